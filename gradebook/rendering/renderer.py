"""
TRANSCRIPT RENDERER - HTML and PDF output for transcript documents

GENERATION PROCESS:
1. Build template context from the transcript and student
2. Render templates/transcript.html with Jinja2
3. Convert HTML to PDF with WeasyPrint (only when a PDF is requested)

Official transcripts carry the verification code and digital signature.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from gradebook.core.models import StudentRef, Transcript

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


def format_gpa(value: Optional[float]) -> str:
    return f"{value:.2f}" if value is not None else "—"


class TranscriptRenderer:
    """Render transcripts to HTML or PDF"""

    def __init__(self, templates_dir: Optional[Path] = None):
        self.templates_dir = Path(templates_dir) if templates_dir else TEMPLATES_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self.env.filters["gpa"] = format_gpa

    def build_context(self, transcript: Transcript, student: Optional[StudentRef] = None) -> Dict[str, Any]:
        return {
            "transcript": transcript,
            "student_name": student.full_name if student else transcript.student_id,
            "student_number": (student.student_number if student else None) or transcript.student_id,
            "transcript_type": "Official" if transcript.is_official else "Unofficial",
            "courses": transcript.courses,
            "honors": transcript.honors,
        }

    def render_html(
        self,
        transcript: Transcript,
        student: Optional[StudentRef] = None,
        template_name: str = "transcript.html",
    ) -> str:
        template = self.env.get_template(template_name)
        return template.render(**self.build_context(transcript, student))

    def write_pdf(
        self,
        transcript: Transcript,
        output_path: Path,
        student: Optional[StudentRef] = None,
    ) -> Path:
        """Render to PDF; also saves the HTML beside it for inspection"""
        from weasyprint import HTML

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        html_content = self.render_html(transcript, student)
        debug_html_path = output_path.with_suffix(".html")
        debug_html_path.write_text(html_content, encoding="utf-8")

        HTML(string=html_content, base_url=str(self.templates_dir)).write_pdf(output_path)
        logger.info(f"PDF generated with WeasyPrint: {output_path}")
        return output_path
