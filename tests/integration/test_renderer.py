"""
Integration Tests for Transcript Rendering
"""

import pytest

from gradebook.rendering import TranscriptRenderer


@pytest.fixture
def transcript(transcript_builder):
    return transcript_builder.generate_transcript("S1001", "2024", "Fall")


class TestTranscriptRenderer:

    def test_unofficial_html(self, transcript, student):
        html = TranscriptRenderer().render_html(transcript, student)

        assert "UNOFFICIAL TRANSCRIPT" in html
        assert "Ada Lovelace" in html
        assert "2025-001" in html
        assert "Fall 2024" in html
        assert "MATH101" in html
        assert "86.00" in html
        assert "3.43" in html
        assert "Good Standing" in html
        assert "Verification code" not in html

    def test_official_html(self, transcript_builder, transcript, student):
        official = transcript_builder.mark_transcript_official(transcript.id)
        html = TranscriptRenderer().render_html(official, student)

        assert "OFFICIAL TRANSCRIPT" in html
        assert "UNOFFICIAL" not in html
        assert f"Verification code: {official.verification_code}" in html
        assert official.digital_signature in html

    def test_without_student_falls_back_to_id(self, transcript):
        html = TranscriptRenderer().render_html(transcript)
        assert "S1001" in html

    def test_empty_transcript(self, transcript_builder):
        empty = transcript_builder.generate_transcript("S1001", "2023", "Spring")
        html = TranscriptRenderer().render_html(empty)
        assert "No graded courses for this term." in html
        assert "0.00" in html

    def test_honors_are_escaped(self, transcript):
        from gradebook.core.models import HonorRecord

        transcript.honors = [HonorRecord(type="Dean's List", semester="Fall", year="2024")]
        html = TranscriptRenderer().render_html(transcript)
        assert "Dean&#39;s List" in html

    def test_write_pdf(self, transcript, student, tmp_path):
        try:
            import weasyprint  # noqa: F401
        except (ImportError, OSError) as e:
            pytest.skip(f"WeasyPrint unavailable: {e}")

        output = TranscriptRenderer().write_pdf(transcript, tmp_path / "transcript.pdf", student)
        assert output.exists()
        assert output.read_bytes().startswith(b"%PDF")
        assert (tmp_path / "transcript.html").exists()
