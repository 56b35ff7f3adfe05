#!/usr/bin/env python3
"""
Simple wrapper to generate a transcript for one student and term
Usage: python3 generate_transcript.py <data_dir> <student_id> <academic_year> <semester> <output_dir> [--html]

<student_id> may be the student id, login user id, or email.
With --html only the HTML rendering is written (no WeasyPrint needed).
"""

import sys
from pathlib import Path

from gradebook.config import configure_logging
from gradebook.core.errors import GradebookError
from gradebook.core.services import StudentResolver, TranscriptBuilder
from gradebook.rendering import TranscriptRenderer
from gradebook.storage import GradebookDataLoader, InMemoryGradebookStore

USAGE = (
    "Usage: python3 generate_transcript.py "
    "<data_dir> <student_id> <academic_year> <semester> <output_dir> [--html]"
)


def main(argv) -> int:
    html_only = "--html" in argv
    args = [a for a in argv if a != "--html"]

    if len(args) < 5:
        print("ERROR: Missing arguments")
        print(USAGE)
        return 1

    data_dir, student_id, academic_year, semester, output_dir = args[:5]
    output_dir = Path(output_dir).expanduser()

    configure_logging()

    print("Starting transcript generation...")
    print(f"  Student ID: {student_id}")
    print(f"  Term:       {semester} {academic_year}")
    print(f"  Output Dir: {output_dir}")

    print("\nLoading all data...")
    loader = GradebookDataLoader(Path(data_dir).expanduser())
    if not loader.load_all_data():
        print(loader.generate_validation_report())
        print("❌ Failed to load data!")
        return 1
    if loader.validation_errors:
        print(loader.generate_validation_report())

    store = InMemoryGradebookStore()
    loader.populate(store)

    builder = TranscriptBuilder(store)
    try:
        student = StudentResolver(store).resolve(student_id)
        transcript = builder.generate_transcript(student.id, academic_year, semester)
    except (GradebookError, ValueError) as e:
        print(f"❌ {e}")
        return 1

    for line in builder.get_generation_log():
        print(f"  {line}")

    renderer = TranscriptRenderer()
    filename = f"{student.id}_{student.last_name}_{semester}_{academic_year}_transcript"
    if html_only:
        output_path = output_dir / f"{filename}.html"
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path.write_text(renderer.render_html(transcript, student), encoding="utf-8")
    else:
        output_path = renderer.write_pdf(transcript, output_dir / f"{filename}.pdf", student)

    print("\n✅ SUCCESS!")
    print(f"  Semester GPA: {transcript.semester_gpa:.2f}")
    print(f"  Cumulative GPA: {transcript.cumulative_gpa:.2f}")
    print(f"  Standing: {transcript.academic_standing}")
    print(f"Transcript saved to: {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
