#!/usr/bin/env python3
"""
BATCH TRANSCRIPT GENERATOR
Generates one term's transcripts for every student in a data directory.

Output structure:
<output_dir>/<academic_year> <semester>/
├── <student_id> <FirstName> <LastName>.pdf
└── ...

Usage: python3 scripts/batch_generate.py <data_dir> <academic_year> <semester> [output_dir]
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from gradebook.config import configure_logging, settings
from gradebook.core.errors import GradebookError
from gradebook.core.services import TranscriptBuilder
from gradebook.rendering import TranscriptRenderer
from gradebook.storage import GradebookDataLoader, InMemoryGradebookStore


@dataclass
class GenerationResult:
    student_id: str
    student_name: str
    success: bool
    pdf_path: Optional[str]
    semester_gpa: Optional[float]
    error: Optional[str]


def generate_all_transcripts(
    store: InMemoryGradebookStore,
    academic_year: str,
    semester: str,
    output_folder: Path,
    progress: bool = True,
) -> List[GenerationResult]:
    """Generate and render a transcript for every student in the store."""
    # Reduce logging verbosity during batch
    logging.getLogger("weasyprint").setLevel(logging.ERROR)
    logging.getLogger("gradebook").setLevel(logging.WARNING)

    builder = TranscriptBuilder(store)
    renderer = TranscriptRenderer()
    students = store.list_students()

    results = []
    iterator = tqdm(students, desc="Generating", unit="transcript") if progress else students

    for student in iterator:
        filename = f"{student.id} {student.first_name} {student.last_name}.pdf".replace('"', "").replace("'", "")
        output_path = output_folder / filename

        try:
            transcript = builder.generate_transcript(student.id, academic_year, semester)
            renderer.write_pdf(transcript, output_path, student)
            results.append(GenerationResult(
                student_id=student.id,
                student_name=student.full_name,
                success=True,
                pdf_path=str(output_path),
                semester_gpa=transcript.semester_gpa,
                error=None,
            ))
        except (GradebookError, ValueError, OSError) as e:
            results.append(GenerationResult(
                student_id=student.id,
                student_name=student.full_name,
                success=False,
                pdf_path=None,
                semester_gpa=None,
                error=str(e),
            ))
            if progress:
                tqdm.write(f"  ❌ Failed {student.id}: {str(e)[:50]}")

    return results


def print_summary(results: List[GenerationResult], output_folder: Path):
    """Print generation summary."""
    success = [r for r in results if r.success]
    failed = [r for r in results if not r.success]

    print("\n" + "=" * 70)
    print("BATCH GENERATION SUMMARY")
    print("=" * 70)

    print(f"\n✅ Successful: {len(success)}")
    print(f"❌ Failed: {len(failed)}")

    if success:
        average = sum(r.semester_gpa for r in success) / len(success)
        print(f"\nAverage semester GPA: {average:.2f}")

    if failed:
        print("\n❌ FAILED TRANSCRIPTS:")
        print("-" * 50)
        for r in failed:
            print(f"  [{r.student_id}] {r.student_name}")
            print(f"      Error: {r.error[:80]}..." if len(r.error) > 80 else f"      Error: {r.error}")

    print(f"\n📁 Output: {output_folder}")
    print("=" * 70)


def main(argv) -> int:
    if len(argv) < 3:
        print("Usage: python3 scripts/batch_generate.py <data_dir> <academic_year> <semester> [output_dir]")
        return 1

    data_dir, academic_year, semester = argv[:3]
    output_base = Path(argv[3]).expanduser() if len(argv) > 3 else settings.OUTPUT_DIR

    configure_logging()

    print("=" * 70)
    print("BATCH TRANSCRIPT GENERATOR")
    print("=" * 70)

    print("\n📊 Loading all data...")
    loader = GradebookDataLoader(Path(data_dir).expanduser())
    if not loader.load_all_data():
        print(loader.generate_validation_report())
        print("❌ Failed to load data!")
        return 1

    if loader.validation_errors:
        print(f"   ⚠️  {len(loader.validation_errors)} rows skipped during validation")

    store = InMemoryGradebookStore()
    counts = loader.populate(store)
    print(f"   Students: {counts['students']}, Courses: {counts['courses']}, Grades: {counts['grades']}")

    output_folder = output_base / f"{academic_year} {semester}"
    output_folder.mkdir(parents=True, exist_ok=True)
    print(f"\n📁 Output folder: {output_folder}")

    print("\n🚀 Starting batch generation...")
    results = generate_all_transcripts(store, academic_year, semester, output_folder, progress=True)

    print_summary(results, output_folder)

    failed_count = len([r for r in results if not r.success])
    if failed_count > 0:
        print(f"\n⚠️  {failed_count} transcripts failed - review errors above")
        return 1
    print("\n✅ All transcripts generated successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
