from gradebook.core.models.calculations import (
    DEFAULT_GRADING_SCALE,
    GradePointResult,
    GradePoints,
    GradingScale,
    UnknownGrade,
)
from gradebook.core.models.categories import (
    CATEGORY_TEMPLATES,
    CategoryScheme,
    CategoryType,
    GradeCategory,
    GradingMode,
)
from gradebook.core.models.courses import CourseRecord, Semester, StudentRef
from gradebook.core.models.grades import GradeEntry, GradeRevision, GradeStatus, LatePenalty
from gradebook.core.models.transcripts import (
    AcademicStanding,
    AssignmentScore,
    CategoryAggregate,
    CourseFinalGrade,
    CourseGradeStatistics,
    CumulativeRecord,
    FinalGrade,
    HonorRecord,
    StudentFinalGrade,
    Transcript,
    TranscriptCourse,
    TranscriptVerification,
)

__all__ = [
    'DEFAULT_GRADING_SCALE',
    'GradePointResult',
    'GradePoints',
    'GradingScale',
    'UnknownGrade',
    'CATEGORY_TEMPLATES',
    'CategoryScheme',
    'CategoryType',
    'GradeCategory',
    'GradingMode',
    'CourseRecord',
    'Semester',
    'StudentRef',
    'GradeEntry',
    'GradeRevision',
    'GradeStatus',
    'LatePenalty',
    'AcademicStanding',
    'AssignmentScore',
    'CategoryAggregate',
    'CourseFinalGrade',
    'CourseGradeStatistics',
    'CumulativeRecord',
    'FinalGrade',
    'HonorRecord',
    'StudentFinalGrade',
    'Transcript',
    'TranscriptCourse',
    'TranscriptVerification',
]
