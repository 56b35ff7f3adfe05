from gradebook.core.services.categories import CategoryService
from gradebook.core.services.grading import GradingService
from gradebook.core.services.identity import StudentResolver
from gradebook.core.services.transcripts import TranscriptBuilder, current_term

__all__ = [
    'CategoryService',
    'GradingService',
    'StudentResolver',
    'TranscriptBuilder',
    'current_term',
]
