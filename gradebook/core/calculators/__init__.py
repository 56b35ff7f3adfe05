from gradebook.core.calculators.category import CategoryAggregator
from gradebook.core.calculators.final_grade import FinalGradeCalculator
from gradebook.core.calculators.gpa import GPACalculator
from gradebook.core.calculators.letter_grades import grade_points, letter_grade
from gradebook.core.calculators.statistics import course_grade_statistics

__all__ = [
    'CategoryAggregator',
    'FinalGradeCalculator',
    'GPACalculator',
    'grade_points',
    'letter_grade',
    'course_grade_statistics',
]
