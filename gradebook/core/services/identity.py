"""
Student identity resolution

Callers may hold a student id, a login (user) id, or an email address.
Resolution order: student id, then user id, then email.
"""

import logging

from gradebook.core.errors import StudentNotFoundError
from gradebook.core.models import StudentRef
from gradebook.storage.base import GradebookStore

logger = logging.getLogger(__name__)


class StudentResolver:
    """Resolve any student identifier to a StudentRef"""

    def __init__(self, store: GradebookStore):
        self.store = store

    def resolve(self, any_id: str) -> StudentRef:
        if any_id is None or not str(any_id).strip():
            raise StudentNotFoundError("Empty student identifier")
        key = str(any_id).strip()

        student = self.store.get_student(key)
        if student is None:
            student = self.store.find_student_by_user_id(key)
            if student is not None:
                logger.debug("Resolved user id %s to student %s", key, student.id)
        if student is None and "@" in key:
            student = self.store.find_student_by_email(key)
            if student is not None:
                logger.debug("Resolved email %s to student %s", key, student.id)

        if student is None:
            raise StudentNotFoundError(f"Student not found: {key}")
        return student
