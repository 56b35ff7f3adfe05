"""
CATEGORY SERVICE - Maintain a course's grade categories

Every write is checked against the course's whole active scheme, so the active
weights of a course never total more than 100%.
"""

import logging
from typing import Dict, List, Optional

from pydantic import ValidationError

from gradebook.core.errors import (
    CategoryNotFoundError,
    CourseNotFoundError,
    InvalidCategoryConfigurationError,
    TemplateNotFoundError,
)
from gradebook.core.models import CATEGORY_TEMPLATES, CategoryScheme, GradeCategory
from gradebook.storage.base import GradebookStore

logger = logging.getLogger(__name__)


class CategoryService:
    """Create, update, reorder and template grade categories"""

    def __init__(self, store: GradebookStore):
        self.store = store

    def list_categories(self, course_id: str) -> List[GradeCategory]:
        return self.store.list_categories(course_id, active_only=True)

    def scheme(self, course_id: str) -> CategoryScheme:
        return CategoryScheme(course_id=course_id, categories=self.list_categories(course_id))

    def _validated(self, course_id: str, categories: List[GradeCategory]) -> CategoryScheme:
        try:
            return CategoryScheme(course_id=course_id, categories=categories)
        except ValidationError as e:
            messages = "; ".join(err["msg"] for err in e.errors())
            raise InvalidCategoryConfigurationError(messages) from e

    def _require_course(self, course_id: str) -> None:
        if self.store.get_course(course_id) is None:
            raise CourseNotFoundError(f"Course not found: {course_id}")

    def add_category(
        self,
        course_id: str,
        name: str,
        weight: float,
        type: str = "assignments",
        drop_lowest: int = 0,
        description: Optional[str] = None,
        grading_mode: str = "points",
        order: Optional[int] = None,
    ) -> GradeCategory:
        """Add a category; order defaults to the end of the list"""
        self._require_course(course_id)
        existing = self.list_categories(course_id)

        try:
            category = GradeCategory(
                course_id=course_id,
                name=name,
                description=description,
                type=type,
                weight=weight,
                drop_lowest=drop_lowest,
                grading_mode=grading_mode,
                order=order if order is not None else len(existing),
            )
        except ValidationError as e:
            raise InvalidCategoryConfigurationError(str(e)) from e

        self._validated(course_id, existing + [category])
        self.store.save_category(category)
        logger.info("Added category %s (%g%%) to course %s", name, weight, course_id)
        return category

    def update_category(self, category_id: str, **changes) -> GradeCategory:
        """Apply field changes to a category, re-validating the course's scheme"""
        category = self.store.get_category(category_id)
        if category is None:
            raise CategoryNotFoundError(f"Grade category not found: {category_id}")

        try:
            updated = GradeCategory.model_validate({**category.model_dump(), **changes, "id": category.id})
        except ValidationError as e:
            raise InvalidCategoryConfigurationError(str(e)) from e

        others = [c for c in self.list_categories(updated.course_id) if c.id != category_id]
        self._validated(updated.course_id, others + [updated])
        self.store.save_category(updated)
        return updated

    def deactivate_category(self, category_id: str) -> GradeCategory:
        """Soft delete"""
        return self.update_category(category_id, is_active=False)

    def reorder_categories(self, category_orders: Dict[str, int]) -> List[GradeCategory]:
        reordered = []
        for category_id, order in category_orders.items():
            category = self.store.get_category(category_id)
            if category is None:
                logger.warning("Skipping unknown category %s in reorder", category_id)
                continue
            category.order = order
            self.store.save_category(category)
            reordered.append(category)
        return reordered

    def apply_template(self, course_id: str, template_name: str) -> List[GradeCategory]:
        """Replace the course's active categories with a built-in template"""
        template = CATEGORY_TEMPLATES.get(template_name)
        if template is None:
            raise TemplateNotFoundError(f"Template not found: {template_name}")
        self._require_course(course_id)

        created = [
            GradeCategory(course_id=course_id, order=i, **fields)
            for i, fields in enumerate(template)
        ]
        self._validated(course_id, created)

        for category in self.store.list_categories(course_id, active_only=True):
            category.is_active = False
            self.store.save_category(category)
        for category in created:
            self.store.save_category(category)

        logger.info("Applied template %r to course %s", template_name, course_id)
        return created
