"""Service for the category taxonomy."""

import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from database import write_transaction
from models import Category
from models.category import CATEGORY_SEPARATOR
from services.exceptions import ConstraintViolation

logger = logging.getLogger(__name__)

CATEGORY_NAME_MAX_LENGTH = 50


class CategoryService:
    """Admin operations on categories.

    Categories are created by seeding or by an explicit admin insert and
    are never changed by the write procedures.
    """

    @staticmethod
    def list_categories(db: Session) -> List[Category]:
        """Get all categories ordered by id."""
        return db.query(Category).order_by(Category.id).all()

    @staticmethod
    def get_category(db: Session, category_id: int) -> Optional[Category]:
        """Get a single category by id."""
        return db.query(Category).filter(Category.id == category_id).first()

    @staticmethod
    def create_category(
        db: Session, name: str, category_id: Optional[int] = None
    ) -> Category:
        """
        Create a new category.

        Args:
            db: Database session
            name: Category name (unique, case-insensitive)
            category_id: Explicit id, used by seeding to keep ids stable

        Returns:
            The created Category

        Raises:
            ConstraintViolation: If the name is empty, too long, taken
                or contains a comma
        """
        name = name.strip()
        if not name or len(name) > CATEGORY_NAME_MAX_LENGTH:
            raise ConstraintViolation(
                f"Category name must be 1-{CATEGORY_NAME_MAX_LENGTH} characters"
            )
        if CATEGORY_SEPARATOR.strip() in name:
            raise ConstraintViolation("Category name must not contain a comma")

        with write_transaction(db):
            existing = (
                db.query(Category)
                .filter(func.lower(Category.name) == name.lower())
                .first()
            )
            if existing:
                raise ConstraintViolation(f"Category '{name}' already exists")

            category = Category(id=category_id, name=name)
            db.add(category)
            db.flush()

        db.refresh(category)
        logger.info("Category created: %s (id=%s)", name, category.id)
        return category
