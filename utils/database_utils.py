"""
Database utilities and common operations to reduce code duplication
"""
from typing import Type, TypeVar, Any, Dict, Iterable
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from utils.errors import NotFoundError

T = TypeVar('T')


class DatabaseUtils:
    """Utility class for common database operations"""

    @staticmethod
    def get_or_404(
        db: Session,
        model_class: Type[T],
        error_class: Type[NotFoundError] = NotFoundError,
        **filters
    ) -> T:
        """
        Get a single object by filters or raise a not-found error

        Args:
            db: Database session
            model_class: SQLAlchemy model class
            error_class: NotFoundError subclass to raise
            **filters: Filter conditions

        Returns:
            Model instance

        Raises:
            NotFoundError: if no row matches
        """
        obj = db.query(model_class).filter_by(**filters).first()
        if not obj:
            raise error_class(f"{model_class.__name__} not found")
        return obj

    @staticmethod
    def paginate_query(
        query,
        page: int = 1,
        per_page: int = 10,
        max_per_page: int = 100
    ) -> Dict[str, Any]:
        """
        Paginate a SQLAlchemy query

        Args:
            query: SQLAlchemy query object
            page: Page number (1-based)
            per_page: Items per page
            max_per_page: Maximum items per page

        Returns:
            Dictionary with pagination info and items
        """
        per_page = min(per_page, max_per_page)
        offset = (page - 1) * per_page

        total = query.count()
        items = query.offset(offset).limit(per_page).all()
        pages = (total + per_page - 1) // per_page if per_page else 0

        return {
            'items': items,
            'page': page,
            'per_page': per_page,
            'pages': pages,
            'total': total,
            'has_next': page < pages,
            'has_prev': page > 1
        }

    @staticmethod
    def exists(db: Session, model_class: Type[T], **filters) -> bool:
        """Check if object exists with given filters"""
        return db.query(
            db.query(model_class).filter_by(**filters).exists()
        ).scalar()

    @staticmethod
    def is_unique_violation(
        exc: IntegrityError,
        constraint: str,
        columns: Iterable[str] = ()
    ) -> bool:
        """
        True when `exc` was raised by the unique constraint `constraint`.

        Postgres reports the constraint name; SQLite only lists the
        offending `table.column` pairs, so `columns` is matched there.
        """
        orig = getattr(exc, "orig", None)
        name = getattr(getattr(orig, "diag", None), "constraint_name", None)
        if name:
            return name == constraint

        message = str(orig if orig is not None else exc)
        if constraint in message:
            return True
        columns = list(columns)
        return (
            "UNIQUE constraint failed" in message
            and bool(columns)
            and all(column in message for column in columns)
        )
