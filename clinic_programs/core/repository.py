"""
Base class for SQLAlchemy-backed repositories.
"""
import logging
from typing import Optional, TypeVar
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

# Set up logging
logger = logging.getLogger(__name__)

T = TypeVar("T")


class SqlRepository:
    """
    Holds the request's session and commits with rollback on failure.
    """

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, instance: Optional[T] = None) -> Optional[T]:
        """
        Commit the unit of work and refresh ``instance`` when given.

        Raises:
            SQLAlchemyError: Re-raised after the session has been rolled back
        """
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database commit failed: {type(e).__name__}: {str(e)}")
            raise
        if instance is not None:
            self.db.refresh(instance)
        return instance
