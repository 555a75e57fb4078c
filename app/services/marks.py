"""
Grading ledger: at most one mark per submission, written by upsert.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Mark, Submission
from app.helpers.errors import NotFoundError, StoreError
from app.helpers.grading import validate_score
from app.helpers.logger import get_logger

logger = get_logger()


async def get_mark(db: AsyncSession, submission_id: UUID) -> Optional[Mark]:
    try:
        result = await db.execute(select(Mark).where(Mark.submission_id == submission_id))
        return result.scalar_one_or_none()
    except SQLAlchemyError as e:
        raise StoreError(cause=e)


async def set_mark(db: AsyncSession, submission_id: UUID, score) -> Mark:
    """
    Create or replace the mark for a submission.

    The score is validated before anything is read or written. Student name,
    class and section are copied from the submission as it is now.
    """
    score = validate_score(score)

    try:
        result = await db.execute(select(Submission).where(Submission.id == submission_id))
        submission = result.scalar_one_or_none()
        if not submission:
            raise NotFoundError("Submission not found")

        mark = await get_mark(db, submission_id)
        if mark is None:
            mark = Mark(submission_id=submission.id)
            db.add(mark)

        mark.student_name = submission.student_name
        mark.class_name = submission.class_name
        mark.section = submission.section
        mark.marks = score
        mark.created_at = datetime.utcnow()

        await db.commit()
        await db.refresh(mark)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Saving mark for submission {submission_id} failed: {e}")
        raise StoreError(cause=e)

    logger.info(f"Marks {score} saved for {mark.student_name} (submission {submission_id})")
    return mark


async def list_marks(
    db: AsyncSession,
    class_name: Optional[str] = None,
    section: Optional[str] = None,
) -> list[Mark]:
    """Most recent first; a None filter matches everything."""
    stmt = select(Mark)
    if class_name:
        stmt = stmt.where(Mark.class_name == class_name)
    if section:
        stmt = stmt.where(Mark.section == section)
    stmt = stmt.order_by(Mark.created_at.desc(), Mark.id)

    try:
        result = await db.execute(stmt)
        return list(result.scalars().all())
    except SQLAlchemyError as e:
        raise StoreError(cause=e)
