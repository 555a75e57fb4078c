"""
Submission records: duplicate lookup, intake write and admin queries.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select, or_, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models import Submission
from app.helpers.errors import ConflictError, NotFoundError, StoreError
from app.helpers.file_paths import DUPLICATE_MESSAGE, LocalBlobStore, build_public_url, build_storage_key
from app.helpers.intake_validator import extension_of
from app.helpers.logger import get_logger

logger = get_logger()


def _discard_blob(blobs: LocalBlobStore, key: str) -> None:
    """Undo a blob write whose record insert failed. Cleanup errors are logged only."""
    try:
        blobs.delete(key)
    except OSError as e:
        logger.error(f"Could not remove orphaned upload {key}: {e}")


async def submission_exists(
    db: AsyncSession,
    student_name: str,
    class_name: str,
    section: str,
    filename: str,
) -> bool:
    """
    Exact match on (student, class, section, filename).
    A failed lookup raises StoreError, never reads as "no duplicate".
    """
    try:
        result = await db.execute(
            select(Submission.id).where(
                Submission.student_name == student_name,
                Submission.class_name == class_name,
                Submission.section == section,
                Submission.filename == filename,
            )
        )
        return result.first() is not None
    except SQLAlchemyError as e:
        logger.error(f"Duplicate check failed for {student_name}/{class_name}/{section}/{filename}: {e}")
        raise StoreError("Failed to validate submission. Try again.", cause=e)


async def create_submission(
    db: AsyncSession,
    blobs: LocalBlobStore,
    student_name: str,
    class_name: str,
    section: str,
    filename: str,
    data: bytes,
) -> Submission:
    """
    Duplicate check, then blob write, then record insert.
    Inputs are expected to have passed validate_intake already.
    """
    if await submission_exists(db, student_name, class_name, section, filename):
        logger.info(f"Rejected duplicate submission: {student_name} {class_name}-{section} {filename}")
        raise ConflictError(DUPLICATE_MESSAGE)

    key = build_storage_key(student_name, class_name, section, filename)
    blobs.put(key, data)

    submission = Submission(
        student_name=student_name,
        class_name=class_name,
        section=section,
        filename=filename,
        extension=extension_of(filename),
        file_path=key,
        file_url=build_public_url(key),
    )
    db.add(submission)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        _discard_blob(blobs, key)
        raise ConflictError(DUPLICATE_MESSAGE)
    except SQLAlchemyError as e:
        await db.rollback()
        _discard_blob(blobs, key)
        logger.error(f"Saving submission {key} failed: {e}")
        raise StoreError("Upload succeeded, but saving submission failed.", cause=e)

    await db.refresh(submission)
    logger.info(f"Submission stored: {key} ({len(data)} bytes)")
    return submission


async def get_submission(db: AsyncSession, submission_id: UUID) -> Submission:
    try:
        result = await db.execute(
            select(Submission)
            .where(Submission.id == submission_id)
            .options(selectinload(Submission.mark))
        )
        submission = result.scalar_one_or_none()
    except SQLAlchemyError as e:
        raise StoreError(cause=e)

    if not submission:
        raise NotFoundError("Submission not found")
    return submission


async def list_submissions(
    db: AsyncSession,
    search: Optional[str] = None,
    class_name: Optional[str] = None,
    section: Optional[str] = None,
) -> list[Submission]:
    """
    Most recent first. `search` matches student name or filename, case-insensitively.
    """
    stmt = select(Submission).options(selectinload(Submission.mark))

    if search:
        pattern = f"%{search.lower()}%"
        stmt = stmt.where(
            or_(
                func.lower(Submission.student_name).like(pattern),
                func.lower(Submission.filename).like(pattern),
            )
        )
    if class_name:
        stmt = stmt.where(Submission.class_name == class_name)
    if section:
        stmt = stmt.where(Submission.section == section)

    stmt = stmt.order_by(Submission.uploaded_at.desc())

    try:
        result = await db.execute(stmt)
        return list(result.scalars().all())
    except SQLAlchemyError as e:
        raise StoreError(cause=e)


async def distinct_filters(db: AsyncSession) -> tuple[list[str], list[str]]:
    """Classes and sections that have at least one submission."""
    try:
        classes = await db.execute(select(Submission.class_name).distinct().order_by(Submission.class_name))
        sections = await db.execute(select(Submission.section).distinct().order_by(Submission.section))
    except SQLAlchemyError as e:
        raise StoreError(cause=e)
    return list(classes.scalars().all()), list(sections.scalars().all())
