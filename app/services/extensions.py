"""
Extension policy registry: which file types administrators advertise.
"""

from datetime import datetime
from typing import Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import FileExtension
from app.helpers.errors import NotFoundError, StoreError
from app.helpers.logger import get_logger

logger = get_logger()

# extension -> (mime type, enabled by default)
DEFAULT_EXTENSIONS = {
    "py": ("text/x-python", True),
    "doc": ("application/msword", False),
    "docx": ("application/vnd.openxmlformats-officedocument.wordprocessingml.document", False),
    "ppt": ("application/vnd.ms-powerpoint", False),
    "pptx": ("application/vnd.openxmlformats-officedocument.presentationml.presentation", False),
    "pdf": ("application/pdf", False),
    "xls": ("application/vnd.ms-excel", False),
    "xlsx": ("application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", False),
}


async def seed_extensions(db: AsyncSession) -> int:
    """Insert any default extension that is missing. Returns how many were added."""
    result = await db.execute(select(FileExtension.extension))
    present = set(result.scalars().all())

    added = 0
    for extension, (mime_type, enabled) in DEFAULT_EXTENSIONS.items():
        if extension in present:
            continue
        db.add(FileExtension(extension=extension, mime_type=mime_type, is_enabled=enabled))
        added += 1

    if added:
        await db.commit()
        logger.info(f"Seeded {added} file extension(s)")
    return added


async def list_extensions(db: AsyncSession) -> list[FileExtension]:
    try:
        result = await db.execute(select(FileExtension).order_by(FileExtension.extension))
        return list(result.scalars().all())
    except SQLAlchemyError as e:
        raise StoreError("Failed to load file extensions", cause=e)


async def enabled_extensions(db: AsyncSession) -> list[str]:
    try:
        result = await db.execute(
            select(FileExtension.extension)
            .where(FileExtension.is_enabled.is_(True))
            .order_by(FileExtension.extension)
        )
        return list(result.scalars().all())
    except SQLAlchemyError as e:
        raise StoreError("Failed to load file extensions", cause=e)


async def _apply(db: AsyncSession, extension_id: UUID, enabled: bool) -> FileExtension:
    result = await db.execute(select(FileExtension).where(FileExtension.id == extension_id))
    extension = result.scalar_one_or_none()
    if not extension:
        raise NotFoundError("File extension not found")

    extension.is_enabled = enabled
    # bumped even when the flag is unchanged
    extension.updated_at = datetime.utcnow()
    return extension


async def set_enabled(db: AsyncSession, extension_id: UUID, enabled: bool) -> FileExtension:
    try:
        extension = await _apply(db, extension_id, enabled)
        await db.commit()
        await db.refresh(extension)
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError("Failed to save changes", cause=e)

    logger.info(f"Extension .{extension.extension} {'enabled' if enabled else 'disabled'}")
    return extension


async def save_extensions(db: AsyncSession, updates: Iterable[tuple[UUID, bool]]) -> list[FileExtension]:
    """Apply many toggles in one commit; an unknown id aborts the whole batch."""
    try:
        for extension_id, enabled in updates:
            await _apply(db, extension_id, enabled)
        await db.commit()
    except NotFoundError:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        raise StoreError("Failed to save changes", cause=e)

    logger.info("File extensions updated")
    return await list_extensions(db)
