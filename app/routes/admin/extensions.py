from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.database import get_db
from app.auth.dependencies import is_admin
from app.schemas.extension import ExtensionPolicyRead, ExtensionToggle, ExtensionBulkUpdate
from app.services.extensions import list_extensions, set_enabled, save_extensions

router = APIRouter(
    prefix="/admin/extensions",
    tags=["Admin File Extension Endpoints"],
    dependencies=[Depends(is_admin)]
)


@router.get("", response_model=list[ExtensionPolicyRead])
async def list_file_extensions(db: AsyncSession = Depends(get_db)):
    return await list_extensions(db)


@router.patch("/{extension_id}", response_model=ExtensionPolicyRead)
async def toggle_file_extension(
    extension_id: UUID,
    toggle: ExtensionToggle,
    db: AsyncSession = Depends(get_db),
):
    return await set_enabled(db, extension_id, toggle.is_enabled)


# ---------------------------
# Save all toggles at once
# ---------------------------
@router.put("", response_model=list[ExtensionPolicyRead])
async def save_file_extensions(
    payload: list[ExtensionBulkUpdate],
    db: AsyncSession = Depends(get_db),
):
    return await save_extensions(db, [(u.id, u.is_enabled) for u in payload])
