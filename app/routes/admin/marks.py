from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app import config
from app.database import get_db
from app.auth.dependencies import is_admin
from app.schemas.user import AdminSession
from app.schemas.mark import MarkRead
from app.helpers.report_generator import generate_report
from app.helpers.logger import get_logger
from app.services.marks import list_marks

logger = get_logger()

router = APIRouter(
    prefix="/admin/marks",
    tags=["Admin Marks Endpoints"],
    dependencies=[Depends(is_admin)]
)


@router.get("", response_model=list[MarkRead])
async def list_all_marks(
    class_name: Optional[str] = None,
    section: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    return await list_marks(db, class_name=class_name, section=section)


# ---------------------------
# Export results as PDF
# ---------------------------
@router.get("/report")
async def export_report(
    class_name: Optional[str] = None,
    section: Optional[str] = None,
    current_admin: AdminSession = Depends(is_admin),
    db: AsyncSession = Depends(get_db),
):
    marks = await list_marks(db, class_name=class_name, section=section)
    pdf = generate_report(marks)

    logger.info(f"{current_admin.email} exported {len(marks)} marks")
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{config.REPORT_FILENAME}"'},
    )
