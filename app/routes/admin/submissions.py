from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from uuid import UUID

from app.database import get_db
from app.auth.dependencies import is_admin
from app.schemas.user import AdminSession
from app.schemas.submission import SubmissionRead, SubmissionWithMark, SubmissionPreview, SubmissionFilters
from app.schemas.mark import MarkRead, MarkUpdate
from app.helpers.errors import NotFoundError
from app.helpers.file_paths import LocalBlobStore, content_disposition, get_blob_store
from app.helpers.logger import get_logger
from app.services.submissions import get_submission, list_submissions, distinct_filters
from app.services.marks import set_mark
from app.services.extensions import DEFAULT_EXTENSIONS

logger = get_logger()

router = APIRouter(
    prefix="/admin/submissions",
    tags=["Admin Submission Endpoints"],
    dependencies=[Depends(is_admin)]
)


def _decode(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1")


# ------------------------------------
# List submissions (with marks)
# ------------------------------------
@router.get("", response_model=list[SubmissionWithMark])
async def list_all_submissions(
    search: Optional[str] = None,
    class_name: Optional[str] = None,
    section: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    submissions = await list_submissions(db, search=search, class_name=class_name, section=section)
    return [SubmissionWithMark.model_validate(s) for s in submissions]


# ------------------------------------
# Filter options
# ------------------------------------
@router.get("/filters", response_model=SubmissionFilters)
async def get_filter_options(db: AsyncSession = Depends(get_db)):
    classes, sections = await distinct_filters(db)
    return SubmissionFilters(classes=classes, sections=sections)


# ------------------------------------
# Preview file contents
# ------------------------------------
@router.get("/{submission_id}/preview", response_model=SubmissionPreview)
async def preview_submission(
    submission_id: UUID,
    db: AsyncSession = Depends(get_db),
    blobs: LocalBlobStore = Depends(get_blob_store),
):
    submission = await get_submission(db, submission_id)
    preview = SubmissionPreview(
        submission=SubmissionRead.model_validate(submission),
        mark=submission.mark.marks if submission.mark else None,
    )

    # a missing file is shown as a warning, the mark can still be entered
    try:
        preview.content = _decode(blobs.get(submission.file_path))
    except NotFoundError as e:
        logger.warning(f"Preview of {submission.file_path} failed: {e}")
        preview.warning = f"Failed to load file: {e}"

    return preview


# ------------------------------------
# Download raw file
# ------------------------------------
@router.get("/{submission_id}/download")
async def download_submission(
    submission_id: UUID,
    db: AsyncSession = Depends(get_db),
    blobs: LocalBlobStore = Depends(get_blob_store),
):
    submission = await get_submission(db, submission_id)
    data = blobs.get(submission.file_path)

    media_type, _ = DEFAULT_EXTENSIONS.get(submission.extension, ("application/octet-stream", False))
    return Response(
        content=data,
        media_type=media_type,
        headers={"Content-Disposition": content_disposition(submission.filename)},
    )


# ---------------------------
# Save mark (upsert)
# ---------------------------
@router.put("/{submission_id}/mark", response_model=MarkRead)
async def save_mark(
    submission_id: UUID,
    mark_in: MarkUpdate,
    current_admin: AdminSession = Depends(is_admin),
    db: AsyncSession = Depends(get_db),
):
    mark = await set_mark(db, submission_id, mark_in.marks)
    logger.info(f"{current_admin.email} graded submission {submission_id}: {mark.marks}")
    return mark
