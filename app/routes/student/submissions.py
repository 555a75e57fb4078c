import os
from fastapi import APIRouter, Depends, Form, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app import config
from app.database import get_db
from app.schemas.submission import SubmissionRead, IntakePolicy
from app.helpers.errors import ValidationError
from app.helpers.intake_validator import validate_intake, format_file_size
from app.helpers.file_paths import LocalBlobStore, get_blob_store
from app.helpers.change_feed import ChangeFeed, INSERT, get_change_feed
from app.helpers.logger import get_logger
from app.services.submissions import create_submission
from app.services.extensions import enabled_extensions

logger = get_logger()

router = APIRouter(
    prefix="/submissions",
    tags=["Student Submission Endpoints"]
)


# ---------------------------
# Upload constraints shown on the form
# ---------------------------
@router.get("/policy", response_model=IntakePolicy)
async def get_intake_policy(db: AsyncSession = Depends(get_db)):
    return IntakePolicy(
        accepted_extension=config.ACCEPTED_EXTENSION,
        max_size_bytes=config.MAX_UPLOAD_BYTES,
        max_size=format_file_size(config.MAX_UPLOAD_BYTES),
        classes=list(config.CLASS_OPTIONS),
        sections=list(config.SECTION_OPTIONS),
        advertised_extensions=await enabled_extensions(db),
    )


# ---------------------------
# Submit Assignment
# ---------------------------
@router.post("", response_model=SubmissionRead, status_code=201)
async def submit_assignment(
    name: str = Form(""),
    class_name: str = Form("", alias="class"),
    section: str = Form(""),
    file: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
    blobs: LocalBlobStore = Depends(get_blob_store),
    feed: ChangeFeed = Depends(get_change_feed),
):
    # keep only the base name of whatever the browser sent
    filename = os.path.basename(file.filename) if file and file.filename else None
    size = file.size if file else None

    # 1️⃣ Validate every field before reading the upload
    intake = validate_intake(name, class_name, section, filename, size)
    if not intake.ok:
        logger.info(f"Submission rejected: {intake.errors}")
        raise ValidationError(intake.errors)

    data = await file.read()
    # size may be unknown until the body is read
    if len(data) > config.MAX_UPLOAD_BYTES:
        raise ValidationError({"size": "File size must be less than 5MB"})

    # 2️⃣ Duplicate check, store file, insert record
    submission = await create_submission(
        db,
        blobs,
        student_name=name.strip(),
        class_name=class_name.strip(),
        section=section.strip(),
        filename=filename,
        data=data,
    )

    # 3️⃣ Notify admin feeds
    record = SubmissionRead.model_validate(submission)
    feed.publish("submissions", INSERT, record.model_dump(mode="json", by_alias=True))

    return record
