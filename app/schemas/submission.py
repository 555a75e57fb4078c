from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
from datetime import datetime

from app.schemas.mark import MarkRead


class SubmissionRead(BaseModel):
    id: UUID
    student_name: str
    class_name: str = Field(serialization_alias="class")
    section: str
    filename: str
    extension: str
    file_path: str
    file_url: str
    uploaded_at: datetime

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }


#for admins: submission joined with its mark (if any)
class SubmissionWithMark(SubmissionRead):
    mark: Optional[MarkRead] = None


class SubmissionPreview(BaseModel):
    submission: SubmissionRead
    content: Optional[str] = None
    warning: Optional[str] = None
    mark: Optional[int] = None


class SubmissionFilters(BaseModel):
    classes: list[str]
    sections: list[str]


class IntakePolicy(BaseModel):
    accepted_extension: str
    max_size_bytes: int
    max_size: str
    classes: list[str]
    sections: list[str]
    advertised_extensions: list[str]
