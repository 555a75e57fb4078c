from typing import Any
from pydantic import BaseModel, Field, computed_field
from uuid import UUID
from datetime import datetime

from app.helpers.grading import derive_grade


class MarkRead(BaseModel):
    id: UUID
    submission_id: UUID
    student_name: str
    class_name: str = Field(serialization_alias="class")
    section: str
    marks: int
    created_at: datetime

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }

    @computed_field
    @property
    def grade(self) -> str:
        return derive_grade(self.marks)


class MarkUpdate(BaseModel):
    # raw JSON value; validate_score owns the rules and the error message
    marks: Any
