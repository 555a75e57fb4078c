from pydantic import BaseModel
from uuid import UUID
from datetime import datetime


class ExtensionPolicyRead(BaseModel):
    id: UUID
    extension: str
    mime_type: str
    is_enabled: bool
    updated_at: datetime

    model_config = {
        "from_attributes": True
    }


class ExtensionToggle(BaseModel):
    is_enabled: bool


class ExtensionBulkUpdate(BaseModel):
    id: UUID
    is_enabled: bool
