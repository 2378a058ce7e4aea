from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from todoapi.database import MAX_ROW_ID, MIN_ROW_ID

NULLABLE_FIELDS = {"description"}

class TodoBase(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None

class TodoCreate(TodoBase):
    user_id: int = Field(..., ge=MIN_ROW_ID, le=MAX_ROW_ID)

class TodoUpdate(BaseModel):
    """Partial update of title/description/completed.

    An explicit ``"description": null`` clears the description; ``null`` for
    the other fields is ignored.
    """

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    completed: Optional[bool] = None

    def changes(self) -> Dict[str, Any]:
        data = self.model_dump(exclude_unset=True)
        return {k: v for k, v in data.items() if v is not None or k in NULLABLE_FIELDS}

class TodoOut(TodoBase):
    id: int
    user_id: int
    completed: bool
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)
