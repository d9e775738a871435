from pydantic import BaseModel
from datetime import datetime
from typing import Literal

class ActivityOut(BaseModel):
    id: int
    group_id: int
    group_name: str
    type: Literal["expense", "settlement", "member_joined", "group_created"]
    description: str
    user_id: str
    user_name: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True
