from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import List, Literal

class MemberCreate(BaseModel):
    uid: str = Field(min_length=1)
    display_name: str = Field(min_length=1)
    email: EmailStr | None = None

class GroupCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    is_public: bool = False
    creator: MemberCreate

class GroupMemberOut(BaseModel):
    uid: str
    display_name: str
    email: EmailStr | None = None
    role: Literal["admin", "member"]
    joined_at: datetime | None = None

    class Config:
        from_attributes = True

class JoinRequestOut(BaseModel):
    uid: str
    display_name: str
    email: EmailStr | None = None
    requested_at: datetime | None = None

    class Config:
        from_attributes = True

class GroupOut(BaseModel):
    id: int
    name: str
    description: str
    is_public: bool
    created_by: str
    created_at: datetime | None = None
    members: List[GroupMemberOut] = []
    join_requests: List[JoinRequestOut] = []

    class Config:
        from_attributes = True
