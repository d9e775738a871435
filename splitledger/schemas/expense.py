from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from decimal import Decimal
from typing import List

class ExpenseCreate(BaseModel):
    description: str = Field(min_length=1)
    amount: Decimal = Field(gt=0, decimal_places=2)
    paid_by: str
    split_among: List[str] = Field(min_length=1)
    category: str | None = None
    created_by: str

    @field_validator("split_among")
    @classmethod
    def no_duplicates(cls, v: List[str]):
        if len(v) != len(set(v)):
            raise ValueError("Duplicate users found in split")
        return v

class ExpenseOut(BaseModel):
    id: int
    group_id: int
    description: str
    amount: Decimal
    paid_by: str
    split_among: List[str]
    category: str | None = None
    created_by: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True
