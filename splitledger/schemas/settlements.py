from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal

class SettlementCreate(BaseModel):
    from_user_id: str
    to_user_id: str
    amount: Decimal = Field(gt=0, decimal_places=2)

class SettlementOut(BaseModel):
    id: int
    group_id: int
    from_user_id: str
    to_user_id: str
    amount: Decimal
    settled_at: datetime | None = None

    class Config:
        from_attributes = True
