from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal

class BudgetUpdate(BaseModel):
    amount: Decimal = Field(ge=0, decimal_places=2)

class BudgetOut(BaseModel):
    uid: str
    monthly_budget: float | None

class MonthlySpendOut(BaseModel):
    uid: str
    month_start: datetime
    total: float
    monthly_budget: float | None
    remaining: float | None
