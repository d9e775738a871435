from sqlalchemy import Column, Numeric, String, DateTime, func
from splitledger.db.session import Base

class UserBudget(Base):
    __tablename__ = "user_budgets"

    uid = Column(String, primary_key=True)
    monthly_budget = Column(Numeric(12, 2), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
