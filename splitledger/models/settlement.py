from sqlalchemy import Column, Integer, Numeric, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from splitledger.db.session import Base

class Settlement(Base):
    __tablename__ = "settlements"

    id = Column(Integer, primary_key=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    from_user_id = Column(String, nullable=False)
    to_user_id = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)

    settled_at = Column(DateTime(timezone=True), server_default=func.now())
