from sqlalchemy import Column, ForeignKey, Integer, String, DateTime, UniqueConstraint, func
from sqlalchemy.orm import relationship
from splitledger.db.session import Base

class JoinRequest(Base):
    __tablename__ = "join_requests"
    __table_args__ = (
        UniqueConstraint("group_id", "uid", name="uq_join_request_uid"),
    )

    id = Column(Integer, primary_key=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False)
    uid = Column(String, nullable=False)
    display_name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    requested_at = Column(DateTime(timezone=True), server_default=func.now())

    group = relationship("Group", back_populates="join_requests")
