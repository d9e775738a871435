from sqlalchemy import Column, Integer, String, DateTime, Boolean
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func, false
from splitledger.db.session import Base

class Group(Base):
    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, server_default="")
    is_public = Column(Boolean, nullable=False, server_default=false())
    created_by = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    is_deleted = Column(Boolean, nullable=False, server_default=false())

    members = relationship(
        "GroupMember",
        back_populates="group",
        cascade="all, delete",
        order_by="GroupMember.id",
        lazy="selectin",
    )

    join_requests = relationship(
        "JoinRequest",
        back_populates="group",
        cascade="all, delete",
        order_by="JoinRequest.id",
        lazy="selectin",
    )
