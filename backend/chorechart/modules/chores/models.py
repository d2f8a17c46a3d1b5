from datetime import datetime

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import relationship

from chorechart.db import Base


class Chore(Base):
    __tablename__ = "chores"
    __table_args__ = (
        Index("ix_chores_due_on_completed", "DueOn", "IsCompleted"),
    )

    Id = Column(Integer, primary_key=True, index=True)
    ChildId = Column(Integer, ForeignKey("children.Id"), nullable=False, index=True)
    TaskId = Column(Integer, ForeignKey("tasks.Id"), nullable=False, index=True)
    DueOn = Column(Date, nullable=False)
    IsCompleted = Column(Boolean, nullable=False, default=False)
    CreatedAt = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    UpdatedAt = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    Child = relationship("Child", back_populates="Chores")
    Task = relationship("Task", back_populates="Chores")
