from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from chorechart.db import Base


class Task(Base):
    __tablename__ = "tasks"

    Id = Column(Integer, primary_key=True, index=True)
    Name = Column(String(200), nullable=False)
    Points = Column(Integer, nullable=False)
    IsActive = Column(Boolean, nullable=False, default=True)
    CreatedAt = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    UpdatedAt = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    Chores = relationship("Chore", back_populates="Task")
