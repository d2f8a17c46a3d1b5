from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from chorechart.db import Base


class Child(Base):
    __tablename__ = "children"

    Id = Column(Integer, primary_key=True, index=True)
    FirstName = Column(String(120), nullable=False)
    LastName = Column(String(120), nullable=False)
    IsActive = Column(Boolean, nullable=False, default=True)
    CreatedAt = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    UpdatedAt = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    Chores = relationship("Chore", back_populates="Child", order_by="Chore.Id")

    @property
    def Name(self) -> str:
        return f"{self.FirstName} {self.LastName}"

    @property
    def PointsEarned(self) -> int:
        return sum(chore.Task.Points for chore in self.Chores if chore.IsCompleted and chore.Task)
