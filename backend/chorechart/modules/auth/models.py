from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String

from chorechart.db import Base


class User(Base):
    __tablename__ = "users"

    Id = Column(Integer, primary_key=True, index=True)
    Username = Column(String(120), nullable=False, unique=True, index=True)
    PasswordHash = Column(String(255))
    ApiKey = Column(String(128), nullable=False, unique=True, index=True)
    CreatedAt = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    UpdatedAt = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
