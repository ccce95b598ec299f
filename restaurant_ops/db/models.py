"""Database models."""
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class AppState(Base):
    """Serialized restaurant state, one row per namespace key."""

    __tablename__ = "app_state"

    key = Column(String, primary_key=True)
    payload = Column(Text, nullable=False)  # RestaurantSnapshot JSON
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
