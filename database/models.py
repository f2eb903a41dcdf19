"""
SQLAlchemy ORM models for the two document collections.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import DeclarativeBase


def _new_id() -> str:
    return uuid.uuid4().hex


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=_new_id)
    username = Column(String(128), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))


class Recipe(Base):
    __tablename__ = "recipes"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String(256), nullable=False)
    ingredients = Column(JSON, nullable=False, default=list)
    instructions = Column(Text, nullable=False, default="")
    image_url = Column(String(1024), nullable=False, default="")
    cooking_time = Column(Float, nullable=False, default=0)
    owner_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
