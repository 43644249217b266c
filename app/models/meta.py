"""
Meta tables for posts, terms and users.

Each table holds any number of rows per (object, key); rows keep insertion
order through their primary key. ``meta_value`` is a JSON column so a value
is either a plain string or a structured value (list, dict, number, bool).
"""

from sqlalchemy import JSON, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.database import Base


class ContentMeta(Base):
    __tablename__ = "content_meta"

    id = Column(Integer, primary_key=True, index=True)
    object_id = Column(Integer, ForeignKey("content.id", ondelete="CASCADE"), nullable=False, index=True)
    meta_key = Column(String(255), nullable=False, index=True)
    meta_value = Column(JSON, nullable=True)

    content = relationship("Content", back_populates="meta")


class TermMeta(Base):
    __tablename__ = "term_meta"

    id = Column(Integer, primary_key=True, index=True)
    object_id = Column(Integer, ForeignKey("terms.id", ondelete="CASCADE"), nullable=False, index=True)
    meta_key = Column(String(255), nullable=False, index=True)
    meta_value = Column(JSON, nullable=True)

    term = relationship("Term", back_populates="meta")


class UserMeta(Base):
    __tablename__ = "user_meta"

    id = Column(Integer, primary_key=True, index=True)
    object_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    meta_key = Column(String(255), nullable=False, index=True)
    meta_value = Column(JSON, nullable=True)

    user = relationship("User", back_populates="meta")
