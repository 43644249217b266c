from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.database import Base


class Term(Base):
    """A term of any taxonomy ("category", "post_tag", or a custom one)."""

    __tablename__ = "terms"

    id = Column(Integer, primary_key=True, index=True)
    taxonomy = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, index=True)
    parent_id = Column(Integer, ForeignKey("terms.id"), nullable=True)

    parent = relationship("Term", remote_side=[id])
    meta = relationship("TermMeta", back_populates="term", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("taxonomy", "slug", name="unique_taxonomy_slug"),
    )
