from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from app.db.base import Base, utcnow
from app.models.thumbnail import Thumbnail


class Image(Base):
    __tablename__ = "images"
    id = Column(Integer, primary_key=True, index=True)
    original_filename = Column(String, index=True, nullable=False)
    filename = Column(String, unique=True, nullable=False)
    content_type = Column(String, nullable=False)
    byte_size = Column(Integer, nullable=False)
    width = Column(Integer)
    height = Column(Integer)
    tags = Column(String, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True, nullable=False)

    # DB-level ON DELETE CASCADE backs up the ORM cascade
    thumbnails = relationship(
        Thumbnail,
        back_populates="image",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=[Thumbnail.max_width, Thumbnail.max_height],
        lazy="selectin",
    )
