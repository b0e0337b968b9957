from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.base import Base, utcnow


class Thumbnail(Base):
    __tablename__ = "thumbnails"
    __table_args__ = (
        UniqueConstraint("image_id", "max_width", "max_height", name="uq_thumbnail_image_bounds"),
    )
    id = Column(Integer, primary_key=True, index=True)
    image_id = Column(Integer, ForeignKey("images.id", ondelete="CASCADE"), nullable=False, index=True)
    max_width = Column(Integer, nullable=False)
    max_height = Column(Integer, nullable=False)
    width = Column(Integer, nullable=False)
    height = Column(Integer, nullable=False)
    filename = Column(String, unique=True, nullable=False)
    content_type = Column(String, nullable=False, default="image/jpeg")
    byte_size = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    image = relationship("Image", back_populates="thumbnails")
