"""Records that may point at an uploaded image in blob storage.

Each table carries one optional storage reference. The orphaned storage
sweep treats these four columns as the complete set of roots.
"""
from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text

from mastergym.core.clock import utcnow
from mastergym.db.database import Base
from mastergym.models.enums import GalleryAccess, MealType, PublishStatus
from mastergym.models.types import JSONDocument, enum_type


class DietLog(Base):
    __tablename__ = "diet_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    meal_type = Column(enum_type(MealType, "meal_type"), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    calories = Column(Float, nullable=True)
    image_id = Column(String(64), nullable=True, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)


class GalleryItem(Base):
    __tablename__ = "gallery_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    img_url = Column(String(1024), nullable=False)
    storage_id = Column(String(64), nullable=True, index=True)
    status = Column(enum_type(PublishStatus, "gallery_status"), nullable=False, default=PublishStatus.ACTIVE)
    access = Column(enum_type(GalleryAccess, "gallery_access"), nullable=False, default=GalleryAccess.PRIVATE)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)


class SuccessStory(Base):
    __tablename__ = "success_stories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(String(200), nullable=False, unique=True)
    title = Column(String(200), nullable=False)
    image_storage_id = Column(String(64), nullable=True, index=True)
    image_url = Column(String(1024), nullable=True)
    paragraph = Column(Text, nullable=False, default="")
    points = Column(JSONDocument, nullable=False, default=list)
    status = Column(enum_type(PublishStatus, "story_status"), nullable=False, default=PublishStatus.ACTIVE)
    order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)


class TransformationImage(Base):
    __tablename__ = "transformation_images"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=True)
    image_storage_id = Column(String(64), nullable=True, index=True)
    image_url = Column(String(1024), nullable=False)
    order = Column(Integer, nullable=False, default=0)
    status = Column(enum_type(PublishStatus, "transformation_status"), nullable=False, default=PublishStatus.ACTIVE)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
