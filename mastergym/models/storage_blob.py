from sqlalchemy import Column, DateTime, Integer, String

from mastergym.db.database import Base


class StorageBlob(Base):
    """Metadata for one uploaded file; the bytes live in the blob store."""
    __tablename__ = "storage_blobs"

    id = Column(String(64), primary_key=True)
    content_type = Column(String(128), nullable=True)
    size = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, index=True)

    def __repr__(self):
        return f"<StorageBlob(id={self.id}, created_at={self.created_at})>"
