from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from datetime import datetime
from models.base import Base


class SavedResource(Base):
    """
    Association between a viewer and a bookmarked resource.
    
    The row's existence means "saved". The surrogate id exists only because the
    ORM needs a primary key; identity is the (resource_id, user_id) pair, and
    user_id is NULL for anonymous viewers.
    """
    __tablename__ = "saved_resources"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    resource_id = Column(Integer, ForeignKey("resources.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(64), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    
    __table_args__ = (
        Index(
            "idx_saved_resource_user",
            "resource_id",
            "user_id",
            unique=True,
            postgresql_nulls_not_distinct=True,
        ),
    )
