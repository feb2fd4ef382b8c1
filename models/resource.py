from sqlalchemy import Column, Integer, String, Enum, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from models.base import Base, JSONDocument, ResourceStatus


class Resource(Base):
    """
    A social-service listing (shelter, food bank, clinic, ...).
    
    Design:
    - category is stored as its display string ("Mental Health") so rows stay
      readable by other consumers of the table
    - contact_details is a free-form JSON document (address, phone, email,
      website, description, services, eligibility, hours)
    - last_updated drives listing order and is rewritten on every mutation
    """
    __tablename__ = "resources"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    
    organization = Column(String(255), nullable=False, index=True)
    program = Column(String(255), nullable=True)
    category = Column(String(100), nullable=False, index=True)
    status = Column(Enum(ResourceStatus, name="resource_status"), default=ResourceStatus.AVAILABLE, nullable=False)
    zipcode = Column(String(10), nullable=True, index=True)
    contact_details = Column(JSONDocument, nullable=True)
    
    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    last_updated = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    
    notes = relationship(
        "ResourceNote",
        back_populates="resource",
        cascade="all, delete-orphan",
        lazy="noload",
    )
    
    __table_args__ = (
        Index("idx_resources_category_zipcode", "category", "zipcode"),
    )


class ResourceNote(Base):
    """
    Free-text note attached to a resource.
    
    Append-only: rows are inserted and read newest-first, never edited.
    """
    __tablename__ = "resource_notes"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    resource_id = Column(Integer, ForeignKey("resources.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(64), nullable=True)
    username = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    
    resource = relationship("Resource", back_populates="notes")
