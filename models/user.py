from sqlalchemy import Column, Integer, String, Enum, DateTime
from datetime import datetime
from models.base import Base, UserRole


class User(Base):
    """
    Directory user. Owned by the identity service; this service only reads it
    to resolve the viewer behind a session token.
    """
    __tablename__ = "users"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), nullable=False, unique=True)
    full_name = Column(String(200), nullable=True)
    role = Column(Enum(UserRole, name="user_role"), default=UserRole.CASE_MANAGER, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
