from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship

from app.db.base import BaseModel


class User(BaseModel):
    """Владелец погреба. Удаление пользователя удаляет и его бутылки."""
    __tablename__ = "users"
    
    email = Column(String(255), unique=True, index=True, nullable=False)
    username = Column(String(100), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    
    bottles = relationship(
        "Bottle",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="desc(Bottle.created_at)",
    )
