from sqlalchemy import Column, String, Integer, Float, ForeignKey, UUID
from sqlalchemy.orm import relationship

from app.db.base import BaseModel


class Bottle(BaseModel):
    __tablename__ = "bottles"
    
    owner_id = Column(UUID(as_uuid=True), ForeignKey("users.uuid", ondelete="CASCADE"), index=True, nullable=False)
    product = Column(String(255), nullable=False)
    vintage = Column(Integer)
    varietal = Column(String(255))
    count = Column(Integer)
    price = Column(Float)
    cost_per_bottle = Column(Float)
    total_cost = Column(Float)
    size = Column(String(50))
    country_code = Column(String(3))
    status = Column(String(50))  # opaque label, not validated
    
    # Relationships
    owner = relationship("User", back_populates="bottles")
