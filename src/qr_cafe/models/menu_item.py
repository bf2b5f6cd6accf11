from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from ..db.base import Base
from ..utils import new_id, utcnow


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(String(32), primary_key=True, default=new_id)
    cafe_id = Column(String(32), ForeignKey("cafes.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(128), nullable=False)
    description = Column(String(512), nullable=False, default="")
    category = Column(String(64), nullable=False, default="Food")  # кофе, еда, десерт и т.д.
    price = Column(Numeric(10, 2), nullable=False)  # цена
    available = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    cafe = relationship("Cafe", back_populates="menu")
