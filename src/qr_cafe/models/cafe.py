from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from ..db.base import Base
from ..utils import new_id, utcnow


class Cafe(Base):
    __tablename__ = "cafes"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(128), nullable=False)
    owner_email = Column(String(255), nullable=False)
    address = Column(String(255), nullable=False, default="")
    phone = Column(String(32), nullable=False, default="")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # меню в порядке добавления
    menu = relationship(
        "MenuItem",
        back_populates="cafe",
        order_by="MenuItem.position",
        cascade="all, delete-orphan",
    )
