import enum
from sqlalchemy import Column, Integer, String, Numeric, DateTime, Enum as SAEnum
from sqlalchemy.orm import relationship
from ..db.base import Base
from ..utils import new_id, utcnow


class OrderStatusEnum(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    preparing = "preparing"
    ready = "ready"
    completed = "completed"


class PaymentStatusEnum(str, enum.Enum):
    pending = "pending"
    completed = "completed"
    failed = "failed"


class PaymentMethodEnum(str, enum.Enum):
    online = "online"
    upi = "upi"
    cash = "cash"


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(32), primary_key=True, default=new_id)
    # без FK: заказ хранит снимок и не зависит от судьбы кафе
    cafe_id = Column(String(32), nullable=False, index=True)
    total_amount = Column(Numeric(10, 2), nullable=False)
    customer_name = Column(String(128), nullable=False)
    table_number = Column(String(32), nullable=False)
    payment_method = Column(
        SAEnum(PaymentMethodEnum, name="payment_method"), nullable=False, default=PaymentMethodEnum.cash
    )
    status = Column(SAEnum(OrderStatusEnum, name="order_status"), nullable=False, default=OrderStatusEnum.pending)
    payment_status = Column(
        SAEnum(PaymentStatusEnum, name="payment_status"), nullable=False, default=PaymentStatusEnum.pending
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    # номер вставки, второй ключ сортировки при равном created_at
    seq = Column(Integer, nullable=False, default=0, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    closed_at = Column(DateTime(timezone=True), nullable=True)

    # связи
    items = relationship(
        "OrderItem",
        back_populates="order",
        order_by="OrderItem.position",
        cascade="all, delete-orphan",
    )
