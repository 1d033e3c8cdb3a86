from sqlalchemy import Column, Integer, ForeignKey, String, Text, DateTime, Numeric
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from campusmart.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column("order_id", Integer, primary_key=True)
    buyer_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    seller_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)

    status = Column(String(20), nullable=False, default="pending")  # pending, confirmed, shipped, delivered, cancelled
    total_amount = Column(Numeric(10, 2), nullable=False)
    delivery_address = Column(String(500), nullable=False, default="")
    notes = Column(Text, nullable=False, default="")
    order_date = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    buyer = relationship("UserModel", foreign_keys=[buyer_id])
    seller = relationship("UserModel", foreign_keys=[seller_id])
    lines = relationship(
        "OrderLineModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderLineModel.id",
    )


class OrderLineModel(Base):
    """Pozycja zamowienia, price_at_time to snapshot ceny z chwili zakupu."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.order_id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.item_id"), nullable=False)

    quantity = Column(Integer, nullable=False)
    price_at_time = Column(Numeric(10, 2), nullable=False)

    order = relationship("OrderModel", back_populates="lines")
    item = relationship("ItemModel")
