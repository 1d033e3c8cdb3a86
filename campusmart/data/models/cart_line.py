from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship

from campusmart.data.database import Base


class CartLineModel(Base):
    __tablename__ = "cart"

    id = Column("cart_id", Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.item_id"), nullable=False)

    quantity = Column(Integer, nullable=False, default=1)
    added_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    item = relationship("ItemModel", lazy="joined")

    __table_args__ = (UniqueConstraint("user_id", "item_id", name="u_cart_user_item"),)
