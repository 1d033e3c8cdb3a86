from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, Integer, ForeignKey, String, DateTime, Numeric
from sqlalchemy.orm import relationship

from campusmart.data.database import Base


class ItemModel(Base):
    """Ogloszenie w katalogu. Serwis zamowien tylko czyta (cena, sprzedawca)."""

    __tablename__ = "items"

    id = Column("item_id", Integer, primary_key=True)
    seller_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String(50), nullable=False, default="other")
    photo = Column(String(500), nullable=True)
    is_available = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    seller = relationship("UserModel", lazy="joined")
