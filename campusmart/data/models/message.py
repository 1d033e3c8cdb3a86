from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, Text, DateTime

from campusmart.data.database import Base


class MessageModel(Base):
    __tablename__ = "messages"

    id = Column("message_id", Integer, primary_key=True)
    sender_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)

    message_text = Column(Text, nullable=False)
    order_id = Column(Integer, ForeignKey("orders.order_id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
