from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime
from campusmart.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column("user_id", Integer, primary_key=True)
    username = Column(String(50), nullable=False, unique=True)
    first_name = Column(String(100), nullable=False, default="")
    last_name = Column(String(100), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    @property
    def display_name(self) -> str:
        full = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return full or self.username
