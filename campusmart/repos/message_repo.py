# campusmart/repos/message_repo.py
from sqlalchemy.orm import Session

from campusmart.data.models.message import MessageModel


class MessageRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_message(self, message: MessageModel) -> MessageModel:
        self.db.add(message)
        self.db.commit()
        self.db.refresh(message)
        return message
