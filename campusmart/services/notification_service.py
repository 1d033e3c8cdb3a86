# campusmart/services/notification_service.py
from sqlalchemy.orm import Session

from campusmart.celery_worker import celery_app
from campusmart.data.models.message import MessageModel
from campusmart.domain.errors import ValidationError
from campusmart.repos.message_repo import MessageRepo
from campusmart.services.push_client import PushClient
from campusmart.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Most do komunikatora: zapisuje wiadomosc (opcjonalnie powiazana
    z zamowieniem) i zleca wysylke push przez Celery.
    Bledy sa propagowane, decyzja co z nimi zrobic nalezy do wolajacego.
    """

    def __init__(self, db: Session):
        self.repo = MessageRepo(db)

    def notify(
        self,
        sender_id: int,
        receiver_id: int,
        text: str,
        order_id: int | None = None,
    ) -> MessageModel:
        if not sender_id or not receiver_id:
            raise ValidationError("Sender and receiver are required")
        if not text or not text.strip():
            raise ValidationError("Message text is required")

        message = self.repo.create_message(
            MessageModel(
                sender_id=sender_id,
                receiver_id=receiver_id,
                message_text=text,
                order_id=order_id,
            )
        )

        logger.info(
            f"Message {message.id} {sender_id} -> {receiver_id} stored"
            + (f" for order {order_id}" if order_id else "")
        )

        deliver_message_task.delay(
            message.id, sender_id, receiver_id, text, order_id
        )
        return message


@celery_app.task(name="campusmart.services.notification_service.deliver_message_task")
def deliver_message_task(
    message_id: int,
    sender_id: int,
    receiver_id: int,
    text: str,
    order_id: int | None = None,
):
    """
    Celery task - push do odbiorcy przez webhook.
    Bez skonfigurowanego PUSH_WEBHOOK_URL tylko loguje.
    """
    payload = {
        "message_id": message_id,
        "sender_id": sender_id,
        "receiver_id": receiver_id,
        "text": text,
        "order_id": order_id,
    }

    client = PushClient()
    if not client.enabled:
        logger.info(f"[NOTIFICATION] User {receiver_id}: {text}")
        return {**payload, "status": "logged"}

    client.deliver(payload)
    return {**payload, "status": "sent"}
