# campusmart/services/push_client.py
import requests

from campusmart.utils.retry import http_retry
from campusmart.utils.settings import PUSH_WEBHOOK_URL, PUSH_TIMEOUT_SECONDS
from campusmart.utils.logging import get_logger

logger = get_logger(__name__)


class PushClient:
    """Wysyla zapisana wiadomosc na webhook push (np. gateway powiadomien mobilnych)."""

    def __init__(self, url: str | None = None, timeout: int | None = None):
        self.url = (url if url is not None else PUSH_WEBHOOK_URL).rstrip("/")
        self.timeout = timeout or PUSH_TIMEOUT_SECONDS

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    @http_retry()
    def deliver(self, payload: dict) -> dict:
        logger.info(f"PushClient POST {self.url} message {payload.get('message_id')}")

        resp = requests.post(self.url, json=payload, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json() if resp.content else {}
