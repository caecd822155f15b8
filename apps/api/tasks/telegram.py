"""Minimal Telegram Bot API sender used by scheduled tasks."""

import logging

import httpx

logger = logging.getLogger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org"
SEND_TIMEOUT_SECONDS = 10


class TelegramNotifier:
    """Sends text messages through the Bot API ``sendMessage`` method."""

    def __init__(self, token: str, client: httpx.Client | None = None):
        if not token:
            raise ValueError("TELEGRAM_TOKEN is not configured")
        self._url = f"{TELEGRAM_API_URL}/bot{token}/sendMessage"
        self._client = client or httpx.Client(timeout=SEND_TIMEOUT_SECONDS)

    def send(self, chat_id: int, text: str, parse_mode: str = "Markdown") -> bool:
        """Send one message. Returns False (and logs) if Telegram rejected it."""
        try:
            response = self._client.post(
                self._url,
                json={"chat_id": chat_id, "text": text, "parse_mode": parse_mode},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Telegram send to {chat_id} failed: {e}")
            return False
        return True

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "TelegramNotifier":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
