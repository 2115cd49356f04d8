"""EmailJS REST API client adapter."""

import logging
from dataclasses import dataclass

import httpx

from food_expiry.domain.reminders import ReminderMessage
from food_expiry.services.reminders import ReminderNotifier

logger = logging.getLogger(__name__)


@dataclass
class HttpxEmailJsClient(ReminderNotifier):
    """Sends reminder emails through an EmailJS template."""

    base_url: str
    service_id: str
    template_id: str
    public_key: str | None
    http_client: httpx.AsyncClient
    private_key: str | None = None

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        base_url: str,
        service_id: str,
        template_id: str,
        public_key: str | None,
        private_key: str | None = None,
    ) -> "HttpxEmailJsClient":
        """Create an EmailJS client with a managed httpx session."""
        return cls(
            base_url=base_url,
            service_id=service_id,
            template_id=template_id,
            public_key=public_key,
            private_key=private_key,
            http_client=httpx.AsyncClient(),
        )

    async def send_reminder(self, message: ReminderMessage) -> bool:
        """Send a reminder using EmailJS's send API.

        Returns False without calling EmailJS when the entry has no address.
        """
        if not message.to_email:
            logger.info("No email address found for %s", message.item_name)
            return False
        if not self.public_key:
            raise RuntimeError("Missing EmailJS public key")
        payload: dict[str, object] = {
            "service_id": self.service_id,
            "template_id": self.template_id,
            "user_id": self.public_key,
            "template_params": message.template_params(),
        }
        if self.private_key:
            payload["accessToken"] = self.private_key
        url = f"{self.base_url}/api/v1.0/email/send"
        response = await self.http_client.post(url, json=payload, timeout=10)
        response.raise_for_status()
        return True

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
