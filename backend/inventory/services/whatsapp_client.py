"""
WhatsApp delivery through the Twilio Messages REST API.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


@dataclass
class TwilioConfig:
    account_sid: str
    auth_token: str
    from_number: str = "whatsapp:+14155238886"
    timeout: int = 10

    @property
    def is_configured(self) -> bool:
        return bool(self.account_sid and self.auth_token)

    @classmethod
    def from_settings(cls) -> 'TwilioConfig':
        return cls(
            account_sid=settings.TWILIO_ACCOUNT_SID,
            auth_token=settings.TWILIO_AUTH_TOKEN,
            from_number=settings.TWILIO_WHATSAPP_FROM,
            timeout=settings.TWILIO_TIMEOUT,
        )


class WhatsAppClient:
    """
    Sends a single WhatsApp message. One attempt per call, no retries.
    """

    BASE_URL = "https://api.twilio.com/2010-04-01/Accounts/{sid}/Messages.json"

    def __init__(self, config: Optional[TwilioConfig] = None):
        self.config = config or TwilioConfig.from_settings()
        self._url = self.BASE_URL.format(sid=self.config.account_sid)

    @staticmethod
    def to_whatsapp_address(number: str) -> str:
        number = number.strip()
        if number.startswith('whatsapp:'):
            return number
        return f"whatsapp:{number}"

    def send(self, number: str, body: str) -> tuple[bool, Optional[str]]:
        """
        Send ``body`` to ``number``.

        Returns:
            (True, message_sid) on success, (False, error message) otherwise
        """
        if not self.config.is_configured:
            error_msg = "Twilio credentials are not configured"
            logger.warning(f"Skipping WhatsApp message to {number}: {error_msg}")
            return False, error_msg

        payload = {
            "From": self.config.from_number,
            "To": self.to_whatsapp_address(number),
            "Body": body,
        }

        try:
            response = requests.post(
                self._url,
                data=payload,
                auth=(self.config.account_sid, self.config.auth_token),
                timeout=self.config.timeout
            )
        except requests.exceptions.Timeout:
            return False, "Request timed out"
        except requests.exceptions.ConnectionError:
            return False, "No internet connection"
        except requests.exceptions.RequestException as e:
            return False, f"Request failed: {str(e)}"

        if response.status_code in (200, 201):
            sid = response.json().get('sid')
            logger.info(f"WhatsApp message sent to {number}: {sid}")
            return True, sid

        return False, f"Twilio API error: {response.status_code} - {response.text}"
