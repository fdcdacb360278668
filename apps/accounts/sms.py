"""
SMS delivery backends.

The active backend is selected with the ``SMS_BACKEND`` setting, the same
way Django selects ``EMAIL_BACKEND``.
"""
import logging
from dataclasses import dataclass

from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


@dataclass
class SmsMessage:
    to: str
    body: str
    sender_id: str = ''


class BaseSmsBackend:
    """Subclasses implement ``send_message``."""

    def send_message(self, message: SmsMessage) -> None:
        raise NotImplementedError('SMS backends must implement send_message()')


class ConsoleSmsBackend(BaseSmsBackend):
    """Writes messages to the log instead of sending them."""

    def send_message(self, message: SmsMessage) -> None:
        logger.info("SMS to %s [%s]: %s", message.to, message.sender_id, message.body)


class InMemorySmsBackend(BaseSmsBackend):
    """
    Keeps sent messages in ``outbox`` for tests.

    ``outbox`` is a class attribute shared by every instance in the
    process, like ``django.core.mail.outbox``. Tests clear it between runs.
    """

    outbox: list = []

    def send_message(self, message: SmsMessage) -> None:
        self.outbox.append(message)


def get_sms_backend() -> BaseSmsBackend:
    return import_string(settings.SMS_BACKEND)()


def send_sms(to: str, body: str) -> None:
    message = SmsMessage(to=to, body=body, sender_id=settings.SMS_SENDER_ID)
    get_sms_backend().send_message(message)
