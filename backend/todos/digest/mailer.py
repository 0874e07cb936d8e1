# todos/digest/mailer.py

import logging
import smtplib
from typing import Optional

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.utils.html import strip_tags

from ..exceptions import DigestDeliveryError

logger = logging.getLogger(__name__)

DIGEST_SUBJECT = "Updated Task List - Todo App"


class MailDispatcher:
    """
    Sends HTML documents through the configured mail relay.

    Without an injected connection each send goes through EMAIL_BACKEND as
    configured at send time; in production that is Django's SMTP backend
    using the operator's EMAIL_HOST_USER / EMAIL_HOST_PASSWORD. One attempt
    per message, no retry, no queue.
    """

    def __init__(self, from_email: Optional[str] = None, connection=None):
        self.from_email = from_email or getattr(settings, "DEFAULT_FROM_EMAIL", None)
        self.connection = connection

    def send(self, recipient: str, html_body: str, subject: str = DIGEST_SUBJECT) -> None:
        """
        Deliver ``html_body`` to ``recipient``.

        Raises:
            DigestDeliveryError: The relay rejected the message or could not
                be reached. The cause is chained and logged, never returned.
        """
        message = EmailMultiAlternatives(
            subject=subject,
            body=strip_tags(html_body),
            from_email=self.from_email,
            to=[recipient],
            connection=self.connection,
        )
        message.attach_alternative(html_body, "text/html")

        try:
            message.send(fail_silently=False)
        except (smtplib.SMTPException, OSError, ValueError) as e:
            logger.exception(f"Mail relay rejected digest for {recipient}: {e}")
            raise DigestDeliveryError("Mail relay delivery failed") from e

        logger.info(f"Email sent to: {recipient}")
