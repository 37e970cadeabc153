import structlog

from portfolio.core.exceptions import AppError, BadRequestError
from portfolio.features.contact.mailer import MailDeliveryError, Mailer, OutgoingMail
from portfolio.features.contact.schemas import ContactIn

logger = structlog.get_logger(__name__)


class ContactService:
    """Relaye le formulaire de contact vers la boîte du propriétaire du portfolio."""

    def __init__(self, *, mailer: Mailer, recipient: str):
        self.mailer = mailer
        self.recipient = recipient

    def send(self, payload: ContactIn) -> None:
        if not payload.sender or not payload.subject or not payload.message:
            raise BadRequestError("from, subject and message are required.")

        mail = OutgoingMail(
            to=self.recipient,
            subject=payload.subject,
            body=f"{payload.message}\n\nSent by: {payload.sender}",
            reply_to=payload.sender,
        )
        try:
            self.mailer.send(mail)
        except MailDeliveryError as e:
            raise AppError("Error while sending the email", details=str(e) or "Unknown error") from e
        logger.info("Contact message relayed", subject_length=len(payload.subject))
