"""
➡️ But : Envoyer les emails sortants (formulaire de contact) via SMTP.

Le mailer est construit une fois à partir des settings et injecté dans ContactService.
"""

import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr
from typing import Optional

import structlog

logger = structlog.get_logger(__name__)


class MailDeliveryError(Exception):
    """L'envoi a échoué (connexion, authentification, refus du serveur...)."""


@dataclass(frozen=True)
class OutgoingMail:
    to: str
    subject: str
    body: str
    reply_to: Optional[str] = None


class Mailer:
    def send(self, mail: OutgoingMail) -> None:
        raise NotImplementedError


class SmtpMailer(Mailer):
    def __init__(
        self,
        *,
        host: str,
        port: int,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout: float = 10.0,
        sender_name: str = "Portfolio",
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout
        self.sender_name = sender_name

    @property
    def sender_address(self) -> str:
        return self.username or f"no-reply@{self.host}"

    def build_message(self, mail: OutgoingMail) -> EmailMessage:
        message = EmailMessage()
        # Expéditeur technique : le compte SMTP ; la réponse part vers l'auteur
        message["From"] = formataddr((self.sender_name, self.sender_address))
        message["To"] = mail.to
        message["Subject"] = mail.subject
        if mail.reply_to:
            message["Reply-To"] = mail.reply_to
        message.set_content(mail.body)
        return message

    def send(self, mail: OutgoingMail) -> None:
        message = self.build_message(mail)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username and self.password:
                    smtp.login(self.username, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Mail delivery failed", host=self.host, port=self.port, error=str(e))
            raise MailDeliveryError(str(e)) from e
        logger.info("Mail sent", to=mail.to)
