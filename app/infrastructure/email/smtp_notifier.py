"""SMTP notifier - delivers account emails through an SMTP relay.

smtplib is blocking, so each send runs on Starlette's worker thread pool
and never stalls the event loop.
"""

import logging
import smtplib
import ssl
from email.message import EmailMessage

from starlette.concurrency import run_in_threadpool

from app.domain.entities.account import Account
from app.domain.services.notifier import INotifier, NotificationResult
from app.infrastructure.email.templates import AccountEmailTemplates, RenderedEmail

logger = logging.getLogger(__name__)


class SmtpNotifier(INotifier):
    """
    INotifier backed by an SMTP server.

    Transport errors are converted into failed NotificationResults; no
    exception escapes a send.
    """

    def __init__(
        self,
        templates: AccountEmailTemplates,
        host: str,
        port: int,
        sender: str,
        username: str = "",
        password: str = "",
        use_tls: bool = True,
        use_ssl: bool = False,
        timeout: float = 10.0,
        verification_token_hours: int = 24,
        reset_token_hours: int = 1,
    ):
        self._templates = templates
        self._host = host
        self._port = port
        self._sender = sender
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._use_ssl = use_ssl
        self._timeout = timeout
        self._verification_token_hours = verification_token_hours
        self._reset_token_hours = reset_token_hours

    async def send_verification(self, account: Account, token: str) -> NotificationResult:
        return await self._send(
            self._templates.verification(account, token, self._verification_token_hours)
        )

    async def send_password_reset(self, account: Account, token: str) -> NotificationResult:
        return await self._send(
            self._templates.password_reset(account, token, self._reset_token_hours)
        )

    async def send_welcome(self, account: Account) -> NotificationResult:
        return await self._send(self._templates.welcome(account))

    async def _send(self, email: RenderedEmail) -> NotificationResult:
        message = self._build_message(email)
        try:
            await run_in_threadpool(self._deliver, message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error(f"SMTP delivery to {self._host}:{self._port} failed: {exc}")
            return NotificationResult.failed(str(exc))

        logger.debug(f"Delivered '{email.subject}' via {self._host}:{self._port}")
        return NotificationResult.ok()

    def _build_message(self, email: RenderedEmail) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self._sender
        message["To"] = email.recipient
        message["Subject"] = email.subject
        message.set_content(email.text)
        message.add_alternative(email.html, subtype="html")
        return message

    def _deliver(self, message: EmailMessage) -> None:
        context = ssl.create_default_context()
        if self._use_ssl:
            client: smtplib.SMTP = smtplib.SMTP_SSL(
                self._host, self._port, timeout=self._timeout, context=context
            )
        else:
            client = smtplib.SMTP(self._host, self._port, timeout=self._timeout)

        with client:
            if self._use_tls and not self._use_ssl:
                client.starttls(context=context)
            if self._username:
                client.login(self._username, self._password)
            client.send_message(message)
