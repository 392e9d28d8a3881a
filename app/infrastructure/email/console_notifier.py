"""Console notifier - logs account emails instead of sending them.

Used for local development and tests. Messages are kept in memory so tests
can assert on them; the log line carries the recipient and subject only,
never the link or token.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from app.domain.entities.account import Account
from app.domain.services.notifier import INotifier, NotificationResult
from app.infrastructure.email.templates import AccountEmailTemplates, RenderedEmail

logger = logging.getLogger(__name__)


@dataclass
class LoggedEmail:
    """Record of a logged email for test assertions."""

    kind: str
    recipient: str
    subject: str
    text: str
    html: str
    token: str | None
    logged_at: datetime


@dataclass
class ConsoleNotifier(INotifier):
    """INotifier that logs instead of sending."""

    templates: AccountEmailTemplates
    verification_token_hours: int = 24
    reset_token_hours: int = 1
    sent_emails: list[LoggedEmail] = field(default_factory=list)
    log_level: int = logging.INFO

    async def send_verification(self, account: Account, token: str) -> NotificationResult:
        return self._record(
            "verification",
            self.templates.verification(account, token, self.verification_token_hours),
            token,
        )

    async def send_password_reset(self, account: Account, token: str) -> NotificationResult:
        return self._record(
            "password_reset",
            self.templates.password_reset(account, token, self.reset_token_hours),
            token,
        )

    async def send_welcome(self, account: Account) -> NotificationResult:
        return self._record("welcome", self.templates.welcome(account), None)

    def _record(self, kind: str, email: RenderedEmail, token: str | None) -> NotificationResult:
        self.sent_emails.append(
            LoggedEmail(
                kind=kind,
                recipient=email.recipient,
                subject=email.subject,
                text=email.text,
                html=email.html,
                token=token,
                logged_at=datetime.now(timezone.utc),
            )
        )
        logger.log(self.log_level, f"EMAIL (console): To={email.recipient}, Subject={email.subject}")
        return NotificationResult.ok()

    # --- Test Helper Methods ---

    def get_last_email(self, kind: str | None = None) -> LoggedEmail | None:
        """Get the most recently logged email, optionally of one kind."""
        emails = [e for e in self.sent_emails if kind is None or e.kind == kind]
        return emails[-1] if emails else None

    def get_emails_to(self, recipient: str) -> list[LoggedEmail]:
        """Get all emails logged to a specific recipient."""
        return [e for e in self.sent_emails if e.recipient == recipient]
