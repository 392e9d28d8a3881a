"""Unit tests for the email templates and notifiers."""

import smtplib

import pytest

from app.domain.entities.account import Account
from app.infrastructure.config.settings import Settings
from app.infrastructure.email.console_notifier import ConsoleNotifier
from app.infrastructure.email.smtp_notifier import SmtpNotifier
from app.infrastructure.email.templates import AccountEmailTemplates
from app.presentation.dependencies import build_notifier

pytestmark = pytest.mark.unit


@pytest.fixture
def account() -> Account:
    return Account(id=1, email="jane@example.com", password_hash="HASHED:x", display_name="<Jane>")


@pytest.fixture
def templates() -> AccountEmailTemplates:
    return AccountEmailTemplates("https://kinote.app")


class TestTemplates:
    def test_verification_link_and_subject(self, templates, account):
        email = templates.verification(account, "abc123")

        assert email.recipient == "jane@example.com"
        assert "Kinote" in email.subject
        assert "https://kinote.app/auth/verify-email?token=abc123" in email.text
        assert "https://kinote.app/auth/verify-email?token=abc123" in email.html
        assert "24 hours" in email.html

    def test_reset_link_mentions_one_hour(self, templates, account):
        email = templates.password_reset(account, "r3set")

        assert "https://kinote.app/auth/reset-password?token=r3set" in email.text
        assert "1 hour" in email.html

    def test_display_name_is_escaped(self, templates, account):
        email = templates.welcome(account)

        assert "&lt;Jane&gt;" in email.html
        assert "<Jane>" not in email.html


class TestConsoleNotifier:
    @pytest.mark.asyncio
    async def test_records_messages(self, templates, account):
        notifier = ConsoleNotifier(templates=templates)

        result = await notifier.send_verification(account, "abc123")
        await notifier.send_welcome(account)

        assert result.delivered
        assert [e.kind for e in notifier.get_emails_to("jane@example.com")] == ["verification", "welcome"]
        assert notifier.get_last_email("verification").token == "abc123"

    @pytest.mark.asyncio
    async def test_token_not_logged(self, templates, account, caplog):
        notifier = ConsoleNotifier(templates=templates)

        with caplog.at_level("INFO"):
            await notifier.send_password_reset(account, "secret-token")

        assert "secret-token" not in caplog.text


class FakeSMTP:
    instances: list["FakeSMTP"] = []
    fail_with: Exception | None = None

    def __init__(self, host, port, timeout=None, **kwargs):
        self.host = host
        self.port = port
        self.started_tls = False
        self.logged_in_as = None
        self.messages = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self, context=None):
        self.started_tls = True

    def login(self, user, password):
        self.logged_in_as = user

    def send_message(self, message):
        if FakeSMTP.fail_with is not None:
            raise FakeSMTP.fail_with
        self.messages.append(message)


class TestSmtpNotifier:
    @pytest.fixture(autouse=True)
    def fake_smtp(self, monkeypatch):
        FakeSMTP.instances = []
        FakeSMTP.fail_with = None
        monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
        monkeypatch.setattr(smtplib, "SMTP_SSL", FakeSMTP)
        return FakeSMTP

    def make_notifier(self, templates, **kwargs) -> SmtpNotifier:
        return SmtpNotifier(
            templates=templates,
            host="smtp.test",
            port=587,
            sender="Kinote <no-reply@kinote.app>",
            username="mailer",
            password="pw",
            **kwargs,
        )

    @pytest.mark.asyncio
    async def test_sends_multipart_message_over_starttls(self, templates, account):
        result = await self.make_notifier(templates).send_verification(account, "abc123")

        assert result.delivered
        smtp = FakeSMTP.instances[0]
        assert smtp.started_tls
        assert smtp.logged_in_as == "mailer"
        message = smtp.messages[0]
        assert message["To"] == "jane@example.com"
        assert message["From"] == "Kinote <no-reply@kinote.app>"
        assert message.is_multipart()

    @pytest.mark.asyncio
    async def test_implicit_ssl_skips_starttls(self, templates, account):
        await self.make_notifier(templates, use_ssl=True).send_welcome(account)

        assert FakeSMTP.instances[0].started_tls is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [smtplib.SMTPAuthenticationError(535, b"bad"), ConnectionRefusedError()])
    async def test_transport_error_becomes_failed_result(self, templates, account, error):
        FakeSMTP.fail_with = error

        result = await self.make_notifier(templates).send_password_reset(account, "r3set")

        assert result.delivered is False
        assert result.error is not None


class TestConsoleNotifierLifetimes:
    @pytest.mark.asyncio
    async def test_configured_lifetimes_appear_in_mail(self, templates, account):
        notifier = ConsoleNotifier(templates=templates, verification_token_hours=48, reset_token_hours=2)

        await notifier.send_verification(account, "abc123")
        await notifier.send_password_reset(account, "r3set")

        assert "48 hours" in notifier.get_last_email("verification").html
        assert "2 hours" in notifier.get_last_email("password_reset").html

    @pytest.mark.asyncio
    async def test_build_notifier_passes_lifetimes_from_settings(self, account):
        settings = Settings(
            _env_file=None,
            secret_key="notifier-test-secret-key-with-32-chars!",
            email_backend="console",
            verification_token_expire_hours=12,
            password_reset_token_expire_hours=3,
        )

        notifier = build_notifier(settings)
        await notifier.send_verification(account, "abc123")
        await notifier.send_password_reset(account, "r3set")

        assert isinstance(notifier, ConsoleNotifier)
        assert "12 hours" in notifier.get_last_email("verification").html
        assert "3 hours" in notifier.get_last_email("password_reset").html
