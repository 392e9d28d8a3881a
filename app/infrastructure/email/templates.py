"""Account email content: subjects, links, HTML and plain-text bodies."""

from dataclasses import dataclass
from html import escape
from urllib.parse import urlencode

from app.domain.entities.account import Account

BRAND = "Kinote"

_LAYOUT = """<!DOCTYPE html>
<html>
  <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
      <div style="background-color: {accent}; color: white; padding: 20px; text-align: center; border-radius: 5px;">
        <h1>{heading}</h1>
      </div>
      <div style="padding: 20px; background-color: #f9f9f9; margin: 20px 0; border-radius: 5px;">
        <p>Hello {name},</p>
        {content}
      </div>
      <div style="text-align: center; color: #666; font-size: 12px; margin-top: 30px;">
        <p>&copy; {brand}. All rights reserved.</p>
      </div>
    </div>
  </body>
</html>
"""

_BUTTON = (
    '<a href="{url}" style="background-color: {accent}; color: white; padding: 12px 24px; '
    'text-decoration: none; border-radius: 5px; display: inline-block; margin: 20px 0;">{label}</a>'
)


@dataclass(frozen=True)
class RenderedEmail:
    recipient: str
    subject: str
    html: str
    text: str


class AccountEmailTemplates:
    """Build the three account emails against a frontend base URL."""

    def __init__(self, frontend_url: str):
        self._frontend_url = frontend_url.rstrip("/")

    def verification(self, account: Account, token: str, valid_hours: int = 24) -> RenderedEmail:
        link = self._link("/auth/verify-email", token)
        content = (
            f"<p>Thank you for registering with {BRAND}. Please verify your email address "
            "to activate your account.</p>"
            + _BUTTON.format(url=escape(link), accent="#007bff", label="Verify Email")
            + f"<p>Or copy this link in your browser:</p><p><small>{escape(link)}</small></p>"
            + f"<p>This link will expire in {valid_hours} hours.</p>"
            "<p>If you didn't create this account, please ignore this email.</p>"
        )
        return RenderedEmail(
            recipient=account.email,
            subject=f"Verify Your Email - {BRAND}",
            html=self._page(account, f"Welcome to {BRAND}!", "#007bff", content),
            text=f"Welcome to {BRAND}! Please verify your email by visiting: {link}",
        )

    def password_reset(self, account: Account, token: str, valid_hours: int = 1) -> RenderedEmail:
        link = self._link("/auth/reset-password", token)
        unit = "hour" if valid_hours == 1 else "hours"
        content = (
            f"<p>We received a request to reset the password for your {BRAND} account.</p>"
            + _BUTTON.format(url=escape(link), accent="#dc3545", label="Reset Password")
            + f"<p>Or copy this link in your browser:</p><p><small>{escape(link)}</small></p>"
            + f'<p style="color: #dc3545; font-weight: bold;">This link will expire in {valid_hours} {unit}.</p>'
            "<p>If you didn't request this, please ignore this email and your password "
            "will remain unchanged.</p>"
        )
        return RenderedEmail(
            recipient=account.email,
            subject=f"Password Reset Request - {BRAND}",
            html=self._page(account, "Password Reset Request", "#dc3545", content),
            text=f"Click this link to reset your password: {link}",
        )

    def welcome(self, account: Account) -> RenderedEmail:
        login_url = f"{self._frontend_url}/login"
        content = (
            "<p>Your account has been successfully verified. "
            f"You can now log in and start using {BRAND}!</p>"
            + _BUTTON.format(url=escape(login_url), accent="#007bff", label="Go to Dashboard")
        )
        return RenderedEmail(
            recipient=account.email,
            subject=f"Welcome to {BRAND} - Get Started Today!",
            html=self._page(account, f"Welcome to {BRAND}!", "#28a745", content),
            text=f"Welcome to {BRAND}! You can now log in at {login_url}",
        )

    def _link(self, path: str, token: str) -> str:
        return f"{self._frontend_url}{path}?{urlencode({'token': token})}"

    def _page(self, account: Account, heading: str, accent: str, content: str) -> str:
        return _LAYOUT.format(
            accent=accent,
            heading=escape(heading),
            name=escape(account.display_name or "User"),
            content=content,
            brand=BRAND,
        )
