"""Password strength policy."""

import re

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128

_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
)


def password_policy_violations(password: str) -> list[str]:
    """
    Check a candidate password against the strength policy.

    Args:
        password: Plain text candidate

    Returns:
        Human-readable messages, empty when the password is acceptable
    """
    violations = []
    if len(password) < MIN_PASSWORD_LENGTH:
        violations.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(password) > MAX_PASSWORD_LENGTH:
        violations.append(f"Password must not exceed {MAX_PASSWORD_LENGTH} characters")
    for pattern, message in _RULES:
        if not pattern.search(password):
            violations.append(message)
    return violations
