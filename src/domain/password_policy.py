"""
Password composition policy for advisor credentials.

Every rule is checked independently; the first violated rule is reported.
"""

import re

from src.domain.result import Error, Result, Return

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_BYTES = 72  # bcrypt ignores input beyond 72 bytes
SPECIAL_CHARACTERS = "@$!%*?&"

_RULES = (
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"\d"), "Password must contain at least one number"),
    (
        re.compile(f"[{re.escape(SPECIAL_CHARACTERS)}]"),
        f"Password must contain at least one special character ({SPECIAL_CHARACTERS})",
    ),
)


def validate_password_strength(password: str) -> Result[None]:
    """
    Validate a new password against the composition policy.

    Returns:
        Result with None if valid, or WEAK_PASSWORD Error naming the violated rule
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        return Return.err(
            Error(
                "WEAK_PASSWORD",
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            )
        )

    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return Return.err(
            Error(
                "WEAK_PASSWORD",
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes long",
            )
        )

    for pattern, message in _RULES:
        if not pattern.search(password):
            return Return.err(Error("WEAK_PASSWORD", message))

    return Return.ok(None)
