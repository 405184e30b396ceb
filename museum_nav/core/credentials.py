"""
Credential format policy for registration and login.
Usernames, emails and passwords are limited to plain ASCII patterns. Each
validator returns the first failing rule; the message text is part of the
API contract.
"""
import re
import string
from dataclasses import dataclass
from typing import Any, Optional

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
PASSWORD_MIN_LENGTH = 8

PASSWORD_SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?~`"

_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
_EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
_PASSWORD_ALLOWED = frozenset(string.ascii_letters + string.digits + PASSWORD_SPECIAL_CHARACTERS)


@dataclass(frozen=True)
class CredentialCheck:
    valid: bool
    reason: Optional[str] = None


_OK = CredentialCheck(valid=True)


def _fail(reason: str) -> CredentialCheck:
    return CredentialCheck(valid=False, reason=reason)


def validate_username(value: Any) -> CredentialCheck:
    if not isinstance(value, str):
        return _fail("Username must be a string")
    if not USERNAME_MIN_LENGTH <= len(value) <= USERNAME_MAX_LENGTH:
        return _fail("Invalid username format: username must be 3-30 characters")
    if not _USERNAME_PATTERN.fullmatch(value):
        return _fail(
            "Invalid username format: username can only contain letters, numbers, underscores and hyphens"
        )
    return _OK


def validate_email(value: Any) -> CredentialCheck:
    if not isinstance(value, str):
        return _fail("Email must be a string")
    if not _EMAIL_PATTERN.fullmatch(value):
        return _fail("Invalid email format")
    return _OK


def validate_password(value: Any) -> CredentialCheck:
    """Order: length, charset, uppercase, lowercase, digit, special."""
    if not isinstance(value, str):
        return _fail("Password must be a string")
    if len(value) < PASSWORD_MIN_LENGTH:
        return _fail("Password must be at least 8 characters long")
    if any(ch not in _PASSWORD_ALLOWED for ch in value):
        return _fail("Password contains invalid characters")
    if not any(ch in string.ascii_uppercase for ch in value):
        return _fail("Password must contain at least one uppercase letter")
    if not any(ch in string.ascii_lowercase for ch in value):
        return _fail("Password must contain at least one lowercase letter")
    if not any(ch in string.digits for ch in value):
        return _fail("Password must contain at least one digit")
    if not any(ch in PASSWORD_SPECIAL_CHARACTERS for ch in value):
        return _fail("Password must contain at least one special character")
    return _OK
