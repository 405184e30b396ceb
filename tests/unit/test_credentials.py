import pytest

from museum_nav.core.credentials import validate_email, validate_password, validate_username


def test_valid_credentials_pass():
    assert validate_username("john_smith-2").valid
    assert validate_email("john.smith@example.com").valid
    assert validate_password("Password123!").valid
    assert validate_password("Password123!").reason is None


@pytest.mark.parametrize("value,reason", [
    (123, "Username must be a string"),
    ("ab", "Invalid username format: username must be 3-30 characters"),
    ("a" * 31, "Invalid username format: username must be 3-30 characters"),
    ("john smith", "Invalid username format: username can only contain letters, numbers, underscores and hyphens"),
    ("john';--", "Invalid username format: username can only contain letters, numbers, underscores and hyphens"),
    ("alice\n", "Invalid username format: username can only contain letters, numbers, underscores and hyphens"),
])
def test_username_rules(value, reason):
    result = validate_username(value)
    assert not result.valid
    assert result.reason == reason


@pytest.mark.parametrize("value,reason", [
    (None, "Email must be a string"),
    ("john@", "Invalid email format"),
    ("john@example", "Invalid email format"),
    ("jöhn@example.com", "Invalid email format"),
    ("a@b.co\n", "Invalid email format"),
])
def test_email_rules(value, reason):
    result = validate_email(value)
    assert not result.valid
    assert result.reason == reason


@pytest.mark.parametrize("value,reason", [
    (12345678, "Password must be a string"),
    ("Pa1!", "Password must be at least 8 characters long"),
    ("Password123! ", "Password contains invalid characters"),
    ("Pässword123!", "Password contains invalid characters"),
    ("password123!", "Password must contain at least one uppercase letter"),
    ("PASSWORD123!", "Password must contain at least one lowercase letter"),
    ("Password!!!", "Password must contain at least one digit"),
    ("Password123", "Password must contain at least one special character"),
])
def test_password_rules_report_first_failure(value, reason):
    result = validate_password(value)
    assert not result.valid
    assert result.reason == reason
