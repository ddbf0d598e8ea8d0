from __future__ import annotations

MIN_PASSWORD_LENGTH = 6


def validate_password_strength(password: str) -> tuple[bool, str | None]:
    """Validate password strength."""
    if len(password) < MIN_PASSWORD_LENGTH:
        return False, f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    return True, None


def normalize_email(email: str) -> str:
    return email.lower().strip()


def parse_bool_flag(value: str | None) -> bool | None:
    """Interpret a query-string flag.

    Only ``true`` (any case) means True; any other present value means False.
    """
    if value is None:
        return None
    return value.strip().lower() == "true"
