"""Per-endpoint input checks run before any business logic.

Each ``validate_*`` function collects every violated field and raises a
single ``ValidationError`` so clients see all problems at once.
"""
from email_validator import EmailNotValidError, validate_email

from app.errors import ValidationError, field_error

MIN_PASSWORD_LENGTH = 6
# bcrypt 只处理前 72 字节
MAX_PASSWORD_BYTES = 72


def is_blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def is_email(value: str | None) -> bool:
    if is_blank(value):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_too_long_password(password: str | None) -> bool:
    return password is not None and len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def _raise_if_any(errors: list[dict]) -> None:
    if errors:
        raise ValidationError(errors)


def validate_registration(name: str | None, email: str | None, password: str | None) -> None:
    errors = []
    if is_blank(name):
        errors.append(field_error("name", "Please enter a valid name", name))
    if not is_email(email):
        errors.append(field_error("email", "Please enter a valid Email", email))
    if password is None or len(password) < MIN_PASSWORD_LENGTH:
        errors.append(field_error("password", f"Password must be at least {MIN_PASSWORD_LENGTH} chars"))
    elif is_too_long_password(password):
        errors.append(field_error("password", f"Password must be at most {MAX_PASSWORD_BYTES} bytes"))
    _raise_if_any(errors)


def validate_login(email: str | None, password: str | None) -> None:
    errors = []
    if not is_email(email):
        errors.append(field_error("email", "Please enter a valid Email", email))
    if not password:
        errors.append(field_error("password", "Password is required"))
    elif is_too_long_password(password):
        errors.append(field_error("password", f"Password must be at most {MAX_PASSWORD_BYTES} bytes"))
    _raise_if_any(errors)


def validate_text(text: str | None) -> None:
    if is_blank(text):
        raise ValidationError([field_error("text", "Text is required", text)])
