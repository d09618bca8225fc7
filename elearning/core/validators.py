"""
First-match request validation.

Each validator is an ordered list of ``(predicate, message)`` rules. Rules
are checked in order and evaluation stops at the first predicate that
fires, so callers receive at most one message.
"""
import re
from typing import Any, Callable, Mapping, Sequence

Payload = Mapping[str, Any]
Rule = tuple[Callable[[Payload], bool], str]

REQUIRED_FIELDS_MESSAGE = "Please provide all required fields"
COURSE_LEVEL_MESSAGE = "Level must be beginner, intermediate, or advanced"

PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 20
SPECIAL_CHARACTERS = "!@#$%^&*"

# Level names accepted by the public API, mixed case included.
ALLOWED_COURSE_LEVELS = ("BEGINNER", "INTERMEDIATE", "Expert")
# Levels the courses table can actually hold.
STORED_COURSE_LEVELS = ("BEGINNER", "INTERMEDIATE")

_ALLOWED_PASSWORD_RE = re.compile(r"[a-zA-Z0-9!@#$%^&*]+")


def is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _any_missing(*fields: str) -> Callable[[Payload], bool]:
    return lambda data: any(is_missing(data.get(field)) for field in fields)


def _any_missing_or_zero(*fields: str) -> Callable[[Payload], bool]:
    """Like ``_any_missing`` but a numeric 0 also counts as not provided."""
    def check(data: Payload) -> bool:
        for field in fields:
            value = data.get(field)
            if is_missing(value) or value == 0:
                return True
        return False
    return check


def first_violation(rules: Sequence[Rule], data: Payload) -> list[str]:
    """Return ``[message]`` for the first rule that fires, or ``[]``."""
    for predicate, message in rules:
        if predicate(data):
            return [message]
    return []


def _password_rules(field: str) -> list[Rule]:
    def pw(data: Payload) -> str:
        return str(data.get(field))

    return [
        (
            lambda d: not PASSWORD_MIN_LEN <= len(pw(d)) <= PASSWORD_MAX_LEN,
            f"Password must be between {PASSWORD_MIN_LEN} and {PASSWORD_MAX_LEN} characters",
        ),
        (lambda d: not re.search(r"[a-z]", pw(d)), "Password must contain a lowercase letter"),
        (lambda d: not re.search(r"[A-Z]", pw(d)), "Password must contain an uppercase letter"),
        (lambda d: not re.search(r"[0-9]", pw(d)), "Password must contain a number"),
        (
            lambda d: not any(c in SPECIAL_CHARACTERS for c in pw(d)),
            "Password must contain a special character",
        ),
        (
            lambda d: not _ALLOWED_PASSWORD_RE.fullmatch(pw(d)),
            "Password must contain only alphanumeric characters and special characters",
        ),
        (lambda d: any(c.isspace() for c in pw(d)), "Password must not contain spaces"),
    ]


REGISTER_RULES: list[Rule] = [
    (_any_missing("name", "email", "password"), REQUIRED_FIELDS_MESSAGE),
    *_password_rules("password"),
]

LOGIN_RULES: list[Rule] = [
    (_any_missing("email", "password"), REQUIRED_FIELDS_MESSAGE),
]

PASSWORD_RULES: list[Rule] = [
    (_any_missing("password"), "Password is required"),
    *_password_rules("password"),
]

RESET_PASSWORD_RULES: list[Rule] = [
    (
        _any_missing("password", "confirm_password"),
        "Password and confirm password are required",
    ),
    (lambda d: d["password"] != d["confirm_password"], "Passwords do not match"),
    *_password_rules("password"),
]

COURSE_RULES: list[Rule] = [
    (
        _any_missing("title", "category", "level", "description", "instructor"),
        REQUIRED_FIELDS_MESSAGE,
    ),
    (_any_missing_or_zero("duration", "price"), REQUIRED_FIELDS_MESSAGE),
    (lambda d: len(str(d["title"])) < 3, "Title must be at least 3 characters"),
    (
        lambda d: len(str(d["description"])) < 10,
        "Description must be at least 10 characters",
    ),
    (lambda d: d["duration"] < 10, "Duration must be at least 10 minute"),
    (lambda d: d["price"] < 0, "Price must be at least $0"),
    (lambda d: d["level"] not in ALLOWED_COURSE_LEVELS, COURSE_LEVEL_MESSAGE),
    (lambda d: d["level"] not in STORED_COURSE_LEVELS, COURSE_LEVEL_MESSAGE),
]


def validate_register(data: Payload) -> list[str]:
    return first_violation(REGISTER_RULES, data)


def validate_login(data: Payload) -> list[str]:
    return first_violation(LOGIN_RULES, data)


def validate_password(data: Payload) -> list[str]:
    """Password rules alone, for profile updates that change the password."""
    return first_violation(PASSWORD_RULES, data)


def validate_reset_password(data: Payload) -> list[str]:
    return first_violation(RESET_PASSWORD_RULES, data)


def validate_course(data: Payload) -> list[str]:
    return first_violation(COURSE_RULES, data)
