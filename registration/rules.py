"""
Field rules for the registration form.

Each rule is a small predicate (or parser) so the validator can evaluate
them independently and tests can target one rule at a time.
"""
import re
from datetime import date, datetime
from typing import Optional

MIN_AGE = 18
MAX_AGE = 99

PASSWORD_MIN_LENGTH = 8
PASSWORD_MIN_DIGITS = 2
PASSWORD_MIN_SYMBOLS = 3
PASSWORD_SYMBOLS = frozenset("!@#$%^&*")

BIRTH_DATE_FORMATS = ("%Y-%m-%d", "%d-%m-%Y")

_NAME_RE = re.compile(r"[A-Za-z]{2,}")
_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
# leading integer, the way a browser parses a number field
_LEADING_INT_RE = re.compile(r"\s*([+-]?)0*([0-9]+)")
# longer digit runs cannot be a valid age and int() refuses huge strings
AGE_MAX_DIGITS = 9

ERROR_MESSAGES = {
    "first_name": "First name must contain at least 2 letters.",
    "last_name": "Last name must contain at least 2 letters.",
    "email": "Enter a valid email address.",
    "password": (
        f"Password must have at least {PASSWORD_MIN_LENGTH} characters, "
        f"{PASSWORD_MIN_DIGITS} digits and {PASSWORD_MIN_SYMBOLS} special characters."
    ),
    "confirm_password": "Passwords must match.",
    "age": f"Age must be a number between {MIN_AGE} and {MAX_AGE}.",
    "birth_date": "Birth date must be consistent with age.",
    "country": "You must select a country.",
    "country_unknown": "Select a country from the list.",
    "terms_consent": "You must accept the terms and conditions.",
}


def is_valid_name(value: str) -> bool:
    return _NAME_RE.fullmatch(value) is not None


def is_valid_email(value: str) -> bool:
    return _EMAIL_RE.fullmatch(value) is not None


def is_strong_password(value: str) -> bool:
    digits = sum(1 for ch in value if "0" <= ch <= "9")
    symbols = sum(1 for ch in value if ch in PASSWORD_SYMBOLS)
    return (
        len(value) >= PASSWORD_MIN_LENGTH
        and digits >= PASSWORD_MIN_DIGITS
        and symbols >= PASSWORD_MIN_SYMBOLS
    )


def parse_age(value: str) -> Optional[int]:
    """
    Lenient integer parse: optional leading whitespace and sign, then the
    leading run of digits. "25.9" -> 25, "abc" -> None. A run of more than
    AGE_MAX_DIGITS significant digits is treated as unparseable.
    """
    m = _LEADING_INT_RE.match(value)
    if m is None:
        return None
    sign, digits = m.groups()
    if len(digits) > AGE_MAX_DIGITS:
        return None
    return int(sign + digits)


def is_age_in_range(age: Optional[int]) -> bool:
    return age is not None and MIN_AGE <= age <= MAX_AGE


def parse_birth_date(value: str) -> Optional[date]:
    text = value.strip()
    for fmt in BIRTH_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def is_age_consistent(birth: Optional[date], age: Optional[int], today: date) -> bool:
    """Only calendar years are compared; month and day are ignored."""
    if birth is None or age is None:
        return False
    return today.year - birth.year == age


def is_country_selected(value: str) -> bool:
    return value != ""
