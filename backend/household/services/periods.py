import re
from datetime import date

PERIOD_KEY_RE = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")


def is_period_key(value: str) -> bool:
    """True for keys of the form YYYY-MM."""
    return bool(PERIOD_KEY_RE.match(value or ""))


def validate_period_key(value: str) -> str:
    if not is_period_key(value):
        raise ValueError(f"Invalid period key '{value}', expected YYYY-MM")
    return value


def period_key_for(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def current_period_key() -> str:
    return period_key_for(date.today())


def first_day(period_key: str) -> date:
    """First calendar day of a period, used as the default expense date."""
    match = PERIOD_KEY_RE.match(period_key)
    if not match:
        raise ValueError(f"Invalid period key '{period_key}', expected YYYY-MM")
    return date(int(match.group(1)), int(match.group(2)), 1)
