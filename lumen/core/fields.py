"""
Field Helpers
=============

Parsing and derivation rules shared by every resource schema:
slugs, read time, comma lists, numbers, dates and emails.
"""

import math
import re
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from .errors import ValidationError

WHITESPACE_RUN = re.compile(r'\s+')
NON_SLUG_CHARS = re.compile(r'[^a-z0-9-]')
EMAIL_REGEX = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
ISO_DATE_PREFIX = re.compile(r'^(\d{4})-(\d{2})-(\d{2})')

WORDS_PER_MINUTE = 200

# Largest value a SQLite INTEGER column holds
MAX_INT = 2 ** 63 - 1
# Prices must stay below this
MAX_PRICE = Decimal('100000000')


def slugify(text):
    """Lowercase, collapse whitespace runs to '-', drop anything outside [a-z0-9-]"""
    slug = WHITESPACE_RUN.sub('-', text.lower())
    return NON_SLUG_CHARS.sub('', slug)


def read_time(content):
    """'<n> min read' at 200 words per minute, None without content"""
    if not content:
        return None
    words = len(content.split())
    if not words:
        return None
    return f"{math.ceil(words / WORDS_PER_MINUTE)} min read"


def clean_text(value):
    """Trim free text; blank or missing becomes None"""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_list(value):
    """
    Normalize a list field.

    None stays None (never set). A JSON array or a comma separated
    string becomes a list of trimmed, non-empty strings, which may be
    empty when the client cleared the field.
    """
    if value is None:
        return None
    if isinstance(value, str):
        items = value.split(',')
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        items = [value]
    return [str(item).strip() for item in items if item is not None and str(item).strip()]


def parse_int(value):
    """Integer or None for empty / non-numeric input"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def parse_decimal(value):
    """Decimal or None for empty / non-numeric input"""
    if value is None or isinstance(value, bool):
        return None
    try:
        # str() keeps 29.99 as typed instead of its binary expansion
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return number


def require_text(data, field, message=None):
    value = clean_text(data.get(field))
    if value is None:
        raise ValidationError(field, message)
    return value


def require_non_negative_int(data, field, required=False):
    """Parse a count-like field; negative values are rejected"""
    value = parse_int(data.get(field))
    if value is None:
        if required:
            raise ValidationError(field, f"{field} must be a whole number")
        return None
    if value < 0:
        raise ValidationError(field, f"{field} cannot be negative")
    if value > MAX_INT:
        raise ValidationError(field, f"{field} is too large")
    return value


def require_price(data, field, required=False):
    value = parse_decimal(data.get(field))
    if value is None:
        if required:
            raise ValidationError(field, f"{field} must be a number")
        return None
    if value < 0:
        raise ValidationError(field, f"{field} cannot be negative")
    if value >= MAX_PRICE:
        raise ValidationError(field, f"{field} is too large")
    return value


def require_positive_id(data, field, required=False):
    value = parse_int(data.get(field))
    if value is None:
        if required:
            raise ValidationError(field, f"{field} must be a positive number")
        return None
    if value <= 0 or value > MAX_INT:
        raise ValidationError(field, f"{field} must be a positive number")
    return value


def require_email(data, field='email'):
    value = require_text(data, field, 'Email is required')
    if not EMAIL_REGEX.match(value):
        raise ValidationError(field, 'Please enter a valid email address')
    return value


def require_date(data, field='date'):
    """Accepts YYYY-MM-DD with an optional time part; stores the date part"""
    value = require_text(data, field)
    match = ISO_DATE_PREFIX.match(value)
    if not match:
        raise ValidationError(field, f"{field} must be an ISO date (YYYY-MM-DD)")
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3))).isoformat()
    except ValueError:
        raise ValidationError(field, f"{field} is not a valid date")


def parse_datetime(data, field):
    """Optional ISO timestamp; a trailing 'Z' is read as UTC and dropped"""
    value = clean_text(data.get(field))
    if value is None:
        return None
    if value.endswith('Z'):
        value = value[:-1]
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError(field, f"{field} must be an ISO date/time")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_bool(value, default=False):
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'on', 'yes')


def price_to_json(value):
    """Full precision number for the wire format"""
    if value is None:
        return None
    return float(value)


def price_display(value):
    """Two fraction digits, for display only"""
    if value is None:
        return None
    try:
        amount = Decimal(str(value)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # Stored before the price ceiling existed
        return None
    return f"${amount}"
