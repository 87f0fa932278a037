# meditime/helpers.py
import datetime
import re

from flask_jwt_extended import get_jwt_identity

from meditime.errors import UnauthenticatedError, ValidationError

_HHMM = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def api_response(success, message, data=None, status_code=200, **extra):
    body = {
        "success": success,
        "message": message,
        "data": data
    }
    body.update(extra)
    return body, status_code


def parse_hhmm(value):
    """Return (hour, minute) for an "HH:MM" string, or None if malformed."""
    if not isinstance(value, str):
        return None
    match = _HHMM.match(value.strip())
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def format_hhmm(hour, minute=0):
    total = (hour * 60 + minute) % (24 * 60)
    return f"{total // 60:02d}:{total % 60:02d}"


def require_time(data, field, required=True):
    """Validate an optional/required HH:MM field and return it normalized."""
    raw = data.get(field)
    if raw in (None, ""):
        if required:
            raise ValidationError(f"Missing field: {field}")
        return None
    parsed = parse_hhmm(raw)
    if parsed is None:
        raise ValidationError(f"{field} must be in HH:MM format")
    return format_hhmm(*parsed)


def parse_date(value, field, default=None):
    if value in (None, ""):
        return default
    if isinstance(value, datetime.date):
        return value
    try:
        return datetime.date.fromisoformat(str(value)[:10])
    except ValueError:
        raise ValidationError(f"{field} must be an ISO date (YYYY-MM-DD)")


def optional_text(data, field, max_length=None):
    """A string field that may be absent; anything else is a ValidationError."""
    value = data.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    value = value.strip()
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return value or None


_TRUE = ("true", "1", "yes")
_FALSE = ("false", "0", "no", "")


def parse_flag(data, field, default=False):
    """JSON booleans, 0/1 and "true"/"false" strings; anything else is rejected."""
    value = data.get(field)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    raise ValidationError(f"{field} must be true or false")


MAX_DOSES_PER_DAY = 24


def coerce_frequency(value):
    """Doses per day; anything that is not a positive integer becomes 1."""
    try:
        frequency = int(value)
    except (TypeError, ValueError):
        return 1
    if frequency < 1:
        return 1
    return min(frequency, MAX_DOSES_PER_DAY)


def current_user_id(required=True):
    """User id from the JWT identity; call inside a jwt_required view."""
    identity = get_jwt_identity()
    if identity is None:
        if required:
            raise UnauthenticatedError()
        return None
    try:
        return int(identity)
    except (ValueError, TypeError):
        raise UnauthenticatedError("Invalid user ID format in token")
