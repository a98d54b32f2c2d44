from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from ..core.exceptions import ValidationError

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name}: pole je povinné")
    return str(value).strip()


def require_iso_date(value: Optional[str], field_name: str = "Dátum") -> str:
    value = require_non_empty(value, field_name)
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise ValidationError(f"{field_name}: neplatný dátum (očakáva sa RRRR-MM-DD)")
    return value


def require_month(value: Optional[str], field_name: str = "Mesiac") -> str:
    value = require_non_empty(value, field_name)
    try:
        datetime.strptime(value, "%Y-%m")
    except ValueError:
        raise ValidationError(f"{field_name}: neplatný mesiac (očakáva sa RRRR-MM)")
    return value


def require_time_of_day(value: Optional[str], field_name: str) -> str:
    """Accept 'H:MM' or 'HH:MM' within a day and normalize to 'HH:MM'."""
    value = require_non_empty(value, field_name)
    m = _TIME_RE.match(value)
    if not m or int(m.group(1)) > 23 or int(m.group(2)) > 59:
        raise ValidationError(f"{field_name}: neplatný čas (očakáva sa HH:MM)")
    return f"{int(m.group(1)):02d}:{m.group(2)}"


def require_duration(value: Optional[str], field_name: str) -> str:
    """Like require_time_of_day, but hours are not limited to a single day."""
    value = require_non_empty(value, field_name)
    m = _TIME_RE.match(value)
    if not m or int(m.group(2)) > 59:
        raise ValidationError(f"{field_name}: neplatné trvanie (očakáva sa HH:MM)")
    return f"{int(m.group(1)):02d}:{m.group(2)}"
