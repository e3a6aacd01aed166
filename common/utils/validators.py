import math
from typing import Any, Optional

from ..errors import ValidationError


def parse_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field} 必須是整數。")
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field} 必須是整數。") from None


def parse_price(value: Any, field: str = "price") -> float:
    if value is None or isinstance(value, bool) or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field} 為必填且必須是數字。")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} 必須是數字。") from None
    if not math.isfinite(number) or number < 0:
        raise ValidationError(f"{field} 不可為負數。")
    return int(number) if number.is_integer() else number


def optional_price(value: Any, field: str) -> Optional[float]:
    """Blank or null means "no value"."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_price(value, field)


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def require_text(value: Any) -> str:
    return str(value).strip() if value is not None else ""
