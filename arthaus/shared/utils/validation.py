"""Input checks shared by the catalog services."""

import math
from typing import Optional

from arthaus.core.errors import ValidationError


def require_title(value: Optional[str], field: str = "title") -> str:
    """Return the title unchanged, or raise if it is missing or blank."""
    if value is None or not value.strip():
        raise ValidationError(f"{field} must not be empty", field=field)
    return value


def require_price(value: Optional[float]) -> float:
    if value is None:
        raise ValidationError("price is required", field="price")
    if not math.isfinite(value) or value < 0:
        raise ValidationError("price must be a finite number >= 0", field="price")
    return float(value)


def require_image(data: bytes, max_bytes: int) -> bytes:
    if not data:
        raise ValidationError("image payload is empty", field="image")
    if len(data) > max_bytes:
        raise ValidationError(
            f"image payload exceeds {max_bytes} bytes",
            field="image",
            size=len(data),
        )
    return data
