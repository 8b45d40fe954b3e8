import math

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts the REST backend's camelCase keys as well as snake_case names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def parse_amount(value) -> float | None:
    """Convert a price-like value to float; None when it cannot be parsed.

    The backend stores decimals as strings ("1000.00"), so numeric strings
    are accepted. NaN and infinities are passed through untouched.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def finite_or_zero(value: float | None) -> float:
    if value is None or not math.isfinite(value):
        return 0.0
    return value
