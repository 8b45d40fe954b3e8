import math

from clinic_engine.config import CLINIC_CURRENCY
from clinic_engine.models.base import finite_or_zero, parse_amount

_DEPARTMENT_NAMES = {
    "lab": "Lab",
    "laboratory": "Lab",
    "lab_test_item": "Lab",
    "xray": "X-Ray",
    "x-ray": "X-Ray",
    "radiology": "X-Ray",
    "xray_exam": "X-Ray",
    "ultrasound": "Ultrasound",
    "ultrasound_exam": "Ultrasound",
    "pharmacy": "Pharmacy",
    "pharmacy_order": "Pharmacy",
}


def format_currency(amount: float | str | None, currency: str = CLINIC_CURRENCY) -> str:
    """Render an amount in whole currency units, e.g. ``"7000 SSP"``.

    Halves round up. Anything that cannot be read as a finite number
    renders as zero.
    """
    value = finite_or_zero(parse_amount(amount))
    return f"{math.floor(value + 0.5)} {currency}"


def to_title_case(text: str) -> str:
    if not text:
        return ""
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" "))


def format_department_name(department: str, include_suffix: bool = True) -> str:
    """Display name for a department or order type ("xray" -> "X-Ray Department")."""
    if not department:
        return ""
    key = department.lower().strip()
    name = _DEPARTMENT_NAMES.get(key) or to_title_case(key.replace("_", " "))
    return f"{name} Department" if include_suffix else name
