import re

# A count that is part of a decimal ("1.5 tablets") is not read as a whole number
_TABLETS_RE = re.compile(r"(?<![\d.])(\d+)\s*tablets?", re.IGNORECASE)
_LEADING_INT_RE = re.compile(r"\s*(\d+)")

# Checked in order; first hit wins
DOSES_PER_DAY = (
    ("twice", 2),
    ("three times", 3),
    ("four times", 4),
    ("every 8 hours", 3),
    ("every 6 hours", 4),
    ("every 4 hours", 6),
)


def doses_per_day(dosage_instructions: str) -> int:
    text = (dosage_instructions or "").lower()
    for keyword, doses in DOSES_PER_DAY:
        if keyword in text:
            return doses
    return 1


def calculate_quantity(dosage_instructions: str, duration: str) -> int:
    """Number of tablets to dispense for a prescription.

    "2 tablets three times daily" for "5 days" gives 30. When no tablet
    count can be read the answer is 1; when the duration has no leading
    number a single day's supply is returned.
    """
    tablets = _TABLETS_RE.search(dosage_instructions or "")
    if not tablets:
        return 1
    per_day = int(tablets.group(1)) * doses_per_day(dosage_instructions)

    days = _LEADING_INT_RE.match(duration or "")
    if not days:
        return max(per_day, 1)
    return max(per_day * int(days.group(1)), 1)
