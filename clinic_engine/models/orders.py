from enum import Enum

from pydantic import AliasChoices, Field, field_validator

from clinic_engine.models.base import CamelModel, parse_amount


class OrderType(str, Enum):
    LAB = "lab"
    XRAY = "xray"
    ULTRASOUND = "ultrasound"
    PHARMACY = "pharmacy"
    CONSULTATION = "consultation"


class OrderStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Backend rows name the related department record, not the order type
RELATED_TYPE_ALIASES = {
    "lab_test": OrderType.LAB.value,
    "lab_test_item": OrderType.LAB.value,
    "xray_exam": OrderType.XRAY.value,
    "ultrasound_exam": OrderType.ULTRASOUND.value,
    "pharmacy_order": OrderType.PHARMACY.value,
}


class OrderLine(CamelModel):
    """A billable line item tied to an encounter.

    ``type`` and ``status`` are plain strings so records carrying values the
    engine does not know about still load; aggregation ignores them. Rows
    from the backend carry ``relatedType`` and ``unitPriceSnapshot``, and a
    row without any type loads with an empty one.
    """
    id: int | str | None = None
    order_id: str | None = None
    encounter_id: str
    service_id: int | str | None = None
    type: str = Field(
        "",
        validation_alias=AliasChoices("type", "relatedType", "related_type"),
        serialization_alias="type",
    )
    status: str = OrderStatus.PENDING.value
    quantity: int = 1
    unit_price: float | None = Field(
        None,
        validation_alias=AliasChoices("unitPrice", "unitPriceSnapshot", "unit_price"),
        serialization_alias="unitPrice",
    )
    total_price: float | None = None
    is_paid: bool = False
    description: str = ""
    department: str | None = None
    ordered_by: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value):
        if value is None:
            return ""
        if isinstance(value, str):
            return RELATED_TYPE_ALIASES.get(value, value)
        return value

    @field_validator("unit_price", "total_price", mode="before")
    @classmethod
    def _coerce_amount(cls, value):
        return parse_amount(value)


class OrderLineCreate(CamelModel):
    """Payload for POST /api/order-lines."""
    encounter_id: str
    service_id: int | str
    related_type: str
    description: str
    quantity: int = 1
    unit_price_snapshot: float
    total_price: float
    department: str
    ordered_by: str | None = None
