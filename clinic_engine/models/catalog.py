from enum import Enum

from pydantic import Field, field_validator

from clinic_engine.models.base import CamelModel, finite_or_zero, parse_amount


class ServiceCategory(str, Enum):
    CONSULTATION = "consultation"
    LABORATORY = "laboratory"
    RADIOLOGY = "radiology"
    ULTRASOUND = "ultrasound"
    PHARMACY = "pharmacy"
    PROCEDURE = "procedure"
    OTHER = "other"


class Service(CamelModel):
    """A billable catalog entry."""
    id: int | str
    name: str
    code: str | None = None
    category: str = ServiceCategory.OTHER.value
    price: float = Field(0.0, ge=0.0)
    is_active: bool = True
    description: str | None = None

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, value):
        return finite_or_zero(parse_amount(value))
