from datetime import date
from enum import Enum

from clinic_engine.config import REFERRAL_PATIENT_TYPE
from clinic_engine.models.base import CamelModel


class EncounterStatus(str, Enum):
    OPEN = "open"
    READY_TO_BILL = "ready_to_bill"
    CLOSED = "closed"


class Encounter(CamelModel):
    """One clinical visit. The status lifecycle belongs to the backend."""
    encounter_id: str
    patient_id: str
    status: str = EncounterStatus.OPEN.value
    visit_date: date | None = None


class Patient(CamelModel):
    patient_id: str
    first_name: str = ""
    last_name: str = ""
    age: str | None = None
    gender: str | None = None
    phone_number: str | None = None
    patient_type: str | None = None

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p) or "Unknown"

    @property
    def is_referral_only(self) -> bool:
        return self.patient_type == REFERRAL_PATIENT_TYPE
