from enum import Enum

from clinic_engine.models.base import CamelModel
from clinic_engine.models.orders import OrderLine


class NoticeKind(str, Enum):
    CONSULTATION_ADDED = "consultation_added"
    CONSULTATION_AUTO_ADD_FAILED = "consultation_auto_add_failed"


class ConsultationNotice(CamelModel):
    """User-facing outcome of an automatic consultation add."""
    kind: NoticeKind
    encounter_id: str
    message: str
    order_line: OrderLine | None = None
