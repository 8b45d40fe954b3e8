from pydantic import Field

from clinic_engine.models.base import CamelModel
from clinic_engine.models.orders import OrderLine

# Order type -> department key used in ServiceStatus.departments
DEPARTMENT_BY_ORDER_TYPE = {
    "lab": "laboratory",
    "xray": "radiology",
    "ultrasound": "ultrasound",
    "pharmacy": "pharmacy",
}
DIAGNOSTIC_DEPARTMENTS = ("laboratory", "radiology", "ultrasound")


class DepartmentCounts(CamelModel):
    pending: int = 0
    completed: int = 0


def _empty_departments() -> dict[str, DepartmentCounts]:
    return {dept: DepartmentCounts() for dept in DEPARTMENT_BY_ORDER_TYPE.values()}


class ServiceStatus(CamelModel):
    """Per-patient billing and diagnostic view model. Never persisted."""
    balance: float = 0.0
    balance_today: float | None = None
    pending_services: int = 0
    completed_services: int = 0
    departments: dict[str, DepartmentCounts] = Field(default_factory=_empty_departments)


class PartitionedOrders(CamelModel):
    lab: list[OrderLine] = []
    xray: list[OrderLine] = []
    ultrasound: list[OrderLine] = []
    consultation: list[OrderLine] = []
    pharmacy: list[OrderLine] = []
