"""Per-patient billing and diagnostic status.

Builds the ``ServiceStatus`` view model behind the patient list badges
("Paid", "1500 SSP Due", "Lab: 2 pending") from a patient's order lines.
Nothing here is cached; callers recompute on every refresh.
"""

from collections.abc import Container, Iterable

from clinic_engine.models.base import finite_or_zero
from clinic_engine.models.orders import OrderLine, OrderStatus
from clinic_engine.models.status import (
    DEPARTMENT_BY_ORDER_TYPE,
    DIAGNOSTIC_DEPARTMENTS,
    ServiceStatus,
)
from clinic_engine.models.visits import Encounter, EncounterStatus, Patient
from clinic_engine.services.order_aggregator import partition_orders

PAID = "paid"
UNPAID = "unpaid"


def _unpaid_total(orders: Iterable[OrderLine]) -> float:
    return sum(
        (
            finite_or_zero(o.total_price)
            for o in orders
            if not o.is_paid and o.status != OrderStatus.CANCELLED.value
        ),
        0.0,
    )


def summarize_status(
    patient_orders: list[OrderLine],
    today_encounter_ids: Container[str] | None = None,
) -> ServiceStatus:
    """Derive a patient's ServiceStatus from all of their order lines.

    Args:
        patient_orders: Order lines across the patient's visits.
        today_encounter_ids: Encounters belonging to the current clinic day.
            When given, ``balance_today`` is computed over those alone.
    """
    status = ServiceStatus()
    buckets = partition_orders(patient_orders)

    for order_type, department in DEPARTMENT_BY_ORDER_TYPE.items():
        counts = status.departments[department]
        for order in getattr(buckets, order_type):
            if order.status == OrderStatus.PENDING.value:
                counts.pending += 1
            elif order.status == OrderStatus.COMPLETED.value:
                counts.completed += 1

    status.pending_services = sum(c.pending for c in status.departments.values())
    status.completed_services = sum(c.completed for c in status.departments.values())

    status.balance = _unpaid_total(patient_orders)
    if today_encounter_ids is not None:
        status.balance_today = _unpaid_total(
            o for o in patient_orders if o.encounter_id in today_encounter_ids
        )
    return status


def amount_due(status: ServiceStatus) -> float:
    """Same-day balance when tracked, otherwise the overall balance."""
    return status.balance_today if status.balance_today is not None else status.balance


def classify_payment(status: ServiceStatus) -> str:
    # Negative (credit) balances fall through to "paid"
    return UNPAID if amount_due(status) > 0 else PAID


def has_pending_orders(status: ServiceStatus) -> bool:
    """True if any lab, x-ray or ultrasound order is still waiting."""
    return any(status.departments[d].pending > 0 for d in DIAGNOSTIC_DEPARTMENTS)


def clinician_patients(patients: Iterable[Patient]) -> list[Patient]:
    """Drop referral/diagnostic-only patients from clinician-facing lists."""
    return [p for p in patients if not p.is_referral_only]


def open_visit_patient_ids(encounters: Iterable[Encounter]) -> set[str]:
    return {e.patient_id for e in encounters if e.status == EncounterStatus.OPEN.value}
