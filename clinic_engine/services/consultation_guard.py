"""Automatic consultation fee, added at most once per encounter.

Opening a visit should bill the standard consultation without the
clinician having to order it. Orders arrive asynchronously, so the add is
gated on the existing-orders fetch having finished, and the encounter id is
marked as triggered before the create call is awaited. A failed attempt is
reported and never retried: the clinician adds the fee by hand.
"""

import logging
from collections.abc import Awaitable, Callable, Container, Sequence

from clinic_engine.config import AUTO_ADD_CONSULTATION_ENABLED, AUTO_ADD_ORDERED_BY
from clinic_engine.errors import AutoAddFailure
from clinic_engine.models.catalog import Service
from clinic_engine.models.notices import ConsultationNotice, NoticeKind
from clinic_engine.models.orders import OrderLine, OrderLineCreate, OrderType
from clinic_engine.models.visits import Encounter, Patient
from clinic_engine.services.catalog_matcher import find_consultation_service
from clinic_engine.services.notices import EncounterNotifier
from clinic_engine.services.order_aggregator import has_consultation_order

logger = logging.getLogger(__name__)

CreateOrderLine = Callable[[OrderLineCreate], Awaitable[OrderLine]]

CONSULTATION_ADDED_MESSAGE = "Consultation fee has been added to the patient's visit."


def should_auto_add_consultation(
    encounter_id: str,
    orders_loaded: bool,
    has_consultation_order: bool,
    already_triggered: Container[str],
    in_flight: bool,
    patient_is_referral_only: bool,
) -> bool:
    """Decide whether the consultation fee should be added now.

    ``orders_loaded`` must reflect a finished fetch of the encounter's
    existing orders, otherwise an existing consultation cannot be seen.
    """
    if patient_is_referral_only:
        return False
    if not encounter_id or not orders_loaded:
        return False
    if has_consultation_order or in_flight:
        return False
    return encounter_id not in already_triggered


def build_consultation_order(encounter: Encounter, service: Service) -> OrderLineCreate:
    return OrderLineCreate(
        encounter_id=encounter.encounter_id,
        service_id=service.id,
        related_type=OrderType.CONSULTATION.value,
        description=service.name,
        quantity=1,
        unit_price_snapshot=service.price,
        total_price=service.price,
        department=OrderType.CONSULTATION.value,
        ordered_by=AUTO_ADD_ORDERED_BY,
    )


class ConsultationAutoAdder:
    """Session-scoped owner of the triggered set and in-flight markers."""

    def __init__(
        self,
        create_order_line: CreateOrderLine,
        notifier: EncounterNotifier | None = None,
        enabled: bool = AUTO_ADD_CONSULTATION_ENABLED,
    ) -> None:
        self._create_order_line = create_order_line
        self._notifier = notifier
        self._enabled = enabled
        self.triggered: set[str] = set()
        self._in_flight: set[str] = set()

    def is_in_flight(self, encounter_id: str) -> bool:
        return encounter_id in self._in_flight

    async def maybe_add(
        self,
        encounter: Encounter,
        orders: Sequence[OrderLine],
        orders_loaded: bool,
        patient: Patient,
        services: Sequence[Service],
    ) -> OrderLine | None:
        """Add the consultation order if the guard allows it.

        Returns the created line, or None when nothing was added (guard
        closed or the attempt failed).
        """
        if not self._enabled:
            return None

        encounter_id = encounter.encounter_id
        if not should_auto_add_consultation(
            encounter_id,
            orders_loaded=orders_loaded,
            has_consultation_order=has_consultation_order(orders),
            already_triggered=self.triggered,
            in_flight=self.is_in_flight(encounter_id),
            patient_is_referral_only=patient.is_referral_only,
        ):
            return None

        # Mark before the first await so a concurrent call sees it
        self.triggered.add(encounter_id)
        self._in_flight.add(encounter_id)
        try:
            service = find_consultation_service(services)
            if service is None:
                raise AutoAddFailure(encounter_id, "Consultation service not found")
            line = await self._create_order_line(build_consultation_order(encounter, service))
        except Exception as exc:
            logger.error("Consultation auto-add failed for encounter %s: %s", encounter_id, exc)
            self._notify(ConsultationNotice(
                kind=NoticeKind.CONSULTATION_AUTO_ADD_FAILED,
                encounter_id=encounter_id,
                message=f"Consultation fee was not added automatically: {exc}",
            ))
            return None
        finally:
            self._in_flight.discard(encounter_id)

        logger.info("Consultation fee added to encounter %s for %s", encounter_id, patient.full_name)
        self._notify(ConsultationNotice(
            kind=NoticeKind.CONSULTATION_ADDED,
            encounter_id=encounter_id,
            message=CONSULTATION_ADDED_MESSAGE,
            order_line=line,
        ))
        return line

    def _notify(self, notice: ConsultationNotice) -> None:
        if self._notifier is not None:
            self._notifier.notify(notice)
