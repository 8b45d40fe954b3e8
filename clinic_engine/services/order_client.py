"""Client for the order-line endpoint of the clinic REST backend."""

import logging

import httpx
from pydantic import ValidationError

from clinic_engine.config import ORDER_API_BASE_URL, ORDER_API_TIMEOUT
from clinic_engine.models.orders import OrderLine, OrderLineCreate

logger = logging.getLogger(__name__)

ORDER_LINES_PATH = "/api/order-lines"


def _line_from_payload(payload: OrderLineCreate) -> dict:
    return {
        "encounterId": payload.encounter_id,
        "serviceId": payload.service_id,
        "relatedType": payload.related_type,
        "description": payload.description,
        "quantity": payload.quantity,
        "unitPriceSnapshot": payload.unit_price_snapshot,
        "totalPrice": payload.total_price,
        "department": payload.department,
        "orderedBy": payload.ordered_by,
    }


def stored_line(payload: OrderLineCreate, row) -> OrderLine:
    """Build the created line from the backend's row, filling gaps from ``payload``.

    The backend has already stored the line by the time this runs, so an
    unreadable row degrades to the line that was sent instead of raising.
    """
    sent = _line_from_payload(payload)
    if not isinstance(row, dict):
        logger.warning("Order-line response for %s is not an object", payload.encounter_id)
        return OrderLine.model_validate(sent)
    try:
        return OrderLine.model_validate({**sent, **row})
    except ValidationError as exc:
        logger.warning("Unreadable order-line row for %s: %s", payload.encounter_id, exc)
        row_id = row.get("id")
        if isinstance(row_id, (int, str)):
            sent["id"] = row_id
        return OrderLine.model_validate(sent)


class OrderLineClient:
    """Creates order lines over HTTP. No retries are attempted."""

    def __init__(
        self,
        base_url: str = ORDER_API_BASE_URL,
        timeout: float = ORDER_API_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client

    async def create_order_line(self, payload: OrderLineCreate) -> OrderLine:
        """POST a new order line and return the stored record.

        An injected client keeps its own timeout settings.

        Raises:
            httpx.HTTPStatusError: the backend rejected the request.
            httpx.TransportError: the backend could not be reached.
        """
        body = payload.model_dump(by_alias=True, exclude_none=True)
        url = f"{self._base_url}{ORDER_LINES_PATH}"

        if self._client is not None:
            resp = await self._client.post(url, json=body)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(url, json=body)
        resp.raise_for_status()

        try:
            row = resp.json()
        except ValueError:
            row = None
        line = stored_line(payload, row)
        logger.debug("Created order line %s for encounter %s", line.id, line.encounter_id)
        return line
