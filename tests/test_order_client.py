"""Tests for the order-line HTTP client against a mocked transport."""

import json

import httpx
import pytest

from clinic_engine.models.orders import OrderLineCreate
from clinic_engine.services.consultation_guard import ConsultationAutoAdder
from clinic_engine.services.order_client import OrderLineClient


def _payload() -> OrderLineCreate:
    return OrderLineCreate(
        encounter_id="ENC-1",
        service_id=1,
        related_type="consultation",
        description="General Consultation",
        unit_price_snapshot=2000,
        total_price=2000,
        department="consultation",
        ordered_by="Dr. System",
    )


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def test_posts_camel_case_payload():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={
            "id": 42,
            "encounterId": "ENC-1",
            "serviceId": 1,
            "type": "consultation",
            "totalPrice": "2000.00",
            "isPaid": False,
        })

    async with _client(handler) as http:
        line = await OrderLineClient(base_url="http://clinic.test/", client=http).create_order_line(_payload())

    assert seen["url"] == "http://clinic.test/api/order-lines"
    assert seen["body"]["encounterId"] == "ENC-1"
    assert seen["body"]["unitPriceSnapshot"] == 2000
    assert seen["body"]["relatedType"] == "consultation"
    assert line.id == 42
    assert line.total_price == 2000


async def test_error_status_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": "Invalid service"})

    async with _client(handler) as http:
        client = OrderLineClient(base_url="http://clinic.test", client=http)
        with pytest.raises(httpx.HTTPStatusError):
            await client.create_order_line(_payload())


async def test_adder_with_http_client(encounter, patient, services):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(json.loads(request.content))
        body = json.loads(request.content)
        return httpx.Response(201, json={
            "id": 7,
            "encounterId": body["encounterId"],
            "type": "consultation",
            "totalPrice": body["totalPrice"],
        })

    async with _client(handler) as http:
        client = OrderLineClient(base_url="http://clinic.test", client=http)
        adder = ConsultationAutoAdder(client.create_order_line, enabled=True)
        line = await adder.maybe_add(encounter, [], True, patient, services)
        assert await adder.maybe_add(encounter, [line], True, patient, services) is None

    assert line.id == 7
    assert len(calls) == 1
    assert calls[0]["serviceId"] == 1


def _backend_row(body: dict) -> dict:
    """Row shape returned by POST /api/order-lines: no ``type`` key."""
    return {
        "id": 7,
        "encounterId": body["encounterId"],
        "serviceId": body["serviceId"],
        "relatedType": "consultation",
        "relatedId": None,
        "description": body["description"],
        "quantity": 1,
        "unitPriceSnapshot": "2000.00",
        "totalPrice": "2000.00",
        "department": "consultation",
        "orderedBy": "Dr. System",
        "createdAt": "2026-10-17T08:00:00Z",
    }


async def test_backend_row_is_read(encounter, patient, services):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(201, json=_backend_row(json.loads(request.content)))

    async with _client(handler) as http:
        client = OrderLineClient(base_url="http://clinic.test", client=http)
        adder = ConsultationAutoAdder(client.create_order_line, enabled=True)
        line = await adder.maybe_add(encounter, [], True, patient, services)

    assert line is not None
    assert line.id == 7
    assert line.type == "consultation"
    assert line.unit_price == 2000
    assert line.total_price == 2000


async def test_accepted_post_with_unreadable_body_still_succeeds(encounter, patient, services):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(201, json={"id": 8, "encounterId": None, "quantity": "many"})

    async with _client(handler) as http:
        client = OrderLineClient(base_url="http://clinic.test", client=http)
        adder = ConsultationAutoAdder(client.create_order_line, enabled=True)
        line = await adder.maybe_add(encounter, [], True, patient, services)

    assert len(calls) == 1
    assert line.id == 8
    assert line.encounter_id == "ENC-1"
    assert line.type == "consultation"
    assert line.total_price == 2000


async def test_accepted_post_with_non_json_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(201, text="Created")

    async with _client(handler) as http:
        line = await OrderLineClient(base_url="http://clinic.test", client=http).create_order_line(_payload())

    assert line.id is None
    assert line.encounter_id == "ENC-1"
    assert line.total_price == 2000


async def test_injected_client_keeps_its_timeout():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["timeout"] = request.extensions["timeout"]
        return httpx.Response(201, json=_backend_row(json.loads(request.content)))

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler), timeout=3.0) as http:
        client = OrderLineClient(base_url="http://clinic.test", timeout=99.0, client=http)
        await client.create_order_line(_payload())

    assert seen["timeout"]["read"] == 3.0
