import os

import pytest

# Deterministic config regardless of a developer's .env
os.environ["CLINIC_CURRENCY"] = "SSP"
os.environ["CONSULTATION_SERVICE_KEYWORD"] = "General"
os.environ["AUTO_ADD_ORDERED_BY"] = "Dr. System"
os.environ["AUTO_ADD_CONSULTATION_ENABLED"] = "true"
os.environ["REFERRAL_PATIENT_TYPE"] = "referral_diagnostic"
os.environ["ORDER_API_BASE_URL"] = "http://clinic.test"

from clinic_engine.models.catalog import Service
from clinic_engine.models.orders import OrderLine
from clinic_engine.models.visits import Encounter, Patient


@pytest.fixture
def services():
    """A small catalog covering every category, with one inactive entry."""
    return [
        Service(id=1, name="General Consultation", code="CONS-GENCONS", category="consultation", price=2000),
        Service(id=2, name="Complete Blood Count (CBC)", code="LAB-CBC", category="laboratory", price=1000),
        Service(id=3, name="Blood Film for Malaria (BFFM)", code="LAB-BFFM", category="laboratory", price=500),
        Service(id=4, name="Urinalysis", code="LAB-URINALYS", category="laboratory", price=700),
        Service(id=5, name="Chest X-Ray", code="RAD-CXR", category="radiology", price=5000),
        Service(id=6, name="Abdominal Ultrasound", code="US-ABDOULTR", category="ultrasound", price=6000),
        Service(id=7, name="Widal Test", code="LAB-WIDAL", category="laboratory", price=800, is_active=False),
    ]


@pytest.fixture
def make_order():
    """Factory for order lines with sensible defaults."""
    counter = {"n": 0}

    def _make(type="lab", status="pending", total_price=1000, is_paid=False, encounter_id="ENC-1", **kwargs):
        counter["n"] += 1
        return OrderLine(
            id=counter["n"],
            encounter_id=encounter_id,
            type=type,
            status=status,
            quantity=kwargs.pop("quantity", 1),
            unit_price=kwargs.pop("unit_price", total_price),
            total_price=total_price,
            is_paid=is_paid,
            **kwargs,
        )

    return _make


@pytest.fixture
def encounter():
    return Encounter(encounter_id="ENC-1", patient_id="P-001", status="open", visit_date="2026-10-17")


@pytest.fixture
def patient():
    return Patient(patient_id="P-001", first_name="Akol", last_name="Deng", age="34", gender="Male")


@pytest.fixture
def referral_patient():
    return Patient(patient_id="P-002", first_name="Nyandeng", last_name="Garang", patient_type="referral_diagnostic")
