import logging
import os

from dotenv import load_dotenv

load_dotenv()

# Display
CLINIC_CURRENCY = os.getenv("CLINIC_CURRENCY", "SSP")

# Order-line collaborator (REST backend)
ORDER_API_BASE_URL = os.getenv("ORDER_API_BASE_URL", "http://localhost:5000")
ORDER_API_TIMEOUT = float(os.getenv("ORDER_API_TIMEOUT", "10.0"))

# Consultation auto-add
AUTO_ADD_CONSULTATION_ENABLED = os.getenv("AUTO_ADD_CONSULTATION_ENABLED", "true").lower() in ("1", "true", "yes", "on")
CONSULTATION_SERVICE_KEYWORD = os.getenv("CONSULTATION_SERVICE_KEYWORD", "General")
AUTO_ADD_ORDERED_BY = os.getenv("AUTO_ADD_ORDERED_BY", "Dr. System")

# Patients of this type never see a clinician directly
REFERRAL_PATIENT_TYPE = os.getenv("REFERRAL_PATIENT_TYPE", "referral_diagnostic")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for hosts embedding the engine."""
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format=LOG_FORMAT,
    )
