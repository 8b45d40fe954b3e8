"""Error taxonomy for the clinic engine.

Malformed numeric fields are coerced to 0 and unparseable dosage strings
degrade to a conservative quantity, so neither has an exception type here.
"""


class ClinicEngineError(Exception):
    """Base class for all clinic engine errors."""


class CatalogMismatch(ClinicEngineError):
    """One or more requested test names matched no active service."""

    def __init__(self, unmatched: list[str]) -> None:
        self.unmatched = list(unmatched)
        super().__init__(
            "No active service found for: " + ", ".join(self.unmatched)
        )


class AutoAddFailure(ClinicEngineError):
    """The automatic consultation order could not be created."""

    def __init__(self, encounter_id: str, reason: str) -> None:
        self.encounter_id = encounter_id
        self.reason = reason
        super().__init__(f"Consultation auto-add failed for {encounter_id}: {reason}")


class ServiceCodeError(ClinicEngineError):
    """A service code could not be generated or failed validation."""
