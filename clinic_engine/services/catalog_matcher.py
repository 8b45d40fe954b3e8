"""Resolve free-text test names to billable catalog services.

Ordered tests are stored by name, so every diagnostic order must be
mapped back to an active service before it can be priced. Names are
compared after normalization (trim, lower-case, single spaces); in fuzzy
mode a trailing parenthetical on the catalog name is ignored, so
"Complete Blood Count (CBC)" answers to "Complete Blood Count".
"""

import logging
import re
from collections.abc import Iterable, Sequence

from clinic_engine.config import CONSULTATION_SERVICE_KEYWORD
from clinic_engine.errors import CatalogMismatch
from clinic_engine.models.catalog import Service, ServiceCategory

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_TRAILING_PAREN_RE = re.compile(r"\s*\([^)]*\)\s*$")


def normalize_name(text: str | None) -> str:
    """Trim, lower-case and collapse whitespace runs to one space."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text.strip().lower())


def _strip_suffix(normalized: str) -> str:
    return _TRAILING_PAREN_RE.sub("", normalized).strip()


def _name_matches(service_name: str, wanted: str) -> bool:
    if service_name == wanted:
        return True
    # Prefix only counts at a word boundary: "cbc" must not match "cbcx"
    return service_name.startswith(wanted + " ") or service_name.startswith(wanted + "(")


def match_service(
    test_name: str,
    services: Iterable[Service],
    fuzzy: bool = True,
) -> Service | None:
    """Return the first active service matching ``test_name``, or None.

    Ties are not broken: services are scanned in caller order.
    """
    wanted = normalize_name(test_name)
    if not wanted:
        return None

    for service in services:
        if not service.is_active:
            continue
        name = normalize_name(service.name)
        if _name_matches(name, wanted):
            return service
        if fuzzy and _name_matches(_strip_suffix(name), wanted):
            return service
        if service.code and normalize_name(service.code) == wanted:
            return service
    return None


def match_services(test_names: Sequence[str], services: Sequence[Service]) -> list[Service]:
    """Resolve a whole batch of test names, all or nothing.

    Raises:
        CatalogMismatch: if any name has no active match. The exception
            lists every unmatched name verbatim, in request order.
    """
    matched: list[Service] = []
    unmatched: list[str] = []
    for name in test_names:
        service = match_service(name, services)
        if service is None:
            unmatched.append(name)
        else:
            matched.append(service)

    if unmatched:
        logger.warning("Catalog mismatch for %d test(s): %s", len(unmatched), unmatched)
        raise CatalogMismatch(unmatched)
    return matched


def find_consultation_service(
    services: Iterable[Service],
    keyword: str = CONSULTATION_SERVICE_KEYWORD,
) -> Service | None:
    """Pick the active consultation service used for the automatic visit fee."""
    for service in services:
        if (
            service.is_active
            and service.category == ServiceCategory.CONSULTATION.value
            and keyword in service.name
        ):
            return service
    return None
