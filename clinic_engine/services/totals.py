import logging
from collections.abc import Iterable, Sequence

from clinic_engine.models.base import finite_or_zero
from clinic_engine.models.catalog import Service
from clinic_engine.models.orders import OrderLine

logger = logging.getLogger(__name__)


def total_order_lines(lines: Iterable[OrderLine]) -> float:
    """Grand total of ``total_price`` over ``lines``.

    Missing or non-finite prices count as 0 so a bad record cannot turn an
    invoice total into NaN. No rounding is applied.
    """
    return sum((finite_or_zero(line.total_price) for line in lines), 0.0)


def recalculate_lab_test_price(test_names: Sequence[str], lab_services: Sequence[Service]) -> float:
    """Sum catalog prices for every test in a single lab order.

    Each name is looked up case-insensitively by exact name first, then by
    containment in either direction. Tests with no catalog entry add nothing.
    """
    by_name = {s.name.lower(): s for s in lab_services}
    total = 0.0
    for test_name in test_names:
        wanted = test_name.lower()
        service = by_name.get(wanted)
        if service is None:
            service = next(
                (s for s in lab_services if wanted in s.name.lower() or s.name.lower() in wanted),
                None,
            )
        if service is not None:
            total += service.price
    return total


def reprice_lab_order_line(
    line: OrderLine,
    test_names: Sequence[str],
    lab_services: Sequence[Service],
) -> OrderLine:
    """Return ``line`` priced as the sum of its tests.

    Older lab orders were billed at the first test's price only. When no
    test can be priced the line is returned unchanged.
    """
    total = recalculate_lab_test_price(test_names, lab_services)
    if total <= 0:
        return line
    if total != line.total_price:
        logger.info("Repriced lab order line %s: %s -> %s", line.id, line.total_price, total)
    return line.model_copy(update={"unit_price": total, "total_price": total})
