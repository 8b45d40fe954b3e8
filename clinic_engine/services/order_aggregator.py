from collections.abc import Iterable

from clinic_engine.models.orders import OrderLine, OrderStatus, OrderType
from clinic_engine.models.status import PartitionedOrders

_BUCKETS = {t.value for t in OrderType}


def partition_orders(orders: Iterable[OrderLine]) -> PartitionedOrders:
    """Split one visit's orders into per-type buckets.

    Unknown types are dropped. Cancelled lab tests are left out of the lab
    bucket so they never count toward pending or completed tallies.
    """
    buckets: dict[str, list[OrderLine]] = {name: [] for name in _BUCKETS}
    for order in orders:
        if order.type not in _BUCKETS:
            continue
        if order.type == OrderType.LAB.value and order.status == OrderStatus.CANCELLED.value:
            continue
        buckets[order.type].append(order)
    return PartitionedOrders(**buckets)


def has_consultation_order(orders: Iterable[OrderLine]) -> bool:
    """True if any consultation order exists, whatever its status."""
    return any(order.type == OrderType.CONSULTATION.value for order in orders)
