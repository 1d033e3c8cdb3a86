# campusmart/domain/orders.py
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Set

CENT = Decimal("0.01")


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: Any) -> "OrderStatus | None":
        try:
            return cls(value)
        except ValueError:
            return None


#plaski graf: z kazdego stanu do kazdego
PERMISSIVE_TRANSITIONS: Dict[OrderStatus, Set[OrderStatus]] = {
    status: set(OrderStatus) for status in OrderStatus
}

STRICT_TRANSITIONS: Dict[OrderStatus, Set[OrderStatus]] = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}


def can_transition(
    current: OrderStatus,
    target: OrderStatus,
    table: Mapping[OrderStatus, Set[OrderStatus]] = PERMISSIVE_TRANSITIONS,
) -> bool:
    return target in table.get(current, set())


def to_money(value: Any) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def group_by_seller(lines: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Dzieli wybrane pozycje koszyka na grupy per sprzedawca.

    Kazda grupa: seller_id, seller_name, lines (item_id, quantity,
    price_at_time, cart_line_id) i total_amount = suma price * quantity.
    Kolejnosc grup = kolejnosc pierwszego wystapienia sprzedawcy.
    """
    groups: Dict[Any, Dict[str, Any]] = {}

    for line in lines:
        seller_id = line["seller_id"]
        group = groups.get(seller_id)
        if group is None:
            group = groups[seller_id] = {
                "seller_id": seller_id,
                "seller_name": line.get("seller_name"),
                "lines": [],
                "total_amount": Decimal("0.00"),
            }

        price = to_money(line["unit_price"])
        group["lines"].append(
            {
                "cart_line_id": line.get("cart_line_id"),
                "item_id": line["item_id"],
                "quantity": line["quantity"],
                "price_at_time": price,
            }
        )
        group["total_amount"] = to_money(group["total_amount"] + price * line["quantity"])

    return list(groups.values())
