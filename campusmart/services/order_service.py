# campusmart/services/order_service.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Set

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campusmart.data.models.order import OrderModel, OrderLineModel
from campusmart.domain.errors import (
    AuthorizationError,
    InternalError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from campusmart.domain.orders import (
    OrderStatus,
    PERMISSIVE_TRANSITIONS,
    STRICT_TRANSITIONS,
    can_transition,
    group_by_seller,
    to_money,
)
from campusmart.repos.item_repo import ItemRepo
from campusmart.repos.order_repo import OrderRepo
from campusmart.services.cart_service import CartService
from campusmart.services.notification_service import NotificationService
from campusmart.services.user_service import UserService
from campusmart.utils.settings import STRICT_ORDER_TRANSITIONS
from campusmart.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień.

    Koszyk i komunikator sa wstrzykiwane (domyslnie budowane na tej samej
    sesji), w testach mozna podac atrape notifiera.
    """

    def __init__(
        self,
        db: Session,
        cart_store: CartService | None = None,
        notifier: NotificationService | None = None,
        strict_transitions: bool | None = None,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.items = ItemRepo(db)
        self.users = UserService(db)
        self.cart_store = cart_store or CartService(db)
        self.notifier = notifier or NotificationService(db)

        strict = STRICT_ORDER_TRANSITIONS if strict_transitions is None else strict_transitions
        self.transitions: Mapping[OrderStatus, Set[OrderStatus]] = (
            STRICT_TRANSITIONS if strict else PERMISSIVE_TRANSITIONS
        )

    # =====================================================
    # COMMANDS
    # =====================================================
    def place_order(
        self,
        buyer_id: int,
        line_ids: Iterable[int],
        delivery_address: str | None = None,
        notes: str | None = None,
    ) -> List[Dict[str, Any]]:
        """
        Use Case: Zamowienie z wybranych pozycji koszyka.

        1. Pobiera pozycje kupujacego (cudze / nieistniejace id pomijane)
        2. Grupuje po sprzedawcy, total = suma cena * ilosc
        3. Kazda grupa = osobne zamowienie w osobnej transakcji
           (naglowek + pozycje + usuniecie pozycji z koszyka)
        4. Blad grupy cofa tylko te grupe, pozostale zostaja
        """
        ids = set(line_ids or ())
        if not buyer_id or not ids:
            raise ValidationError("User ID and selected items are required")

        cart_lines = self.cart_store.get_selected_cart_lines(buyer_id, ids)
        if not cart_lines:
            raise NotFoundError("No valid items found in cart")

        groups = group_by_seller(cart_lines)
        logger.info(
            f"Placing order for buyer {buyer_id}: {len(cart_lines)} line(s), "
            f"{len(groups)} seller group(s)"
        )

        created: List[Dict[str, Any]] = []
        failed: List[Any] = []

        for group in groups:
            try:
                order = self._create_order_from_lines(
                    buyer_id=buyer_id,
                    seller_id=group["seller_id"],
                    lines=group["lines"],
                    delivery_address=delivery_address,
                    notes=notes,
                    consume_cart_lines=True,
                )
            except SQLAlchemyError as e:
                logger.error(
                    f"Order for buyer {buyer_id} / seller {group['seller_id']} rolled back: {e}"
                )
                failed.append(group["seller_id"])
                continue

            created.append(
                {
                    "order_id": order.id,
                    "seller_id": order.seller_id,
                    "seller_name": group["seller_name"],
                    "total_amount": to_money(order.total_amount),
                }
            )

        if not created:
            raise InternalError("Failed to place order")

        if failed:
            logger.warning(f"Buyer {buyer_id}: orders for sellers {failed} were not created")

        return created

    def confirm_order(
        self,
        buyer_id: int,
        seller_id: int,
        items: List[Mapping[str, Any]],
        delivery_address: str | None = None,
        notes: str | None = None,
        total_amount: Any = None,
    ) -> Dict[str, Any]:
        """
        Use Case: Potwierdzenie zamowienia u jednego sprzedawcy (z czatu).

        Cena pozycji zawsze z katalogu, total liczony po stronie serwera.
        Po zapisie dwie wiadomosci: kupujacy -> sprzedawca i odwrotnie.
        """
        if not buyer_id or not seller_id:
            raise ValidationError("Buyer ID and seller ID are required")
        if not items:
            raise ValidationError("At least one item is required")

        for user_id in (buyer_id, seller_id):
            if not self.users.exists(user_id):
                raise NotFoundError(f"User {user_id} not found")

        catalog = self.items.get_items(i["item_id"] for i in items)
        lines = []

        for entry in items:
            quantity = entry.get("quantity") or 0
            if quantity <= 0:
                raise ValidationError("Quantity must be greater than 0")

            item = catalog.get(entry["item_id"])
            if not item:
                raise NotFoundError(f"Item {entry['item_id']} not found")
            if item.seller_id != seller_id:
                raise ValidationError(f"Item {item.id} is not sold by user {seller_id}")

            price = to_money(item.price)
            claimed = entry.get("price_at_time")
            if claimed is not None and to_money(claimed) != price:
                logger.warning(
                    f"Item {item.id}: client price {claimed} differs from catalog {price}, using catalog"
                )
            lines.append({"item_id": item.id, "quantity": quantity, "price_at_time": price})

        try:
            order = self._create_order_from_lines(
                buyer_id=buyer_id,
                seller_id=seller_id,
                lines=lines,
                delivery_address=delivery_address,
                notes=notes,
            )
        except SQLAlchemyError as e:
            logger.error(f"Confirm order buyer {buyer_id} / seller {seller_id} rolled back: {e}")
            raise InternalError("Failed to confirm order") from e

        total = to_money(order.total_amount)
        if total_amount is not None and to_money(total_amount) != total:
            logger.warning(
                f"Order {order.id}: client total {total_amount} ignored, server total {total}"
            )

        count = sum(l["quantity"] for l in lines)
        self._notify_safely(
            buyer_id, seller_id,
            f"Order #{order.id} confirmed: {count} item(s), total {total}. Please prepare the order.",
            order.id,
        )
        self._notify_safely(
            seller_id, buyer_id,
            f"Thank you! Order #{order.id} ({count} item(s), total {total}) has been received.",
            order.id,
        )

        return {"order_id": order.id, "total_amount": total}

    def set_order_status(self, order_id: int, user_id: int, status: Any) -> Dict[str, Any]:
        """
        Use Case: Zmiana statusu przez kupujacego albo sprzedawce.
        Nadpisuje status i powiadamia druga strone.
        """
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")

        if user_id not in (order.buyer_id, order.seller_id):
            raise AuthorizationError("You are not a party to this order")

        target = OrderStatus.parse(status)
        if target is None:
            raise ValidationError("Invalid status")

        current = OrderStatus.parse(order.status)
        if current is not None and not can_transition(current, target, self.transitions):
            raise InvalidTransitionError(
                f"Cannot change status from {current.value} to {target.value}"
            )

        self.repo.update_order_status(order, target.value)

        counterparty = order.buyer_id if user_id == order.seller_id else order.seller_id
        logger.info(
            f"Order {order_id} status {current.value if current else order.status} -> "
            f"{target.value} by user {user_id}"
        )

        self._notify_safely(
            user_id,
            counterparty,
            f"Order #{order.id} status updated to {target.value}",
            order.id,
        )

        return {"order_id": order.id, "status": target.value}

    # =====================================================
    # QUERY
    # =====================================================
    def get_orders_for_buyer(self, user_id: int) -> List[Dict[str, Any]]:
        return [
            {
                **self._summary(o),
                "seller_username": o.seller.username,
                "seller_name": o.seller.display_name,
            }
            for o in self.repo.list_for_buyer(user_id)
        ]

    def get_orders_for_seller(self, user_id: int) -> List[Dict[str, Any]]:
        return [
            {
                **self._summary(o),
                "buyer_username": o.buyer.username,
                "buyer_name": o.buyer.display_name,
            }
            for o in self.repo.list_for_seller(user_id)
        ]

    def get_orders_between(self, user_a: int, user_b: int) -> List[Dict[str, Any]]:
        return [self._summary(o) for o in self.repo.list_between(user_a, user_b)]

    def get_order_detail(self, order_id: int) -> Dict[str, Any]:
        order = self.repo.get_order_with_lines(order_id)
        if not order:
            raise NotFoundError("Order not found")

        return {
            **self._summary(order),
            "buyer_username": order.buyer.username,
            "buyer_name": order.buyer.display_name,
            "seller_username": order.seller.username,
            "seller_name": order.seller.display_name,
            "items": [
                {
                    "item_id": line.item_id,
                    "quantity": line.quantity,
                    "price_at_time": to_money(line.price_at_time),
                    "item_name": line.item.name if line.item else None,
                    "item_category": line.item.category if line.item else None,
                    "item_photo": line.item.photo if line.item else None,
                }
                for line in order.lines
            ],
        }

    # =====================================================
    # INTERNAL
    # =====================================================
    def _create_order_from_lines(
        self,
        buyer_id: int,
        seller_id: int,
        lines: List[Mapping[str, Any]],
        delivery_address: str | None = None,
        notes: str | None = None,
        consume_cart_lines: bool = False,
    ) -> OrderModel:
        # total zawsze z pozycji (snapshot ceny), nigdy od klienta
        total = sum(
            (to_money(l["price_at_time"]) * l["quantity"] for l in lines),
            Decimal("0.00"),
        )

        order = OrderModel(
            buyer_id=buyer_id,
            seller_id=seller_id,
            total_amount=to_money(total),
            status=OrderStatus.PENDING.value,
            delivery_address=delivery_address or "",
            notes=notes or "",
            order_date=datetime.now(timezone.utc),
        )
        order_lines = [
            OrderLineModel(
                item_id=l["item_id"],
                quantity=l["quantity"],
                price_at_time=to_money(l["price_at_time"]),
            )
            for l in lines
        ]
        consumed = [l["cart_line_id"] for l in lines if l.get("cart_line_id")] if consume_cart_lines else []

        created = self.repo.create_order_with_lines(order, order_lines, consumed)
        logger.info(
            f"Order {created.id} created: buyer {buyer_id}, seller {seller_id}, "
            f"{len(order_lines)} line(s), total {created.total_amount}"
        )
        return created

    def _notify_safely(self, sender_id: int, receiver_id: int, text: str, order_id: int) -> bool:
        # zamowienie jest juz zacommitowane, blad powiadomienia tylko logujemy
        try:
            self.notifier.notify(sender_id, receiver_id, text, order_id)
            return True
        except Exception as e:
            logger.error(f"Notification for order {order_id} to user {receiver_id} failed: {e}")
            self.db.rollback()
            return False

    @staticmethod
    def _summary(order: OrderModel) -> Dict[str, Any]:
        return {
            "order_id": order.id,
            "buyer_id": order.buyer_id,
            "seller_id": order.seller_id,
            "total_amount": to_money(order.total_amount),
            "status": order.status,
            "delivery_address": order.delivery_address,
            "notes": order.notes,
            "order_date": order.order_date,
        }
