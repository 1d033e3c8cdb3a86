from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, List
from sqlalchemy.orm import Session
from campusmart.data.models.cart_line import CartLineModel
from campusmart.domain.errors import NotFoundError, ValidationError
from campusmart.domain.orders import to_money
from campusmart.repos.cart_repo import CartRepo
from campusmart.repos.item_repo import ItemRepo
from campusmart.utils.logging import get_logger

logger = get_logger(__name__)

class CartService:
    """
    Koszyk per user: jedna pozycja na (user, item)
    commands (add, update, remove, clear) modyfikuja stan
    query (get_cart, get_selected_cart_lines) tylko odczyt
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.items = ItemRepo(db)

    #query - odczyt
    def get_cart(self, user_id: int) -> Dict[str, Any]:
        lines = self.repo.list_lines(user_id)
        total = sum((to_money(l.item.price) * l.quantity for l in lines), Decimal("0.00"))

        return {
            "cart_items": [
                {
                    "cart_id": l.id,
                    "user_id": l.user_id,
                    "item_id": l.item_id,
                    "quantity": l.quantity,
                    "added_at": l.added_at,
                    "item_name": l.item.name,
                    "item_price": to_money(l.item.price),
                    "item_photo": l.item.photo,
                    "item_category": l.item.category,
                    "seller_id": l.item.seller_id,
                    "seller_username": l.item.seller.username,
                }
                for l in lines
            ],
            "total_items": len(lines),
            "total_amount": to_money(total),
        }

    def get_selected_cart_lines(self, buyer_id: int, line_ids: Iterable[int]) -> List[Dict[str, Any]]:
        """
        Pozycje koszyka wybrane do zamowienia, wzbogacone o cene i sprzedawce.
        Id nieistniejace albo nalezace do kogos innego sa pomijane.
        """
        lines = self.repo.get_lines_by_ids(buyer_id, line_ids)

        return [
            {
                "cart_line_id": l.id,
                "item_id": l.item_id,
                "item_name": l.item.name,
                "quantity": l.quantity,
                "unit_price": to_money(l.item.price),
                "seller_id": l.item.seller_id,
                "seller_name": l.item.seller.username,
            }
            for l in lines
        ]

    #commands
    def add_item(self, user_id: int, item_id: int, quantity: int = 1) -> Dict[str, Any]:
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than 0")

        item = self.items.get_item(item_id)
        if not item:
            raise NotFoundError("Item not found")

        if not item.is_available:
            raise ValidationError("Item is no longer available")

        existing = self.repo.get_line(user_id, item_id)

        if existing:
            logger.info(
                f"Item {item_id} already in cart of user {user_id}, quantity "
                f"{existing.quantity} -> {existing.quantity + quantity}"
            )
            existing.quantity += quantity
            self.repo.commit()
            return {"success": True, "message": "Cart updated successfully"}

        self.repo.add_line(
            CartLineModel(
                user_id=user_id,
                item_id=item_id,
                quantity=quantity,
                added_at=datetime.now(timezone.utc),
            )
        )
        logger.info(f"Item {item_id} added to cart of user {user_id}")
        return {"success": True, "message": "Item added to cart successfully"}

    def update_quantity(self, user_id: int, item_id: int, quantity: int) -> Dict[str, Any]:
        line = self.repo.get_line(user_id, item_id)
        if not line:
            raise NotFoundError("Cart item not found")

        #0 albo mniej = usuniecie pozycji
        if quantity <= 0:
            self.repo.delete_line(line)
            logger.info(f"Item {item_id} removed from cart of user {user_id} (quantity {quantity})")
            return {"success": True, "message": "Item removed from cart"}

        line.quantity = quantity
        self.repo.commit()
        return {"success": True, "message": "Cart quantity updated"}

    def remove_item(self, user_id: int, item_id: int) -> Dict[str, Any]:
        line = self.repo.get_line(user_id, item_id)
        if not line:
            raise NotFoundError("Cart item not found")

        self.repo.delete_line(line)
        logger.info(f"Item {item_id} removed from cart of user {user_id}")
        return {"success": True, "message": "Item removed from cart"}

    def clear_cart(self, user_id: int) -> int:
        removed = self.repo.clear(user_id)
        logger.info(f"Cart of user {user_id} cleared, {removed} line(s) removed")
        return removed
