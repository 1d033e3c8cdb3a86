#campusmart/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campusmart.api.errors import service_errors
from campusmart.data.database import get_db
from campusmart.domain.schemas import (
    ActionOut,
    CartAddIn,
    CartClearOut,
    CartOut,
    CartRemoveIn,
    CartUpdateIn,
)
from campusmart.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.post("/add", response_model=ActionOut)
def add_item(payload: CartAddIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    with service_errors("Failed to add item to cart"):
        return svc.add_item(payload.user_id, payload.item_id, payload.quantity)


@router.get("/{user_id}", response_model=CartOut)
def get_cart(user_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    with service_errors("Failed to fetch cart items"):
        cart = svc.get_cart(user_id)
    return {"success": True, **cart}


@router.put("/update", response_model=ActionOut)
def update_item(payload: CartUpdateIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    with service_errors("Failed to update cart item"):
        return svc.update_quantity(payload.user_id, payload.item_id, payload.quantity)


@router.delete("/remove", response_model=ActionOut)
def remove_item(payload: CartRemoveIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    with service_errors("Failed to remove cart item"):
        return svc.remove_item(payload.user_id, payload.item_id)


@router.delete("/clear/{user_id}", response_model=CartClearOut)
def clear_cart(user_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    with service_errors("Failed to clear cart"):
        removed = svc.clear_cart(user_id)
    return {"success": True, "message": "Cart cleared successfully", "removed": removed}
