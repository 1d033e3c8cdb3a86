# campusmart/api/routers/orders.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from campusmart.api.errors import service_errors
from campusmart.data.database import get_db
from campusmart.domain.schemas import (
    ConfirmOrderIn,
    ConfirmOrderOut,
    OrderDetailEnvelope,
    OrderListOut,
    PlaceOrderIn,
    PlaceOrderOut,
    StatusUpdateIn,
    StatusUpdateOut,
    UserStatusUpdateIn,
)
from campusmart.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("/place", response_model=PlaceOrderOut, status_code=201)
def place_order(payload: PlaceOrderIn, db: Session = Depends(get_db)):
    """
    Zamowienie z wybranych pozycji koszyka, osobne zamowienie per sprzedawca.
    """
    svc = get_service(db)
    with service_errors("Failed to place order"):
        orders = svc.place_order(
            buyer_id=payload.user_id,
            line_ids=payload.selected_items,
            delivery_address=payload.delivery_address,
            notes=payload.notes,
        )
    return {"success": True, "message": "Orders placed successfully", "orders": orders}


@router.post("/confirm", response_model=ConfirmOrderOut, status_code=201)
def confirm_order(payload: ConfirmOrderIn, db: Session = Depends(get_db)):
    """
    Potwierdzenie zamowienia u jednego sprzedawcy, z powiadomieniem obu stron.
    """
    svc = get_service(db)
    with service_errors("Failed to confirm order"):
        result = svc.confirm_order(
            buyer_id=payload.buyer_id,
            seller_id=payload.seller_id,
            items=[i.model_dump() for i in payload.items],
            delivery_address=payload.delivery_address,
            notes=payload.notes,
            total_amount=payload.total_amount,
        )
    return {"success": True, "message": "Order confirmed", **result}


@router.get("/buyer/{user_id}", response_model=OrderListOut)
def get_buyer_orders(user_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    with service_errors("Failed to fetch orders"):
        orders = svc.get_orders_for_buyer(user_id)
    return {"success": True, "orders": orders}


@router.get("/seller/{user_id}", response_model=OrderListOut)
def get_seller_orders(user_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    with service_errors("Failed to fetch orders"):
        orders = svc.get_orders_for_seller(user_id)
    return {"success": True, "orders": orders}


@router.get("/between/{user1_id}/{user2_id}", response_model=OrderListOut)
def get_orders_between(user1_id: int, user2_id: int, db: Session = Depends(get_db)):
    """
    Zamowienia miedzy dwoma userami (kontekst czatu), w obu rolach.
    """
    svc = get_service(db)
    with service_errors("Failed to fetch orders"):
        orders = svc.get_orders_between(user1_id, user2_id)
    return {"success": True, "orders": orders}


@router.put("/status/{user_id}", response_model=StatusUpdateOut)
def update_status_by_user(
    user_id: int,
    payload: UserStatusUpdateIn,
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    with service_errors("Failed to update order status"):
        result = svc.set_order_status(payload.order_id, user_id, payload.status)
    return {"success": True, "message": "Order status updated successfully", **result}


@router.get("/{order_id}", response_model=OrderDetailEnvelope)
def get_order(order_id: int, db: Session = Depends(get_db)):
    """
    Szczegoly zamowienia razem z pozycjami.
    """
    svc = get_service(db)
    with service_errors("Failed to fetch order details"):
        order = svc.get_order_detail(order_id)
    return {"success": True, "order": order}


@router.put("/{order_id}/status", response_model=StatusUpdateOut)
def update_order_status(
    order_id: int,
    payload: StatusUpdateIn,
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    with service_errors("Failed to update order status"):
        result = svc.set_order_status(order_id, user_id, payload.status)
    return {"success": True, "message": "Order status updated successfully", **result}
