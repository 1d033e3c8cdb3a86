from decimal import Decimal

from fastapi.testclient import TestClient
from sqlalchemy import select

from campusmart.data.models import MessageModel, OrderModel
from campusmart.main import app
from campusmart.services.order_service import OrderService


def _place(client, market, add_to_cart):
    lines = [
        add_to_cart(market.alice, market.items["calculator"], 2),
        add_to_cart(market.alice, market.items["labcoat"], 1),
    ]
    return client.post(
        "/orders/place",
        json={"user_id": market.alice, "selected_items": lines, "delivery_address": "Dorm 3"},
    )


class TestPlaceOrderApi:

    def test_two_sellers(self, client, market, add_to_cart):
        resp = _place(client, market, add_to_cart)

        assert resp.status_code == 201
        body = resp.json()
        assert body["success"] is True
        assert len(body["orders"]) == 2
        assert {o["seller_id"] for o in body["orders"]} == {market.bob, market.carol}
        assert all(Decimal(o["total_amount"]) == Decimal("100.00") for o in body["orders"])

    def test_empty_selection(self, client, market):
        resp = client.post("/orders/place", json={"user_id": market.alice, "selected_items": []})

        assert resp.status_code == 400
        assert resp.json()["success"] is False

    def test_missing_user(self, client):
        resp = client.post("/orders/place", json={"selected_items": [1]})
        assert resp.status_code == 400

    def test_no_valid_lines(self, client, market, add_to_cart):
        foreign = add_to_cart(market.dave, market.items["labcoat"])

        resp = client.post("/orders/place", json={"user_id": market.alice, "selected_items": [foreign]})

        assert resp.status_code == 404
        assert resp.json() == {"success": False, "message": "No valid items found in cart"}


class TestConfirmOrderApi:

    def test_confirm(self, client, db_session, market):
        resp = client.post(
            "/orders/confirm",
            json={
                "buyer_id": market.alice,
                "seller_id": market.bob,
                "items": [{"item_id": market.items["calculator"], "quantity": 1, "price_at_time": "50.00"}],
                "total_amount": "10.00",
            },
        )

        assert resp.status_code == 201
        body = resp.json()
        assert Decimal(body["total_amount"]) == Decimal("50.00")

        db_session.expire_all()
        messages = db_session.execute(select(MessageModel)).scalars().all()
        assert len(messages) == 2
        assert {m.order_id for m in messages} == {body["order_id"]}

    def test_confirm_without_items(self, client, market):
        resp = client.post(
            "/orders/confirm",
            json={"buyer_id": market.alice, "seller_id": market.bob, "items": []},
        )
        assert resp.status_code == 400

    def test_confirm_foreign_item(self, client, market):
        resp = client.post(
            "/orders/confirm",
            json={
                "buyer_id": market.alice,
                "seller_id": market.bob,
                "items": [{"item_id": market.items["labcoat"], "quantity": 1}],
            },
        )
        assert resp.status_code == 400
        assert resp.json()["success"] is False

    def test_confirm_unknown_buyer(self, client, market):
        resp = client.post(
            "/orders/confirm",
            json={
                "buyer_id": 987654,
                "seller_id": market.bob,
                "items": [{"item_id": market.items["calculator"], "quantity": 1}],
            },
        )

        assert resp.status_code == 404
        assert resp.json() == {"success": False, "message": "User 987654 not found"}
        assert client.get(f"/orders/seller/{market.bob}").json() == {"success": True, "orders": []}


class TestUnexpectedErrors:

    def test_unmapped_exception_keeps_envelope(self, client, market, monkeypatch):
        def broken(self, user_id):
            raise KeyError("seller_username")

        monkeypatch.setattr(OrderService, "get_orders_for_buyer", broken)
        # bez re-raise w kliencie: odpowiedz z handlera 500
        unsafe_client = TestClient(app, raise_server_exceptions=False)

        resp = unsafe_client.get(f"/orders/buyer/{market.alice}")

        assert resp.status_code == 500
        assert resp.json() == {"success": False, "message": "Internal server error"}


class TestStatusApi:

    def test_seller_ships_via_path(self, client, db_session, market, add_to_cart):
        order_id = _place(client, market, add_to_cart).json()["orders"][0]["order_id"]
        db_session.expire_all()
        order = db_session.get(OrderModel, order_id)

        resp = client.put(
            f"/orders/{order_id}/status",
            params={"user_id": order.seller_id},
            json={"status": "shipped"},
        )

        assert resp.status_code == 200
        assert resp.json() == {
            "success": True,
            "message": "Order status updated successfully",
            "order_id": order_id,
            "status": "shipped",
        }
        db_session.expire_all()
        [message] = db_session.execute(select(MessageModel)).scalars().all()
        assert message.receiver_id == market.alice
        assert "shipped" in message.message_text

    def test_buyer_cancels_via_user_route(self, client, market, add_to_cart):
        order_id = _place(client, market, add_to_cart).json()["orders"][0]["order_id"]

        resp = client.put(
            f"/orders/status/{market.alice}",
            json={"order_id": order_id, "status": "cancelled"},
        )

        assert resp.status_code == 200
        assert resp.json()["status"] == "cancelled"

    def test_outsider_forbidden(self, client, db_session, market, add_to_cart):
        order_id = _place(client, market, add_to_cart).json()["orders"][0]["order_id"]

        resp = client.put(
            f"/orders/{order_id}/status",
            params={"user_id": market.dave},
            json={"status": "delivered"},
        )

        assert resp.status_code == 403
        assert resp.json()["success"] is False
        db_session.expire_all()
        assert db_session.get(OrderModel, order_id).status == "pending"
        assert db_session.execute(select(MessageModel)).first() is None

    def test_invalid_status(self, client, market, add_to_cart):
        order_id = _place(client, market, add_to_cart).json()["orders"][0]["order_id"]

        resp = client.put(
            f"/orders/{order_id}/status",
            params={"user_id": market.alice},
            json={"status": "teleported"},
        )

        assert resp.status_code == 400
        assert resp.json() == {"success": False, "message": "Invalid status"}

    def test_unknown_order(self, client, market):
        resp = client.put("/orders/424242/status", params={"user_id": market.alice}, json={"status": "shipped"})
        assert resp.status_code == 404

    def test_not_found_checked_before_authorization(self, client, market):
        resp = client.put(f"/orders/status/{market.dave}", json={"order_id": 424242, "status": "nope"})
        assert resp.status_code == 404

    def test_missing_user_id_query(self, client, market, add_to_cart):
        order_id = _place(client, market, add_to_cart).json()["orders"][0]["order_id"]

        resp = client.put(f"/orders/{order_id}/status", json={"status": "shipped"})

        assert resp.status_code == 400


class TestOrderQueriesApi:

    def test_buyer_and_seller_lists(self, client, market, add_to_cart):
        _place(client, market, add_to_cart)

        buyer = client.get(f"/orders/buyer/{market.alice}").json()
        assert buyer["success"] is True
        assert len(buyer["orders"]) == 2
        assert {o["seller_username"] for o in buyer["orders"]} == {"bob", "carol"}

        seller = client.get(f"/orders/seller/{market.bob}").json()
        [order] = seller["orders"]
        assert order["buyer_username"] == "alice"
        assert order["buyer_name"] == "Alice Buyer"

    def test_lists_empty_for_unknown_user(self, client, market):
        assert client.get("/orders/buyer/9999").json() == {"success": True, "orders": []}

    def test_between(self, client, market, add_to_cart):
        _place(client, market, add_to_cart)

        resp = client.get(f"/orders/between/{market.bob}/{market.alice}")

        [order] = resp.json()["orders"]
        assert order["buyer_id"] == market.alice
        assert order["seller_id"] == market.bob

    def test_detail(self, client, market, add_to_cart):
        orders = _place(client, market, add_to_cart).json()["orders"]
        bob_order = next(o for o in orders if o["seller_id"] == market.bob)

        resp = client.get(f"/orders/{bob_order['order_id']}")

        assert resp.status_code == 200
        detail = resp.json()["order"]
        assert detail["status"] == "pending"
        assert detail["delivery_address"] == "Dorm 3"
        [line] = detail["items"]
        assert line["item_name"] == "Calculator"
        assert line["quantity"] == 2
        assert Decimal(line["price_at_time"]) == Decimal("50.00")

    def test_detail_not_found(self, client, market):
        resp = client.get("/orders/31337")

        assert resp.status_code == 404
        assert resp.json() == {"success": False, "message": "Order not found"}
