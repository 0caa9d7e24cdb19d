"""Order endpoint tests."""
from unittest.mock import Mock, patch

import pytest
from sqlalchemy import func, select

from backoffice.core.exceptions import BusinessRuleViolation, StockLockConflict
from backoffice.models import Order, OrderItem, Product


def count(db, model):
    db.expire_all()
    return db.execute(select(func.count()).select_from(model)).scalar_one()


class TestPlaceMultiOrder:

    def test_success(self, client, db_session):
        response = client.post("/api/orders/multi", json={
            "customer_id": 7,
            "items": [{"product_id": 1, "quantity": 3}],
        })

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Order placed successfully"
        order_id = data["orderId"]

        detail = client.get(f"/api/orders/{order_id}").json()
        assert detail["total_amount"] == 300
        assert detail["status"] == "pending"
        assert [(i["product_id"], i["quantity"], i["subtotal"]) for i in detail["items"]] == [(1, 3, 300)]

        db_session.expire_all()
        assert db_session.get(Product, 1).stock == 2

    def test_insufficient_stock(self, client, db_session, seeded):
        seeded["p1"].stock = 2
        db_session.commit()

        response = client.post("/api/orders/multi", json={
            "customer_id": 7,
            "items": [{"product_id": 1, "quantity": 5}],
        })

        assert response.status_code == 400
        assert "Insufficient stock" in response.json()["error"]
        db_session.expire_all()
        assert db_session.get(Product, 1).stock == 2
        assert count(db_session, Order) == 0

    def test_partial_failure_persists_nothing(self, client, db_session):
        response = client.post("/api/orders/multi", json={
            "customer_id": 7,
            "items": [
                {"product_id": 2, "quantity": 1},
                {"product_id": 1, "quantity": 99},
            ],
        })

        assert response.status_code == 400
        assert count(db_session, Order) == 0
        assert count(db_session, OrderItem) == 0
        assert db_session.get(Product, 2).stock == 10

    def test_unknown_product(self, client):
        response = client.post("/api/orders/multi", json={
            "customer_id": 7,
            "items": [{"product_id": 999, "quantity": 1}],
        })

        assert response.status_code == 400
        assert "999" in response.json()["error"]

    @pytest.mark.parametrize("body", [
        {"customer_id": 7, "items": []},
        {"customer_id": 7},
        {"items": [{"product_id": 1, "quantity": 1}]},
        {"customer_id": 7, "items": [{"product_id": 1, "quantity": 0}]},
        {"customer_id": 7, "items": [{"product_id": 1}]},
    ])
    def test_rejected_before_store_interaction(self, client, body):
        with patch("backoffice.routers.order_router.OrderService") as mock_service:
            response = client.post("/api/orders/multi", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"
        mock_service.assert_not_called()

    def test_store_failure(self, client):
        with patch("backoffice.routers.order_router.OrderService") as mock_service:
            mock_service.return_value.place_order.side_effect = RuntimeError("connection lost")
            response = client.post("/api/orders/multi", json={
                "customer_id": 7,
                "items": [{"product_id": 1, "quantity": 1}],
            })

        assert response.status_code == 500
        assert "connection lost" in response.json()["error"]

    def test_service_errors_pass_through(self, client):
        with patch("backoffice.routers.order_router.OrderService") as mock_service:
            mock_service.return_value.place_order.side_effect = StockLockConflict()
            response = client.post("/api/orders/multi", json={
                "customer_id": 7,
                "items": [{"product_id": 1, "quantity": 1}],
            })

        assert response.status_code == 429
        assert response.json()["error"] == "Stock operation conflict, please retry"

    def test_uses_configured_redlock(self, client, mock_redlock):
        from backoffice.core.dependencies import get_redlock
        from backoffice.main import app

        app.dependency_overrides[get_redlock] = lambda: mock_redlock
        response = client.post("/api/orders/multi", json={
            "customer_id": 7,
            "items": [{"product_id": 1, "quantity": 1}],
        })

        assert response.status_code == 201
        mock_redlock.lock.assert_called_once()
        mock_redlock.unlock.assert_called_once()


class TestPlaceSingleOrder:

    def test_success(self, client, db_session):
        response = client.post("/api/orders", json={"customer_id": 7, "product_id": 2, "quantity": 4})

        assert response.status_code == 201
        assert response.json()["message"] == "Order placed successfully"
        db_session.expire_all()
        assert db_session.get(Product, 2).stock == 6

    def test_missing_fields(self, client):
        response = client.post("/api/orders", json={"customer_id": 7, "product_id": 2})

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"

    def test_business_rule(self, client):
        with patch("backoffice.routers.order_router.OrderService") as mock_service:
            mock_service.return_value.place_order.side_effect = BusinessRuleViolation("Product 3 not found")
            response = client.post("/api/orders", json={"customer_id": 7, "product_id": 3, "quantity": 1})

        assert response.status_code == 400
        assert response.json() == {"error": "Product 3 not found"}


class TestOrderStatus:

    def test_update(self, client):
        order_id = client.post("/api/orders", json={"customer_id": 7, "product_id": 1, "quantity": 1}).json()["orderId"]

        response = client.patch(f"/api/orders/{order_id}/status", json={"status": "shipped"})

        assert response.status_code == 200
        assert response.json()["message"] == "Order status updated successfully"
        assert client.get(f"/api/orders/{order_id}").json()["status"] == "shipped"

    def test_unknown_order(self, client):
        response = client.patch("/api/orders/9999/status", json={"status": "shipped"})

        assert response.status_code == 404
        assert response.json()["error"] == "Order not found"

    def test_invalid_status(self, client):
        response = client.patch("/api/orders/1/status", json={"status": "teleported"})

        assert response.status_code == 400


class TestOrderReads:

    def test_list_orders(self, client):
        client.post("/api/orders", json={"customer_id": 7, "product_id": 1, "quantity": 1})
        client.post("/api/orders", json={"customer_id": 7, "product_id": 2, "quantity": 2})

        orders = client.get("/api/orders").json()

        assert len(orders) == 2
        assert {o["total_amount"] for o in orders} == {100, 500}
        assert all(o["customer_name"] == "Asha Verma" for o in orders)

    def test_get_unknown_order(self, client):
        response = client.get("/api/orders/4242")

        assert response.status_code == 404
        assert response.json() == {"error": "Order not found"}
