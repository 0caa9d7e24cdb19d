"""Product, customer and dashboard endpoint tests."""
from unittest.mock import patch


class TestProductRouter:

    def test_list_products_only_in_stock(self, client):
        response = client.get("/api/products")

        assert response.status_code == 200
        ids = {p["product_id"] for p in response.json()}
        assert ids == {1, 2}

    def test_get_product(self, client):
        response = client.get("/api/products/1")

        assert response.status_code == 200
        data = response.json()
        assert data["product_name"] == "Wireless Mouse"
        assert data["price"] == 100
        assert data["stock"] == 5

    def test_get_product_is_repeatable(self, client):
        first = client.get("/api/products/2").json()
        second = client.get("/api/products/2").json()

        assert first == second

    def test_get_unknown_product(self, client):
        response = client.get("/api/products/999")

        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}

    def test_products_by_category(self, client):
        assert [p["product_id"] for p in client.get("/api/products/category/Clothing").json()] == [2]
        # sold-out products are hidden
        assert client.get("/api/products/category/Home").json() == []

    def test_categories(self, client):
        assert client.get("/api/categories").json() == ["Clothing", "Electronics", "Home"]

    def test_store_failure(self, client):
        with patch("backoffice.routers.product_router.CatalogService") as mock_service:
            mock_service.return_value.list_in_stock.side_effect = RuntimeError("database unavailable")
            response = client.get("/api/products")

        assert response.status_code == 500
        assert "database unavailable" in response.json()["error"]


class TestCustomerRouter:

    def test_list_customers(self, client):
        customers = client.get("/api/customers").json()

        assert [c["name"] for c in customers] == ["Asha Verma"]

    def test_get_customer(self, client):
        response = client.get("/api/customers/7")

        assert response.status_code == 200
        assert response.json()["email"] == "asha@example.com"

    def test_get_unknown_customer(self, client):
        response = client.get("/api/customers/70")

        assert response.status_code == 404
        assert response.json()["error"] == "Customer not found"

    def test_add_customer(self, client):
        response = client.post("/api/customers", json={
            "name": "Rahul Nair",
            "email": "rahul@example.com",
            "phone": "9123456780",
            "address": "Mumbai",
        })

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Customer added successfully"
        assert client.get(f"/api/customers/{data['customerId']}").json()["name"] == "Rahul Nair"

    def test_add_customer_duplicate_email(self, client):
        response = client.post("/api/customers", json={"name": "Other Asha", "email": "asha@example.com"})

        assert response.status_code == 400
        assert "already exists" in response.json()["error"]

    def test_add_customer_missing_fields(self, client):
        response = client.post("/api/customers", json={"email": "nobody@example.com"})

        assert response.status_code == 400

    def test_customer_orders_and_stats(self, client):
        client.post("/api/orders/multi", json={
            "customer_id": 7,
            "items": [{"product_id": 1, "quantity": 2}, {"product_id": 2, "quantity": 1}],
        })
        client.post("/api/orders", json={"customer_id": 7, "product_id": 1, "quantity": 1})

        orders = client.get("/api/customers/7/orders").json()
        assert sorted(o["item_count"] for o in orders) == [1, 2]

        stats = client.get("/api/customers/7/stats").json()
        assert stats == {"total_orders": 2, "total_spent": 550}

    def test_stats_without_orders(self, client):
        assert client.get("/api/customers/7/stats").json() == {"total_orders": 0, "total_spent": 0}


class TestDashboard:

    def test_stats(self, client):
        client.post("/api/orders", json={"customer_id": 7, "product_id": 2, "quantity": 2})

        stats = client.get("/api/stats").json()

        assert stats == {
            "totalRevenue": 500,
            "totalOrders": 1,
            "totalCustomers": 1,
            "totalProducts": 3,
            # P3 is sold out (0) and below the threshold of 5; P1 has exactly 5
            "lowStock": 1,
        }


class TestServiceInfo:

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"

    def test_root(self, client):
        assert client.get("/").json()["docs"] == "/docs"

    def test_error_schema_documented(self, client):
        schema = client.get("/openapi.json").json()

        assert "ErrorResponse" in schema["components"]["schemas"]
        conflict = schema["paths"]["/api/orders/multi"]["post"]["responses"]["429"]
        assert conflict["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
