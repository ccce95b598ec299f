"""Unit tests for the HTTP API."""
import pytest
from fastapi.testclient import TestClient

from restaurant_ops.main import app
from restaurant_ops.services.restaurant.models import OrderStatus
from restaurant_ops.services.restaurant.store import RestaurantStore


class TestHealthAPI:
    """Test health and identity endpoints."""

    def test_health(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "restaurant": "Campomar"}

    def test_restaurant_identity(self, test_client):
        """Test the static restaurant record."""
        response = test_client.get("/api/restaurant/1")

        assert response.status_code == 200
        assert response.json() == {"id": 1, "name": "Campomar"}


class TestMenuAPI:
    """Test menu API endpoints."""

    def test_get_menu(self, test_client):
        """Test GET /api/menu returns items and categories."""
        response = test_client.get("/api/menu")

        assert response.status_code == 200
        data = response.json()
        assert [item["id"] for item in data["items"]] == [
            "mi_pizza", "mi_burger", "mi_salad", "mi_coffee",
        ]
        assert data["categories"] == ["Entrees", "Salads", "Drinks"]
        assert data["items"][0]["modifiers"][0] == {"name": "Extra Cheese", "price_delta": 2.0}

    def test_search_menu(self, test_client):
        """Test the q parameter filters by name or category."""
        response = test_client.get("/api/menu", params={"q": "salad"})

        assert response.status_code == 200
        assert [item["id"] for item in response.json()["items"]] == ["mi_salad"]

    def test_create_item(self, test_client, live_store):
        """Test POST /api/menu/items appends a new item."""
        new_item = {
            "name": "  Tiramisu ",
            "category": "Desserts",
            "price": 7.5,
            "modifiers": [{"name": "Extra Cocoa", "price_delta": 0.5}],
        }

        response = test_client.post("/api/menu/items", json=new_item)

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Tiramisu"
        assert data["id"]
        assert live_store.menu_items[-1].id == data["id"]

    def test_create_item_blank_name(self, test_client):
        """Test a blank name is rejected."""
        response = test_client.post("/api/menu/items", json={"name": "   ", "price": 1})

        assert response.status_code == 422

    def test_create_item_negative_price(self, test_client):
        """Test a negative base price is rejected."""
        response = test_client.post("/api/menu/items", json={"name": "Oops", "price": -1})

        assert response.status_code == 422

    def test_update_item(self, test_client, live_store):
        """Test PUT /api/menu/items/{id} replaces the item."""
        response = test_client.put(
            "/api/menu/items/mi_burger",
            json={"name": "Smash Burger", "category": "Entrees", "price": 13, "modifiers": []},
        )

        assert response.status_code == 200
        assert response.json()["id"] == "mi_burger"
        assert live_store.get_menu_item("mi_burger").name == "Smash Burger"

    def test_update_unknown_item(self, test_client):
        """Test updating an unknown item returns 404."""
        response = test_client.put("/api/menu/items/nope", json={"name": "X", "price": 1})

        assert response.status_code == 404

    def test_delete_item(self, test_client, live_store):
        """Test DELETE removes the item but keeps orders referencing it."""
        response = test_client.delete("/api/menu/items/mi_pizza")

        assert response.status_code == 200
        assert live_store.get_menu_item("mi_pizza") is None
        assert len(live_store.orders) == 4

        assert test_client.delete("/api/menu/items/mi_pizza").status_code == 404


class TestTablesAPI:
    """Test table API endpoints."""

    def test_list_tables(self, test_client):
        response = test_client.get("/api/tables")

        assert response.status_code == 200
        assert len(response.json()) == 10

    def test_filter_tables(self, test_client):
        """Test the status filter."""
        response = test_client.get("/api/tables", params={"status": "occupied"})

        assert [t["id"] for t in response.json()] == ["t1", "t2"]

    def test_filter_tables_invalid_status(self, test_client):
        response = test_client.get("/api/tables", params={"status": "dirty"})

        assert response.status_code == 422

    def test_table_orders(self, test_client):
        """Test orders per table include their totals."""
        response = test_client.get("/api/tables/t1/orders")

        assert response.status_code == 200
        orders = response.json()
        assert len(orders) == 1
        assert orders[0]["total"] == 33.0
        assert orders[0]["total_display"] == "$33.00"

    def test_clean_table(self, test_client):
        """Test POST /api/tables/{id}/clean makes the table available."""
        response = test_client.post("/api/tables/t1/clean")

        assert response.status_code == 200
        assert response.json()["status"] == "available"

    def test_unknown_table(self, test_client):
        assert test_client.post("/api/tables/t99/clean").status_code == 404
        assert test_client.get("/api/tables/t99/orders").status_code == 404


class TestOrdersAPI:
    """Test order API endpoints."""

    def test_list_orders(self, test_client):
        response = test_client.get("/api/orders")

        assert response.status_code == 200
        assert [o["table_id"] for o in response.json()] == ["t1", "t2", "t3", "t4"]

    def test_list_orders_by_status(self, test_client):
        response = test_client.get("/api/orders", params={"status": "paid"})

        assert [o["table_id"] for o in response.json()] == ["t3", "t4"]

    def test_order_board(self, test_client):
        """Test the board has one column per status."""
        response = test_client.get("/api/orders/board")

        assert response.status_code == 200
        board = response.json()
        assert set(board) == {"in_progress", "served", "paid"}
        assert [o["table_id"] for o in board["served"]] == ["t2"]

    def test_create_order(self, test_client, live_store):
        """Test POST /api/orders creates an in-progress order and occupies the table."""
        response = test_client.post(
            "/api/orders",
            json={
                "table_id": "t5",
                "items": [
                    {"menu_item_id": "mi_pizza", "modifier_name": "Extra Cheese", "qty": 1},
                    {"menu_item_id": "mi_coffee", "qty": 2},
                ],
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "in_progress"
        assert data["total"] == 22.0
        assert live_store.orders[0].id == data["id"]
        assert live_store.get_table("t5").status == "occupied"

    @pytest.mark.parametrize(
        "payload",
        [
            {"table_id": "t5", "items": []},
            {"items": [{"menu_item_id": "mi_pizza", "qty": 1}]},
            {"table_id": "", "items": [{"menu_item_id": "mi_pizza", "qty": 1}]},
        ],
    )
    def test_create_order_incomplete(self, test_client, live_store, payload):
        """Test an order without table or items is refused."""
        response = test_client.post("/api/orders", json=payload)

        assert response.status_code == 400
        assert len(live_store.orders) == 4

    def test_create_order_unknown_table(self, test_client):
        response = test_client.post(
            "/api/orders",
            json={"table_id": "t99", "items": [{"menu_item_id": "mi_pizza", "qty": 1}]},
        )

        assert response.status_code == 404

    def test_create_order_zero_qty(self, test_client):
        """Test line quantities must be positive."""
        response = test_client.post(
            "/api/orders",
            json={"table_id": "t5", "items": [{"menu_item_id": "mi_pizza", "qty": 0}]},
        )

        assert response.status_code == 422

    def test_mark_served_then_paid(self, test_client, live_store):
        """Test the forward lifecycle and the table side effect."""
        order_id = live_store.first_order_with_status(OrderStatus.IN_PROGRESS).id

        served = test_client.patch(f"/api/orders/{order_id}/status", json={"status": "served"})
        paid = test_client.patch(f"/api/orders/{order_id}/status", json={"status": "paid"})

        assert served.status_code == 200
        assert paid.status_code == 200
        assert paid.json()["status"] == "paid"
        assert live_store.get_table("t1").status == "needs_cleaning"

    def test_backward_transition_rejected(self, test_client, live_store):
        """Test a paid order cannot go back to in progress."""
        order_id = live_store.first_order_with_status(OrderStatus.PAID).id

        response = test_client.patch(
            f"/api/orders/{order_id}/status", json={"status": "in_progress"}
        )

        assert response.status_code == 409
        assert live_store.get_order(order_id).status == OrderStatus.PAID

    def test_update_unknown_order(self, test_client):
        response = test_client.patch("/api/orders/nope/status", json={"status": "paid"})

        assert response.status_code == 404


class TestDashboardAPI:
    """Test the dashboard endpoint."""

    def test_dashboard(self, test_client):
        """Test seed data produces the expected aggregates."""
        response = test_client.get("/api/dashboard")

        assert response.status_code == 200
        data = response.json()
        assert data["sales"]["today"] == 25.5
        assert data["sales"]["last_7_days"] == 41.0
        assert data["sales"]["last_30_days"] == 59.0
        assert data["sales_display"]["today"] == "$25.50"
        assert len(data["active_orders"]) == 1
        assert data["active_orders"][0]["total"] == 33.0
        assert [row["name"] for row in data["top_sellers"]] == [
            "Iced Coffee", "Caesar Salad", "Margherita Pizza", "Classic Burger",
        ]
        assert len(data["trend"]) == 14
        assert data["trend"][-1]["total"] == 25.5

    def test_dashboard_after_serving(self, test_client, live_store):
        """Test serving the active order moves it into today's sales."""
        order_id = live_store.first_order_with_status(OrderStatus.IN_PROGRESS).id
        test_client.patch(f"/api/orders/{order_id}/status", json={"status": "served"})

        data = test_client.get("/api/dashboard").json()

        assert data["sales"]["today"] == 25.5 + 33.0
        assert data["active_orders"] == []


class TestLifespan:
    """Test application startup and shutdown."""

    def test_startup_builds_store(self):
        """Test startup loads or seeds the store and serves it."""
        with TestClient(app) as client:
            assert isinstance(app.state.store, RestaurantStore)
            assert len(app.state.store.tables) == 10

            response = client.get("/api/orders")

            assert response.status_code == 200
            assert len(response.json()) == len(app.state.store.orders)
