from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from hotcoffee.api.main import create_app

LATTE = {
    "product_id": "latte",
    "name": "Caffe Latte",
    "description": "Espresso with steamed milk",
    "price": 3.5,
    "ingredients": [
        {"ingredient_id": "espresso_shot", "quantity": 1},
        {"ingredient_id": "milk", "quantity": 200},
    ],
}


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def client(data_dir: Path) -> Iterator[TestClient]:
    with TestClient(create_app(data_dir)) as test_client:
        test_client.post(
            "/inventory",
            json={
                "ingredient_id": "espresso_shot",
                "name": "Espresso Shot",
                "quantity": 10,
                "unit": "shots",
            },
        )
        test_client.post(
            "/inventory",
            json={"ingredient_id": "milk", "name": "Milk", "quantity": 1000, "unit": "ml"},
        )
        test_client.post("/menu", json=LATTE)
        yield test_client


def _place(client: TestClient, quantity: int = 1, customer_name: str = "Alice") -> dict:
    response = client.post(
        "/orders",
        json={
            "customer_name": customer_name,
            "items": [{"product_id": "latte", "quantity": quantity}],
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_order_lifecycle_updates_inventory_and_reports(client: TestClient, data_dir: Path) -> None:
    order = _place(client, quantity=2)
    assert order["order_id"] == "order1"
    assert order["status"] == "open"

    close_response = client.post(f"/orders/{order['order_id']}/close")
    assert close_response.status_code == 200
    assert close_response.json()["status"] == "closed"

    milk = client.get("/inventory/milk").json()
    assert milk["quantity"] == 600

    sales = client.get("/reports/total-sales")
    assert sales.status_code == 200
    assert sales.json() == {"total_sales": 7.0}

    popular = client.get("/reports/popular-items").json()
    assert [(item["product_id"], item["quantity"]) for item in popular] == [("latte", 2)]

    stored = json.loads((data_dir / "orders.json").read_text(encoding="utf-8"))
    assert stored[0]["status"] == "closed"


def test_closing_twice_returns_conflict(client: TestClient) -> None:
    order = _place(client)
    client.post(f"/orders/{order['order_id']}/close")

    response = client.post(f"/orders/{order['order_id']}/close")

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ORDER_ALREADY_CLOSED"
    assert client.get("/inventory/espresso_shot").json()["quantity"] == 9


def test_place_order_with_insufficient_stock_is_rejected(client: TestClient) -> None:
    response = client.post(
        "/orders",
        json={"customer_name": "Alice", "items": [{"product_id": "latte", "quantity": 11}]},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"]["code"] == "INSUFFICIENT_STOCK"
    assert body["error"]["details"]["ingredient_id"] == "espresso_shot"
    assert client.get("/orders").json() == []


def test_place_order_with_unknown_product_is_not_found(client: TestClient) -> None:
    response = client.post(
        "/orders",
        json={"customer_name": "Alice", "items": [{"product_id": "mocha", "quantity": 1}]},
    )

    assert response.status_code == 404


def test_malformed_body_is_bad_request(client: TestClient) -> None:
    response = client.post("/orders", json={"customer_name": "Alice", "items": "latte"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_REQUEST"


def test_modify_order_and_nothing_to_modify(client: TestClient) -> None:
    order = _place(client)

    modified = client.put(f"/orders/{order['order_id']}", json={"customer_name": "Bob"})
    assert modified.status_code == 200
    assert modified.json()["customer_name"] == "Bob"
    assert modified.json()["created_at"] == order["created_at"]

    unchanged = client.put(f"/orders/{order['order_id']}", json={"customer_name": "Bob"})
    assert unchanged.status_code == 204


def test_modify_order_rejects_created_at_change(client: TestClient) -> None:
    order = _place(client)

    response = client.put(
        f"/orders/{order['order_id']}",
        json={"created_at": "2000-01-01 00:00:00"},
    )

    assert response.status_code == 400


def test_inventory_crud(client: TestClient) -> None:
    created = client.post(
        "/inventory",
        json={"ingredient_id": "sugar", "name": "Sugar", "quantity": 100, "unit": "g"},
    )
    assert created.status_code == 201

    duplicate = client.post(
        "/inventory",
        json={"ingredient_id": "sugar", "name": "Sugar", "quantity": 100, "unit": "g"},
    )
    assert duplicate.status_code == 409

    mismatched = client.put(
        "/inventory/sugar",
        json={"ingredient_id": "salt", "name": "Salt", "quantity": 1, "unit": "g"},
    )
    assert mismatched.status_code == 400

    updated = client.put(
        "/inventory/sugar",
        json={"ingredient_id": "sugar", "name": "Sugar", "quantity": 50, "unit": "g"},
    )
    assert updated.json()["quantity"] == 50

    assert client.delete("/inventory/sugar").status_code == 204
    assert client.get("/inventory/sugar").status_code == 404


def test_menu_item_with_unknown_ingredient_is_rejected(client: TestClient) -> None:
    mocha = dict(
        LATTE,
        product_id="mocha",
        ingredients=[{"ingredient_id": "cocoa", "quantity": 10}],
    )

    response = client.post("/menu", json=mocha)

    assert response.status_code == 400
    assert client.get("/menu/mocha").status_code == 404


def test_reports_without_orders_are_not_found(client: TestClient) -> None:
    response = client.get("/reports/total-sales")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NO_ORDERS"


def test_reports_reject_unknown_status(client: TestClient, data_dir: Path) -> None:
    _place(client)
    stored = json.loads((data_dir / "orders.json").read_text(encoding="utf-8"))
    stored[0]["status"] = "unknown"
    (data_dir / "orders.json").write_text(json.dumps(stored), encoding="utf-8")

    response = client.get("/reports/total-sales")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "UNKNOWN_ORDER_STATUS"


def test_corrupt_collection_is_reported(client: TestClient, data_dir: Path) -> None:
    (data_dir / "menu_items.json").write_text("{broken", encoding="utf-8")

    response = client.get("/menu")

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "STORE_UNAVAILABLE"


def test_request_id_is_echoed(client: TestClient) -> None:
    response = client.get("/inventory", headers={"X-Request-Id": "req-123"})

    assert response.headers["X-Request-Id"] == "req-123"


@pytest.mark.parametrize("token", ["NaN", "Infinity"])
def test_non_finite_numbers_are_rejected(client: TestClient, data_dir: Path, token: str) -> None:
    inventory_body = (
        '{"ingredient_id": "sugar", "name": "Sugar", "quantity": %s, "unit": "g"}' % token
    )
    menu_body = (
        '{"product_id": "espresso", "name": "Espresso", "description": "Strong",'
        ' "price": %s, "ingredients": [{"ingredient_id": "espresso_shot", "quantity": 1}]}'
        % token
    )
    headers = {"Content-Type": "application/json"}

    inventory_response = client.post("/inventory", content=inventory_body, headers=headers)
    menu_response = client.post("/menu", content=menu_body, headers=headers)

    assert inventory_response.status_code == 400
    assert menu_response.status_code == 400
    assert client.get("/inventory/sugar").status_code == 404
    assert client.get("/menu/espresso").status_code == 404
    assert token not in (data_dir / "inventory.json").read_text(encoding="utf-8")
