"""Tests for the HTTP API"""

from conftest import CUSTOMER_ID, PRODUCT_A, PRODUCT_B, UNKNOWN_CUSTOMER_ID, UNKNOWN_PRODUCT


def _create(client, *items, customer_id=CUSTOMER_ID):
    return client.post("/orders", json={
        "customer_id": customer_id,
        "items": [{"product_id": product_id, "quantity": quantity} for product_id, quantity in items],
    })


def test_create_order(client, inventory, publisher):
    response = _create(client, (PRODUCT_A, 2), (PRODUCT_B, 1))

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Order created successfully"
    order = body["data"]
    assert order["customer_id"] == CUSTOMER_ID
    assert order["status"] == "processing"
    assert order["total_price"] == 22.5
    assert order["shipping_info"] is None
    assert [(i["product_id"], i["quantity"]) for i in order["items"]] == [(PRODUCT_A, 2), (PRODUCT_B, 1)]
    assert inventory.stock[PRODUCT_A] == 3
    assert [e.event_type for e in publisher.published] == ["order.created"]


def test_create_order_unknown_customer(client):
    response = _create(client, (PRODUCT_A, 1), customer_id=UNKNOWN_CUSTOMER_ID)

    assert response.status_code == 400
    body = response.json()
    assert body["status_code"] == 400
    assert body["path"] == "/orders"
    assert body["method"] == "POST"
    assert body["message"] == f"Customer with ID {UNKNOWN_CUSTOMER_ID} not found"
    assert "timestamp" in body


def test_create_order_unknown_product(client):
    response = _create(client, (UNKNOWN_PRODUCT, 1))
    assert response.status_code == 400
    assert response.json()["message"] == f"Product with ID {UNKNOWN_PRODUCT} not found"


def test_create_order_insufficient_stock(client, inventory):
    response = _create(client, (PRODUCT_A, 6))

    assert response.status_code == 400
    assert response.json()["message"] == (
        f"Insufficient inventory for product {PRODUCT_A}. Requested: 6, Available: 5"
    )
    assert inventory.stock[PRODUCT_A] == 5


def test_create_order_rejects_invalid_body(client):
    assert client.post("/orders", json={"customer_id": CUSTOMER_ID, "items": []}).status_code == 422
    assert _create(client, (PRODUCT_A, 0)).status_code == 422
    assert _create(client, (PRODUCT_A, 1), customer_id="not-a-uuid").status_code == 422


def test_get_order(client):
    order_id = _create(client, (PRODUCT_A, 1)).json()["data"]["id"]

    response = client.get(f"/orders/{order_id}")

    assert response.status_code == 200
    assert response.json()["data"]["id"] == order_id


def test_get_unknown_order(client):
    response = client.get("/orders/missing")

    assert response.status_code == 404
    body = response.json()
    assert body["message"] == "Order with ID missing not found"
    assert body["path"] == "/orders/missing"
    assert body["method"] == "GET"


def test_list_orders_with_filters(client):
    other_customer = "323e4567-e89b-12d3-a456-426614174111"
    first = _create(client, (PRODUCT_A, 1)).json()["data"]["id"]
    _create(client, (PRODUCT_B, 1), customer_id=other_customer)
    client.put(f"/orders/{first}/status", json={"status": "canceled"})

    assert len(client.get("/orders").json()["data"]) == 2

    mine = client.get("/orders", params={"customer_id": CUSTOMER_ID}).json()["data"]
    assert [o["id"] for o in mine] == [first]

    canceled = client.get("/orders", params={"status": "canceled"}).json()["data"]
    assert [o["id"] for o in canceled] == [first]

    assert client.get("/orders", params={"status": "shipped"}).json()["data"] == []
    assert client.get("/orders", params={"status": "lost"}).status_code == 422


def test_update_order_notes(client, publisher):
    order_id = _create(client, (PRODUCT_A, 1)).json()["data"]["id"]

    response = client.put(f"/orders/{order_id}", json={"notes": "leave at the door"})

    assert response.status_code == 200
    assert response.json()["data"]["notes"] == "leave at the door"
    assert publisher.published[-1].event_type == "order.updated"


def test_update_unknown_order(client):
    assert client.put("/orders/missing", json={"notes": "x"}).status_code == 404


def test_update_shipping(client, publisher):
    order_id = _create(client, (PRODUCT_A, 1)).json()["data"]["id"]

    response = client.put(f"/orders/{order_id}/shipping", json={
        "tracking_number": "1Z999AA10123456784",
        "tracking_company": "UPS",
        "estimated_delivery": "2024-05-01",
    })

    assert response.status_code == 200
    order = response.json()["data"]
    assert order["status"] == "processing"
    assert order["shipping_info"]["tracking_company"] == "UPS"
    assert publisher.published[-1].event_type == "order.shipped"


def test_update_shipping_rejects_unknown_carrier(client):
    order_id = _create(client, (PRODUCT_A, 1)).json()["data"]["id"]
    response = client.put(f"/orders/{order_id}/shipping", json={
        "tracking_number": "X1", "tracking_company": "Pigeon",
    })
    assert response.status_code == 422


def test_status_flow(client, inventory):
    order_id = _create(client, (PRODUCT_A, 2)).json()["data"]["id"]

    shipped = client.put(f"/orders/{order_id}/status", json={"status": "shipped"})
    assert shipped.status_code == 200
    assert shipped.json()["data"]["status"] == "shipped"

    delivered = client.put(f"/orders/{order_id}/status", json={"status": "delivered"})
    assert delivered.json()["data"]["status"] == "delivered"
    assert inventory.stock[PRODUCT_A] == 3


def test_invalid_status_transition(client):
    order_id = _create(client, (PRODUCT_A, 1)).json()["data"]["id"]

    response = client.put(f"/orders/{order_id}/status", json={"status": "delivered"})

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid status transition from processing to delivered"


def test_cancel_releases_inventory(client, inventory, publisher):
    order_id = _create(client, (PRODUCT_A, 2)).json()["data"]["id"]

    response = client.put(f"/orders/{order_id}/status", json={
        "status": "canceled", "status_reason": "customer request",
    })

    assert response.status_code == 200
    assert inventory.stock[PRODUCT_A] == 5
    canceled = publisher.events_of("order.canceled")[0]
    assert canceled.data["status_reason"] == "customer request"
    assert publisher.events_of("inventory.released")[0].data == {"product_id": PRODUCT_A, "quantity": 2}


def test_delete_order(client):
    order_id = _create(client, (PRODUCT_A, 1)).json()["data"]["id"]

    response = client.delete(f"/orders/{order_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"] is None
    assert body["message"] == "Order deleted successfully"
    assert client.get(f"/orders/{order_id}").status_code == 404
    assert client.delete(f"/orders/{order_id}").status_code == 404


def test_health(client):
    _create(client, (PRODUCT_A, 1))

    body = client.get("/health").json()

    assert body["status"] == "healthy"
    assert body["order_store"]["status"] == "healthy"
    assert body["order_store"]["orders"] == 1
    assert set(body["collaborators"]) == {"customer_service", "inventory_service", "message_broker"}


def test_root(client):
    body = client.get("/").json()
    assert body["service"] == "order-management-service"
    assert body["docs"] == "/docs"


def test_request_id_is_echoed(client):
    response = client.get("/orders", headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"
    assert client.get("/orders").headers["X-Request-ID"]
