async def create_customer(client, name="Alice"):
    response = await client.post("/api/customers", json={"name": name})
    assert response.status_code == 201
    return response.json()["id"]


async def create_menu_item(client, name="Pad Thai", price=120.0):
    response = await client.post("/api/menu", json={"name": name, "price": price, "category": "Main"})
    assert response.status_code == 201
    return response.json()["id"]


async def add_to_cart(client, customer_id, menu_item_id, quantity=1):
    response = await client.post(
        f"/api/carts/{customer_id}/items",
        json={"menuItemId": menu_item_id, "quantity": quantity}
    )
    assert response.status_code == 201
    return response.json()


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


async def test_menu_lists_active_items(client):
    await create_menu_item(client, "Pad Thai", 120)
    response = await client.post("/api/menu", json={"name": "Old Dish", "price": 50, "active": False})
    assert response.status_code == 201

    response = await client.get("/api/menu")

    assert response.status_code == 200
    assert [item["name"] for item in response.json()] == ["Pad Thai"]


async def test_create_menu_item_negative_price(client):
    response = await client.post("/api/menu", json={"name": "Free Lunch", "price": -1})
    assert response.status_code == 422


async def test_update_menu_item(client):
    menu_item_id = await create_menu_item(client, "Pad Thai", 120)

    response = await client.put(
        f"/api/menu/{menu_item_id}",
        json={"name": "Pad Thai Special", "price": 135.5, "category": "Main", "description": "С креветками"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == menu_item_id
    assert body["name"] == "Pad Thai Special"
    assert body["price"] == 135.5
    assert body["description"] == "С креветками"

    [listed] = (await client.get("/api/menu")).json()
    assert listed["name"] == "Pad Thai Special"


async def test_deactivated_menu_item_hidden_from_menu(client):
    menu_item_id = await create_menu_item(client, "Pad Thai", 120)

    response = await client.put(f"/api/menu/{menu_item_id}", json={"name": "Pad Thai", "price": 120, "active": False})

    assert response.status_code == 200
    assert response.json()["active"] is False
    assert (await client.get("/api/menu")).json() == []


async def test_cart_keeps_price_after_menu_update(client):
    customer_id = await create_customer(client)
    menu_item_id = await create_menu_item(client, "Pad Thai", 120)
    await add_to_cart(client, customer_id, menu_item_id)

    await client.put(f"/api/menu/{menu_item_id}", json={"name": "Pad Thai", "price": 200})

    [item] = (await client.get(f"/api/carts/{customer_id}")).json()
    assert item["itemPrice"] == 120.0


async def test_delete_menu_item(client):
    menu_item_id = await create_menu_item(client, "Pad Thai", 120)
    await create_menu_item(client, "Tom Yum", 150)

    response = await client.delete(f"/api/menu/{menu_item_id}")

    assert response.status_code == 204
    assert [item["name"] for item in (await client.get("/api/menu")).json()] == ["Tom Yum"]

    response = await client.delete(f"/api/menu/{menu_item_id}")
    assert response.status_code == 404


async def test_update_unknown_menu_item(client):
    response = await client.put("/api/menu/999", json={"name": "Ghost", "price": 10})
    assert response.status_code == 404

    response = await client.put("/api/menu/999", json={"name": "Ghost", "price": -10})
    assert response.status_code == 422


async def test_add_to_cart_unknown_menu_item(client):
    customer_id = await create_customer(client)
    response = await client.post(f"/api/carts/{customer_id}/items", json={"menuItemId": 999})
    assert response.status_code == 404


async def test_add_to_cart_unknown_customer(client):
    menu_item_id = await create_menu_item(client)
    response = await client.post("/api/carts/999/items", json={"menuItemId": menu_item_id})
    assert response.status_code == 404


async def test_cart_lists_unordered_items(client):
    customer_id = await create_customer(client)
    menu_item_id = await create_menu_item(client)
    await add_to_cart(client, customer_id, menu_item_id, 2)

    response = await client.get(f"/api/carts/{customer_id}")

    assert response.status_code == 200
    [item] = response.json()
    assert item["itemName"] == "Pad Thai"
    assert item["subtotal"] == 240.0
    assert item["status"] == "Cart"


async def test_place_order_empty_cart_returns_409(client):
    customer_id = await create_customer(client)
    response = await client.post(f"/api/orders/customers/{customer_id}/place")
    assert response.status_code == 409


async def test_place_order_unknown_customer_returns_404(client):
    response = await client.post("/api/orders/customers/12345/place")
    assert response.status_code == 404


async def test_pending_orders_sentinel(client):
    customer_id = await create_customer(client, "Bob")

    response = await client.get(f"/api/orders/customers/{customer_id}/pending-orders")

    assert response.status_code == 200
    body = response.json()
    assert body["customerId"] == customer_id
    assert body["customerName"] == "Bob"
    assert body["items"] == []
    assert body["totalPrice"] == 0
    assert body["status"] == "Pending"
    assert body["orderId"] is None
    assert "createdAt" in body and "updatedAt" in body


async def test_pending_orders_unknown_customer(client):
    response = await client.get("/api/orders/customers/777/pending-orders")
    assert response.status_code == 404


async def test_snapshot_json_shape(client):
    customer_id = await create_customer(client)
    menu_item_id = await create_menu_item(client, "Tom Yum", 150.5)
    await add_to_cart(client, customer_id, menu_item_id, 2)

    response = await client.post(f"/api/orders/customers/{customer_id}/place")

    assert response.status_code == 201
    body = response.json()
    assert set(body) == {
        "orderId", "customerId", "customerName", "items", "totalPrice", "status", "createdAt", "updatedAt"
    }
    [item] = body["items"]
    assert item["itemName"] == "Tom Yum"
    assert item["itemPrice"] == 150.5
    assert item["quantity"] == 2
    assert item["subtotal"] == 301.0
    assert body["totalPrice"] == 301.0
    assert body["status"] == "Pending"


async def test_update_status_request_validation(client):
    customer_id = await create_customer(client)

    response = await client.put(f"/api/orders/customers/{customer_id}/status", json={})
    assert response.status_code == 422

    response = await client.put(f"/api/orders/customers/{customer_id}/status", json={"status": "Done"})
    assert response.status_code == 400


async def test_update_status_unknown_customer(client):
    response = await client.put("/api/orders/customers/999/status", json={"status": "In Progress"})
    assert response.status_code == 404


async def test_list_and_count_reject_unknown_status(client):
    response = await client.get("/api/orders", params={"status": "Cart"})
    assert response.status_code == 400
    response = await client.get("/api/orders/count", params={"status": "Delivered"})
    assert response.status_code == 400


async def test_count_is_bare_integer(client):
    response = await client.get("/api/orders/count", params={"status": "In Progress"})

    assert response.status_code == 200
    assert response.text == "0"
    assert isinstance(response.json(), int)


async def test_order_lifecycle_end_to_end(client):
    customer_id = await create_customer(client, "Alice")
    pad_thai = await create_menu_item(client, "Pad Thai", 120)
    tom_yum = await create_menu_item(client, "Tom Yum", 150)
    await add_to_cart(client, customer_id, pad_thai, 2)
    await add_to_cart(client, customer_id, tom_yum, 1)
    status_url = f"/api/orders/customers/{customer_id}/status"
    pending_url = f"/api/orders/customers/{customer_id}/pending-orders"

    # Клиент оформляет заказ: Cart -> Pending
    response = await client.post(f"/api/orders/customers/{customer_id}/place")
    assert response.status_code == 201
    placed = response.json()
    assert placed["status"] == "Pending"
    assert placed["totalPrice"] == 390.0

    response = await client.get("/api/orders/count", params={"status": "Pending"})
    assert response.json() == 1

    # Сотрудник берет заказ в работу
    response = await client.put(status_url, json={"status": "In Progress"})
    assert response.status_code == 200
    assert response.json()["status"] == "In Progress"

    response = await client.get("/api/orders", params={"status": "In Progress"})
    assert response.status_code == 200
    [listed] = response.json()
    assert listed["customerId"] == customer_id
    assert len(listed["items"]) == 2

    # Возврат в Pending запрещен
    response = await client.put(status_url, json={"status": "Pending"})
    assert response.status_code == 400

    response = await client.get(pending_url)
    assert response.json()["status"] == "In Progress"

    # Завершение заказа
    response = await client.put(status_url, json={"status": "Finish", "orderId": placed["orderId"]})
    assert response.status_code == 200
    assert response.json()["status"] == "Finish"

    response = await client.get(pending_url)
    body = response.json()
    assert body["status"] == "Finish"
    assert body["orderId"] == placed["orderId"]
    assert body["totalPrice"] == 390.0

    # Finish терминальный
    response = await client.put(status_url, json={"status": "Cancelled"})
    assert response.status_code == 400

    response = await client.get("/api/orders/count", params={"status": "Pending"})
    assert response.json() == 0
