def _payload(**overrides):
    data = {
        "name": "Grace Hopper",
        "email": "grace@example.com",
        "hourly_rate": 25.5,
        "gender": "female",
    }
    data.update(overrides)
    return data


def test_create_and_get_customer(client, store):
    response = client.post("/api/v1/customers", json=_payload(company="Navy"))

    assert response.status_code == 201
    customer_id = response.json()["Id"]

    fetched = client.get(f"/api/v1/customers/{customer_id}").json()
    assert fetched["hourlyRate"] == 25.5
    assert fetched["company"] == "Navy"
    assert fetched["phone"] is None


def test_customer_validation(client):
    assert client.post("/api/v1/customers", json=_payload(hourly_rate=-5)).status_code == 422
    assert client.post("/api/v1/customers", json=_payload(gender="other")).status_code == 422
    assert client.post("/api/v1/customers", json=_payload(name="")).status_code == 422


def test_list_customers_sorted_by_name(client, store):
    store.add("customers", {"name": "Zed", "hourlyRate": 1})
    store.add("customers", {"name": "Amy", "hourlyRate": 2})

    names = [c["name"] for c in client.get("/api/v1/customers").json()]

    assert names == ["Amy", "Zed"]


def test_update_customer_rate_changes_next_quote(client, store):
    customer = store.add("customers", {"name": "Linus", "email": "l@example.com", "hourlyRate": 10})

    response = client.put(f"/api/v1/customers/{customer['Id']}", json=_payload(name="Linus", hourly_rate=20))
    assert response.status_code == 200

    quote = client.post("/api/v1/bookings/quote", json={
        "customer_id": str(customer["Id"]),
        "booking_date": "2024-06-01",
        "start_time": "09:00",
        "end_time": "10:00",
    })
    assert quote.json()["cost"] == 20.0


def test_delete_missing_customer(client):
    assert client.delete("/api/v1/customers/42").status_code == 404
