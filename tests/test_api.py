import pytest


def register(client, username, role, full_name=None):
    response = client.post("/auth/register", json={
        "username": username,
        "email": f"{username}@farmmail.in",
        "password": "secret",
        "full_name": full_name,
        "role": role,
    })
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def farmer_headers(client):
    return register(client, "ramesh", "farmer", full_name="Ramesh Patil")


@pytest.fixture
def customer_headers(client):
    return register(client, "anita", "customer", full_name="Anita Rao")


def create_listing(client, headers, **overrides):
    payload = {"crop_name": "Tomato", "price_per_unit": 50, "quantity": 10, "unit": "kg"}
    payload.update(overrides)
    response = client.post("/listings/", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()


def test_read_root(client):
    response = client.get("/")
    assert response.status_code == 200


def test_login_and_token(client, farmer_headers):
    response = client.post("/auth/login", data={"username": "ramesh", "password": "secret"})
    assert response.status_code == 200
    assert response.json()["user"]["role"] == "farmer"

    response = client.post("/auth/token", data={"username": "ramesh", "password": "wrong"})
    assert response.status_code == 401


def test_duplicate_registration(client, farmer_headers):
    response = client.post("/auth/register", json={
        "username": "ramesh", "email": "other@farmmail.in", "password": "x", "role": "farmer",
    })
    assert response.status_code == 400


def test_requests_without_token_are_rejected(client):
    assert client.get("/cart/").status_code == 401
    assert client.get("/ledger/").status_code == 401


def test_only_farmers_create_listings(client, customer_headers):
    response = client.post(
        "/listings/",
        json={"crop_name": "Tomato", "price_per_unit": 50, "quantity": 10},
        headers=customer_headers,
    )
    assert response.status_code == 403


def test_listing_lifecycle(client, farmer_headers, customer_headers):
    listing = create_listing(client, farmer_headers)
    assert listing["seller_name"] == "Ramesh Patil"
    assert listing["is_available"] is True

    available = client.get("/listings/", headers=customer_headers).json()
    assert [l["id"] for l in available] == [listing["id"]]

    mine = client.get("/listings/mine", headers=farmer_headers).json()
    assert [l["id"] for l in mine] == [listing["id"]]

    other_farmer = register(client, "sunita", "farmer")
    response = client.delete(f"/listings/{listing['id']}", headers=other_farmer)
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"

    response = client.delete(f"/listings/{listing['id']}", headers=farmer_headers)
    assert response.status_code == 200
    response = client.get(f"/listings/{listing['id']}", headers=farmer_headers)
    assert response.status_code == 404
    assert response.json() == {"detail": "Listing not found", "error": "not_found"}


def test_purchase_flow(client, farmer_headers, customer_headers):
    listing = create_listing(client, farmer_headers)

    response = client.post(
        "/purchases/",
        json={"listing_id": listing["id"], "quantity": 4, "payment_method": "upi"},
        headers=customer_headers,
    )
    assert response.status_code == 201
    confirmation = response.json()
    assert confirmation["total_amount"] == 200
    assert confirmation["seller_name"] == "Ramesh Patil"
    assert confirmation["transaction_id"].startswith("TXN")

    listing_after = client.get(f"/listings/{listing['id']}", headers=customer_headers).json()
    assert listing_after["quantity"] == 6

    purchases = client.get("/purchases/", headers=customer_headers).json()
    assert [p["transaction_id"] for p in purchases] == [confirmation["transaction_id"]]

    sales = client.get("/purchases/sales", headers=farmer_headers).json()
    assert sales[0]["buyer_name"] == "Anita Rao"
    assert sales[0]["total_amount"] == 200

    ledger = client.get("/ledger/", headers=farmer_headers).json()
    assert ledger[0]["entry_type"] == "sale"
    assert ledger[0]["items"][0]["item_name"] == "Tomato"


def test_purchase_errors_are_distinguishable(client, farmer_headers, customer_headers):
    listing = create_listing(client, farmer_headers, quantity=2)

    response = client.post(
        "/purchases/",
        json={"listing_id": listing["id"], "quantity": 5, "payment_method": "card"},
        headers=customer_headers,
    )
    assert response.status_code == 409
    assert response.json()["error"] == "insufficient_quantity"

    response = client.post(
        "/purchases/",
        json={"listing_id": 9999, "quantity": 1, "payment_method": "card"},
        headers=customer_headers,
    )
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"

    response = client.post(
        "/purchases/",
        json={"listing_id": listing["id"], "quantity": 1, "payment_method": "cash"},
        headers=customer_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"

    client.post(
        "/purchases/",
        json={"listing_id": listing["id"], "quantity": 2, "payment_method": "card"},
        headers=customer_headers,
    )
    response = client.post(
        "/purchases/",
        json={"listing_id": listing["id"], "quantity": 1, "payment_method": "card"},
        headers=customer_headers,
    )
    assert response.status_code == 409
    assert response.json()["error"] == "listing_unavailable"


@pytest.mark.parametrize("payload", [
    {"quantity": 1.5, "payment_method": "upi"},
    {"quantity": 0, "payment_method": "upi"},
    {"payment_method": "upi"},
    {"quantity": 1},
])
def test_bad_purchase_requests_are_validation_errors(client, farmer_headers, customer_headers, payload):
    listing = create_listing(client, farmer_headers)

    response = client.post(
        "/purchases/", json={"listing_id": listing["id"], **payload}, headers=customer_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"

    listing_after = client.get(f"/listings/{listing['id']}", headers=customer_headers).json()
    assert listing_after["quantity"] == 10


def test_purchase_without_listing_id(client, customer_headers):
    response = client.post(
        "/purchases/", json={"quantity": 1, "payment_method": "upi"}, headers=customer_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_farmers_cannot_buy_listings(client, farmer_headers):
    listing = create_listing(client, farmer_headers)
    response = client.post(
        "/purchases/",
        json={"listing_id": listing["id"], "quantity": 1, "payment_method": "upi"},
        headers=farmer_headers,
    )
    assert response.status_code == 403


def test_cart_and_checkout(client, farmer_headers):
    for crop, price, quantity in (("Wheat", 20, 2), ("Rice", 30, 1)):
        response = client.post("/cart/", json={
            "crop": crop, "company": "Mahadhan Seeds", "price_per_unit": price, "quantity": quantity,
        }, headers=farmer_headers)
        assert response.status_code == 201

    response = client.post("/cart/", json={"crop": "Wheat", "quantity": 1}, headers=farmer_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"

    assert len(client.get("/cart/", headers=farmer_headers).json()) == 2

    response = client.post(
        "/cart/checkout",
        json={"payment_method": "upi", "transaction_id": "TXN1"},
        headers=farmer_headers,
    )
    assert response.status_code == 200
    assert response.json() == {"transaction_id": "TXN1", "items_converted": 2, "total_amount": 70.0}
    assert client.get("/cart/", headers=farmer_headers).json() == []

    response = client.post(
        "/cart/checkout",
        json={"payment_method": "upi", "transaction_id": "TXN1"},
        headers=farmer_headers,
    )
    assert response.status_code == 409
    assert response.json()["error"] == "duplicate_transaction_id"

    ledger = client.get("/ledger/", headers=farmer_headers).json()
    assert ledger[0]["amount"] == 70
    assert len(ledger[0]["items"]) == 2


def test_remove_cart_item(client, customer_headers, farmer_headers):
    item = client.post("/cart/", json={
        "crop": "Wheat", "company": "Mahadhan Seeds", "price_per_unit": 20, "quantity": 1,
    }, headers=customer_headers).json()

    assert client.delete(f"/cart/{item['id']}", headers=farmer_headers).status_code == 404
    assert client.delete(f"/cart/{item['id']}", headers=customer_headers).status_code == 200
    assert client.get("/cart/", headers=customer_headers).json() == []


def test_manual_ledger_entry_and_summary(client, farmer_headers, customer_headers):
    listing = create_listing(client, farmer_headers)
    client.post(
        "/purchases/",
        json={"listing_id": listing["id"], "quantity": 3, "payment_method": "upi"},
        headers=customer_headers,
    )

    response = client.post("/ledger/", json={
        "entry_type": "payment",
        "description": "Tractor rental",
        "amount": 500,
        "payment_method": "cash",
        "items": [{"item_name": "Tractor hours", "quantity": 2, "unit_price": 250}],
        "notes": "paid at the mandi",
    }, headers=farmer_headers)
    assert response.status_code == 201
    entry = response.json()
    assert entry["transaction_id"].startswith("TXN")
    assert entry["party_name"] == "Ramesh Patil"

    response = client.post("/ledger/", json={
        "entry_type": "refund", "description": "x", "amount": 1, "payment_method": "cash",
    }, headers=farmer_headers)
    assert response.status_code == 422

    summary = client.get("/ledger/summary", headers=farmer_headers).json()
    assert summary["total_transactions"] == 2
    assert summary["total_sales"] == 150
    assert summary["sales_count"] == 1
    assert summary["total_purchases"] == 0
    assert summary["net_amount"] == 150
    assert len(summary["recent_transactions"]) == 2

    summary = client.get("/ledger/summary", headers=customer_headers).json()
    assert summary["total_purchases"] == 150
    assert summary["purchase_count"] == 1
    assert summary["net_amount"] == -150
