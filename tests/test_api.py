"""HTTP contract tests for the ledger API."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from frameledger.config import Settings


def _create_shop(client: TestClient, name: str = "Optique Centre") -> dict:
    response = client.post("/api/shops", json={"name": name, "address": "1 Grand-Rue"})
    assert response.status_code == 201
    return response.json()


def _create_frame(client: TestClient, product_id: str = "F001", price: float = 49.99) -> dict:
    response = client.post(
        "/api/frames",
        json={"product_id": product_id, "name": "Aviator", "description": "Metal", "price": price},
    )
    assert response.status_code == 201
    return response.json()


def _lens_id(client: TestClient, name: str) -> int:
    lens_types = client.get("/api/lens-types").json()
    return next(lt["id"] for lt in lens_types if lt["name"] == name)


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok", "database": "ok"}
    assert client.head("/health").status_code == 200
    assert client.get("/").json()["ok"] is True


def test_lens_types_are_seeded(client: TestClient) -> None:
    response = client.get("/api/lens-types")

    assert response.status_code == 200
    assert {lt["name"]: lt["price_multiplier"] for lt in response.json()} == {
        "Regular": 1.0,
        "Premium": 1.5,
        "Pro": 2.0,
    }


def test_shops_crud(client: TestClient) -> None:
    created = _create_shop(client)

    assert created["name"] == "Optique Centre"
    assert created["address"] == "1 Grand-Rue"
    assert "created_at" in created
    assert client.get(f"/api/shops/{created['id']}").json()["id"] == created["id"]
    assert [s["id"] for s in client.get("/api/shops").json()] == [created["id"]]


def test_unknown_shop_returns_error_payload(client: TestClient) -> None:
    response = client.get("/api/shops/999")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_frames_create_and_duplicate(client: TestClient) -> None:
    frame = _create_frame(client)

    assert frame["price"] == pytest.approx(49.99)
    assert client.get("/api/frames").json()[0]["product_id"] == "F001"

    duplicate = client.post("/api/frames", json={"product_id": "F001", "name": "Copy", "price": 1})
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["code"] == "CONFLICT"


def test_frame_negative_price_is_rejected(client: TestClient) -> None:
    response = client.post("/api/frames", json={"product_id": "F002", "name": "X", "price": -5})

    assert response.status_code == 422


@pytest.mark.parametrize("price", ["1e400", "100000000"])
def test_frame_price_beyond_column_is_rejected(client: TestClient, price: str) -> None:
    response = client.post("/api/frames", json={"product_id": "F003", "name": "X", "price": price})

    assert response.status_code == 422
    assert client.get("/api/frames").json() == []


def test_inventory_increment_and_listing(client: TestClient) -> None:
    shop = _create_shop(client)
    frame = _create_frame(client)

    for qty in (10, 5):
        response = client.post(
            "/api/inventory", json={"shop_id": shop["id"], "frame_id": frame["id"], "quantity": qty}
        )
        assert response.status_code == 200

    assert response.json()["quantity"] == 15
    [line] = client.get(f"/api/inventory/{shop['id']}").json()
    assert line["product_id"] == "F001"
    assert line["quantity"] == 15


def test_inventory_increment_unknown_frame(client: TestClient) -> None:
    shop = _create_shop(client)

    response = client.post("/api/inventory", json={"shop_id": shop["id"], "frame_id": 77, "quantity": 1})

    assert response.status_code == 404


def test_record_sale_and_list(client: TestClient) -> None:
    shop = _create_shop(client)
    frame = _create_frame(client)
    client.post("/api/inventory", json={"shop_id": shop["id"], "frame_id": frame["id"], "quantity": 3})

    response = client.post(
        "/api/sales",
        json={
            "shop_id": shop["id"],
            "frame_id": frame["id"],
            "lens_type_id": _lens_id(client, "Premium"),
        },
    )

    assert response.status_code == 201
    sale = response.json()
    assert sale["quantity"] == 1
    assert sale["total_price"] == pytest.approx(74.99)
    assert sale["billed"] is False

    [listed] = client.get(f"/api/sales/{shop['id']}").json()
    assert listed["frame_name"] == "Aviator"
    assert listed["lens_type"] == "Premium"
    assert client.get(f"/api/inventory/{shop['id']}").json()[0]["quantity"] == 2


def test_record_sale_rejects_zero_quantity(client: TestClient) -> None:
    shop = _create_shop(client)
    frame = _create_frame(client)

    response = client.post(
        "/api/sales",
        json={
            "shop_id": shop["id"],
            "frame_id": frame["id"],
            "lens_type_id": _lens_id(client, "Regular"),
            "quantity": 0,
        },
    )

    assert response.status_code == 422


@pytest.mark.parametrize("field", ["unit_price", "total_price"])
def test_record_sale_rejects_huge_amounts(client: TestClient, field: str) -> None:
    shop = _create_shop(client)
    frame = _create_frame(client)

    response = client.post(
        "/api/sales",
        json={
            "shop_id": shop["id"],
            "frame_id": frame["id"],
            "lens_type_id": _lens_id(client, "Regular"),
            field: "1e400",
        },
    )

    assert response.status_code == 422
    assert client.get(f"/api/sales/{shop['id']}").json() == []


def test_oversell_policy_from_settings(client: TestClient, test_settings: Settings) -> None:
    from frameledger.config import get_settings
    from frameledger.main import app

    app.dependency_overrides[get_settings] = lambda: Settings(
        database_url=test_settings.database_url, allow_negative_stock=False
    )
    shop = _create_shop(client)
    frame = _create_frame(client)

    response = client.post(
        "/api/sales",
        json={
            "shop_id": shop["id"],
            "frame_id": frame["id"],
            "lens_type_id": _lens_id(client, "Regular"),
        },
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_ARGUMENT"
    assert client.get(f"/api/sales/{shop['id']}").json() == []


def test_upload_inventory_multipart(client: TestClient) -> None:
    shop = _create_shop(client)
    csv_bytes = b"product_id,name,price,quantity\nF001,Aviator,49.99,10\n,BadRow,notanumber,5\n"

    response = client.post(
        "/api/upload-inventory",
        data={"shopId": str(shop["id"])},
        files={"csvFile": ("inventory.csv", csv_bytes, "text/csv")},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["processedCount"] == 1
    assert body["message"] == "Processed 1 frames"
    assert [e["row"] for e in body["errors"]] == [3]
    [line] = client.get(f"/api/inventory/{shop['id']}").json()
    assert (line["product_id"], line["quantity"]) == ("F001", 10)


def test_import_raw_csv_missing_columns(client: TestClient) -> None:
    shop = _create_shop(client)

    response = client.post(
        f"/api/inventory/{shop['id']}/import",
        content="product_id,quantity\nF001,3\n",
        headers={"Content-Type": "text/csv"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["details"]["missing_columns"] == ["name", "price"]


def test_import_raw_csv_twice(client: TestClient) -> None:
    shop = _create_shop(client)
    text = "product_id,name,price,quantity\nF001,Aviator,49.99,10\n"

    for _ in range(2):
        response = client.post(
            f"/api/inventory/{shop['id']}/import",
            content=text,
            headers={"Content-Type": "text/csv"},
        )
        assert response.status_code == 200

    assert client.get(f"/api/inventory/{shop['id']}").json()[0]["quantity"] == 20


def test_billing_flow(client: TestClient) -> None:
    shop = _create_shop(client)
    frame = _create_frame(client)
    regular = _lens_id(client, "Regular")
    for _ in range(2):
        client.post(
            "/api/sales",
            json={"shop_id": shop["id"], "frame_id": frame["id"], "lens_type_id": regular},
        )
    now = datetime.now(timezone.utc)

    bill = client.get(f"/api/billing/{shop['id']}").json()
    assert bill["summary"] == {
        "totalAmount": pytest.approx(99.98),
        "itemCount": 2,
        "month": now.month,
        "year": now.year,
    }

    sale_ids = [s["id"] for s in bill["sales"]]
    first = client.post(f"/api/billing/{shop['id']}/mark-billed", json={"salesIds": sale_ids})
    second = client.post(f"/api/billing/{shop['id']}/mark-billed", json={"salesIds": sale_ids})

    assert first.json() == {"updated": 2}
    assert second.json() == {"updated": 0}
    again = client.get(
        f"/api/billing/{shop['id']}", params={"month": now.month, "year": now.year}
    ).json()
    assert all(s["billed"] for s in again["sales"])
    assert again["summary"]["totalAmount"] == pytest.approx(99.98)


def test_mark_billed_empty_ids(client: TestClient) -> None:
    shop = _create_shop(client)

    response = client.post(f"/api/billing/{shop['id']}/mark-billed", json={"salesIds": []})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_ARGUMENT"


def test_billing_rejects_bad_month(client: TestClient) -> None:
    shop = _create_shop(client)

    assert client.get(f"/api/billing/{shop['id']}", params={"month": 13}).status_code == 422


def test_dashboards(client: TestClient) -> None:
    shop = _create_shop(client)
    quiet = _create_shop(client, "Optique Nord")
    frame = _create_frame(client)
    client.post("/api/inventory", json={"shop_id": shop["id"], "frame_id": frame["id"], "quantity": 5})
    client.post(
        "/api/sales",
        json={
            "shop_id": shop["id"],
            "frame_id": frame["id"],
            "lens_type_id": _lens_id(client, "Pro"),
        },
    )

    overview = client.get("/api/dashboard").json()
    assert overview["total_shops"] == 2
    assert overview["total_sales"] == 1
    assert overview["total_revenue"] == pytest.approx(99.98)
    assert overview["unbilled_sales"] == 1
    by_shop = {s["shop_id"]: s for s in overview["shops"]}
    assert by_shop[quiet["id"]]["sales_count"] == 0
    assert by_shop[quiet["id"]]["revenue"] == 0

    detail = client.get(f"/api/dashboard/{shop['id']}").json()
    assert detail["total_sales"] == 1
    assert detail["units_on_hand"] == 4
    assert detail["frames_in_inventory"] == 1
