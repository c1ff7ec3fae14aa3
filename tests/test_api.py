import json
import uuid
from types import SimpleNamespace
from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient

from shared.core.schemas import FileUpload
from shared.core.transaction import run_transaction
from asset_service.app.core.services import get_services
from asset_service.app.main import app


@pytest.fixture
def client(services):
    # no context manager: the lifespan would connect to the configured database
    app.dependency_overrides[get_services] = lambda: services
    yield TestClient(app)
    app.dependency_overrides.pop(get_services, None)


def product_form(**overrides):
    payload = {
        "product_type_ids": [str(uuid.uuid4())],
        "vendor_ids": [str(uuid.uuid4())],
        "make_ids": [str(uuid.uuid4())],
        "product_model": "Chiller X",
        "serial_number": "CH-100",
        "acquired_date": "2024-02-01",
        "acquired_price": "25000.00",
        "current_price": "21000.00",
        "condition": "good",
        "location_id": str(uuid.uuid4()),
        "warranty_date": "2028-02-01",
    }
    payload.update(overrides)
    return {"product": json.dumps(payload)}


def create_product(client, **overrides):
    response = client.post("/api/products/create", data=product_form(**overrides))
    assert response.status_code == 200, response.text
    return response.json()["data"]


def commission(client, product_id, outcome="pass"):
    return client.post(
        "/api/product-commissioning/create",
        data={"commissioning": json.dumps({"product_id": product_id, "outcome": outcome})},
    )


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_product_lifecycle_over_http(client):
    window = client.post("/api/maintenance-windows/create", json={
        "name": "Monthly", "days_before": 2, "days_after": 2, "recurrency": "monthly",
    }).json()["data"]
    product = create_product(client, maintenance_window_ids=[window["id"]])
    assert product["status"] == "awaiting-commissioning"

    response = commission(client, product["id"])
    assert response.status_code == 200
    assert response.json()["status_code"] == "101"
    commissioning = response.json()["data"]

    response = client.post("/api/product-maintenance/create", data={"maintenance": json.dumps({
        "product_id": product["id"], "name": "Inspection", "type": "preventive-maintenance",
    })})
    assert response.status_code == 200

    body = client.get(f"/api/products/{product['id']}").json()["data"]
    assert body["status"] == "in-preventive-maintenance"
    assert body["maintenance_date"] is not None

    response = client.put("/api/product-commissioning/decommission",
                          json={"id": commissioning["id"], "details": "Replaced"})
    assert response.status_code == 200
    assert response.json()["data"]["active"] is False

    body = client.get(f"/api/products/{product['id']}").json()["data"]
    assert body["status"] == "decommissioned"

    history = client.get(f"/api/products/{product['id']}/history").json()["data"]
    assert {entry["title"] for entry in history} == {
        "Product commissioned", "Maintenance recorded", "Product decommissioned"}


def test_duplicate_commissioning_is_a_validation_failure(client):
    product = create_product(client)
    assert commission(client, product["id"]).status_code == 200

    response = commission(client, product["id"])

    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "Failure"
    assert body["status_code"] == "201"
    assert body["message"] == "A commissioning already exists for this product."
    assert body["data"] is None


def test_maintenance_without_approved_commissioning(client):
    product = create_product(client)
    commission(client, product["id"], outcome="fail")

    response = client.post("/api/product-maintenance/create", data={"maintenance": json.dumps({
        "product_id": product["id"], "name": "Repair", "type": "service",
    })})

    assert response.status_code == 400
    assert response.json()["message"] == "The commissioning for this product has not been approved."


def test_unknown_records_are_not_found(client):
    response = client.get(f"/api/products/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json()["status_code"] == "203"

    response = client.delete(f"/api/product-maintenance/{uuid.uuid4()}")
    assert response.status_code == 404

    response = client.get(f"/api/files/{uuid.uuid4()}")
    assert response.status_code == 404


def test_invalid_payloads(client):
    response = client.post("/api/products/create", data={"product": "{not json"})
    assert response.status_code == 400

    response = client.post("/api/products/create", data=product_form(condition="broken"))
    assert response.status_code == 422
    assert response.json()["status_code"] == "200"

    response = client.post("/api/maintenance-windows/create", json={"name": "Bad", "days_before": -1})
    assert response.status_code == 422

    response = client.get("/api/products/all", params={"order_by": "serial_number:sideways"})
    assert response.status_code == 400


def test_upload_and_download_files(client):
    response = client.post(
        "/api/products/create",
        data=product_form(),
        files=[
            ("photo", ("unit.png", b"\x89PNG-data", "image/png")),
            ("attachments", ("manual.pdf", b"%PDF-1.7", "application/pdf")),
        ],
    )
    assert response.status_code == 200, response.text
    product = response.json()["data"]

    response = client.get(f"/api/files/{product['photo']}")
    assert response.status_code == 200
    assert response.content == b"\x89PNG-data"
    assert response.headers["content-type"] == "image/png"

    info = client.get(f"/api/files/{product['attachments'][0]}/info").json()["data"]
    assert info["file_name"] == "manual.pdf"
    assert info["size"] == 8


def test_rejected_photo_type(client):
    response = client.post(
        "/api/products/create",
        data=product_form(),
        files=[("photo", ("unit.exe", b"MZ", "application/octet-stream"))],
    )

    assert response.status_code == 400
    assert client.get("/api/products/all").json()["data"]["total_docs"] == 0


def test_list_pagination_and_soft_delete(client):
    ids = [create_product(client, serial_number=f"CH-{i}")["id"] for i in range(3)]

    response = client.delete(f"/api/products/{ids[0]}")
    assert response.json()["data"] == {"deleted": True}
    assert client.delete(f"/api/products/{ids[0]}").json()["data"] == {"deleted": False}

    page = client.get("/api/products/all", params={
        "page": 1, "limit": 1, "order_by": "serial_number:desc"}).json()["data"]
    assert page["total_docs"] == 2
    assert page["total_pages"] == 2
    assert page["has_next_page"] is True
    assert [doc["serial_number"] for doc in page["docs"]] == ["CH-2"]

    inactive = client.get("/api/products/all", params={"active": False}).json()["data"]
    assert [doc["id"] for doc in inactive["docs"]] == [ids[0]]


def test_empty_required_field_on_update(client):
    product = create_product(client)

    response = client.put("/api/products/update", data={
        "product": json.dumps({"id": product["id"], "product_model": None})})

    assert response.status_code == 400
    assert response.json()["status_code"] == "201"
    assert client.get(f"/api/products/{product['id']}").json()["data"]["product_model"] == "Chiller X"


def test_download_non_ascii_file_name(client, services):
    upload = FileUpload(filename='отчёт "final".pdf', content_type="application/pdf", data=b"%PDF")
    reference = run_transaction(
        None, lambda db: services.file_storage.upload(upload, db), services.session_factory)

    response = client.get(f"/api/files/{reference}")

    assert response.status_code == 200
    assert response.content == b"%PDF"
    disposition = response.headers["content-disposition"]
    assert 'filename=" final.pdf"' in disposition
    assert "filename*=UTF-8''" + quote('отчёт "final".pdf', safe="") in disposition


def test_unexpected_errors_are_hidden():
    def boom(*args, **kwargs):
        raise RuntimeError("database exploded")

    broken = SimpleNamespace(products=SimpleNamespace(get=boom))
    app.dependency_overrides[get_services] = lambda: broken
    try:
        response = TestClient(app, raise_server_exceptions=False).get("/api/products/all")
    finally:
        app.dependency_overrides.pop(get_services, None)

    assert response.status_code == 500
    assert response.json()["message"] == "An internal server error occurred"
    assert "exploded" not in response.text
