import uuid

import pytest

from shared.core.exceptions import NotFoundException, ValidationException
from shared.core.schemas import FileUpload
from shared.core.transaction import run_transaction
from asset_service.app.enum.product_enum import ProductStatus
from asset_service.app.schemas.products.product_commissioning_schemas import (
    ProductCommissioningCreate,
    ProductCommissioningUpdate,
    ProductDecommissionRequest,
)


def active_commissionings(services, product_id):
    return services.product_commissioning.get({"product_id": product_id, "active": True})


def test_passed_commissioning_activates_product(services, make_product):
    product = make_product()
    assert product.status == ProductStatus.awaiting_commissioning.value

    commissioning = services.product_commissioning.create(
        ProductCommissioningCreate(product_id=product.id, outcome="pass", details="All checks green"))

    assert commissioning.active is True
    assert services.products.get_by_id(product.id).status == ProductStatus.active.value
    assert len(active_commissionings(services, product.id)) == 1


def test_failed_commissioning_keeps_product_awaiting(services, make_product):
    product = make_product()

    services.product_commissioning.create({"product_id": product.id, "outcome": "fail"})

    assert services.products.get_by_id(product.id).status == ProductStatus.awaiting_commissioning.value


def test_recommissioning_after_failure_replaces_active_record(services, make_product):
    product = make_product()
    failed = services.product_commissioning.create({"product_id": product.id, "outcome": "fail"})

    passed = services.product_commissioning.create({"product_id": product.id, "outcome": "pass"})

    assert services.product_commissioning.get_by_id(failed.id).active is False
    assert [c.id for c in active_commissionings(services, product.id)] == [passed.id]
    assert services.products.get_by_id(product.id).status == ProductStatus.active.value


def test_second_passed_commissioning_is_rejected(services, make_product):
    product = make_product()
    first = services.product_commissioning.create({"product_id": product.id, "outcome": "pass"})

    with pytest.raises(ValidationException, match="already exists"):
        services.product_commissioning.create({"product_id": product.id, "outcome": "pass"})

    # nothing from the rejected attempt was persisted
    assert [c.id for c in active_commissionings(services, product.id)] == [first.id]
    assert services.product_commissioning.get({"product_id": product.id}, count=True) == 1


def test_second_passed_commissioning_replaces_when_enabled(replacing_services, make_product):
    services = replacing_services
    product = make_product()
    first = services.product_commissioning.create({"product_id": product.id, "outcome": "pass"})

    second = services.product_commissioning.create({"product_id": product.id, "outcome": "pass"})

    assert services.product_commissioning.get_by_id(first.id).active is False
    assert [c.id for c in active_commissionings(services, product.id)] == [second.id]
    assert services.products.get_by_id(product.id).status == ProductStatus.active.value


def test_commissioning_unknown_product(services):
    with pytest.raises(NotFoundException):
        services.product_commissioning.create({"product_id": uuid.uuid4(), "outcome": "pass"})


def test_commissioning_uploads_attachments(services, make_product):
    product = make_product()
    report = FileUpload(filename="report.pdf", content_type="application/pdf", data=b"%PDF-1.4")

    commissioning = services.product_commissioning.create({
        "product_id": product.id,
        "outcome": "pass",
        "attachments": ["existing-reference", report],
    })

    assert commissioning.attachments[0] == "existing-reference"
    stored = run_transaction(
        None,
        lambda db: services.file_storage.download(commissioning.attachments[1], db),
        services.session_factory,
    )
    assert stored.file_name == "report.pdf"
    assert stored.file_data == b"%PDF-1.4"


def test_rejected_attachment_aborts_commissioning(services, make_product):
    product = make_product()
    script = FileUpload(filename="run.sh", content_type="application/x-sh", data=b"#!/bin/sh")

    with pytest.raises(ValidationException, match="not allowed"):
        services.product_commissioning.create(
            {"product_id": product.id, "outcome": "pass", "attachments": [script]})

    assert services.product_commissioning.get({"product_id": product.id}, count=True) == 0
    assert services.products.get_by_id(product.id).status == ProductStatus.awaiting_commissioning.value


def test_update_rejects_second_active_commissioning(services, make_product):
    product = make_product()
    old = services.product_commissioning.create({"product_id": product.id, "outcome": "fail"})
    services.product_commissioning.create({"product_id": product.id, "outcome": "pass"})

    with pytest.raises(ValidationException, match="Another active commissioning"):
        services.product_commissioning.update({"id": old.id, "active": True})


def test_update_recomputes_status(services, make_product):
    product = make_product()
    commissioning = services.product_commissioning.create({"product_id": product.id, "outcome": "pass"})

    updated = services.product_commissioning.update({"id": commissioning.id, "outcome": "fail"})

    assert updated.outcome == "fail"
    assert services.products.get_by_id(product.id).status == ProductStatus.awaiting_commissioning.value


def test_delete_recomputes_status(services, make_product):
    product = make_product()
    commissioning = services.product_commissioning.create({"product_id": product.id, "outcome": "pass"})

    assert services.product_commissioning.delete(commissioning.id) is True
    assert services.product_commissioning.delete(commissioning.id) is False
    assert services.products.get_by_id(product.id).status == ProductStatus.awaiting_commissioning.value


def test_decommission_overrides_status(services, commissioned_product):
    services.product_maintenance.create(
        {"product_id": commissioned_product.id, "name": "Compressor", "type": "service"})
    commissioning = active_commissionings(services, commissioned_product.id)[0]

    result = services.product_commissioning.update_decommission(
        ProductDecommissionRequest(id=commissioning.id, details="End of life"))

    assert result.active is False
    assert result.details == "End of life"
    assert services.products.get_by_id(commissioned_product.id).status == ProductStatus.decommissioned.value


def test_commissioning_events_are_recorded(services, make_product):
    product = make_product()
    commissioning = services.product_commissioning.create({"product_id": product.id, "outcome": "pass"})
    services.product_commissioning.update_decommission({"id": commissioning.id})

    history = services.activity_history.get_for("product", product.id)

    assert sorted(entry.title for entry in history) == ["Product commissioned", "Product decommissioned"]
    commissioned = next(entry for entry in history if entry.title == "Product commissioned")
    assert commissioned.extra == {"commissioning_id": str(commissioning.id), "outcome": "pass"}


def test_update_rejects_empty_outcome(services, make_product):
    product = make_product()
    commissioning = services.product_commissioning.create({"product_id": product.id, "outcome": "pass"})

    with pytest.raises(ValidationException, match="outcome"):
        services.product_commissioning.update(
            ProductCommissioningUpdate.model_validate({"id": commissioning.id, "outcome": None}))

    assert services.product_commissioning.get_by_id(commissioning.id).outcome == "pass"


def test_database_keeps_one_active_commissioning_per_product(services, make_product, session_factory):
    product = make_product()
    store = services.product_commissioning.store

    def interleaved(session):
        # two writers that both saw no active commissioning
        store.create({"product_id": product.id, "outcome": "pass", "active": True}, session)
        store.create({"product_id": product.id, "outcome": "pass", "active": True}, session)

    with pytest.raises(ValidationException, match="Invalid data"):
        run_transaction(None, interleaved, session_factory)

    assert active_commissionings(services, product.id) == []
    store.create({"product_id": product.id, "outcome": "fail", "active": False})
    store.create({"product_id": product.id, "outcome": "fail", "active": False})
    assert services.product_commissioning.get({"product_id": product.id}, count=True) == 2
