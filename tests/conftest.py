import os
import uuid
from datetime import date
from decimal import Decimal

# Keep the module-level engine off PostgreSQL while the tests import the app
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from shared.core.config import Settings
from shared.core.database import Base, build_session_factory
from asset_service.app import models  # noqa: F401
from asset_service.app.core.services import build_services


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def settings():
    return Settings(DATABASE_URL="sqlite://", MAX_UPLOAD_SIZE_MB=1)


@pytest.fixture
def services(session_factory, settings):
    return build_services(session_factory, settings)


@pytest.fixture
def replacing_services(session_factory, settings):
    """Services that let a new passed commissioning replace the active one."""
    return build_services(
        session_factory, settings.model_copy(update={"COMMISSIONING_REPLACE_PASSED": True}))


def product_data(**overrides):
    data = {
        "product_type_ids": [uuid.uuid4()],
        "vendor_ids": [uuid.uuid4()],
        "make_ids": [uuid.uuid4()],
        "product_model": "HVAC-2000",
        "serial_number": "SN-0001",
        "acquired_date": date(2024, 1, 15),
        "acquired_price": Decimal("1500.00"),
        "current_price": Decimal("1200.00"),
        "condition": "good",
        "location_id": uuid.uuid4(),
        "warranty_date": date(2027, 1, 15),
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_product(services):
    def _make(**overrides):
        return services.products.create(product_data(**overrides))
    return _make


@pytest.fixture
def make_window(services):
    def _make(**overrides):
        data = {
            "name": "Monthly check",
            "days_before": 3,
            "days_after": 5,
            "recurrency": "monthly",
            "recurrency_interval": 1,
        }
        data.update(overrides)
        return services.maintenance_windows.create(data)
    return _make


@pytest.fixture
def commissioned_product(services, make_product, make_window):
    window = make_window()
    product = make_product(maintenance_window_ids=[window.id])
    services.product_commissioning.create({"product_id": product.id, "outcome": "pass"})
    return services.products.get_by_id(product.id)
