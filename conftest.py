import pytest
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import os

from moving_estimate.models.base import Base
from moving_estimate.models.catalog import Prefecture, PrefectureDistance, PackageContent, TruckCapacity, OptionalService
from moving_estimate.models.customer import Customer, CustomerOptionService, CustomerPackage  # noqa: F401
from moving_estimate.core.enums import PackageType, OptionalServiceType
from moving_estimate.core import redis as redis_module
from moving_estimate.schemas.estimate import QuoteRequest
from moving_estimate.services.lookups import CatalogSnapshot
from moving_estimate.services.trucks import TruckClass, TruckFleet


TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL",
    "sqlite+aiosqlite:///:memory:"
)

ORIGIN_ID = 13
DESTINATION_ID = 27
DISTANCE_KM = 250.0

SMALL_TRUCK = TruckClass(max_box=50, price=20000)
LARGE_TRUCK = TruckClass(max_box=200, price=50000)

BOX_FACTORS = {
    PackageType.BOX: 1,
    PackageType.BED: 15,
    PackageType.BICYCLE: 5,
    PackageType.WASHING_MACHINE: 10,
}

INSTALLATION_FEE = 3000


@pytest.fixture
def fleet():
    return TruckFleet(small=SMALL_TRUCK, large=LARGE_TRUCK)


@pytest.fixture
def catalog():
    return CatalogSnapshot(
        distances={(ORIGIN_ID, DESTINATION_ID): DISTANCE_KM, (ORIGIN_ID, ORIGIN_ID): 0.0},
        box_factors=dict(BOX_FACTORS),
        truck_classes=(LARGE_TRUCK, SMALL_TRUCK),
        option_prices={OptionalServiceType.WASHING_MACHINE: INSTALLATION_FEE},
    )


@pytest.fixture
def quote_request_factory():
    def _make(box=30, month=6, installation=False, origin=ORIGIN_ID, destination=DESTINATION_ID, **packages):
        quantities = {PackageType.BOX: box}
        quantities.update({PackageType(name): count for name, count in packages.items()})
        return QuoteRequest(
            origin_prefecture_id=origin,
            destination_prefecture_id=destination,
            month=month,
            packages=quantities,
            washing_machine_installation=installation,
        )
    return _make


@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        future=True,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def seeded_db(db_session):
    db_session.add_all([
        Prefecture(id=ORIGIN_ID, name="Tokyo"),
        Prefecture(id=DESTINATION_ID, name="Osaka"),
    ])
    db_session.add(PrefectureDistance(
        prefecture_id_from=ORIGIN_ID,
        prefecture_id_to=DESTINATION_ID,
        distance=DISTANCE_KM,
    ))
    db_session.add_all([
        PackageContent(package_type=package_type, box=box)
        for package_type, box in BOX_FACTORS.items()
    ])
    db_session.add_all([
        TruckCapacity(max_box=LARGE_TRUCK.max_box, price=LARGE_TRUCK.price),
        TruckCapacity(max_box=SMALL_TRUCK.max_box, price=SMALL_TRUCK.price),
    ])
    db_session.add(OptionalService(
        service_type=OptionalServiceType.WASHING_MACHINE,
        name="Washing machine installation",
        price=INSTALLATION_FEE,
    ))
    await db_session.commit()
    return db_session


class FakeRedis:
    def __init__(self):
        self.store = {}
        self.ttl = {}
        self.closed = False

    async def ping(self):
        return True

    async def close(self):
        self.closed = True

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value.encode() if isinstance(value, str) else value
        self.ttl[key] = ex


@pytest.fixture
def fake_redis(monkeypatch):
    client = FakeRedis()
    monkeypatch.setattr(redis_module, "redis", client)
    return client


@pytest.fixture(autouse=True)
def no_redis(monkeypatch):
    monkeypatch.setattr(redis_module, "redis", None)


@pytest.fixture
def valid_order_data():
    return {
        "customer_name": "Taro Yamada",
        "tel": "03-1234-5678",
        "email": "taro@example.com",
        "old_prefecture_id": ORIGIN_ID,
        "old_address": "1-1 Chiyoda, Chiyoda-ku",
        "new_prefecture_id": DESTINATION_ID,
        "new_address": "2-2 Umeda, Kita-ku",
        "month": 3,
        "box": 20,
        "bed": 1,
        "bicycle": 0,
        "washing_machine": 1,
        "washing_machine_installation": True,
    }


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests that use a database session"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to pricing"
    )
    config.addinivalue_line(
        "markers", "trucks: marks tests related to truck allocation"
    )
    config.addinivalue_line(
        "markers", "orders: marks tests related to order registration"
    )
