import pytest
from moving_estimate.core.enums import PackageType, OptionalServiceType
from moving_estimate.core.exceptions import LookupNotFound, ConfigurationError
from moving_estimate.models.catalog import TruckCapacity, PrefectureDistance
from moving_estimate.services.catalog import load_catalog, load_package_ids, load_option_service_ids
from moving_estimate.services.lookups import CatalogSnapshot
from moving_estimate.services.trucks import TruckClass


class TestCatalogSnapshot:

    def test_distance_either_direction(self, catalog):
        assert catalog.lookup_distance(13, 27) == 250.0
        assert catalog.lookup_distance(27, 13) == 250.0

    def test_unknown_distance(self, catalog):
        with pytest.raises(LookupNotFound):
            catalog.lookup_distance(27, 27)

    def test_truck_classes_sorted_by_capacity(self, catalog):
        small, large = catalog.lookup_truck_classes()

        assert small == TruckClass(50, 20000)
        assert large == TruckClass(200, 50000)

    def test_empty_truck_catalog(self):
        with pytest.raises(ConfigurationError):
            CatalogSnapshot().lookup_truck_classes()

    def test_unknown_box_factor(self):
        with pytest.raises(LookupNotFound):
            CatalogSnapshot().lookup_box_factor(PackageType.BED)

    def test_option_price(self, catalog):
        assert catalog.lookup_option_price(OptionalServiceType.WASHING_MACHINE) == 3000


class TestLoadCatalog:

    @pytest.mark.asyncio
    async def test_loads_rows_for_request(self, seeded_db, quote_request_factory):
        snapshot = await load_catalog(seeded_db, quote_request_factory())

        assert snapshot.distances == {(13, 27): 250.0}
        assert snapshot.box_factors == {
            PackageType.BOX: 1,
            PackageType.BED: 15,
            PackageType.BICYCLE: 5,
            PackageType.WASHING_MACHINE: 10,
        }
        assert snapshot.truck_classes == (TruckClass(50, 20000), TruckClass(200, 50000))
        assert snapshot.option_prices == {OptionalServiceType.WASHING_MACHINE: 3000}

    @pytest.mark.asyncio
    async def test_reverse_pair_found(self, seeded_db, quote_request_factory):
        snapshot = await load_catalog(seeded_db, quote_request_factory(origin=27, destination=13))

        assert snapshot.lookup_distance(27, 13) == 250.0

    @pytest.mark.asyncio
    async def test_only_requested_pair_loaded(self, seeded_db, quote_request_factory):
        seeded_db.add(PrefectureDistance(prefecture_id_from=13, prefecture_id_to=13, distance=0.0))
        await seeded_db.commit()

        snapshot = await load_catalog(seeded_db, quote_request_factory())

        assert (13, 13) not in snapshot.distances

    @pytest.mark.asyncio
    async def test_third_truck_class_is_configuration_error(self, seeded_db, quote_request_factory):
        seeded_db.add(TruckCapacity(max_box=400, price=90000))
        await seeded_db.commit()

        snapshot = await load_catalog(seeded_db, quote_request_factory())

        assert len(snapshot.truck_classes) == 3
        with pytest.raises(ConfigurationError):
            snapshot.lookup_truck_classes()

    @pytest.mark.asyncio
    async def test_row_ids(self, seeded_db):
        package_ids = await load_package_ids(seeded_db)
        service_ids = await load_option_service_ids(seeded_db)

        assert set(package_ids) == set(PackageType)
        assert set(service_ids) == {OptionalServiceType.WASHING_MACHINE}
