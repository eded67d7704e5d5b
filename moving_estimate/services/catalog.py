"""Loads catalog rows from the database into a ``CatalogSnapshot``"""
import logging
from sqlalchemy import or_, and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from moving_estimate.core.metrics import track_db_operation
from moving_estimate.models.catalog import PrefectureDistance, PackageContent, TruckCapacity, OptionalService
from moving_estimate.schemas.estimate import QuoteRequest
from moving_estimate.services.lookups import CatalogSnapshot
from moving_estimate.services.trucks import TruckClass

logger = logging.getLogger(__name__)


@track_db_operation("select", "prefecture_distances")
async def load_distances(db: AsyncSession, origin_id: int, destination_id: int) -> dict:
    res = await db.execute(
        select(PrefectureDistance).where(
            or_(
                and_(PrefectureDistance.prefecture_id_from == origin_id,
                     PrefectureDistance.prefecture_id_to == destination_id),
                and_(PrefectureDistance.prefecture_id_from == destination_id,
                     PrefectureDistance.prefecture_id_to == origin_id),
            )
        )
    )
    return {
        (row.prefecture_id_from, row.prefecture_id_to): row.distance
        for row in res.scalars().all()
    }


@track_db_operation("select", "package_contents")
async def load_box_factors(db: AsyncSession) -> dict:
    res = await db.execute(select(PackageContent))
    return {row.package_type: row.box for row in res.scalars().all()}


@track_db_operation("select", "truck_capacities")
async def load_truck_classes(db: AsyncSession) -> tuple:
    res = await db.execute(select(TruckCapacity).order_by(TruckCapacity.max_box))
    return tuple(TruckClass(max_box=row.max_box, price=row.price) for row in res.scalars().all())


@track_db_operation("select", "optional_services")
async def load_option_prices(db: AsyncSession) -> dict:
    res = await db.execute(select(OptionalService))
    return {row.service_type: row.price for row in res.scalars().all()}


async def load_catalog(db: AsyncSession, req: QuoteRequest) -> CatalogSnapshot:
    snapshot = CatalogSnapshot(
        distances=await load_distances(db, req.origin_prefecture_id, req.destination_prefecture_id),
        box_factors=await load_box_factors(db),
        truck_classes=await load_truck_classes(db),
        option_prices=await load_option_prices(db),
    )
    logger.debug(
        f"Loaded catalog for {req.origin_prefecture_id}->{req.destination_prefecture_id}: "
        f"{len(snapshot.distances)} distance rows, {len(snapshot.truck_classes)} truck classes"
    )
    return snapshot


@track_db_operation("select", "package_contents")
async def load_package_ids(db: AsyncSession) -> dict:
    res = await db.execute(select(PackageContent.package_type, PackageContent.id))
    return {package_type: package_id for package_type, package_id in res.all()}


@track_db_operation("select", "optional_services")
async def load_option_service_ids(db: AsyncSession) -> dict:
    res = await db.execute(select(OptionalService.service_type, OptionalService.id))
    return {service_type: service_id for service_type, service_id in res.all()}
