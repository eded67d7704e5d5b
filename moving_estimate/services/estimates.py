"""Quote estimation and order registration against the database"""
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker

from moving_estimate.core.config import settings
from moving_estimate.core.exceptions import EstimateError, LookupNotFound
from moving_estimate.core.metrics import (
    quotes_computed, quote_duration, truck_allocations, cache_hits, cache_misses, orders_registered,
)
from moving_estimate.core.redis import init_redis, close_redis, get_redis
from moving_estimate.core.response_builders import build_order_response
from moving_estimate.db.session import AsyncSessionLocal
from moving_estimate.models.customer import Customer, CustomerOptionService, CustomerPackage
from moving_estimate.schemas.estimate import QuoteRequest, QuoteBreakdown
from moving_estimate.schemas.order import UserOrder, OrderOut
from moving_estimate.services.catalog import load_catalog, load_package_ids, load_option_service_ids
from moving_estimate.services.pricing import QuoteEngine, validate_request
from moving_estimate.utils.hashing import quote_cache_key

logger = logging.getLogger(__name__)


def _cache_client() -> Optional[Redis]:
    try:
        return get_redis()
    except RuntimeError:
        return None


@asynccontextmanager
async def estimate_session(session_factory: sessionmaker = AsyncSessionLocal) -> AsyncIterator[AsyncSession]:
    """Open the quote cache and a database session for ``estimate_price``/``register_order``.

    Quotes are still priced when Redis is unreachable, just without caching.
    """
    try:
        await init_redis()
    except Exception as e:
        logger.error(f"Redis connection failed, quotes will not be cached: {e}")

    try:
        async with session_factory() as db:
            yield db
    finally:
        await close_redis()


async def estimate_price(db: AsyncSession, req: QuoteRequest) -> QuoteBreakdown:
    cache_key = quote_cache_key(req)
    redis = _cache_client()

    if redis is not None:
        try:
            cached = await redis.get(cache_key)
            if cached:
                cache_hits.inc()
                return QuoteBreakdown.model_validate_json(cached)
            cache_misses.inc()
        except Exception as e:
            logger.warning(f"Cache retrieval failed: {e}")

    start_time = time.time()
    try:
        catalog = await load_catalog(db, req)
        result = QuoteEngine(catalog).breakdown(req)
    except EstimateError as e:
        quotes_computed.labels(outcome=type(e).__name__).inc()
        logger.warning(f"Quote failed ({type(e).__name__}): {e}")
        raise
    finally:
        quote_duration.observe(time.time() - start_time)
    quotes_computed.labels(outcome="success").inc()
    truck_allocations.labels(case=result.truck_case).inc()

    if redis is not None:
        try:
            await redis.set(cache_key, result.model_dump_json(), ex=settings.PRICE_CACHE_TTL)
        except Exception as e:
            logger.warning(f"Cache write failed: {e}")

    return result


async def register_order(db: AsyncSession, order: UserOrder) -> OrderOut:
    """Insert the customer with its option and package rows in one transaction."""
    validate_request(order.to_quote_request())

    try:
        customer = Customer(
            old_prefecture_id=order.old_prefecture_id,
            new_prefecture_id=order.new_prefecture_id,
            customer_name=order.customer_name,
            tel=order.tel,
            email=order.email,
            old_address=order.old_address,
            new_address=order.new_address,
            moving_month=order.month,
        )
        db.add(customer)
        await db.flush()

        if order.washing_machine_installation:
            service_ids = await load_option_service_ids(db)
            for option in order.to_quote_request().requested_options:
                if option not in service_ids:
                    raise LookupNotFound(f"Unknown optional service: {option}", context={"option_type": str(option)})
                db.add(CustomerOptionService(customer_id=customer.id, service_id=service_ids[option]))

        package_ids = await load_package_ids(db)
        for package_type, quantity in order.package_quantities.items():
            if package_type not in package_ids:
                raise LookupNotFound(
                    f"Unknown package type: {package_type}",
                    context={"package_type": str(package_type)},
                )
            db.add(CustomerPackage(
                customer_id=customer.id,
                package_id=package_ids[package_type],
                package_number=quantity,
            ))

        await db.commit()
    except Exception:
        await db.rollback()
        orders_registered.labels(status="error").inc()
        raise

    await db.refresh(customer)
    orders_registered.labels(status="success").inc()
    logger.info(f"Registered order for customer {customer.id}")

    return build_order_response(customer, order)
