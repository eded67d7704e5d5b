"""Quote pricing engine.

    total = floor((distance_price + truck_price) * seasonal_coefficient) + option_surcharge

The option surcharge is added after the seasonal multiplier and is never
scaled by it.
"""
import logging
import math

from moving_estimate.core.enums import PackageType
from moving_estimate.core.exceptions import InvalidInput
from moving_estimate.schemas.estimate import QuoteRequest, QuoteBreakdown
from moving_estimate.services.lookups import CatalogLookups
from moving_estimate.services.trucks import TruckFleet, allocate_trucks

logger = logging.getLogger(__name__)

PRICE_PER_DISTANCE = 100  # per whole kilometre

SEASONAL_COEFFICIENTS = {
    3: 1.5,
    4: 1.5,
    9: 1.2,
}
DEFAULT_SEASONAL_COEFFICIENT = 1.0


def distance_price(distance_km: float) -> int:
    return math.floor(distance_km) * PRICE_PER_DISTANCE


def seasonal_coefficient(month: int) -> float:
    return SEASONAL_COEFFICIENTS.get(month, DEFAULT_SEASONAL_COEFFICIENT)


def compose_price(distance_price: int, truck_price: int, coefficient: float, option_surcharge: int) -> int:
    return math.floor((distance_price + truck_price) * coefficient) + option_surcharge


def validate_request(req: QuoteRequest) -> None:
    if not 1 <= req.month <= 12:
        raise InvalidInput(f"Moving month must be between 1 and 12, got {req.month}", context={"month": req.month})

    negative = {str(t): q for t, q in req.packages if q < 0}
    if negative:
        raise InvalidInput(f"Package quantities must not be negative: {negative}", context={"packages": negative})


class QuoteEngine:

    def __init__(self, lookups: CatalogLookups):
        self.lookups = lookups

    def box_count(self, req: QuoteRequest) -> int:
        return sum(
            req.quantity(package_type) * self.lookups.lookup_box_factor(package_type)
            for package_type in PackageType
        )

    def option_surcharge(self, req: QuoteRequest) -> int:
        return sum(self.lookups.lookup_option_price(option) for option in req.requested_options)

    def breakdown(self, req: QuoteRequest) -> QuoteBreakdown:
        validate_request(req)

        distance_km = self.lookups.lookup_distance(req.origin_prefecture_id, req.destination_prefecture_id)
        price_for_distance = distance_price(distance_km)

        boxes = self.box_count(req)
        fleet = TruckFleet.from_classes(self.lookups.lookup_truck_classes())
        allocation = allocate_trucks(boxes, fleet)

        coefficient = seasonal_coefficient(req.month)
        surcharge = self.option_surcharge(req)

        total = compose_price(price_for_distance, allocation.price, coefficient, surcharge)
        logger.debug(
            f"Quote {req.origin_prefecture_id}->{req.destination_prefecture_id}: "
            f"{boxes} boxes, {allocation.small_count} small/{allocation.large_count} large "
            f"({allocation.case}), coefficient {coefficient}, total {total}"
        )

        return QuoteBreakdown(
            distance_km=distance_km,
            distance_price=price_for_distance,
            box_count=boxes,
            small_trucks=allocation.small_count,
            large_trucks=allocation.large_count,
            truck_price=allocation.price,
            truck_case=allocation.case,
            seasonal_coefficient=coefficient,
            option_surcharge=surcharge,
            total_price=total,
        )

    def compute_quote(self, req: QuoteRequest) -> int:
        return self.breakdown(req).total_price
