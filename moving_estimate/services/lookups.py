"""Read-only catalog lookups consumed by the quote engine.

The engine never touches the database. It receives an object satisfying
``CatalogLookups``; in production that is a ``CatalogSnapshot`` filled by
``moving_estimate.services.catalog.load_catalog``.
"""
from dataclasses import dataclass, field
from typing import Dict, Protocol, Sequence, Tuple

from moving_estimate.core.enums import PackageType, OptionalServiceType
from moving_estimate.core.exceptions import LookupNotFound, ConfigurationError
from moving_estimate.services.trucks import TruckClass

TRUCK_CLASS_COUNT = 2


class CatalogLookups(Protocol):

    def lookup_distance(self, origin_id: int, destination_id: int) -> float:
        ...

    def lookup_box_factor(self, package_type: PackageType) -> int:
        ...

    def lookup_truck_classes(self) -> Sequence[TruckClass]:
        ...

    def lookup_option_price(self, option_type: OptionalServiceType) -> int:
        ...


@dataclass(frozen=True)
class CatalogSnapshot:
    """In-memory copy of the catalog rows needed to price one request."""
    distances: Dict[Tuple[int, int], float] = field(default_factory=dict)
    box_factors: Dict[PackageType, int] = field(default_factory=dict)
    truck_classes: Tuple[TruckClass, ...] = ()
    option_prices: Dict[OptionalServiceType, int] = field(default_factory=dict)

    def lookup_distance(self, origin_id: int, destination_id: int) -> float:
        # Distances are symmetric; a pair may be stored in either direction.
        for key in ((origin_id, destination_id), (destination_id, origin_id)):
            if key in self.distances:
                return self.distances[key]
        raise LookupNotFound(
            f"No distance record between prefecture {origin_id} and {destination_id}",
            context={"origin_id": origin_id, "destination_id": destination_id},
        )

    def lookup_box_factor(self, package_type: PackageType) -> int:
        try:
            return self.box_factors[package_type]
        except KeyError:
            raise LookupNotFound(
                f"Unknown package type: {package_type}",
                context={"package_type": str(package_type)},
            ) from None

    def lookup_truck_classes(self) -> Sequence[TruckClass]:
        if len(self.truck_classes) != TRUCK_CLASS_COUNT:
            raise ConfigurationError(
                f"Expected exactly {TRUCK_CLASS_COUNT} truck classes, found {len(self.truck_classes)}",
                context={"truck_classes": len(self.truck_classes)},
            )
        return tuple(sorted(self.truck_classes, key=lambda t: t.max_box))

    def lookup_option_price(self, option_type: OptionalServiceType) -> int:
        try:
            return self.option_prices[option_type]
        except KeyError:
            raise LookupNotFound(
                f"Unknown optional service: {option_type}",
                context={"option_type": str(option_type)},
            ) from None
