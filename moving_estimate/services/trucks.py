"""Truck fleet allocation for a given number of unit boxes.

The allocation is a greedy bin-filling heuristic written as an ordered
decision list: the first case whose guard matches decides the truck counts.
It is not a cost-optimal packing. Existing quotes depend on these exact
counts, including the ``four_large`` remainder rule.
"""
from dataclasses import dataclass
from typing import Callable, Sequence, Tuple

from moving_estimate.core.exceptions import ConfigurationError, InvalidInput

# Number of large trucks at which the remainder is carried by small trucks only.
FOUR_LARGE_TRUCKS = 4


@dataclass(frozen=True)
class TruckClass:
    max_box: int
    price: int


@dataclass(frozen=True)
class TruckFleet:
    small: TruckClass
    large: TruckClass

    @classmethod
    def from_classes(cls, classes: Sequence[TruckClass]) -> "TruckFleet":
        if len(classes) != 2:
            raise ConfigurationError(
                f"Truck catalog must contain exactly 2 classes, got {len(classes)}",
                context={"truck_classes": len(classes)},
            )
        small, large = sorted(classes, key=lambda t: t.max_box)
        if small.max_box <= 0 or large.max_box <= 0:
            raise ConfigurationError(
                "Truck capacities must be positive",
                context={"small_max_box": small.max_box, "large_max_box": large.max_box},
            )
        if small.max_box == large.max_box:
            raise ConfigurationError(
                f"Truck classes must differ in capacity, both hold {small.max_box} boxes",
                context={"max_box": small.max_box},
            )
        if small.price < 0 or large.price < 0:
            raise ConfigurationError(
                "Truck prices must not be negative",
                context={"small_price": small.price, "large_price": large.price},
            )
        return cls(small=small, large=large)


@dataclass(frozen=True)
class TruckAllocation:
    small_count: int
    large_count: int
    price: int
    case: str

    def capacity(self, fleet: TruckFleet) -> int:
        return self.small_count * fleet.small.max_box + self.large_count * fleet.large.max_box


Guard = Callable[[int, TruckFleet], bool]
Allocate = Callable[[int, TruckFleet], Tuple[int, int, str]]


def _ceil_div(numerator: int, denominator: int) -> int:
    count = numerator // denominator
    if numerator % denominator != 0:
        count += 1
    return count


def _split_overflow(box_count: int, fleet: TruckFleet) -> Tuple[int, int, str]:
    large = box_count // fleet.large.max_box
    remainder = box_count % fleet.large.max_box

    case, settle = next(
        (case, settle) for case, guard, settle in REMAINDER_CASES if guard(large, remainder, fleet)
    )
    small, extra_large = settle(remainder, fleet)
    return small, large + extra_large, case


REMAINDER_CASES = (
    ("four_large",
     lambda large, m, fleet: large == FOUR_LARGE_TRUCKS,
     lambda m, fleet: (_ceil_div(m, fleet.small.max_box), 0)),
    ("remainder_small",
     lambda large, m, fleet: 0 < m <= fleet.small.max_box,
     lambda m, fleet: (1, 0)),
    ("remainder_large",
     lambda large, m, fleet: fleet.small.max_box < m <= fleet.large.max_box,
     lambda m, fleet: (0, 1)),
    # m == 0 is all that is left here
    ("exact",
     lambda large, m, fleet: True,
     lambda m, fleet: (0, 0)),
)

ALLOCATION_CASES: Tuple[Tuple[Guard, Allocate], ...] = (
    (lambda n, fleet: n == 0, lambda n, fleet: (0, 0, "empty")),
    (lambda n, fleet: n <= fleet.small.max_box, lambda n, fleet: (1, 0, "single_small")),
    (lambda n, fleet: n <= fleet.large.max_box, lambda n, fleet: (0, 1, "single_large")),
    # n > large.max_box
    (lambda n, fleet: True, _split_overflow),
)


def allocate_trucks(box_count: int, fleet: TruckFleet) -> TruckAllocation:
    """Pick small/large truck counts for ``box_count`` boxes and price them."""
    if box_count < 0:
        raise InvalidInput(f"Box count must not be negative: {box_count}", context={"box_count": box_count})

    allocate = next(allocate for guard, allocate in ALLOCATION_CASES if guard(box_count, fleet))
    small, large, case = allocate(box_count, fleet)
    price = small * fleet.small.price + large * fleet.large.price
    return TruckAllocation(small_count=small, large_count=large, price=price, case=case)
