from pydantic import BaseModel, ConfigDict, field_validator
from typing import List, Tuple
from moving_estimate.core.enums import PackageType, OptionalServiceType


class QuoteRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    origin_prefecture_id: int
    destination_prefecture_id: int
    month: int
    # (package type, quantity) pairs; a mapping is accepted on input
    packages: Tuple[Tuple[PackageType, int], ...] = ()
    washing_machine_installation: bool = False

    @field_validator("packages", mode="before")
    @classmethod
    def freeze_packages(cls, v):
        if isinstance(v, dict):
            v = v.items()
        return tuple(sorted((PackageType(t), q) for t, q in v))

    def quantity(self, package_type: PackageType) -> int:
        return dict(self.packages).get(package_type, 0)

    @property
    def requested_options(self) -> List[OptionalServiceType]:
        if self.washing_machine_installation:
            return [OptionalServiceType.WASHING_MACHINE]
        return []


class QuoteBreakdown(BaseModel):
    distance_km: float
    distance_price: int
    box_count: int
    small_trucks: int
    large_trucks: int
    truck_price: int
    truck_case: str
    seasonal_coefficient: float
    option_surcharge: int
    total_price: int
