from pydantic import BaseModel
from typing import Dict, Optional
from datetime import datetime
from moving_estimate.core.enums import PackageType
from moving_estimate.schemas.estimate import QuoteRequest


class UserOrder(BaseModel):
    customer_name: str
    tel: str
    email: str
    old_prefecture_id: int
    old_address: str
    new_prefecture_id: int
    new_address: str
    month: int
    box: int = 0
    bed: int = 0
    bicycle: int = 0
    washing_machine: int = 0
    washing_machine_installation: bool = False

    @property
    def package_quantities(self) -> Dict[PackageType, int]:
        return {
            PackageType.BOX: self.box,
            PackageType.BED: self.bed,
            PackageType.BICYCLE: self.bicycle,
            PackageType.WASHING_MACHINE: self.washing_machine,
        }

    def to_quote_request(self) -> QuoteRequest:
        return QuoteRequest(
            origin_prefecture_id=self.old_prefecture_id,
            destination_prefecture_id=self.new_prefecture_id,
            month=self.month,
            packages=self.package_quantities,
            washing_machine_installation=self.washing_machine_installation,
        )


class OrderOut(BaseModel):
    customer_id: int
    customer_name: str
    old_prefecture_id: int
    new_prefecture_id: int
    moving_month: int
    packages: Dict[PackageType, int]
    washing_machine_installation: bool
    created_at: Optional[datetime] = None
