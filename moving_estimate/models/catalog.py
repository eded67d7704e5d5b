"""Reference tables the quote engine reads from"""
from sqlalchemy import Column, String, Integer, Float, ForeignKey, Enum, UniqueConstraint, CheckConstraint
from moving_estimate.models.base import BaseModel
from moving_estimate.core.enums import PackageType, OptionalServiceType


class Prefecture(BaseModel):
    __tablename__ = "prefectures"
    name = Column(String(40), unique=True, nullable=False)


class PrefectureDistance(BaseModel):
    __tablename__ = "prefecture_distances"
    __table_args__ = (
        UniqueConstraint("prefecture_id_from", "prefecture_id_to", name="uq_prefecture_distance_pair"),
        CheckConstraint("distance >= 0", name="ck_prefecture_distance_non_negative"),
    )

    prefecture_id_from = Column(ForeignKey("prefectures.id"), nullable=False)
    prefecture_id_to = Column(ForeignKey("prefectures.id"), nullable=False)
    distance = Column(Float, nullable=False)


class PackageContent(BaseModel):
    __tablename__ = "package_contents"
    package_type = Column(Enum(PackageType), unique=True, nullable=False)
    box = Column(Integer, nullable=False)


class TruckCapacity(BaseModel):
    __tablename__ = "truck_capacities"
    __table_args__ = (
        CheckConstraint("max_box > 0", name="ck_truck_capacity_max_box_positive"),
        CheckConstraint("price >= 0", name="ck_truck_capacity_price_non_negative"),
    )

    max_box = Column(Integer, nullable=False)
    price = Column(Integer, nullable=False)


class OptionalService(BaseModel):
    __tablename__ = "optional_services"
    service_type = Column(Enum(OptionalServiceType), unique=True, nullable=False)
    name = Column(String(80), nullable=False)
    price = Column(Integer, nullable=False)
