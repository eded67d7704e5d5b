from sqlalchemy import Column, String, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from moving_estimate.models.base import BaseModel


class Customer(BaseModel):
    __tablename__ = "customers"
    old_prefecture_id = Column(ForeignKey("prefectures.id"), nullable=False)
    new_prefecture_id = Column(ForeignKey("prefectures.id"), nullable=False)
    customer_name = Column(String(120), nullable=False)
    tel = Column(String(40), nullable=False)
    email = Column(String(120), nullable=False)
    old_address = Column(String(255), nullable=False)
    new_address = Column(String(255), nullable=False)
    moving_month = Column(Integer, nullable=False)

    option_services = relationship("CustomerOptionService", back_populates="customer")
    packages = relationship("CustomerPackage", back_populates="customer")


class CustomerOptionService(BaseModel):
    __tablename__ = "customer_option_services"
    __table_args__ = (UniqueConstraint("customer_id", "service_id", name="uq_customer_option_service"),)

    customer_id = Column(ForeignKey("customers.id"), nullable=False)
    service_id = Column(ForeignKey("optional_services.id"), nullable=False)

    customer = relationship("Customer", back_populates="option_services")


class CustomerPackage(BaseModel):
    __tablename__ = "customer_packages"
    __table_args__ = (UniqueConstraint("customer_id", "package_id", name="uq_customer_package"),)

    customer_id = Column(ForeignKey("customers.id"), nullable=False)
    package_id = Column(ForeignKey("package_contents.id"), nullable=False)
    package_number = Column(Integer, nullable=False, default=0)

    customer = relationship("Customer", back_populates="packages")
