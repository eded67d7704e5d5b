from moving_estimate.models.customer import Customer
from moving_estimate.schemas.order import UserOrder, OrderOut


def build_order_response(customer: Customer, order: UserOrder) -> OrderOut:
    return OrderOut(
        customer_id=customer.id,
        customer_name=customer.customer_name,
        old_prefecture_id=customer.old_prefecture_id,
        new_prefecture_id=customer.new_prefecture_id,
        moving_month=customer.moving_month,
        packages=order.package_quantities,
        washing_machine_installation=order.washing_machine_installation,
        created_at=customer.created_at,
    )
