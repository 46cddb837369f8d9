"""
Order intake service.

Re-prices a checked-out cart on the server and writes the order with all of
its items as one unit. Pricing happens before the transaction opens, so a
rejected cart never touches the database.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from django.db import transaction

from apps.accounts.models import User
from apps.catalog.models import Service
from apps.orders.models import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
    WALK_IN_CUSTOMER,
)
from apps.pricing.calculators import MAX_AMOUNT, PriceResult, quantize_money
from apps.pricing.exceptions import InvalidSpecification
from apps.pricing.services import price_service

from .exceptions import EmptyOrderError, PriceMismatch, ServiceUnavailableError
from .order_numbers import OrderNumberAllocator

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')


@dataclass(frozen=True)
class PricedLine:
    service: Service
    quantity: int
    specification: Optional[Mapping[str, Any]]
    result: PriceResult

    @property
    def unit_price(self) -> Decimal:
        return quantize_money(self.result.unit_price)

    @property
    def amount(self) -> Decimal:
        return quantize_money(self.result.total)

    def stored_breakdown(self):
        """Breakdown with Decimals as strings, the form it reads back from JSON."""
        return {
            key: str(value) if isinstance(value, Decimal) else value
            for key, value in self.result.breakdown.items()
        }


def price_cart_line(index: int, line: Mapping[str, Any]) -> PricedLine:
    """
    Price one cart line and check it against what the client showed.

    ``line`` carries ``service`` and optionally ``service_type``,
    ``specification``, ``quantity``, ``unit_price`` and ``amount``.

    Raises:
        ServiceUnavailableError: If the service is inactive
        InvalidSpecification: With the field path inside ``items``; also when
            ``quantity`` disagrees with the quantity the specification prices
        PriceMismatch: If ``amount`` differs from the server price
    """
    prefix = f'items[{index}]'
    service = line['service']
    specification = line.get('specification')

    if not service.active:
        raise ServiceUnavailableError(f'{prefix}.service', f"Service '{service.name}' is not available.")

    service_type = line.get('service_type')
    if service_type and service_type != service.type:
        raise InvalidSpecification(
            f'{prefix}.service_type',
            f"Service '{service.name}' is {service.type}, not {service_type}."
        )

    quantity = line.get('quantity')
    try:
        spec, result = price_service(service=service, specification=specification, quantity=quantity)
    except InvalidSpecification as e:
        field = f'{prefix}.specification'
        if e.field != 'specification':
            field = f'{field}.{e.field}'
        raise InvalidSpecification(field, e.message) from e

    # The stored quantity is the one that was priced
    if quantity is not None and quantity != spec.quantity:
        raise InvalidSpecification(
            f'{prefix}.quantity',
            f"Quantity {quantity} does not match the specification, which prices {spec.quantity}."
        )

    priced = PricedLine(
        service=service,
        quantity=spec.quantity,
        specification=specification,
        result=result,
    )

    amount = line.get('amount')
    if amount is not None and quantize_money(amount) != priced.amount:
        raise PriceMismatch(f'{prefix}.amount', priced.amount, quantize_money(amount))

    return priced


def create_order(
    *,
    created_by: User,
    items: Iterable[Mapping[str, Any]],
    total: Optional[Decimal] = None,
    discount: Decimal = ZERO,
    payment_method: str = '',
    payment_status: str = PaymentStatus.UNPAID,
    customer_id: Optional[int] = None,
    customer_name: str = '',
    notes: str = '',
    allocator: Optional[OrderNumberAllocator] = None,
) -> Tuple[Order, List[OrderItem]]:
    """
    Create an order from a checked-out cart.

    Every line is priced on the server first. The order row, with its
    allocated order number, and all item rows are then written inside one
    transaction: if allocation gives up, nothing is left behind.

    Args:
        created_by: Staff member taking the order
        items: Cart lines (see ``price_cart_line``)
        total: Total the client displayed; checked when given
        discount: Amount taken off the subtotal
        payment_method: cash, gcash, card or blank
        payment_status: paid or unpaid
        customer_id: Optional customer reference
        customer_name: Defaults to walk-in
        notes: Free text
        allocator: Order number allocator (default settings when omitted)

    Returns:
        tuple: (Order, list[OrderItem])

    Raises:
        EmptyOrderError: If there are no items
        ServiceUnavailableError, InvalidSpecification, InvalidRuleSet,
        PriceMismatch: If a line cannot be priced as submitted
        OrderNumberAllocationFailed: If no unique order number was written
    """
    priced_lines = [price_cart_line(index, line) for index, line in enumerate(items)]
    if not priced_lines:
        raise EmptyOrderError("An order needs at least one item.")

    discount = quantize_money(discount or ZERO)
    subtotal = sum((line.amount for line in priced_lines), ZERO)
    expected_total = max(subtotal - discount, ZERO)

    if subtotal > MAX_AMOUNT:
        raise InvalidSpecification('items', f'Order total exceeds the largest amount accepted ({MAX_AMOUNT}).')

    if total is not None and quantize_money(total) != expected_total:
        raise PriceMismatch('total', expected_total, quantize_money(total))

    allocator = allocator or OrderNumberAllocator()

    def insert_order(order_number):
        return Order.objects.create(
            order_number=order_number,
            customer_id=customer_id,
            customer_name=customer_name or WALK_IN_CUSTOMER,
            subtotal=subtotal,
            discount=discount,
            total=expected_total,
            payment_method=payment_method or '',
            payment_status=payment_status,
            notes=notes or '',
            created_by=created_by,
        )

    with transaction.atomic():
        order = allocator.allocate(insert_order)
        order_items = OrderItem.objects.bulk_create([
            OrderItem(
                order=order,
                service=line.service,
                service_type=line.service.type,
                quantity=line.quantity,
                unit_price=line.unit_price,
                amount=line.amount,
                specifications=line.specification,
                breakdown=line.stored_breakdown(),
            )
            for line in priced_lines
        ])

    logger.info(
        "Created order %s: %d item(s), total %s, by %s",
        order.order_number, len(order_items), order.total, created_by.username
    )
    return order, order_items


@transaction.atomic
def update_order_status(*, order: Order, status: str) -> Order:
    """Move an order to another workflow status."""
    order = Order.objects.select_for_update().get(pk=order.pk)
    previous = order.status
    order.status = OrderStatus(status)
    order.save(update_fields=['status', 'updated_at'])
    logger.info("Order %s status %s -> %s", order.order_number, previous, order.status)
    return order


@transaction.atomic
def update_order_payment(*, order: Order, payment_method: str, payment_status: str) -> Order:
    """Record how and whether an order was paid."""
    order = Order.objects.select_for_update().get(pk=order.pk)
    order.payment_method = payment_method
    order.payment_status = PaymentStatus(payment_status)
    order.save(update_fields=['payment_method', 'payment_status', 'updated_at'])
    logger.info(
        "Order %s payment %s (%s)",
        order.order_number, order.payment_status, order.payment_method or '-'
    )
    return order


def delete_order(*, order: Order) -> Order:
    """
    Soft delete an order.

    The row stays so its order number keeps counting towards the day and is
    never handed out again.
    """
    order.is_active = False
    order.save(update_fields=['is_active', 'updated_at'])
    logger.info("Order %s deleted", order.order_number)
    return order
