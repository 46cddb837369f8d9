"""
Orders app services layer.

Order creation re-prices the cart, allocates an order number and writes the
order with its items in one transaction.
"""

from .exceptions import (
    OrderServiceError,
    OrderNumberAllocationFailed,
    PriceMismatch,
    EmptyOrderError,
    ServiceUnavailableError,
    OrderNumberUnavailable,
)

from .order_numbers import (
    OrderNumberAllocator,
    format_order_number,
    parse_order_number,
    count_orders_for_day,
    local_today,
)

from .order_intake import (
    create_order,
    price_cart_line,
    update_order_status,
    update_order_payment,
    delete_order,
)


__all__ = [
    # Exceptions
    'OrderServiceError',
    'OrderNumberAllocationFailed',
    'PriceMismatch',
    'EmptyOrderError',
    'ServiceUnavailableError',
    'OrderNumberUnavailable',

    # Order numbers
    'OrderNumberAllocator',
    'format_order_number',
    'parse_order_number',
    'count_orders_for_day',
    'local_today',

    # Order intake
    'create_order',
    'price_cart_line',
    'update_order_status',
    'update_order_payment',
    'delete_order',
]
