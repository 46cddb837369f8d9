"""
Order number allocation.

Order numbers look like ``ORD-YYMMDD-NNNN`` where NNNN is one more than the
number of orders already created on that calendar day. The daily count is
read without a lock, so two concurrent requests can propose the same number.
The unique constraint on ``Order.order_number`` is what keeps them apart:
the loser of the race gets an ``IntegrityError``, and the next candidate
carries a random three digit suffix (``ORD-YYMMDD-NNNN-RRR``).

"Today" is the local date in ``settings.TIME_ZONE``.
"""

import logging
import re
import secrets
import time
from datetime import date, datetime
from typing import Callable, Iterator, NamedTuple, Optional, TypeVar

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.orders.models import Order

from .exceptions import OrderNumberAllocationFailed

logger = logging.getLogger(__name__)

T = TypeVar('T')

ORDER_NUMBER_PATTERN = re.compile(
    r'^(?P<prefix>[A-Za-z0-9]{1,10})-(?P<date>\d{6})-(?P<sequence>\d{4,})(?:-(?P<suffix>\d{3}))?$'
)
# Keeps suffixed numbers inside Order.order_number's 32 characters
PREFIX_PATTERN = re.compile(r'[A-Za-z0-9]{1,10}')


class ParsedOrderNumber(NamedTuple):
    prefix: str
    day: date
    sequence: int
    suffix: Optional[int]


def format_order_number(day: date, sequence: int, suffix: Optional[int] = None, prefix: Optional[str] = None) -> str:
    """
    Format an order number.

    Raises:
        ImproperlyConfigured: If the prefix is not 1-10 letters or digits

    Example:
        >>> format_order_number(date(2025, 3, 7), 4)
        'ORD-250307-0004'
        >>> format_order_number(date(2025, 3, 7), 4, suffix=27)
        'ORD-250307-0004-027'
    """
    prefix = prefix or settings.ORDER_NUMBER_PREFIX
    if not PREFIX_PATTERN.fullmatch(prefix):
        raise ImproperlyConfigured(
            f"ORDER_NUMBER_PREFIX must be 1-10 letters or digits, got {prefix!r}"
        )
    number = f"{prefix}-{day:%y%m%d}-{sequence:04d}"
    if suffix is not None:
        number = f"{number}-{suffix:03d}"
    return number


def parse_order_number(value: str) -> ParsedOrderNumber:
    """
    Split an order number into its parts.

    Raises:
        ValueError: If ``value`` is not a well-formed order number
    """
    match = ORDER_NUMBER_PATTERN.match(value or '')
    if not match:
        raise ValueError(f"Not an order number: {value!r}")
    suffix = match.group('suffix')
    return ParsedOrderNumber(
        prefix=match.group('prefix'),
        day=datetime.strptime(match.group('date'), '%y%m%d').date(),
        sequence=int(match.group('sequence')),
        suffix=int(suffix) if suffix is not None else None,
    )


def local_today() -> date:
    return timezone.localdate()


def count_orders_for_day(day: date) -> int:
    """Count orders created on ``day`` (local time), soft-deleted ones included."""
    return Order.objects.filter(created_at__date=day).count()


class OrderNumberAllocator:
    """
    Proposes order numbers and writes the first one the database accepts.

    The allocator keeps no state between calls; it reads the daily count,
    proposes candidates, and leaves uniqueness to the database.

    Args:
        max_attempts: Total candidates tried (the plain number counts as one)
        timeout: Seconds after which no further attempt is started
        random_suffix: ``n -> int`` in ``[0, n)``; defaults to ``secrets.randbelow``
        clock: Monotonic clock in seconds
    """

    def __init__(
        self,
        *,
        max_attempts: Optional[int] = None,
        timeout: Optional[float] = None,
        random_suffix: Callable[[int], int] = secrets.randbelow,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_attempts = settings.ORDER_NUMBER_MAX_ATTEMPTS if max_attempts is None else max_attempts
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        self.timeout = settings.ORDER_NUMBER_ALLOCATION_TIMEOUT if timeout is None else timeout
        self.random_suffix = random_suffix
        self.clock = clock

    def candidates(self, day: date, orders_today: int) -> Iterator[str]:
        """Yield the plain candidate, then suffixed retries, ``max_attempts`` in all."""
        sequence = orders_today + 1
        yield format_order_number(day, sequence)
        for _ in range(self.max_attempts - 1):
            yield format_order_number(day, sequence, suffix=self.random_suffix(1000))

    def allocate(self, write: Callable[[str], T], *, day: Optional[date] = None) -> T:
        """
        Call ``write(order_number)`` with successive candidates until one sticks.

        ``write`` must insert the row carrying the number. Each call runs in
        its own savepoint, so a duplicate only rolls back that attempt. Call
        this inside ``transaction.atomic()`` when other rows belong with it.

        Returns:
            Whatever ``write`` returned for the accepted number

        Raises:
            OrderNumberAllocationFailed: If every candidate collided or the
                timeout passed
            IntegrityError: If ``write`` failed for a reason other than a
                duplicate order number
        """
        day = day or local_today()
        deadline = self.clock() + self.timeout
        orders_today = count_orders_for_day(day)
        attempts = 0

        for candidate in self.candidates(day, orders_today):
            if self.clock() > deadline:
                logger.error(
                    "Order number allocation timed out after %d attempt(s) (%.1fs)",
                    attempts, self.timeout
                )
                raise OrderNumberAllocationFailed(
                    f"Timed out allocating an order number after {attempts} attempt(s)",
                    attempts=attempts,
                )
            attempts += 1

            try:
                with transaction.atomic():
                    return write(candidate)
            except IntegrityError:
                if not Order.objects.filter(order_number=candidate).exists():
                    raise
                logger.info("Order number %s already taken (attempt %d)", candidate, attempts)

        logger.error(
            "Order number allocation failed for %s after %d attempts",
            day.isoformat(), attempts
        )
        raise OrderNumberAllocationFailed(
            f"No unique order number after {attempts} attempts",
            attempts=attempts,
        )
