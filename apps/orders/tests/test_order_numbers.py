"""
Order number allocation tests.

Tests cover:
- Order number format
- Daily sequencing from the count of today's orders
- Collision retries with a random suffix
- Exhaustion and timeout
"""

import itertools
import logging
import pytest
from datetime import date
from unittest.mock import patch
from django.core.exceptions import ImproperlyConfigured
from django.db import IntegrityError
from django.test import override_settings

from apps.orders.models import Order
from apps.orders.services import (
    OrderNumberAllocator,
    OrderNumberAllocationFailed,
    count_orders_for_day,
    format_order_number,
    local_today,
    parse_order_number,
)

COUNT_PATH = 'apps.orders.services.order_numbers.count_orders_for_day'


def fixed_suffix(value):
    return lambda upper: value


class TestOrderNumberFormat:

    def test_plain(self):
        assert format_order_number(date(2025, 3, 7), 4) == 'ORD-250307-0004'

    def test_with_suffix(self):
        assert format_order_number(date(2025, 3, 7), 4, suffix=27) == 'ORD-250307-0004-027'

    def test_sequence_beyond_four_digits(self):
        assert format_order_number(date(2025, 12, 31), 12345) == 'ORD-251231-12345'

    @override_settings(ORDER_NUMBER_PREFIX='WEB')
    def test_prefix_from_settings(self):
        assert format_order_number(date(2025, 3, 7), 1) == 'WEB-250307-0001'

    def test_parse(self):
        parsed = parse_order_number('ORD-250307-0004-027')

        assert parsed.prefix == 'ORD'
        assert parsed.day == date(2025, 3, 7)
        assert parsed.sequence == 4
        assert parsed.suffix == 27

    def test_parse_without_suffix(self):
        assert parse_order_number('ORD-250307-0004').suffix is None

    @override_settings(ORDER_NUMBER_PREFIX='Web2')
    def test_alphanumeric_prefix_parses_back(self):
        number = format_order_number(date(2025, 3, 7), 1, suffix=5)

        assert number == 'Web2-250307-0001-005'
        assert parse_order_number(number).prefix == 'Web2'

    @pytest.mark.parametrize('prefix', ['', 'ORD-X', 'ABCDEFGHIJK', 'PRÉ'])
    def test_unusable_prefix_rejected(self, prefix):
        with override_settings(ORDER_NUMBER_PREFIX=prefix):
            with pytest.raises(ImproperlyConfigured):
                format_order_number(date(2025, 3, 7), 1)

    @pytest.mark.parametrize('value', ['', 'ORD-2503-0004', 'ORD-250307-04', 'ORD-250307-0004-27'])
    def test_parse_rejects_malformed(self, value):
        with pytest.raises(ValueError):
            parse_order_number(value)


class TestCandidates:

    def test_plain_then_suffixed(self):
        allocator = OrderNumberAllocator(max_attempts=3, random_suffix=fixed_suffix(7))

        candidates = list(allocator.candidates(date(2025, 3, 7), 3))

        assert candidates == [
            'ORD-250307-0004',
            'ORD-250307-0004-007',
            'ORD-250307-0004-007',
        ]

    def test_suffix_drawn_below_one_thousand(self):
        bounds = []

        def record(upper):
            bounds.append(upper)
            return 999

        allocator = OrderNumberAllocator(max_attempts=2, random_suffix=record)
        candidates = list(allocator.candidates(date(2025, 3, 7), 0))

        assert bounds == [1000]
        assert candidates[-1] == 'ORD-250307-0001-999'

    def test_attempts_default_from_settings(self):
        with override_settings(ORDER_NUMBER_MAX_ATTEMPTS=5):
            allocator = OrderNumberAllocator()

        assert len(list(allocator.candidates(date(2025, 3, 7), 0))) == 5

    def test_explicit_attempts_override_settings(self):
        with override_settings(ORDER_NUMBER_MAX_ATTEMPTS=5):
            allocator = OrderNumberAllocator(max_attempts=1)

        assert list(allocator.candidates(date(2025, 3, 7), 0)) == ['ORD-250307-0001']

    @pytest.mark.parametrize('attempts', [0, -1])
    def test_attempts_below_one_rejected(self, attempts):
        with pytest.raises(ValueError):
            OrderNumberAllocator(max_attempts=attempts)


@pytest.mark.django_db
class TestDailyCount:

    def test_counts_todays_orders_including_deleted(self, make_order, cashier_user):
        make_order(cashier_user, 1)
        make_order(cashier_user, 2, is_active=False)

        assert count_orders_for_day(local_today()) == 2

    def test_other_days_not_counted(self, make_order, cashier_user):
        make_order(cashier_user, 1)

        assert count_orders_for_day(date(2001, 1, 1)) == 0


@pytest.mark.django_db
class TestAllocate:
    """Tests for OrderNumberAllocator.allocate()"""

    @pytest.fixture
    def write_order(self, cashier_user):
        def _write(order_number):
            return Order.objects.create(
                order_number=order_number,
                subtotal=10,
                total=10,
                created_by=cashier_user,
            )
        return _write

    def test_next_number_after_three_orders(self, make_order, cashier_user, write_order):
        for sequence in (1, 2, 3):
            make_order(cashier_user, sequence)

        order = OrderNumberAllocator().allocate(write_order)

        assert order.order_number == format_order_number(local_today(), 4)

    def test_first_order_of_the_day(self, write_order):
        order = OrderNumberAllocator().allocate(write_order)

        assert order.order_number.endswith('-0001')

    def test_taken_number_gets_suffix(self, make_order, cashier_user, write_order, caplog):
        """3 orders today but 0004 already exists: retry with -RRR."""
        make_order(cashier_user, 4)
        allocator = OrderNumberAllocator(random_suffix=fixed_suffix(42))

        with patch(COUNT_PATH, return_value=3):
            with caplog.at_level(logging.INFO, logger='apps.orders'):
                order = allocator.allocate(write_order)

        assert order.order_number == format_order_number(local_today(), 4, suffix=42)
        assert 'already taken' in caplog.text

    def test_exhausted_retries(self, make_order, cashier_user, write_order, caplog):
        make_order(cashier_user, 1)
        make_order(cashier_user, 1, suffix=7)
        allocator = OrderNumberAllocator(max_attempts=5, random_suffix=fixed_suffix(7))

        with patch(COUNT_PATH, return_value=0):
            with caplog.at_level(logging.ERROR, logger='apps.orders'):
                with pytest.raises(OrderNumberAllocationFailed) as exc_info:
                    allocator.allocate(write_order)

        assert exc_info.value.attempts == 5
        assert Order.objects.count() == 2
        assert 'allocation failed' in caplog.text

    def test_timeout(self, make_order, cashier_user, write_order):
        """Once the deadline passes no further attempt is started."""
        make_order(cashier_user, 1)
        clock = itertools.chain([0, 0], itertools.repeat(10)).__next__
        allocator = OrderNumberAllocator(timeout=5, clock=clock, random_suffix=fixed_suffix(1))

        with patch(COUNT_PATH, return_value=0):
            with pytest.raises(OrderNumberAllocationFailed) as exc_info:
                allocator.allocate(write_order)

        assert exc_info.value.attempts == 1
        assert Order.objects.count() == 1

    def test_other_integrity_errors_propagate(self):
        def failing_write(order_number):
            raise IntegrityError('NOT NULL constraint failed: orders.created_by_id')

        with pytest.raises(IntegrityError):
            OrderNumberAllocator().allocate(failing_write)
