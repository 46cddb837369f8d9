import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, Role
from apps.catalog.defaults import DOCUMENT_RULES, TARPAULIN_RULES, LAMINATION_RULES
from apps.catalog.models import Service, ServiceCategory
from apps.orders.models import Order, OrderItem
from apps.orders.services import local_today, format_order_number


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


# =============================================================================
# Users and clients
# =============================================================================

@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        username='admin',
        password='TestPass123!',
        name='Shop Admin',
        role=Role.ADMIN,
    )


@pytest.fixture
def cashier_user(db):
    return User.objects.create_user(
        username='cashier',
        password='TestPass123!',
        name='Front Desk',
        role=Role.CASHIER,
    )


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        username='staff',
        password='TestPass123!',
        name='Print Operator',
        role=Role.STAFF,
    )


@pytest.fixture
def admin_client(admin_user):
    """Return API client authenticated as admin."""
    return _client_for(admin_user)


@pytest.fixture
def cashier_client(cashier_user):
    """Return API client authenticated as cashier."""
    return _client_for(cashier_user)


@pytest.fixture
def staff_client(staff_user):
    """Return API client authenticated as staff."""
    return _client_for(staff_user)


# =============================================================================
# Catalog
# =============================================================================

@pytest.fixture
def document_service(db):
    return Service.objects.create(
        name='A4 Document Printing',
        category=ServiceCategory.DYNAMIC,
        type='document',
        base_price=Decimal('8.00'),
        pricing_rules=DOCUMENT_RULES,
    )


@pytest.fixture
def tarpaulin_service(db):
    return Service.objects.create(
        name='Tarpaulin Printing',
        category=ServiceCategory.DYNAMIC,
        type='tarpaulin',
        base_price=Decimal('25.00'),
        pricing_rules=TARPAULIN_RULES,
    )


@pytest.fixture
def lamination_service(db):
    return Service.objects.create(
        name='ID Lamination',
        category=ServiceCategory.DYNAMIC,
        type='lamination',
        base_price=Decimal('25.00'),
        pricing_rules=LAMINATION_RULES,
    )


@pytest.fixture
def standard_service(db):
    return Service.objects.create(
        name='Business Card Printing',
        category=ServiceCategory.STANDARD,
        type='standard',
        base_price=Decimal('150.00'),
    )


# =============================================================================
# Carts and orders
# =============================================================================

@pytest.fixture
def tarpaulin_line(tarpaulin_service):
    """3x4 ft tarpaulin with 6 eyelets and rope: 410.00."""
    return {
        'service': tarpaulin_service,
        'service_type': 'tarpaulin',
        'specification': {'width': 3, 'height': 4, 'eyelets': 6, 'rope': True, 'stand': False},
        'quantity': 1,
        'amount': Decimal('410.00'),
    }


@pytest.fixture
def document_line(document_service):
    """4 color + 6 black Glossy pages, one copy: 24.00."""
    return {
        'service': document_service,
        'service_type': 'document',
        'specification': {
            'paperSize': 'A4',
            'paperType': 'Glossy',
            'copies': 1,
            'colorMode': 'Auto Detect',
            'pageAnalysis': {'pageCount': 10, 'colorPages': 4, 'bwPages': 6},
        },
        'quantity': 1,
        'amount': Decimal('24.00'),
    }


@pytest.fixture
def make_order(db):
    """Create an order row directly, bypassing intake."""
    def _make_order(created_by, sequence, suffix=None, **fields):
        return Order.objects.create(
            order_number=format_order_number(local_today(), sequence, suffix=suffix),
            subtotal=fields.pop('subtotal', Decimal('100.00')),
            total=fields.pop('total', Decimal('100.00')),
            created_by=created_by,
            **fields
        )
    return _make_order


@pytest.fixture
def placed_order(make_order, cashier_user, standard_service):
    """An order with one standard item."""
    order = make_order(cashier_user, 1, subtotal=Decimal('300.00'), total=Decimal('300.00'))
    OrderItem.objects.create(
        order=order,
        service=standard_service,
        service_type='standard',
        quantity=2,
        unit_price=Decimal('150.00'),
        amount=Decimal('300.00'),
        breakdown={'base_price': '150.00', 'quantity': 2},
    )
    return order
