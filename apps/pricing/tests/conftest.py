import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, Role
from apps.catalog.defaults import DOCUMENT_RULES, TARPAULIN_RULES, LAMINATION_RULES
from apps.catalog.models import Service, ServiceCategory
from apps.pricing.rule_sets import (
    DocumentRuleSet,
    TarpaulinRuleSet,
    LaminationRuleSet,
    StandardRuleSet,
)


# =============================================================================
# Rule sets
# =============================================================================

@pytest.fixture
def document_rules():
    """Document rules with a Glossy surcharge of 1 per page."""
    return DocumentRuleSet(
        color_page_rate=Decimal('2'),
        black_page_rate=Decimal('1'),
        paper_types={'Standard': Decimal('0'), 'Glossy': Decimal('1')},
    )


@pytest.fixture
def tarpaulin_rules():
    return TarpaulinRuleSet(
        base_price=Decimal('25'),
        eyelet_price=Decimal('10'),
        rope_price=Decimal('50'),
        stand_price=Decimal('200'),
    )


@pytest.fixture
def lamination_rules():
    return LaminationRuleSet(
        base_price=Decimal('25'),
        size_multipliers={'ID Size': Decimal('1'), 'A4': Decimal('2.5')},
    )


@pytest.fixture
def standard_rules():
    return StandardRuleSet(base_price=Decimal('150.00'))


# =============================================================================
# API
# =============================================================================

@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        username='staff',
        password='TestPass123!',
        name='Shop Staff',
        role=Role.STAFF,
    )


@pytest.fixture
def staff_client(api_client, staff_user):
    """Return API client authenticated as staff."""
    refresh = RefreshToken.for_user(staff_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


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
