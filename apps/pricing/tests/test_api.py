import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.catalog.models import Service, ServiceCategory


@pytest.mark.django_db
class TestQuote:
    """Tests for POST /api/pricing/quote/"""

    def test_document_auto_detect_quote(self, staff_client, document_service):
        url = reverse('pricing:quote')
        response = staff_client.post(url, {
            'service': str(document_service.id),
            'specification': {
                'paperType': 'Glossy',
                'copies': 1,
                'colorMode': 'Auto Detect',
                'pageAnalysis': {'pageCount': 10, 'colorPages': 4, 'bwPages': 6},
            },
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['service_type'] == 'document'
        # Default rules: Glossy adds 1 -> 4 x 3 + 6 x 2
        assert response.data['total'] == 24
        assert response.data['unit_price'] == Decimal('2.40')
        assert response.data['breakdown']['total_pages'] == 10

    def test_tarpaulin_quote(self, staff_client, tarpaulin_service):
        url = reverse('pricing:quote')
        response = staff_client.post(url, {
            'service': str(tarpaulin_service.id),
            'specification': {'width': 3, 'height': 4, 'eyelets': 6, 'rope': True},
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['unit_price'] == 300
        assert response.data['total'] == 410

    def test_lamination_quote_uses_cart_quantity(self, staff_client, lamination_service):
        url = reverse('pricing:quote')
        response = staff_client.post(url, {
            'service': str(lamination_service.id),
            'specification': {'size': 'ID Size'},
            'quantity': 10,
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == 250

    def test_standard_quote_without_specification(self, staff_client, standard_service):
        url = reverse('pricing:quote')
        response = staff_client.post(url, {
            'service': str(standard_service.id),
            'quantity': 2,
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['unit_price'] == 150
        assert response.data['total'] == 300

    def test_invalid_specification_names_field(self, staff_client, tarpaulin_service):
        url = reverse('pricing:quote')
        response = staff_client.post(url, {
            'service': str(tarpaulin_service.id),
            'specification': {'width': 0, 'height': 4},
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['field'] == 'width_ft'

    def test_misconfigured_service_rules(self, staff_client, tarpaulin_service):
        # Bypass model validation to simulate rules saved before validation existed
        tarpaulin_service.pricing_rules = {'colorPageRate': 2}
        tarpaulin_service.save()

        url = reverse('pricing:quote')
        response = staff_client.post(url, {
            'service': str(tarpaulin_service.id),
            'specification': {'width': 3, 'height': 4},
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['field'].startswith('pricing_rules')

    def test_inactive_service(self, staff_client, standard_service):
        standard_service.active = False
        standard_service.save()

        url = reverse('pricing:quote')
        response = staff_client.post(url, {'service': str(standard_service.id), 'quantity': 1}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'service' in response.data

    def test_quote_unauthenticated(self, api_client, standard_service):
        url = reverse('pricing:quote')
        response = api_client.post(url, {'service': str(standard_service.id)}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestQuoteLimits:
    """Oversized specifications are rejected instead of overflowing the money fields."""

    def test_huge_tarpaulin(self, staff_client, tarpaulin_service):
        url = reverse('pricing:quote')
        response = staff_client.post(url, {
            'service': str(tarpaulin_service.id),
            'specification': {'width': 1e9, 'height': 1e9},
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['field'] == 'width_ft'

    def test_huge_quantity(self, staff_client, lamination_service):
        url = reverse('pricing:quote')
        response = staff_client.post(url, {
            'service': str(lamination_service.id),
            'specification': {'size': 'A4', 'quantity': 10 ** 9},
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['field'] == 'quantity'

    def test_total_beyond_largest_amount(self, staff_client):
        service = Service.objects.create(
            name='Billboard Package',
            category=ServiceCategory.STANDARD,
            type='standard',
            base_price=Decimal('99999999.00'),
        )

        url = reverse('pricing:quote')
        response = staff_client.post(url, {'service': str(service.id), 'quantity': 100000}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['field'] == 'specification'

    def test_total_at_largest_amount(self, staff_client):
        service = Service.objects.create(
            name='Billboard Package',
            category=ServiceCategory.STANDARD,
            type='standard',
            base_price=Decimal('99999999.99'),
        )

        url = reverse('pricing:quote')
        response = staff_client.post(url, {'service': str(service.id), 'quantity': 100}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == Decimal('9999999999.00')
