from decimal import ROUND_HALF_UP

from drf_spectacular.utils import extend_schema
from rest_framework import serializers, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.catalog.models import Service
from .exceptions import InvalidSpecification, InvalidRuleSet
from .services import quote_service


class QuoteInputSerializer(serializers.Serializer):
    """
    Validate a price quote request.

    Fields:
        service (UUID): Active catalog service
        specification (dict): Service-specific specification
        quantity (int): Cart line quantity (fallback copies/quantity)
    """

    service = serializers.PrimaryKeyRelatedField(queryset=Service.objects.filter(active=True))
    specification = serializers.DictField(required=False, allow_null=True)
    quantity = serializers.IntegerField(min_value=1, required=False)


class PriceQuoteSerializer(serializers.Serializer):
    service = serializers.UUIDField()
    service_type = serializers.CharField()
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2, rounding=ROUND_HALF_UP)
    total = serializers.DecimalField(max_digits=12, decimal_places=2, rounding=ROUND_HALF_UP)
    breakdown = serializers.DictField()


class PricingErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
    field = serializers.CharField()


@extend_schema(
    request=QuoteInputSerializer,
    responses={200: PriceQuoteSerializer, 400: PricingErrorSerializer},
    description="Compute unit price, total and breakdown for one cart line.",
    tags=['pricing'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def quote(request):
    """Price a service specification without creating anything."""
    input_serializer = QuoteInputSerializer(data=request.data)
    input_serializer.is_valid(raise_exception=True)
    service = input_serializer.validated_data['service']

    try:
        result = quote_service(
            service=service,
            specification=input_serializer.validated_data.get('specification'),
            quantity=input_serializer.validated_data.get('quantity'),
        )
    except (InvalidSpecification, InvalidRuleSet) as e:
        return Response(
            {'error': e.message, 'field': e.field},
            status=status.HTTP_400_BAD_REQUEST
        )

    serializer = PriceQuoteSerializer({
        'service': service.id,
        'service_type': service.type,
        **result.as_dict(),
    })
    return Response(serializer.data)
