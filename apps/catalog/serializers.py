from rest_framework import serializers

from apps.pricing.choices import ServiceType
from apps.pricing.exceptions import InvalidRuleSet
from apps.pricing.serializers import load_rule_set
from .models import Service, ServiceCategory


# =============================================================================
# Input Serializers
# =============================================================================

class ServiceFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for service filtering.

    Query Parameters:
        category (str): dynamic or standard
        type (str): document, tarpaulin, lamination or standard
        online (bool): Only services orderable from the online store
        include_inactive (bool): Include deactivated services
    """

    category = serializers.ChoiceField(choices=ServiceCategory.choices, required=False)
    type = serializers.ChoiceField(choices=ServiceType.choices, required=False)
    online = serializers.BooleanField(required=False)
    include_inactive = serializers.BooleanField(required=False, default=False)


# =============================================================================
# Output Serializers
# =============================================================================

class ServiceSerializer(serializers.ModelSerializer):
    """Service with its pricing rules; rules are validated against the type."""

    class Meta:
        model = Service
        fields = [
            'id',
            'name',
            'description',
            'category',
            'type',
            'base_price',
            'pricing_rules',
            'active',
            'image_url',
            'featured',
            'display_order',
            'online_available',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id',
            'category',
            'created_at',
            'updated_at',
        ]

    def validate(self, attrs):
        """Check pricing rules fit the service type; derive the category."""
        instance = self.instance
        service_type = attrs.get('type', instance.type if instance else ServiceType.STANDARD)
        pricing_rules = attrs.get('pricing_rules', instance.pricing_rules if instance else None)
        base_price = attrs.get('base_price', instance.base_price if instance else None)

        try:
            load_rule_set(service_type, pricing_rules, base_price=base_price)
        except InvalidRuleSet as e:
            raise serializers.ValidationError({'pricing_rules': f"{e.field}: {e.message}"})

        attrs['category'] = (
            ServiceCategory.STANDARD if service_type == ServiceType.STANDARD
            else ServiceCategory.DYNAMIC
        )
        return attrs


class ServiceListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    class Meta:
        model = Service
        fields = [
            'id',
            'name',
            'category',
            'type',
            'base_price',
            'active',
            'featured',
            'online_available',
        ]
        read_only_fields = fields
