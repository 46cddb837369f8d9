from decimal import Decimal

from rest_framework import serializers

from apps.accounts.models import User
from apps.catalog.models import Service
from apps.pricing.calculators import MAX_AMOUNT
from apps.pricing.choices import ServiceType
from apps.pricing.serializers import AliasedInputSerializer
from .models import Order, OrderItem, OrderStatus, PaymentMethod, PaymentStatus


def _money_field(**kwargs):
    return serializers.DecimalField(max_digits=None, decimal_places=None, max_value=MAX_AMOUNT, **kwargs)


# =============================================================================
# Input Serializers
# =============================================================================

class OrderFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for order filtering.

    Query Parameters:
        status (str): Workflow status
        payment_status (str): paid or unpaid
        date_from (date): Orders created on or after this date
        date_to (date): Orders created on or before this date
    """

    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)
    payment_status = serializers.ChoiceField(choices=PaymentStatus.choices, required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        """Validate date range."""
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({
                'date_to': 'End date must be after start date'
            })

        return attrs


class OrderItemInputSerializer(AliasedInputSerializer):
    """
    Validate one cart line.

    Accepts the POS client's camelCase keys (``serviceId``, ``serviceType``,
    ``unitPrice``, ``specifications``) as well as snake_case.

    Fields:
        service (UUID): Catalog service
        service_type (str): Optional; must match the service
        specification (dict): Service-specific specification
        quantity (int): Cart line quantity; must match the specification's
            copies/quantity (always 1 for tarpaulin) when both are given
        unit_price (Decimal): Unit price shown to the customer (informational)
        amount (Decimal): Line amount shown to the customer; checked server side
    """

    aliases = {
        'serviceId': 'service',
        'service_id': 'service',
        'serviceType': 'service_type',
        'specifications': 'specification',
        'unitPrice': 'unit_price',
    }

    service = serializers.PrimaryKeyRelatedField(queryset=Service.objects.all())
    service_type = serializers.ChoiceField(choices=ServiceType.choices, required=False)
    specification = serializers.DictField(required=False, allow_null=True)
    quantity = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    unit_price = _money_field(required=False, allow_null=True)
    amount = _money_field(required=False, allow_null=True)


class OrderCreateSerializer(AliasedInputSerializer):
    """
    Validate an order creation request.

    Fields:
        items (list): Cart lines, at least one
        total (Decimal): Total shown to the customer; checked server side
        discount (Decimal): Amount off the subtotal
        payment_method (str): cash, gcash or card
        payment_status (str): paid or unpaid
        customer_id (int): Optional customer reference
        customer_name (str): Defaults to walk-in
        notes (str): Free text
    """

    aliases = {
        'paymentMethod': 'payment_method',
        'paymentStatus': 'payment_status',
        'customerId': 'customer_id',
        'customerName': 'customer_name',
    }

    items = OrderItemInputSerializer(many=True, allow_empty=False)
    total = _money_field(required=False, allow_null=True)
    discount = _money_field(required=False, min_value=Decimal('0'), default=Decimal('0'))
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, required=False, allow_blank=True, default='')
    payment_status = serializers.ChoiceField(choices=PaymentStatus.choices, required=False, default=PaymentStatus.UNPAID)
    customer_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    customer_name = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class OrderStatusInputSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)


class OrderPaymentInputSerializer(AliasedInputSerializer):
    aliases = {
        'paymentMethod': 'payment_method',
        'paymentStatus': 'payment_status',
    }

    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices)
    payment_status = serializers.ChoiceField(choices=PaymentStatus.choices)


# =============================================================================
# Output Serializers
# =============================================================================

class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'username', 'display_name', 'role']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class OrderItemSerializer(serializers.ModelSerializer):
    service_name = serializers.CharField(source='service.name', read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            'id',
            'order',
            'service',
            'service_name',
            'service_type',
            'quantity',
            'unit_price',
            'amount',
            'specifications',
            'breakdown',
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    created_by = UserMinimalSerializer(read_only=True)
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id',
            'order_number',
            'customer_id',
            'customer_name',
            'subtotal',
            'discount',
            'total',
            'status',
            'payment_method',
            'payment_status',
            'notes',
            'item_count',
            'created_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_item_count(self, obj):
        return obj.items.count()


class OrderDetailSerializer(serializers.Serializer):
    """Order with its items, as returned by create and retrieve."""

    order = OrderSerializer()
    items = OrderItemSerializer(many=True)


class OrderErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
    field = serializers.CharField()
