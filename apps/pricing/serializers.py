from decimal import Decimal

from rest_framework import serializers

from .choices import ServiceType, PaperSize
from .exceptions import InvalidSpecification, InvalidRuleSet
from .rule_sets import (
    DocumentRuleSet,
    TarpaulinRuleSet,
    LaminationRuleSet,
    StandardRuleSet,
)
from .specifications import (
    PageAnalysis,
    DocumentSpec,
    TarpaulinSpec,
    LaminationSpec,
    StandardSpec,
)


def _first_error(errors, prefix=''):
    """Return (field, message) for the first entry of a DRF error structure."""
    if isinstance(errors, dict):
        key, value = next(iter(errors.items()))
        name = key if key != 'non_field_errors' else ''
        path = f'{prefix}.{name}' if prefix and name else (name or prefix)
        return _first_error(value, path)
    if isinstance(errors, list) and errors:
        return _first_error(errors[0], prefix)
    return prefix or 'specification', str(errors)


class AliasedInputSerializer(serializers.Serializer):
    """Input serializer that accepts alternate spellings of its keys."""

    aliases = {}

    def to_internal_value(self, data):
        if isinstance(data, dict):
            data = dict(data)
            for alias, name in self.aliases.items():
                if alias in data and name not in data:
                    data[name] = data.pop(alias)
        return super().to_internal_value(data)


# =============================================================================
# Specification Input Serializers
# =============================================================================

def _decimal_field(**kwargs):
    return serializers.DecimalField(max_digits=None, decimal_places=None, **kwargs)


class PageAnalysisSerializer(serializers.Serializer):
    pageCount = serializers.IntegerField(min_value=0, required=False)
    colorPages = serializers.IntegerField(min_value=0)
    bwPages = serializers.IntegerField(min_value=0)


class DocumentSpecSerializer(serializers.Serializer):
    """
    Validate a document printing specification.

    Fields:
        paperSize (str): A4, Letter, Long or A5
        paperType (str): Paper type name; unknown types carry no surcharge
        copies (int): Number of copies (>= 1)
        colorMode (str): Color, Black & White or Auto Detect
        pageAnalysis (dict): Optional {pageCount, colorPages, bwPages}
        pageCount (int): Optional explicit page count
    """

    paperSize = serializers.ChoiceField(choices=PaperSize.choices, required=False, default=PaperSize.A4)
    paperType = serializers.CharField(required=False, allow_blank=True, default='Standard')
    copies = serializers.IntegerField(min_value=1)
    colorMode = serializers.CharField()
    pageAnalysis = PageAnalysisSerializer(required=False, allow_null=True)
    pageCount = serializers.IntegerField(min_value=1, required=False, allow_null=True)

    def to_spec(self):
        data = self.validated_data
        analysis = data.get('pageAnalysis')
        if analysis:
            colored = analysis['colorPages']
            black = analysis['bwPages']
            analysis = PageAnalysis(
                page_count=analysis.get('pageCount', colored + black),
                color_pages=colored,
                bw_pages=black,
            )
        return DocumentSpec(
            paper_size=data['paperSize'],
            paper_type=data['paperType'],
            copies=data['copies'],
            color_mode=data['colorMode'],
            page_analysis=analysis or None,
            page_count=data.get('pageCount'),
        )


class TarpaulinSpecSerializer(AliasedInputSerializer):
    """
    Validate a tarpaulin specification.

    Accepts ``width``/``height``/``rope``/``stand`` as well as
    ``widthFt``/``heightFt``/``includeRope``/``includeStand``.
    """

    aliases = {
        'width': 'widthFt',
        'height': 'heightFt',
        'rope': 'includeRope',
        'stand': 'includeStand',
    }

    widthFt = _decimal_field()
    heightFt = _decimal_field()
    eyelets = serializers.IntegerField(min_value=0, required=False, default=0)
    includeRope = serializers.BooleanField(required=False, default=False)
    includeStand = serializers.BooleanField(required=False, default=False)

    def to_spec(self):
        data = self.validated_data
        return TarpaulinSpec(
            width_ft=data['widthFt'],
            height_ft=data['heightFt'],
            eyelets=data['eyelets'],
            include_rope=data['includeRope'],
            include_stand=data['includeStand'],
        )


class LaminationSpecSerializer(serializers.Serializer):
    size = serializers.CharField()
    quantity = serializers.IntegerField(min_value=1)

    def to_spec(self):
        data = self.validated_data
        return LaminationSpec(size=data['size'], quantity=data['quantity'])


class StandardSpecSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)

    def to_spec(self):
        return StandardSpec(quantity=self.validated_data['quantity'])


SPECIFICATION_SERIALIZERS = {
    ServiceType.DOCUMENT: DocumentSpecSerializer,
    ServiceType.TARPAULIN: TarpaulinSpecSerializer,
    ServiceType.LAMINATION: LaminationSpecSerializer,
    ServiceType.STANDARD: StandardSpecSerializer,
}

# Key that falls back to the cart line quantity when the specification omits it
QUANTITY_KEYS = {
    ServiceType.DOCUMENT: 'copies',
    ServiceType.LAMINATION: 'quantity',
    ServiceType.STANDARD: 'quantity',
}


def parse_specification(service_type, data, quantity=None):
    """
    Build a typed specification from client JSON.

    Args:
        service_type: One of ServiceType
        data: Specification dict as sent by the POS client (may be None
            for standard services)
        quantity: Cart line quantity, used when the specification does
            not carry its own copies/quantity

    Returns:
        DocumentSpec, TarpaulinSpec, LaminationSpec or StandardSpec

    Raises:
        InvalidSpecification: Naming the first offending field
    """
    try:
        service_type = ServiceType(service_type)
    except ValueError:
        raise InvalidSpecification('service_type', f"Unknown service type '{service_type}'.")

    serializer_class = SPECIFICATION_SERIALIZERS[service_type]

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidSpecification('specification', 'Expected an object.')

    quantity_key = QUANTITY_KEYS.get(service_type)
    if quantity_key and quantity is not None and data.get(quantity_key) is None:
        data = {**data, quantity_key: quantity}

    serializer = serializer_class(data=data)
    if not serializer.is_valid():
        raise InvalidSpecification(*_first_error(serializer.errors))
    return serializer.to_spec()


# =============================================================================
# Rule Set Serializers
# =============================================================================

def _rate_field(**kwargs):
    return _decimal_field(min_value=Decimal('0'), **kwargs)


class DocumentRulesSerializer(serializers.Serializer):
    colorPageRate = _rate_field()
    blackPageRate = _rate_field()
    paperTypes = serializers.DictField(child=_rate_field(), required=False, default=dict)

    def to_rule_set(self, base_price):
        data = self.validated_data
        return DocumentRuleSet(
            color_page_rate=data['colorPageRate'],
            black_page_rate=data['blackPageRate'],
            paper_types=data['paperTypes'],
        )


class TarpaulinRulesSerializer(AliasedInputSerializer):
    aliases = {
        'eyelets': 'eyeletPrice',
        'rope': 'ropePrice',
        'stand': 'standPrice',
    }

    basePrice = _rate_field(required=False)
    eyeletPrice = _rate_field()
    ropePrice = _rate_field()
    standPrice = _rate_field()

    def to_rule_set(self, base_price):
        data = self.validated_data
        return TarpaulinRuleSet(
            base_price=data.get('basePrice', base_price),
            eyelet_price=data['eyeletPrice'],
            rope_price=data['ropePrice'],
            stand_price=data['standPrice'],
        )


class LaminationRulesSerializer(AliasedInputSerializer):
    aliases = {'sizes': 'sizeMultipliers'}

    basePrice = _rate_field(required=False)
    sizeMultipliers = serializers.DictField(child=_rate_field(), required=False, default=dict)

    def to_rule_set(self, base_price):
        data = self.validated_data
        return LaminationRuleSet(
            base_price=data.get('basePrice', base_price),
            size_multipliers=data['sizeMultipliers'],
        )


RULE_SET_SERIALIZERS = {
    ServiceType.DOCUMENT: DocumentRulesSerializer,
    ServiceType.TARPAULIN: TarpaulinRulesSerializer,
    ServiceType.LAMINATION: LaminationRulesSerializer,
}


def load_rule_set(service_type, pricing_rules, base_price=None):
    """
    Validate a service's ``pricing_rules`` JSON into a typed rule set.

    Args:
        service_type: One of ServiceType
        pricing_rules: The rules dict stored on the service (ignored for
            standard services)
        base_price: The service's own base price; the flat price of a
            standard service and the fallback ``basePrice`` for tarpaulin
            and lamination rules

    Returns:
        DocumentRuleSet, TarpaulinRuleSet, LaminationRuleSet or StandardRuleSet

    Raises:
        InvalidRuleSet: If the rules are missing, malformed or negative
    """
    try:
        service_type = ServiceType(service_type)
    except ValueError:
        raise InvalidRuleSet('type', f"Unknown service type '{service_type}'.")

    if base_price is not None and Decimal(str(base_price)) < 0:
        raise InvalidRuleSet('base_price', 'Must not be negative.')

    if service_type == ServiceType.STANDARD:
        if base_price is None:
            raise InvalidRuleSet('base_price', 'Standard services need a base price.')
        return StandardRuleSet(base_price=base_price)

    if not isinstance(pricing_rules, dict):
        raise InvalidRuleSet('pricing_rules', f'{service_type.label} services need pricing rules.')

    serializer = RULE_SET_SERIALIZERS[service_type](data=pricing_rules)
    if not serializer.is_valid():
        raise InvalidRuleSet(*_first_error(serializer.errors, 'pricing_rules'))

    if service_type != ServiceType.DOCUMENT and base_price is None and 'basePrice' not in serializer.validated_data:
        raise InvalidRuleSet('pricing_rules.basePrice', 'This field is required.')

    return serializer.to_rule_set(base_price)
