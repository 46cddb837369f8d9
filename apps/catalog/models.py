from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal
import uuid

from apps.pricing.choices import ServiceType
from apps.pricing.exceptions import InvalidRuleSet
from apps.pricing.serializers import load_rule_set


class ServiceCategory(models.TextChoices):
    DYNAMIC = 'dynamic', 'Dynamic'
    STANDARD = 'standard', 'Standard'


class Service(models.Model):
    """
    A sellable print shop service.

    Dynamic services (document, tarpaulin, lamination) are priced from their
    ``pricing_rules`` and the customer's specification; standard services
    sell at a flat ``base_price`` per unit.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    category = models.CharField(
        max_length=20,
        choices=ServiceCategory.choices,
        default=ServiceCategory.STANDARD
    )
    type = models.CharField(
        max_length=20,
        choices=ServiceType.choices,
        default=ServiceType.STANDARD
    )
    base_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    pricing_rules = models.JSONField(null=True, blank=True)
    active = models.BooleanField(default=True)

    # Online store presentation
    image_url = models.URLField(blank=True)
    featured = models.BooleanField(default=False)
    display_order = models.PositiveIntegerField(default=0)
    online_available = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'services'
        indexes = [
            models.Index(fields=['type', 'active'], name='services_type_active_idx'),
            models.Index(fields=['category', 'active'], name='services_category_active_idx'),
        ]
        ordering = ['display_order', 'name']

    def __str__(self):
        return f"{self.name} ({self.get_type_display()})"

    @property
    def is_dynamic(self):
        return self.type != ServiceType.STANDARD

    def get_rule_set(self):
        """
        Return the typed rule set for this service.

        Raises:
            InvalidRuleSet: If ``pricing_rules`` does not fit ``type``
        """
        return load_rule_set(self.type, self.pricing_rules, base_price=self.base_price)

    def clean(self):
        """Reject pricing rules that do not fit the service type."""
        super().clean()
        if self.is_dynamic and self.category != ServiceCategory.DYNAMIC:
            raise ValidationError({'category': 'Priced-by-specification services must be dynamic.'})
        if self.base_price is None:
            return
        try:
            self.get_rule_set()
        except InvalidRuleSet as e:
            raise ValidationError({'pricing_rules': f"{e.field}: {e.message}"})
