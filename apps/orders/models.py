from django.core.serializers.json import DjangoJSONEncoder
from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal
import uuid


class OrderStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    IN_PROGRESS = 'in_progress', 'In Progress'
    READY = 'ready', 'Ready'
    COMPLETED = 'completed', 'Completed'


class PaymentMethod(models.TextChoices):
    CASH = 'cash', 'Cash'
    GCASH = 'gcash', 'GCash'
    CARD = 'card', 'Card'


class PaymentStatus(models.TextChoices):
    PAID = 'paid', 'Paid'
    UNPAID = 'unpaid', 'Unpaid'


WALK_IN_CUSTOMER = 'Walk-in Customer'


class ActiveOrderManager(models.Manager):
    def get_queryset(self):
        return super().get_queryset().filter(is_active=True)


class Order(models.Model):
    """
    A checked-out cart.

    ``order_number`` is unique at the database level; that constraint is
    what keeps concurrently allocated numbers apart. Orders are never hard
    deleted, so a number is never handed out twice.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order_number = models.CharField(max_length=32, unique=True, editable=False)

    # Customer (customer records live outside this app)
    customer_id = models.PositiveIntegerField(null=True, blank=True)
    customer_name = models.CharField(max_length=200, default=WALK_IN_CUSTOMER)

    # Money
    subtotal = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    discount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    total = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    # Workflow
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING
    )
    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        blank=True
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.UNPAID
    )
    notes = models.TextField(blank=True)

    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='orders_created'
    )

    # Soft delete
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = models.Manager()
    active = ActiveOrderManager()

    class Meta:
        db_table = 'orders'
        indexes = [
            models.Index(fields=['created_at'], name='orders_created_at_idx'),
            models.Index(fields=['status', 'is_active'], name='orders_status_active_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.order_number} - {self.total} ({self.customer_name})"


class OrderItem(models.Model):
    """One cart line of an order, priced by the server at intake."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='items'
    )
    service = models.ForeignKey(
        'catalog.Service',
        on_delete=models.PROTECT,
        related_name='order_items'
    )
    service_type = models.CharField(max_length=20)

    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    amount = models.DecimalField(max_digits=12, decimal_places=2)

    # Customer-provided parameters, as sent by the client
    specifications = models.JSONField(null=True, blank=True)
    # Intermediate pricing terms behind ``amount``
    breakdown = models.JSONField(encoder=DjangoJSONEncoder, default=dict, blank=True)

    class Meta:
        db_table = 'order_items'
        ordering = ['order', 'id']

    def __str__(self):
        return f"{self.service_id} x{self.quantity} = {self.amount}"
