# ==========================================
# apps/orders/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from .models import Order, OrderItem, OrderStatus, PaymentStatus


class OrderItemInline(admin.TabularInline):
    """Inline admin for order items within an order."""
    model = OrderItem
    extra = 0
    fields = ['service', 'service_type', 'quantity', 'unit_price', 'amount', 'specifications']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        """Items are priced and created by the order intake service."""
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Admin interface for orders.

    Orders are created through the API so every amount is priced on the
    server; the admin edits workflow fields only and never hard deletes.
    """

    list_display = [
        'order_number',
        'customer_name',
        'total',
        'status_badge',
        'payment_status',
        'created_by',
        'is_active',
        'created_at',
    ]
    list_filter = ['status', 'payment_status', 'payment_method', 'is_active', 'created_at']
    search_fields = ['order_number', 'customer_name', 'notes']
    ordering = ['-created_at']
    readonly_fields = [
        'order_number',
        'subtotal',
        'discount',
        'total',
        'created_by',
        'created_at',
        'updated_at',
    ]
    inlines = [OrderItemInline]
    actions = ['mark_paid', 'mark_completed']

    def status_badge(self, obj):
        colors = {
            OrderStatus.PENDING: ('#E5C49A', '#2C1810'),
            OrderStatus.IN_PROGRESS: ('#A47449', 'white'),
            OrderStatus.READY: ('#5E7A8E', 'white'),
            OrderStatus.COMPLETED: ('#6B8E5E', 'white'),
        }
        bg, fg = colors.get(obj.status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.action(description='Mark selected orders as paid')
    def mark_paid(self, request, queryset):
        updated = queryset.update(payment_status=PaymentStatus.PAID)
        self.message_user(request, f'{updated} order(s) marked as paid.')

    @admin.action(description='Mark selected orders as completed')
    def mark_completed(self, request, queryset):
        updated = queryset.update(status=OrderStatus.COMPLETED)
        self.message_user(request, f'{updated} order(s) marked as completed.')
