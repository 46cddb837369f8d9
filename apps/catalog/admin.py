# ==========================================
# apps/catalog/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from .models import Service, ServiceCategory


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    """
    Admin interface for catalog services.

    Saving runs ``Service.clean``, so pricing rules that do not fit the
    service type are rejected in the form.
    """

    list_display = [
        'name',
        'type',
        'category_badge',
        'base_price',
        'active',
        'featured',
        'display_order',
    ]
    list_filter = ['type', 'category', 'active', 'featured', 'online_available']
    search_fields = ['name', 'description']
    list_editable = ['active', 'featured', 'display_order']
    ordering = ['display_order', 'name']

    fieldsets = (
        ('Service', {
            'fields': ('name', 'description', 'type', 'category', 'base_price', 'active')
        }),
        ('Pricing Rules', {
            'fields': ('pricing_rules',),
            'description': 'JSON rules for dynamic services; validated against the service type.',
        }),
        ('Online Store', {
            'fields': ('image_url', 'featured', 'display_order', 'online_available'),
            'classes': ('collapse',),
        }),
    )

    def category_badge(self, obj):
        colors = {
            ServiceCategory.DYNAMIC: '#6B8E5E',
            ServiceCategory.STANDARD: '#A47449',
        }
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            colors.get(obj.category, '#ccc'), obj.get_category_display()
        )
    category_badge.short_description = 'Category'
    category_badge.admin_order_field = 'category'
