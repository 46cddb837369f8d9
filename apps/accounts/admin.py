# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User, Role


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for shop accounts.

    Provides:
    - Account listing with role badges
    - Filtering by role and status
    - Bulk activate/deactivate
    """

    list_display = [
        'username',
        'name',
        'role_badge',
        'is_active',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'role',
        'is_active',
        'is_staff',
        'is_superuser',
    ]

    search_fields = [
        'username',
        'name',
    ]

    ordering = ['username']

    fieldsets = (
        ('Basic Information', {
            'fields': ('username', 'name', 'role', 'password')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('username', 'name', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = [
        'created_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def role_badge(self, obj):
        """Display role as colored badge."""
        colors = {
            Role.ADMIN: '#B85C5C',
            Role.CASHIER: '#6B8E5E',
            Role.STAFF: '#A47449',
        }
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            colors.get(obj.role, '#ccc'), obj.get_role_display()
        )
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role'

    actions = [
        'make_cashier',
        'make_staff',
        'deactivate_users',
    ]

    def _set_role(self, request, queryset, role):
        # Superusers stay admins
        count = queryset.filter(is_superuser=False).update(role=role)
        self.message_user(request, f'{count} account(s) set to {role.label}.')

    @admin.action(description='Set role: cashier')
    def make_cashier(self, request, queryset):
        self._set_role(request, queryset, Role.CASHIER)

    @admin.action(description='Set role: staff')
    def make_staff(self, request, queryset):
        self._set_role(request, queryset, Role.STAFF)

    @admin.action(description='Deactivate selected accounts')
    def deactivate_users(self, request, queryset):
        """Deactivated accounts can no longer log in; their orders stay."""
        count = queryset.filter(is_superuser=False).update(is_active=False)
        self.message_user(request, f'Deactivated {count} account(s).')
