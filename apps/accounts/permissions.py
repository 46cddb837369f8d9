"""
Role-based permission classes shared by the shop apps.

Usage:
    class OrderViewSet(viewsets.ModelViewSet):
        def get_permissions(self):
            if self.action == 'create':
                return [IsAuthenticated(), IsCashier()]
            return super().get_permissions()
"""
from rest_framework.permissions import BasePermission

from .models import Role


class HasRole(BasePermission):
    """Allow access only to users whose role is in ``allowed_roles``."""

    allowed_roles = ()
    message = 'Your role does not allow this action.'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return user.role in self.allowed_roles


class IsAdmin(HasRole):
    allowed_roles = (Role.ADMIN,)
    message = 'Only admins can perform this action.'


class IsCashier(HasRole):
    """Admins and cashiers (can take orders and payments)."""
    allowed_roles = (Role.ADMIN, Role.CASHIER)


class IsShopStaff(HasRole):
    """Any shop role (can move orders through production)."""
    allowed_roles = (Role.ADMIN, Role.CASHIER, Role.STAFF)
