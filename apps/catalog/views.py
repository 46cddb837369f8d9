from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from apps.accounts.permissions import IsAdmin
from .models import Service
from .serializers import ServiceSerializer, ServiceListSerializer, ServiceFilterSerializer


class ServiceViewSet(viewsets.ModelViewSet):
    """
    ViewSet for catalog services.

    list: Active services (filterable by category/type/online)
    retrieve: One service with its pricing rules
    create / update: Admin only; pricing rules are validated
    destroy: Admin only; deactivates the service
    """

    queryset = Service.objects.all()
    serializer_class = ServiceSerializer
    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        if self.action in ['create', 'update', 'partial_update', 'destroy']:
            return [IsAuthenticated(), IsAdmin()]
        return super().get_permissions()

    def get_queryset(self):
        """Filter services using input serializer validation."""
        queryset = super().get_queryset()
        if self.action != 'list':
            return queryset

        filter_serializer = ServiceFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if not params['include_inactive']:
            queryset = queryset.filter(active=True)
        if 'category' in params:
            queryset = queryset.filter(category=params['category'])
        if 'type' in params:
            queryset = queryset.filter(type=params['type'])
        if params.get('online'):
            queryset = queryset.filter(online_available=True)

        return queryset

    def get_serializer_class(self):
        if self.action == 'list':
            return ServiceListSerializer
        return ServiceSerializer

    def perform_destroy(self, instance):
        """Soft delete: order items keep referencing the service."""
        instance.active = False
        instance.save(update_fields=['active', 'updated_at'])
