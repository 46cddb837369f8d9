from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import IsAdmin, IsCashier, IsShopStaff
from apps.pricing.exceptions import InvalidRuleSet, InvalidSpecification
from .models import Order
from .serializers import (
    OrderSerializer,
    OrderItemSerializer,
    OrderDetailSerializer,
    OrderErrorSerializer,
    # Input serializers
    OrderFilterSerializer,
    OrderCreateSerializer,
    OrderStatusInputSerializer,
    OrderPaymentInputSerializer,
)
from .services import (
    create_order,
    update_order_status,
    update_order_payment,
    delete_order,
    EmptyOrderError,
    OrderNumberAllocationFailed,
    OrderNumberUnavailable,
    PriceMismatch,
    ServiceUnavailableError,
)


class OrderPagination(PageNumberPagination):
    """Custom pagination for orders."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _error_response(field, message):
    return Response(
        {'error': message, 'field': field},
        status=status.HTTP_400_BAD_REQUEST
    )


class OrderViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet
):
    """
    ViewSet for orders.

    list: Active orders, newest first (filterable by status/payment/date)
    retrieve: One order with its items
    create: Price the cart server side and create the order (admin, cashier)
    items: The order's items
    status: Change workflow status (any shop role)
    payment: Record payment (admin, cashier)
    destroy: Soft delete (admin)
    """

    queryset = Order.active.select_related('created_by')
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated, IsShopStaff]
    pagination_class = OrderPagination

    def get_permissions(self):
        """Use different permissions for different actions."""
        if self.action in ['create', 'payment']:
            return [IsAuthenticated(), IsCashier()]
        elif self.action == 'destroy':
            return [IsAuthenticated(), IsAdmin()]
        return super().get_permissions()

    def get_queryset(self):
        """Filter orders using input serializer validation."""
        queryset = super().get_queryset()
        if self.action != 'list':
            return queryset

        filter_serializer = OrderFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if 'status' in params:
            queryset = queryset.filter(status=params['status'])
        if 'payment_status' in params:
            queryset = queryset.filter(payment_status=params['payment_status'])
        if 'date_from' in params:
            queryset = queryset.filter(created_at__date__gte=params['date_from'])
        if 'date_to' in params:
            queryset = queryset.filter(created_at__date__lte=params['date_to'])

        return queryset

    def get_serializer_class(self):
        if self.action == 'create':
            return OrderCreateSerializer
        return OrderSerializer

    def _detail(self, order, items):
        return OrderDetailSerializer({'order': order, 'items': items}).data

    @extend_schema(
        request=OrderCreateSerializer,
        responses={201: OrderDetailSerializer, 400: OrderErrorSerializer},
    )
    def create(self, request, *args, **kwargs):
        """
        Create an order from a checked-out cart.

        POST /api/orders/
        Every amount is recomputed on the server; a mismatch is rejected.
        """
        input_serializer = OrderCreateSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            order, items = create_order(
                created_by=request.user,
                **input_serializer.validated_data
            )
        except (InvalidSpecification, InvalidRuleSet, ServiceUnavailableError, PriceMismatch) as e:
            return _error_response(e.field, e.message)
        except EmptyOrderError as e:
            return _error_response('items', str(e))
        except OrderNumberAllocationFailed:
            raise OrderNumberUnavailable()

        return Response(self._detail(order, items), status=status.HTTP_201_CREATED)

    @extend_schema(responses=OrderDetailSerializer)
    def retrieve(self, request, *args, **kwargs):
        """
        Get an order with its items.

        GET /api/orders/{id}/
        """
        order = self.get_object()
        items = order.items.select_related('service')
        return Response(self._detail(order, items))

    @extend_schema(responses=OrderItemSerializer(many=True))
    @action(detail=True, methods=['get'])
    def items(self, request, pk=None):
        """
        Get all items of this order.

        GET /api/orders/{id}/items/
        """
        order = self.get_object()
        serializer = OrderItemSerializer(order.items.select_related('service'), many=True)
        return Response(serializer.data)

    @extend_schema(request=OrderStatusInputSerializer, responses=OrderSerializer)
    @action(detail=True, methods=['patch'], url_path='status')
    def set_status(self, request, pk=None):
        """
        Change the workflow status.

        PATCH /api/orders/{id}/status/
        Body: {"status": "in_progress"}
        """
        order = self.get_object()

        input_serializer = OrderStatusInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        order = update_order_status(order=order, status=input_serializer.validated_data['status'])
        return Response(OrderSerializer(order).data)

    @extend_schema(request=OrderPaymentInputSerializer, responses=OrderSerializer)
    @action(detail=True, methods=['patch'])
    def payment(self, request, pk=None):
        """
        Record payment.

        PATCH /api/orders/{id}/payment/
        Body: {"payment_method": "cash", "payment_status": "paid"}
        """
        order = self.get_object()

        input_serializer = OrderPaymentInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        order = update_order_payment(order=order, **input_serializer.validated_data)
        return Response(OrderSerializer(order).data)

    def perform_destroy(self, instance):
        """Soft delete: the order number stays taken."""
        delete_order(order=instance)
