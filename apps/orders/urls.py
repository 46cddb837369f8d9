from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'orders'

router = DefaultRouter()
router.register(r'', views.OrderViewSet, basename='order')

urlpatterns = [
    # GET    /api/orders/               - List active orders
    # POST   /api/orders/               - Create order (admin, cashier)
    # GET    /api/orders/{id}/          - Order with items
    # GET    /api/orders/{id}/items/    - Order items
    # PATCH  /api/orders/{id}/status/   - Change status
    # PATCH  /api/orders/{id}/payment/  - Record payment (admin, cashier)
    # DELETE /api/orders/{id}/          - Soft delete (admin)
    path('', include(router.urls)),
]
