from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'catalog'

router = DefaultRouter()
router.register(r'', views.ServiceViewSet, basename='service')

urlpatterns = [
    # GET    /api/services/       - List services
    # POST   /api/services/       - Create service (admin)
    # GET    /api/services/{id}/  - Service details with pricing rules
    # PATCH  /api/services/{id}/  - Update service (admin)
    # DELETE /api/services/{id}/  - Deactivate service (admin)
    path('', include(router.urls)),
]
