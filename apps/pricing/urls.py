from django.urls import path
from . import views

app_name = 'pricing'

urlpatterns = [
    # POST /api/pricing/quote/ - Price a specification for a service
    path('quote/', views.quote, name='quote'),
]
