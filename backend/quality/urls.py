from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import OrderQualityDeductionPreviewView, OrderQualityDeductionsView, QualityParameterViewSet

router = SimpleRouter()
router.register(r'quality/parameters', QualityParameterViewSet, basename='quality-parameters')

urlpatterns = [
    path('orders/<int:order_id>/quality-deductions/', OrderQualityDeductionsView.as_view(), name='order-quality-deductions'),
    path(
        'orders/<int:order_id>/quality-deductions/preview/',
        OrderQualityDeductionPreviewView.as_view(),
        name='order-quality-deductions-preview',
    ),
]
urlpatterns += router.urls
