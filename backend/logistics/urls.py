from rest_framework.routers import SimpleRouter

from .views import LogisticsProviderViewSet, LogisticsShipmentViewSet

router = SimpleRouter()
router.register(r'logistics', LogisticsProviderViewSet, basename='logistics')
router.register(r'logistics-shipments', LogisticsShipmentViewSet, basename='logistics-shipments')

urlpatterns = router.urls
