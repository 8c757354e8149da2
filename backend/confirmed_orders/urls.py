from rest_framework.routers import SimpleRouter

from .views import ConfirmedPurchaseOrderViewSet, ConfirmedSalesOrderViewSet

router = SimpleRouter()
router.register(r'confirmed-sales-orders', ConfirmedSalesOrderViewSet, basename='confirmed-sales-orders')
router.register(r'confirmed-purchase-orders', ConfirmedPurchaseOrderViewSet, basename='confirmed-purchase-orders')

urlpatterns = router.urls
