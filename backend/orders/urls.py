from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import (
    AdminCustomersView,
    AdminPurchaseOrderView,
    AdminSaleOrderView,
    AdminTradeOrderView,
    OrderViewSet,
    PurchaseOrderViewSet,
    SaleOrderViewSet,
)

router = SimpleRouter()
router.register(r'orders', OrderViewSet, basename='orders')
router.register(r'purchase-orders', PurchaseOrderViewSet, basename='purchase-orders')
router.register(r'sale-orders', SaleOrderViewSet, basename='sale-orders')

urlpatterns = [
    path('admin/orders/customers', AdminCustomersView.as_view(), name='admin-order-customers'),
    path('admin/orders/trade-order', AdminTradeOrderView.as_view(), name='admin-trade-order'),
    path('admin/orders/purchase-order', AdminPurchaseOrderView.as_view(), name='admin-purchase-order'),
    path('admin/orders/sale-order', AdminSaleOrderView.as_view(), name='admin-sale-order'),
]
urlpatterns += router.urls
