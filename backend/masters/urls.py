from rest_framework.routers import SimpleRouter

from . import views

router = SimpleRouter()
router.register(r'commodity-master', views.CommodityViewSet, basename='commodity-master')
router.register(r'variety-master', views.VarietyViewSet, basename='variety-master')
router.register(r'location-master', views.LocationViewSet, basename='location-master')
router.register(r'warehouse-master', views.WarehouseViewSet, basename='warehouse-master')

urlpatterns = router.urls
