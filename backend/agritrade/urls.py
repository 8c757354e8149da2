from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('accounts.urls')),
    path('api/', include('offers.urls')),
    path('api/', include('orders.urls')),
    path('api/', include('quality.urls')),
    path('api/', include('logistics.urls')),
    path('api/', include('confirmed_orders.urls')),
    path('api/', include('masters.urls')),
    path('api/', include('core.urls')),
]
