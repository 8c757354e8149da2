from django.contrib import admin

from .models import LogisticsProvider, LogisticsShipment


@admin.register(LogisticsProvider)
class LogisticsProviderAdmin(admin.ModelAdmin):
    list_display = ("id", "company_name", "contact_person", "mobile_number", "pickup_city", "delivery_city", "rate_per_km", "kyc_verified", "is_active")
    list_filter = ("is_active", "kyc_verified", "pickup_city", "delivery_city")
    search_fields = ("company_name", "contact_person", "mobile_number")


@admin.register(LogisticsShipment)
class LogisticsShipmentAdmin(admin.ModelAdmin):
    list_display = ("id", "order", "transporter_name", "vehicle_number", "pickup_location", "delivery_location", "status", "expected_delivery_date")
    list_filter = ("status",)
    search_fields = ("vehicle_number", "transporter_name", "driver_name")
