from django.contrib import admin

from .models import Commodity, Location, Variety, Warehouse


@admin.register(Commodity)
class CommodityAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "category", "is_active")
    list_filter = ("is_active", "category")
    search_fields = ("name",)


@admin.register(Variety)
class VarietyAdmin(admin.ModelAdmin):
    list_display = ("id", "commodity_name", "variety_name", "is_active")
    list_filter = ("is_active", "commodity_name")
    search_fields = ("commodity_name", "variety_name")


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "is_active")
    list_filter = ("is_active",)
    search_fields = ("name",)


@admin.register(Warehouse)
class WarehouseAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "location", "is_active")
    list_filter = ("is_active", "location")
    search_fields = ("name",)
