from django.contrib import admin

from .models import Offer


@admin.register(Offer)
class OfferAdmin(admin.ModelAdmin):
    list_display = ("id", "commodity", "variety", "seller", "quantity_mt", "price_per_quintal", "status", "created_at")
    list_filter = ("status", "commodity", "payment_terms", "logistics_option")
    search_fields = ("commodity", "variety", "seller__name", "location")
    date_hierarchy = "created_at"
