from django.contrib import admin

from .models import Order, PurchaseOrder, SaleOrder


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "offer", "buyer", "quantity_mt", "final_price_per_quintal", "deduction_amount", "status", "created_at")
    list_filter = ("status", "created_at")
    search_fields = ("buyer__name", "offer__commodity", "offer__seller__name")
    date_hierarchy = "created_at"
    readonly_fields = ("created_by", "created_at", "updated_at")

    def get_readonly_fields(self, request, obj=None):
        ro = list(super().get_readonly_fields(request, obj))
        if obj and obj.is_final:
            # completed and rejected orders are closed
            for f in obj._meta.fields:
                if f.name not in ro:
                    ro.append(f.name)
        return ro


@admin.register(PurchaseOrder)
class PurchaseOrderAdmin(admin.ModelAdmin):
    list_display = ("id", "buyer", "commodity", "variety", "quantity_mt", "expected_price_per_quintal", "status", "updated_at")
    list_filter = ("status", "payment_terms", "commodity")
    search_fields = ("buyer__name", "commodity", "variety", "delivery_location")


@admin.register(SaleOrder)
class SaleOrderAdmin(admin.ModelAdmin):
    list_display = ("id", "seller", "commodity", "variety", "quantity_mt", "price_per_quintal", "status", "updated_at")
    list_filter = ("status", "payment_terms", "commodity")
    search_fields = ("seller__name", "commodity", "variety", "delivery_location")
