from django.contrib import admin

from .models import ConfirmedPurchaseOrder, ConfirmedSalesOrder

COMMON_LIST = ("invoice_number", "transaction_date", "customer", "commodity", "net_weight_mt", "gross_amount", "net_amount")


@admin.register(ConfirmedSalesOrder)
class ConfirmedSalesOrderAdmin(admin.ModelAdmin):
    list_display = COMMON_LIST + ("approval_status", "is_trashed")
    list_filter = ("approval_status", "is_trashed", "commodity", "state")
    search_fields = ("invoice_number", "seller_name", "vehicle_no", "customer__name")
    date_hierarchy = "transaction_date"
    readonly_fields = ("approved_by", "approved_at", "created_by", "created_at", "updated_at")


@admin.register(ConfirmedPurchaseOrder)
class ConfirmedPurchaseOrderAdmin(admin.ModelAdmin):
    list_display = COMMON_LIST + ("is_trashed",)
    list_filter = ("is_trashed", "commodity", "state")
    search_fields = ("invoice_number", "supplier_name", "vehicle_no", "customer__name")
    date_hierarchy = "transaction_date"
    readonly_fields = ("created_by", "created_at", "updated_at")
