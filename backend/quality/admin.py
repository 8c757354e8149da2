from django.contrib import admin

from .models import QualityDeduction, QualityParameter


@admin.register(QualityParameter)
class QualityParameterAdmin(admin.ModelAdmin):
    list_display = ("commodity", "param_name", "unit", "standard")
    list_filter = ("commodity",)
    search_fields = ("commodity", "param_name")


@admin.register(QualityDeduction)
class QualityDeductionAdmin(admin.ModelAdmin):
    list_display = ("order", "parameter", "measured_value", "standard_value", "deduction_percentage", "deduction_amount")
    list_select_related = ("parameter",)
    readonly_fields = ("created_by", "created_at")
