from django.conf import settings
from django.db import models


class QualityParameter(models.Model):
    """A graded quality attribute of a commodity and its accepted standard."""
    commodity = models.CharField(max_length=100)
    param_name = models.CharField(max_length=100)
    unit = models.CharField(max_length=20)
    # Free text: "14", "16-17", "6%-8%"
    standard = models.CharField(max_length=50)
    remarks = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['commodity', 'param_name']
        indexes = [
            models.Index(fields=['commodity'], name='quality_qua_commodi_2f6a1d_idx'),
        ]

    def __str__(self):
        return f"{self.commodity}: {self.param_name} ({self.standard} {self.unit})"


class QualityDeduction(models.Model):
    order = models.ForeignKey('orders.Order', on_delete=models.CASCADE, related_name='quality_deductions')
    parameter = models.ForeignKey(QualityParameter, on_delete=models.PROTECT, related_name='deductions')
    measured_value = models.DecimalField(max_digits=12, decimal_places=3)
    standard_value = models.DecimalField(max_digits=12, decimal_places=3)
    deduction_percentage = models.DecimalField(max_digits=9, decimal_places=4)
    deduction_amount = models.DecimalField(max_digits=14, decimal_places=2)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, blank=True, null=True, related_name='+',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['order', 'parameter__param_name']

    def __str__(self):
        return f"Order #{self.order_id} {self.parameter.param_name}: {self.deduction_percentage}%"
