from django.conf import settings
from django.db import models

APPROVAL_PENDING = 'pending'
APPROVAL_APPROVED = 'approved'
APPROVAL_DECLINED = 'declined'

APPROVAL_CHOICES = [
    (APPROVAL_PENDING, 'Pending'),
    (APPROVAL_APPROVED, 'Approved'),
    (APPROVAL_DECLINED, 'Declined'),
]


class ConfirmedOrderBase(models.Model):
    """
    A settled transaction as recorded at the warehouse gate: weighbridge
    readings, lab results for the lot, the rate, and every deduction taken
    off the gross amount.
    """
    invoice_number = models.CharField(max_length=64, unique=True)
    unique_id = models.CharField(max_length=64, unique=True, blank=True, null=True)
    is_trashed = models.BooleanField(default=False)

    transaction_date = models.DateField()
    state = models.CharField(max_length=100, blank=True, default='')
    location = models.CharField(max_length=255, blank=True, default='')
    warehouse_name = models.CharField(max_length=255, blank=True, default='')
    chamber_no = models.CharField(max_length=50, blank=True, default='')
    commodity = models.CharField(max_length=100)
    variety = models.CharField(max_length=100, blank=True, default='')
    gate_pass_no = models.CharField(max_length=50, blank=True, default='')
    vehicle_no = models.CharField(max_length=50)
    weight_slip_no = models.CharField(max_length=50, blank=True, default='')

    # Weighbridge: gross is vehicle plus goods, tare is the empty vehicle
    gross_weight_mt = models.DecimalField(max_digits=14, decimal_places=4, default=0)
    tare_weight_mt = models.DecimalField(max_digits=14, decimal_places=4, default=0)
    no_of_bags = models.PositiveIntegerField(default=0)
    net_weight_mt = models.DecimalField(max_digits=14, decimal_places=4)
    rate_per_mt = models.DecimalField(max_digits=14, decimal_places=2)
    gross_amount = models.DecimalField(max_digits=16, decimal_places=2)

    # Lab results. HLW is hectolitre weight; BDOI is broken, damaged,
    # discoloured and immature grains.
    hlw_wheat = models.DecimalField(max_digits=10, decimal_places=4, default=0)
    excess_hlw = models.DecimalField(max_digits=10, decimal_places=4, default=0)
    deduction_amount_hlw = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    moisture_moi = models.DecimalField(max_digits=10, decimal_places=4, default=0)
    excess_moisture = models.DecimalField(max_digits=10, decimal_places=4, default=0)
    bdoi = models.DecimalField(max_digits=10, decimal_places=4, default=0)
    excess_bdoi = models.DecimalField(max_digits=10, decimal_places=4, default=0)
    moi_bdoi = models.DecimalField(max_digits=10, decimal_places=4, default=0)
    weight_deduction_kg = models.DecimalField(max_digits=14, decimal_places=3, default=0)
    deduction_amount_moi_bdoi = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    other_deductions = models.JSONField(default=list, blank=True)

    total_deduction = models.DecimalField(max_digits=16, decimal_places=2, default=0)
    net_amount = models.DecimalField(max_digits=16, decimal_places=2)

    quality_report = models.JSONField(default=dict, blank=True)
    delivery_location = models.CharField(max_length=255, blank=True, default='')
    remarks = models.TextField(blank=True, default='')
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, blank=True, null=True, related_name='+',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ['-created_at']

    def normalize(self):
        """Hook for per-model cleanup; bulk inserts call it since they skip save()."""
        return self

    def save(self, *args, **kwargs):
        self.normalize()
        return super().save(*args, **kwargs)


class ConfirmedSalesOrder(ConfirmedOrderBase):
    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='confirmed_sales_orders',
    )
    seller_name = models.CharField(max_length=255, blank=True, default='')

    approval_status = models.CharField(max_length=10, choices=APPROVAL_CHOICES, default=APPROVAL_PENDING)
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, blank=True, null=True, related_name='+',
    )
    approved_at = models.DateTimeField(blank=True, null=True)
    declined_reason = models.TextField(blank=True, default='')

    class Meta(ConfirmedOrderBase.Meta):
        indexes = [
            models.Index(fields=['-updated_at'], name='confirmed_o_updated_5b7e2c_idx'),
            models.Index(fields=['customer', 'approval_status'], name='confirmed_o_custome_a41d9e_idx'),
        ]

    def normalize(self):
        self.commodity = (self.commodity or '').strip().upper()
        self.variety = (self.variety or '').strip().upper()
        self.state = (self.state or '').strip().upper()
        return self

    def __str__(self):
        return f"Sale {self.invoice_number} {self.commodity} {self.net_weight_mt} MT"


class ConfirmedPurchaseOrder(ConfirmedOrderBase):
    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='confirmed_purchase_orders',
    )
    supplier_name = models.CharField(max_length=255, blank=True, default='')

    def __str__(self):
        return f"Purchase {self.invoice_number} {self.commodity} {self.net_weight_mt} MT"
