from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from core.units import gross_amount, net_amount, quintals
from core.utils import ZERO
from offers.models import PAYMENT_TERMS_CHOICES

PENDING_APPROVAL = 'Pending Approval'
APPROVED = 'Approved'
AWAITING_LOGISTICS = 'Approved - Awaiting Logistics'
COMPLETED = 'Completed'
REJECTED = 'Rejected'

REQUEST_STATUS_CHOICES = [
    ('Open', 'Open'),
    ('In Negotiation', 'In Negotiation'),
    ('Confirmed', 'Confirmed'),
    ('Completed', 'Completed'),
    ('Cancelled', 'Cancelled'),
]


class Order(models.Model):
    """A trade (sauda) struck by a buyer against a seller's offer."""
    STATUS_CHOICES = [
        (PENDING_APPROVAL, PENDING_APPROVAL),
        (APPROVED, APPROVED),
        (AWAITING_LOGISTICS, AWAITING_LOGISTICS),
        (COMPLETED, COMPLETED),
        (REJECTED, REJECTED),
    ]

    offer = models.ForeignKey('offers.Offer', on_delete=models.PROTECT, related_name='orders')
    buyer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='trade_orders')
    quantity_mt = models.DecimalField(max_digits=12, decimal_places=3)
    final_price_per_quintal = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=32, choices=STATUS_CHOICES, default=PENDING_APPROVAL)
    deduction_amount = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    sauda_confirmation_date = models.DateField(blank=True, null=True)
    logistics_provider = models.ForeignKey(
        'logistics.LogisticsProvider', on_delete=models.SET_NULL, blank=True, null=True, related_name='orders',
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, blank=True, null=True, related_name='+',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', '-created_at'], name='orders_orde_status_4e2a71_idx'),
        ]

    @property
    def quantity_quintals(self):
        return quintals(self.quantity_mt)

    @property
    def gross_amount(self):
        return gross_amount(self.quantity_mt, self.final_price_per_quintal)

    @property
    def net_amount(self):
        return net_amount(self.gross_amount, self.deduction_amount)

    @property
    def is_final(self) -> bool:
        return self.status in (COMPLETED, REJECTED)

    def save(self, *args, **kwargs):
        deduction = self.deduction_amount or ZERO
        if deduction < 0:
            raise ValidationError("Deduction amount cannot be negative.")
        if deduction > self.gross_amount:
            raise ValidationError("Deduction amount cannot exceed the gross amount of the order.")
        return super().save(*args, **kwargs)

    def __str__(self):
        return f"Order #{self.pk} {self.offer.commodity} {self.quantity_mt} MT ({self.status})"


class PurchaseOrder(models.Model):
    """A buyer's requirement: what they want to buy, where and at what price."""
    buyer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='purchase_orders')
    commodity = models.CharField(max_length=100)
    variety = models.CharField(max_length=100, blank=True, default='')
    quantity_mt = models.DecimalField(max_digits=12, decimal_places=3)
    expected_price_per_quintal = models.DecimalField(max_digits=12, decimal_places=2, blank=True, null=True)
    quality_requirements = models.JSONField(default=dict, blank=True)
    delivery_location = models.CharField(max_length=255)
    delivery_timeline_days = models.PositiveIntegerField(blank=True, null=True)
    payment_terms = models.CharField(max_length=20, choices=PAYMENT_TERMS_CHOICES, default='Against Delivery')
    status = models.CharField(max_length=20, choices=REQUEST_STATUS_CHOICES, default='Open')
    notes = models.TextField(blank=True, default='')
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, blank=True, null=True, related_name='+',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-updated_at']

    @property
    def expected_value(self):
        if self.expected_price_per_quintal is None:
            return None
        return gross_amount(self.quantity_mt, self.expected_price_per_quintal)

    def __str__(self):
        return f"PO #{self.pk} {self.commodity} {self.quantity_mt} MT"


class SaleOrder(models.Model):
    """A seller's listing of produce for sale, with its quality report."""
    seller = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='sale_orders')
    commodity = models.CharField(max_length=100)
    variety = models.CharField(max_length=100, blank=True, default='')
    quantity_mt = models.DecimalField(max_digits=12, decimal_places=3)
    price_per_quintal = models.DecimalField(max_digits=12, decimal_places=2)
    quality_report = models.JSONField(default=dict, blank=True)
    delivery_location = models.CharField(max_length=255)
    sauda_confirmation_date = models.DateField(blank=True, null=True)
    delivery_timeline_days = models.PositiveIntegerField(blank=True, null=True)
    payment_terms = models.CharField(max_length=20, choices=PAYMENT_TERMS_CHOICES, default='Against Delivery')
    status = models.CharField(max_length=20, choices=REQUEST_STATUS_CHOICES, default='Open')
    notes = models.TextField(blank=True, default='')
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, blank=True, null=True, related_name='+',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-updated_at']
        indexes = [
            models.Index(fields=['-updated_at'], name='orders_sale_updated_8d0c4b_idx'),
        ]

    @property
    def total_value(self):
        return gross_amount(self.quantity_mt, self.price_per_quintal)

    def __str__(self):
        return f"SO #{self.pk} {self.commodity} {self.quantity_mt} MT"
