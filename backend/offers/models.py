from django.conf import settings
from django.db import models

from core.units import gross_amount, quintals

PAYMENT_TERMS_CHOICES = [
    ('Advance', 'Advance'),
    ('T+3 Days', 'T+3 Days'),
    ('Against Delivery', 'Against Delivery'),
]


class Offer(models.Model):
    STATUS_CHOICES = [('Active', 'Active'), ('Sold', 'Sold'), ('Inactive', 'Inactive')]
    LOGISTICS_CHOICES = [
        ('Seller Arranged', 'Seller Arranged'),
        ('Buyer Arranged', 'Buyer Arranged'),
        ('Platform Arranged', 'Platform Arranged'),
    ]

    seller = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='offers')
    commodity = models.CharField(max_length=100)
    variety = models.CharField(max_length=100)
    quantity_mt = models.DecimalField(max_digits=12, decimal_places=3)
    price_per_quintal = models.DecimalField(max_digits=12, decimal_places=2)
    location = models.CharField(max_length=255)
    quality_report = models.JSONField(default=dict, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='Active')
    min_trade_quantity_mt = models.DecimalField(max_digits=12, decimal_places=3, default=0)
    payment_terms = models.CharField(max_length=20, choices=PAYMENT_TERMS_CHOICES, default='Against Delivery')
    offer_validity_days = models.PositiveIntegerField(default=30)
    delivery_location = models.CharField(max_length=255)
    sauda_confirmation_date = models.DateField(blank=True, null=True)
    logistics_option = models.CharField(max_length=20, choices=LOGISTICS_CHOICES, default='Platform Arranged')
    delivery_timeline_days = models.PositiveIntegerField(default=7)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', '-created_at'], name='offers_offe_status_6c1b2e_idx'),
            models.Index(fields=['commodity'], name='offers_offe_commodi_9a7f3d_idx'),
        ]

    @property
    def quantity_quintals(self):
        return quintals(self.quantity_mt)

    @property
    def total_value(self):
        return gross_amount(self.quantity_mt, self.price_per_quintal)

    def __str__(self):
        return f"{self.commodity} {self.variety} - {self.quantity_mt} MT @ {self.price_per_quintal}/qtl"
