from django.db import models


def default_vehicle_types():
    return ['Truck', 'Mini Truck', 'Tempo']


class LogisticsProvider(models.Model):
    company_name = models.CharField(max_length=255)
    contact_person = models.CharField(max_length=255)
    mobile_number = models.CharField(max_length=20)
    email = models.EmailField(blank=True, null=True)
    pickup_city = models.CharField(max_length=100)
    delivery_city = models.CharField(max_length=100)
    service_areas = models.JSONField(default=list, blank=True)
    vehicle_types = models.JSONField(default=default_vehicle_types, blank=True)
    rate_per_km = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    kyc_verified = models.BooleanField(default=False)
    kyc_documents = models.JSONField(default=dict, blank=True)
    pan_number = models.CharField(max_length=10, blank=True, null=True)
    gst_number = models.CharField(max_length=15, blank=True, null=True)
    address = models.TextField()
    is_active = models.BooleanField(default=True)
    notes = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['company_name']

    def __str__(self):
        return f"{self.company_name} ({self.pickup_city} -> {self.delivery_city})"


class LogisticsShipment(models.Model):
    """A truck movement booked against a trade order."""
    PENDING = 'pending'
    IN_TRANSIT = 'in_transit'
    DELIVERED = 'delivered'
    CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (PENDING, 'Pending'),
        (IN_TRANSIT, 'In Transit'),
        (DELIVERED, 'Delivered'),
        (CANCELLED, 'Cancelled'),
    ]

    order = models.ForeignKey('orders.Order', on_delete=models.CASCADE, related_name='shipments')
    transporter_name = models.CharField(max_length=255, blank=True, default='')
    vehicle_number = models.CharField(max_length=50, blank=True, default='')
    driver_name = models.CharField(max_length=255, blank=True, default='')
    driver_contact = models.CharField(max_length=20, blank=True, default='')
    pickup_location = models.CharField(max_length=255)
    delivery_location = models.CharField(max_length=255)
    pickup_date = models.DateField(blank=True, null=True)
    expected_delivery_date = models.DateField(blank=True, null=True)
    actual_delivery_date = models.DateField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)
    tracking_updates = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"Shipment {self.pk} for order {self.order_id} ({self.status})"
