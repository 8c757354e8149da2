from __future__ import annotations

import re
from decimal import Decimal

from django.utils import timezone
from rest_framework import serializers

from orders.models import Order

from .models import LogisticsProvider, LogisticsShipment

PAN_RE = re.compile(r'^[A-Z]{5}[0-9]{4}[A-Z]$')
GSTIN_RE = re.compile(r'^[0-9]{2}[A-Z0-9]{13}$')


class LogisticsProviderSerializer(serializers.ModelSerializer):
    service_areas = serializers.ListField(child=serializers.CharField(max_length=100), required=False)
    vehicle_types = serializers.ListField(child=serializers.CharField(max_length=50), required=False)

    class Meta:
        model = LogisticsProvider
        fields = "__all__"
        read_only_fields = ("created_at", "updated_at")

    def validate_mobile_number(self, value: str) -> str:
        digits = re.sub(r'[\s-]', '', value or '')
        if digits.startswith('+91'):
            digits = digits[3:]
        if not digits.isdigit() or len(digits) != 10:
            raise serializers.ValidationError('Mobile number must be 10 digits')
        return digits

    def validate_rate_per_km(self, value: Decimal) -> Decimal:
        if value < 0:
            raise serializers.ValidationError('Rate per km cannot be negative')
        return value

    def validate_pan_number(self, value):
        if not value:
            return value
        value = value.strip().upper()
        if not PAN_RE.match(value):
            raise serializers.ValidationError('Invalid PAN format')
        return value

    def validate_gst_number(self, value):
        if not value:
            return value
        value = value.strip().upper()
        if not GSTIN_RE.match(value):
            raise serializers.ValidationError('Invalid GST number format')
        return value


class LogisticsShipmentSerializer(serializers.ModelSerializer):
    order_id = serializers.PrimaryKeyRelatedField(source='order', queryset=Order.objects.all())
    tracking_updates = serializers.ListField(child=serializers.DictField(), required=False)

    class Meta:
        model = LogisticsShipment
        fields = [
            'id', 'order_id', 'transporter_name', 'vehicle_number', 'driver_name', 'driver_contact',
            'pickup_location', 'delivery_location', 'pickup_date', 'expected_delivery_date',
            'actual_delivery_date', 'status', 'tracking_updates', 'created_at', 'updated_at',
        ]
        read_only_fields = ('created_at', 'updated_at')

    def validate_vehicle_number(self, value: str) -> str:
        return re.sub(r'\s+', '', value or '').upper()

    def validate(self, attrs):
        pickup = attrs.get('pickup_date', getattr(self.instance, 'pickup_date', None))
        expected = attrs.get('expected_delivery_date', getattr(self.instance, 'expected_delivery_date', None))
        if pickup and expected and expected < pickup:
            raise serializers.ValidationError(
                {'expected_delivery_date': 'Expected delivery date cannot be before the pickup date'}
            )
        # A delivered shipment always carries its delivery date
        if attrs.get('status') == LogisticsShipment.DELIVERED and not attrs.get('actual_delivery_date'):
            if not getattr(self.instance, 'actual_delivery_date', None):
                attrs['actual_delivery_date'] = timezone.localdate()
        return attrs
