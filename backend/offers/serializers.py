from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from accounts.models import CustomUser

from .models import Offer


def party_card(user):
    """Minimal counterparty block embedded in order and offer payloads."""
    if user is None:
        return None
    return {'id': user.id, 'name': user.display_name}


class OfferSerializer(serializers.ModelSerializer):
    seller = serializers.SerializerMethodField(read_only=True)
    seller_id = serializers.PrimaryKeyRelatedField(
        source='seller', queryset=CustomUser.objects.all(), required=False, write_only=True,
    )
    quantity_quintals = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    total_value = serializers.DecimalField(max_digits=16, decimal_places=2, read_only=True)

    class Meta:
        model = Offer
        fields = [
            'id', 'seller', 'seller_id', 'commodity', 'variety',
            'quantity_mt', 'quantity_quintals', 'price_per_quintal', 'total_value',
            'location', 'quality_report', 'status', 'min_trade_quantity_mt',
            'payment_terms', 'offer_validity_days', 'delivery_location',
            'sauda_confirmation_date', 'logistics_option', 'delivery_timeline_days',
            'created_at', 'updated_at',
        ]
        read_only_fields = ('created_at', 'updated_at')

    def get_seller(self, obj):
        return party_card(obj.seller)

    def validate_quantity_mt(self, value: Decimal) -> Decimal:
        if value <= 0:
            raise serializers.ValidationError('Quantity must be greater than zero.')
        return value

    def validate_price_per_quintal(self, value: Decimal) -> Decimal:
        if value <= 0:
            raise serializers.ValidationError('Price must be greater than zero.')
        return value

    def validate_min_trade_quantity_mt(self, value: Decimal) -> Decimal:
        if value < 0:
            raise serializers.ValidationError('Minimum trade quantity cannot be negative.')
        return value

    def validate(self, attrs):
        qty = attrs.get('quantity_mt', getattr(self.instance, 'quantity_mt', None))
        min_qty = attrs.get('min_trade_quantity_mt', getattr(self.instance, 'min_trade_quantity_mt', None))
        if qty is not None and min_qty is not None and min_qty > qty:
            raise serializers.ValidationError(
                {'min_trade_quantity_mt': 'Minimum trade quantity cannot exceed the offered quantity.'}
            )
        return attrs
