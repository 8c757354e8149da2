from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from core.units import UNIT_CHOICES
from offers.serializers import OfferSerializer, party_card

from .models import Order, PurchaseOrder, SaleOrder


def contact_card(user):
    if user is None:
        return None
    return {
        'id': user.id,
        'name': user.display_name,
        'email': user.email,
        'mobile_number': user.mobile_number,
    }


# ---------- TRADE ORDERS (read) ----------
class OrderSerializer(serializers.ModelSerializer):
    offer = OfferSerializer(read_only=True)
    buyer = serializers.SerializerMethodField()
    logistics_provider = serializers.SerializerMethodField()
    quantity_quintals = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    gross_amount = serializers.DecimalField(max_digits=16, decimal_places=2, read_only=True)
    net_amount = serializers.DecimalField(max_digits=16, decimal_places=2, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'offer', 'buyer', 'quantity_mt', 'quantity_quintals',
            'final_price_per_quintal', 'gross_amount', 'deduction_amount', 'net_amount',
            'status', 'sauda_confirmation_date', 'logistics_provider',
            'created_at', 'updated_at',
        ]

    def get_buyer(self, obj):
        return party_card(obj.buyer)

    def get_logistics_provider(self, obj):
        provider = obj.logistics_provider
        if provider is None:
            return None
        return {'id': provider.id, 'company_name': provider.company_name, 'mobile_number': provider.mobile_number}


# ---------- TRADE ORDERS (write payloads) ----------
class TradeOrderRequestSerializer(serializers.Serializer):
    offer_id = serializers.IntegerField()
    quantity_mt = serializers.DecimalField(max_digits=12, decimal_places=3)
    quantity_unit = serializers.ChoiceField(choices=UNIT_CHOICES, required=False, default='MT')
    final_price_per_quintal = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)


class AdminTradeOrderRequestSerializer(TradeOrderRequestSerializer):
    buyer_id = serializers.IntegerField()
    status = serializers.ChoiceField(choices=[c[0] for c in Order.STATUS_CHOICES], required=False, default='Pending Approval')
    deduction_amount = serializers.DecimalField(max_digits=14, decimal_places=2, required=False, default=Decimal('0'))


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[c[0] for c in Order.STATUS_CHOICES])


class FinalizeSerializer(serializers.Serializer):
    deduction_amount = serializers.DecimalField(max_digits=14, decimal_places=2, required=False, default=Decimal('0'))


class AssignLogisticsSerializer(serializers.Serializer):
    logistics_provider_id = serializers.IntegerField()


# ---------- PURCHASE / SALE ORDERS ----------
class _PositiveQuantityMixin:
    def validate_quantity_mt(self, value: Decimal) -> Decimal:
        if value <= 0:
            raise serializers.ValidationError('Quantity must be greater than zero.')
        return value


class PurchaseOrderSerializer(_PositiveQuantityMixin, serializers.ModelSerializer):
    buyer = serializers.SerializerMethodField()
    expected_value = serializers.DecimalField(max_digits=16, decimal_places=2, read_only=True, allow_null=True)

    class Meta:
        model = PurchaseOrder
        fields = [
            'id', 'buyer', 'commodity', 'variety', 'quantity_mt',
            'expected_price_per_quintal', 'expected_value', 'quality_requirements',
            'delivery_location', 'delivery_timeline_days', 'payment_terms',
            'status', 'notes', 'created_at', 'updated_at',
        ]
        read_only_fields = ('created_at', 'updated_at')

    def get_buyer(self, obj):
        return contact_card(obj.buyer)

    def validate_expected_price_per_quintal(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError('Expected price must be greater than zero.')
        return value


class SaleOrderSerializer(_PositiveQuantityMixin, serializers.ModelSerializer):
    seller = serializers.SerializerMethodField()
    total_value = serializers.DecimalField(max_digits=16, decimal_places=2, read_only=True)

    class Meta:
        model = SaleOrder
        fields = [
            'id', 'seller', 'commodity', 'variety', 'quantity_mt', 'price_per_quintal',
            'total_value', 'quality_report', 'delivery_location', 'sauda_confirmation_date',
            'delivery_timeline_days', 'payment_terms', 'status', 'notes',
            'created_at', 'updated_at',
        ]
        read_only_fields = ('created_at', 'updated_at')

    def get_seller(self, obj):
        return contact_card(obj.seller)

    def validate_price_per_quintal(self, value: Decimal) -> Decimal:
        if value <= 0:
            raise serializers.ValidationError('Price must be greater than zero.')
        return value
