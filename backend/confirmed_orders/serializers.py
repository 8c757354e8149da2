from __future__ import annotations

import json
import logging

from django.utils import timezone
from django.utils.crypto import get_random_string
from rest_framework import serializers

from accounts.models import CUSTOMER_ROLES, CustomUser
from orders.serializers import contact_card

from .models import ConfirmedPurchaseOrder, ConfirmedSalesOrder
from .services.totals import TOTAL_INPUTS, clean_other_deductions, compute_totals

logger = logging.getLogger(__name__)

BASE_FIELDS = [
    'id', 'customer', 'customer_id', 'invoice_number', 'unique_id', 'transaction_date', 'state',
    'location', 'warehouse_name', 'chamber_no', 'commodity', 'variety', 'gate_pass_no', 'vehicle_no',
    'weight_slip_no', 'gross_weight_mt', 'tare_weight_mt', 'no_of_bags', 'net_weight_mt', 'rate_per_mt',
    'gross_amount', 'hlw_wheat', 'excess_hlw', 'deduction_amount_hlw', 'moisture_moi', 'excess_moisture',
    'bdoi', 'excess_bdoi', 'moi_bdoi', 'weight_deduction_kg', 'deduction_amount_moi_bdoi',
    'other_deductions', 'total_deduction', 'net_amount', 'quality_report', 'delivery_location',
    'remarks', 'created_by', 'created_at', 'updated_at',
]


def _user_card(user):
    if user is None:
        return None
    return {'id': user.id, 'name': user.display_name, 'email': user.email}


class ConfirmedOrderSerializer(serializers.ModelSerializer):
    customer = serializers.SerializerMethodField()
    customer_id = serializers.PrimaryKeyRelatedField(
        source='customer',
        queryset=CustomUser.objects.filter(role__in=CUSTOMER_ROLES),
        write_only=True,
        required=False,
    )
    created_by = serializers.SerializerMethodField()
    other_deductions = serializers.ListField(child=serializers.DictField(), required=False)

    id_prefix = None

    class Meta:
        fields = BASE_FIELDS
        read_only_fields = ('total_deduction', 'net_amount', 'created_at', 'updated_at')

    def get_customer(self, obj):
        return contact_card(obj.customer)

    def get_created_by(self, obj):
        return _user_card(obj.created_by)

    def validate_other_deductions(self, value):
        try:
            return clean_other_deductions(value)
        except ValueError as e:
            raise serializers.ValidationError(str(e))

    def validate(self, attrs):
        if self.instance is None or any(k in attrs for k in TOTAL_INPUTS):
            def current(key):
                if key in attrs:
                    return attrs[key]
                return getattr(self.instance, key, None) if self.instance is not None else None

            attrs['total_deduction'], attrs['net_amount'] = compute_totals(
                current('gross_amount'),
                current('deduction_amount_hlw'),
                current('deduction_amount_moi_bdoi'),
                current('other_deductions'),
            )
        return attrs

    def create(self, validated_data):
        if not validated_data.get('unique_id'):
            stamp = timezone.now().strftime('%Y%m%d%H%M%S')
            validated_data['unique_id'] = f'{self.id_prefix}-{stamp}-{get_random_string(6).upper()}'
        return super().create(validated_data)


class ConfirmedSalesOrderSerializer(ConfirmedOrderSerializer):
    approved_by = serializers.SerializerMethodField()
    id_prefix = 'SO'

    class Meta(ConfirmedOrderSerializer.Meta):
        model = ConfirmedSalesOrder
        fields = BASE_FIELDS + ['seller_name', 'approval_status', 'approved_by', 'approved_at', 'declined_reason']
        read_only_fields = ConfirmedOrderSerializer.Meta.read_only_fields + (
            'approval_status', 'approved_at', 'declined_reason',
        )

    def get_approved_by(self, obj):
        return _user_card(obj.approved_by)


class ConfirmedPurchaseOrderSerializer(ConfirmedOrderSerializer):
    id_prefix = 'PO'

    class Meta(ConfirmedOrderSerializer.Meta):
        model = ConfirmedPurchaseOrder
        fields = BASE_FIELDS + ['supplier_name']


class ApprovalDecisionSerializer(serializers.Serializer):
    status = serializers.CharField()
    reason = serializers.CharField(required=False, allow_blank=True, default='')


class BulkUploadSerializer(serializers.Serializer):
    file = serializers.FileField()
    columnMapping = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)

    def validate_columnMapping(self, value):
        """A missing or unreadable mapping falls back to the default headers."""
        if not value:
            return {}
        try:
            mapping = json.loads(value)
        except ValueError:
            logger.warning("Ignoring unreadable columnMapping: %.200s", value)
            return {}
        if not isinstance(mapping, dict):
            logger.warning("Ignoring columnMapping that is not an object: %.200s", value)
            return {}
        return mapping
