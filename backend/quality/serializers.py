from rest_framework import serializers

from .models import QualityDeduction, QualityParameter


class QualityParameterSerializer(serializers.ModelSerializer):
    class Meta:
        model = QualityParameter
        fields = ['id', 'commodity', 'param_name', 'unit', 'standard', 'remarks', 'created_at', 'updated_at']
        read_only_fields = ('created_at', 'updated_at')


class QualityDeductionSerializer(serializers.ModelSerializer):
    param_name = serializers.CharField(source='parameter.param_name', read_only=True)
    unit = serializers.CharField(source='parameter.unit', read_only=True)
    standard = serializers.CharField(source='parameter.standard', read_only=True)

    class Meta:
        model = QualityDeduction
        fields = [
            'id', 'order', 'parameter', 'param_name', 'unit', 'standard',
            'measured_value', 'standard_value', 'deduction_percentage',
            'deduction_amount', 'created_at',
        ]
        read_only_fields = fields


class MeasurementSerializer(serializers.Serializer):
    parameter_id = serializers.IntegerField()
    measured_value = serializers.DecimalField(max_digits=12, decimal_places=3)
    deduction_percentage = serializers.DecimalField(
        max_digits=9, decimal_places=4, required=False, allow_null=True,
    )


class MeasurementsSerializer(serializers.Serializer):
    measurements = MeasurementSerializer(many=True, allow_empty=False)
