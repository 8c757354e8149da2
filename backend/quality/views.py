
from django.shortcuts import get_object_or_404
from rest_framework import status, viewsets
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsAdminOrReadOnly, IsAdminRole
from core.exceptions import error_response
from orders.models import Order

from .models import QualityParameter
from .serializers import MeasurementsSerializer, QualityDeductionSerializer, QualityParameterSerializer
from .services.deductions import (
    DeductionError,
    apply_quality_deductions,
    compute_quality_deductions,
    summarize,
)


class QualityParameterViewSet(viewsets.ModelViewSet):
    serializer_class = QualityParameterSerializer
    permission_classes = [IsAdminOrReadOnly]

    def get_queryset(self):
        qs = QualityParameter.objects.order_by('commodity', 'param_name')
        commodity = self.request.query_params.get('commodity')
        if commodity:
            qs = qs.filter(commodity__iexact=commodity)
        return qs

    def destroy(self, request, *args, **kwargs):
        param = self.get_object()
        if param.deductions.exists():
            return error_response(
                'Quality parameter is referenced by recorded deductions',
                status.HTTP_409_CONFLICT,
            )
        param.delete()
        return Response({'detail': 'Quality parameter deleted successfully'})


def _get_order(pk):
    return get_object_or_404(Order.objects.select_related('offer'), pk=pk)


def _deductions_payload(order):
    rows = order.quality_deductions.select_related('parameter')
    return {
        'order_id': order.pk,
        'deduction_amount': order.deduction_amount,
        'net_amount': order.net_amount,
        'deductions': QualityDeductionSerializer(rows, many=True).data,
    }


class OrderQualityDeductionsView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request, order_id):
        return Response(_deductions_payload(_get_order(order_id)))

    def post(self, request, order_id):
        order = _get_order(order_id)
        ser = MeasurementsSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        try:
            apply_quality_deductions(order, ser.validated_data['measurements'], user=request.user)
        except DeductionError as e:
            return error_response(str(e))
        return Response(_deductions_payload(order), status=status.HTTP_201_CREATED)


class OrderQualityDeductionPreviewView(APIView):
    permission_classes = [IsAdminRole]

    def post(self, request, order_id):
        order = _get_order(order_id)
        ser = MeasurementsSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        try:
            lines = compute_quality_deductions(order, ser.validated_data['measurements'])
        except DeductionError as e:
            return error_response(str(e))
        return Response(summarize(order, lines))
