import logging

from django.db.models import Q
from rest_framework import status, viewsets
from rest_framework.exceptions import ParseError
from rest_framework.response import Response

from accounts.permissions import IsAdminOrReadOnly, is_admin_user

from .models import LogisticsProvider, LogisticsShipment
from .serializers import LogisticsProviderSerializer, LogisticsShipmentSerializer

logger = logging.getLogger(__name__)


class LogisticsProviderViewSet(viewsets.ModelViewSet):
    serializer_class = LogisticsProviderSerializer
    permission_classes = [IsAdminOrReadOnly]

    def get_queryset(self):
        qs = LogisticsProvider.objects.all().order_by('company_name')
        params = self.request.query_params
        if params.get('id'):
            if not params['id'].isdigit():
                raise ParseError('id must be a number')
            qs = qs.filter(pk=params['id'])
        is_active = params.get('is_active')
        if is_active is not None and is_active != '':
            qs = qs.filter(is_active=is_active.lower() == 'true')
        if params.get('pickup_city'):
            qs = qs.filter(pickup_city__iexact=params['pickup_city'])
        if params.get('delivery_city'):
            qs = qs.filter(delivery_city__iexact=params['delivery_city'])
        if params.get('company_name'):
            qs = qs.filter(company_name__icontains=params['company_name'])
        return qs

    def perform_create(self, serializer):
        provider = serializer.save()
        logger.info("Logistics provider %s (%s) created by %s", provider.pk, provider.company_name, self.request.user.pk)

    def destroy(self, request, *args, **kwargs):
        provider = self.get_object()
        provider.delete()
        return Response({'detail': 'Logistics provider deleted successfully'}, status=status.HTTP_200_OK)


class LogisticsShipmentViewSet(viewsets.ModelViewSet):
    """
    Shipments booked against trade orders. Console operators manage them;
    the buyer and seller of an order may follow its shipments.
    """
    serializer_class = LogisticsShipmentSerializer
    permission_classes = [IsAdminOrReadOnly]

    def get_queryset(self):
        qs = LogisticsShipment.objects.select_related('order').order_by('-created_at', '-id')
        user = self.request.user
        if not is_admin_user(user):
            qs = qs.filter(Q(order__buyer=user) | Q(order__offer__seller=user))
        params = self.request.query_params
        if params.get('order_id'):
            if not params['order_id'].isdigit():
                raise ParseError('order_id must be a number')
            qs = qs.filter(order_id=params['order_id'])
        if params.get('status'):
            qs = qs.filter(status=params['status'])
        return qs

    def perform_create(self, serializer):
        shipment = serializer.save()
        logger.info("Shipment %s booked for order %s by %s", shipment.pk, shipment.order_id, self.request.user.pk)

    def perform_update(self, serializer):
        shipment = serializer.save()
        logger.info("Shipment %s updated to %s by %s", shipment.pk, shipment.status, self.request.user.pk)

    def destroy(self, request, *args, **kwargs):
        shipment = self.get_object()
        shipment.delete()
        return Response({'detail': 'Logistics shipment deleted successfully'}, status=status.HTTP_200_OK)
