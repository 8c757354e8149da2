import logging

from rest_framework import viewsets
from rest_framework.exceptions import ParseError
from rest_framework.response import Response

from accounts.permissions import IsAdminOrReadOnly

from .models import Commodity, Location, Variety, Warehouse
from .serializers import CommoditySerializer, LocationSerializer, VarietySerializer, WarehouseSerializer

logger = logging.getLogger(__name__)


class _MasterViewSet(viewsets.ModelViewSet):
    """
    Reference lists behind the console's dropdowns and the import checks.

    Anyone signed in may read; console operators write. Delete only
    deactivates the entry so past orders still name it.
    """
    permission_classes = [IsAdminOrReadOnly]
    model = None
    label = None
    ordering = ('name',)

    def get_queryset(self):
        qs = self.model.objects.order_by(*self.ordering)
        is_active = self.request.query_params.get('is_active')
        if is_active is not None and is_active != '':
            qs = qs.filter(is_active=is_active.lower() == 'true')
        return qs

    def destroy(self, request, *args, **kwargs):
        entry = self.get_object()
        entry.is_active = False
        entry.save(update_fields=['is_active', 'updated_at'])
        logger.info("%s %s deactivated by %s", self.model.__name__, entry.pk, request.user.pk)
        return Response({
            'detail': f'{self.label} deactivated successfully',
            self.label.lower(): self.get_serializer(entry).data,
        })


class CommodityViewSet(_MasterViewSet):
    serializer_class = CommoditySerializer
    model = Commodity
    label = 'Commodity'


class VarietyViewSet(_MasterViewSet):
    serializer_class = VarietySerializer
    model = Variety
    label = 'Variety'
    ordering = ('commodity_name', 'variety_name')

    def get_queryset(self):
        qs = super().get_queryset()
        commodity = self.request.query_params.get('commodity_name')
        if commodity:
            qs = qs.filter(commodity_name=commodity.strip().upper())
        return qs


class LocationViewSet(_MasterViewSet):
    serializer_class = LocationSerializer
    model = Location
    label = 'Location'


class WarehouseViewSet(_MasterViewSet):
    serializer_class = WarehouseSerializer
    model = Warehouse
    label = 'Warehouse'

    def get_queryset(self):
        qs = super().get_queryset().select_related('location')
        location_id = self.request.query_params.get('location_id')
        if location_id:
            if not location_id.isdigit():
                raise ParseError('location_id must be a number')
            qs = qs.filter(location_id=location_id)
        return qs
