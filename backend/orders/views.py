from __future__ import annotations

import logging

from django.db.models import Case, IntegerField, Q, Value, When

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.models import CUSTOMER_ROLES, CustomUser
from accounts.permissions import IsAdminRole, IsOwnerOrAdmin, is_admin_user
from accounts.serializers import CustomerSerializer
from core.exceptions import error_response
from core.units import UnitError
from logistics.models import LogisticsProvider
from offers.models import Offer

from .models import PENDING_APPROVAL, Order, PurchaseOrder, SaleOrder
from .serializers import (
    AdminTradeOrderRequestSerializer,
    AssignLogisticsSerializer,
    FinalizeSerializer,
    OrderSerializer,
    PurchaseOrderSerializer,
    SaleOrderSerializer,
    StatusUpdateSerializer,
    TradeOrderRequestSerializer,
    contact_card,
)
from .services import (
    OrderError,
    assign_logistics,
    change_status,
    finalize_order,
    place_trade_order,
)

logger = logging.getLogger(__name__)


def _get_customer(pk):
    customer = CustomUser.objects.filter(pk=pk, role__in=CUSTOMER_ROLES).first()
    if customer is None:
        return None, error_response('Customer not found', status.HTTP_404_NOT_FOUND)
    return customer, None


def _order_queryset():
    return Order.objects.select_related('offer', 'offer__seller', 'buyer', 'logistics_provider')


# ---- Trade orders ----
class OrderViewSet(mixins.ListModelMixin,
                   mixins.RetrieveModelMixin,
                   mixins.CreateModelMixin,
                   viewsets.GenericViewSet):
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        # Pending orders surface first so the review queue is at the top
        qs = _order_queryset().annotate(
            review_rank=Case(
                When(status=PENDING_APPROVAL, then=Value(0)),
                default=Value(1),
                output_field=IntegerField(),
            )
        ).order_by('review_rank', '-created_at')
        status_filter = self.request.query_params.get('status')
        if status_filter and status_filter != 'All':
            qs = qs.filter(status=status_filter)
        user = self.request.user
        if not is_admin_user(user):
            qs = qs.filter(Q(buyer=user) | Q(offer__seller=user))
        return qs

    def create(self, request, *args, **kwargs):
        user = request.user
        if not user.is_kyc_verified:
            return error_response('Please complete KYC verification before placing orders')
        ser = TradeOrderRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        offer = Offer.objects.filter(pk=data['offer_id']).first()
        if offer is None:
            return error_response('Offer not found', status.HTTP_404_NOT_FOUND)
        if offer.seller_id == user.id:
            return error_response('You cannot trade against your own offer')
        try:
            order = place_trade_order(
                offer=offer,
                buyer=user,
                quantity=data['quantity_mt'],
                quantity_unit=data.get('quantity_unit'),
                price_per_quintal=data.get('final_price_per_quintal'),
                created_by=user,
            )
        except (OrderError, UnitError) as e:
            return error_response(str(e))
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['put', 'patch'], url_path='status', permission_classes=[IsAdminRole])
    def update_status(self, request, pk=None):
        order = self.get_object()
        ser = StatusUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        try:
            change_status(order, ser.validated_data['status'])
        except OrderError as e:
            return error_response(str(e))
        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=['put', 'patch'], permission_classes=[IsAdminRole])
    def finalize(self, request, pk=None):
        order = self.get_object()
        ser = FinalizeSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        try:
            finalize_order(order, ser.validated_data['deduction_amount'])
        except OrderError as e:
            return error_response(str(e))
        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=['put', 'patch'], url_path='logistics', permission_classes=[IsAdminRole])
    def logistics(self, request, pk=None):
        order = self.get_object()
        ser = AssignLogisticsSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        provider = LogisticsProvider.objects.filter(pk=ser.validated_data['logistics_provider_id']).first()
        if provider is None:
            return error_response('Logistics provider not found', status.HTTP_404_NOT_FOUND)
        try:
            assign_logistics(order, provider)
        except OrderError as e:
            return error_response(str(e))
        return Response(OrderSerializer(order).data)


# ---- Purchase / sale orders ----
class _CustomerOwnedViewSet(mixins.ListModelMixin,
                            mixins.RetrieveModelMixin,
                            mixins.CreateModelMixin,
                            mixins.UpdateModelMixin,
                            viewsets.GenericViewSet):
    permission_classes = [IsAuthenticated, IsOwnerOrAdmin]
    model = None
    owner_field = None

    def get_queryset(self):
        qs = self.model.objects.select_related(self.owner_field).order_by('-updated_at')
        status_filter = self.request.query_params.get('status')
        if status_filter:
            qs = qs.filter(status=status_filter)
        commodity = self.request.query_params.get('commodity')
        if commodity:
            qs = qs.filter(commodity__iexact=commodity)
        if not is_admin_user(self.request.user):
            qs = qs.filter(**{self.owner_field: self.request.user})
        return qs

    def create(self, request, *args, **kwargs):
        if is_admin_user(request.user):
            return error_response(
                'Use the admin order endpoints to create orders on behalf of a customer',
            )
        return super().create(request, *args, **kwargs)

    def perform_create(self, serializer):
        obj = serializer.save(**{self.owner_field: self.request.user, 'created_by': self.request.user})
        logger.info("%s %s created by %s", self.model.__name__, obj.pk, self.request.user.pk)


class PurchaseOrderViewSet(_CustomerOwnedViewSet):
    serializer_class = PurchaseOrderSerializer
    model = PurchaseOrder
    owner_field = 'buyer'


class SaleOrderViewSet(_CustomerOwnedViewSet):
    serializer_class = SaleOrderSerializer
    model = SaleOrder
    owner_field = 'seller'


# ---- Admin POS: create orders on behalf of customers ----
class AdminCustomersView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request):
        customers = CustomUser.objects.filter(role__in=CUSTOMER_ROLES).order_by('name', 'username')
        search = request.query_params.get('search')
        if search:
            customers = customers.filter(
                Q(name__icontains=search) | Q(mobile_number__icontains=search) | Q(email__icontains=search)
            )
        return Response(CustomerSerializer(customers, many=True).data)


class AdminTradeOrderView(APIView):
    permission_classes = [IsAdminRole]

    def post(self, request):
        if not request.data.get('buyer_id') or not request.data.get('offer_id'):
            return error_response('buyer_id and offer_id are required')
        ser = AdminTradeOrderRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        buyer, err = _get_customer(data['buyer_id'])
        if err:
            return err
        offer = Offer.objects.select_related('seller').filter(pk=data['offer_id']).first()
        if offer is None:
            return error_response('Offer not found', status.HTTP_404_NOT_FOUND)
        if offer.seller_id == buyer.id:
            return error_response('Buyer cannot trade against their own offer')

        try:
            order = place_trade_order(
                offer=offer,
                buyer=buyer,
                quantity=data['quantity_mt'],
                quantity_unit=data.get('quantity_unit'),
                price_per_quintal=data.get('final_price_per_quintal'),
                status=data['status'],
                deduction_amount=data['deduction_amount'],
                created_by=request.user,
            )
        except (OrderError, UnitError) as e:
            return error_response(str(e))

        payload = OrderSerializer(_order_queryset().get(pk=order.pk)).data
        payload['order_type'] = 'trade'
        return Response(payload, status=status.HTTP_201_CREATED)


class _AdminCustomerOrderView(APIView):
    """Creates a purchase or sale order owned by the chosen customer."""
    permission_classes = [IsAdminRole]
    serializer_class = None
    customer_field = None
    order_type = None

    def post(self, request):
        id_key = f'{self.customer_field}_id'
        customer_id = request.data.get(id_key)
        if not customer_id:
            return error_response(f'{id_key} is required')
        customer, err = _get_customer(customer_id)
        if err:
            return err

        ser = self.serializer_class(data=request.data)
        ser.is_valid(raise_exception=True)
        obj = ser.save(**{self.customer_field: customer, 'created_by': request.user})
        logger.info(
            "Admin %s created %s order %s for customer %s",
            request.user.pk, self.order_type, obj.pk, customer.pk,
        )

        payload = self.serializer_class(obj).data
        payload['order_type'] = self.order_type
        payload[self.customer_field] = contact_card(customer)
        payload['customer_name'] = customer.display_name or 'N/A'
        return Response(payload, status=status.HTTP_201_CREATED)


class AdminPurchaseOrderView(_AdminCustomerOrderView):
    serializer_class = PurchaseOrderSerializer
    customer_field = 'buyer'
    order_type = 'purchase'


class AdminSaleOrderView(_AdminCustomerOrderView):
    serializer_class = SaleOrderSerializer
    customer_field = 'seller'
    order_type = 'sale'
