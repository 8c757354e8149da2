import logging

from django.db.models import Q
from rest_framework import status, viewsets
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from accounts.permissions import IsOwnerOrAdminOrReadOnly, is_admin_user
from core.exceptions import error_response

from .models import Offer
from .serializers import OfferSerializer

logger = logging.getLogger(__name__)


class OfferViewSet(viewsets.ModelViewSet):
    serializer_class = OfferSerializer
    permission_classes = [IsAuthenticated, IsOwnerOrAdminOrReadOnly]
    owner_field = 'seller'

    def get_queryset(self):
        qs = Offer.objects.select_related('seller').order_by('-created_at')
        status_filter = self.request.query_params.get('status')
        if status_filter:
            qs = qs.filter(status=status_filter)
        commodity = self.request.query_params.get('commodity')
        if commodity:
            qs = qs.filter(commodity__iexact=commodity)
        user = self.request.user
        if not is_admin_user(user):
            # Customers browse the marketplace plus their own listings
            qs = qs.filter(Q(status='Active') | Q(seller=user))
        return qs

    def create(self, request, *args, **kwargs):
        user = request.user
        if not is_admin_user(user) and not user.is_kyc_verified:
            return error_response('Please complete KYC verification before creating offers')
        if is_admin_user(user) and not request.data.get('seller_id'):
            return error_response('seller_id is required when creating an offer on behalf of a customer')
        return super().create(request, *args, **kwargs)

    def perform_create(self, serializer):
        user = self.request.user
        if is_admin_user(user):
            offer = serializer.save()
        else:
            offer = serializer.save(seller=user)
        logger.info("Offer %s created for seller %s by %s", offer.pk, offer.seller_id, user.pk)

    def perform_update(self, serializer):
        # Reassigning the seller is a console-only operation
        if not is_admin_user(self.request.user):
            serializer.validated_data.pop('seller', None)
        serializer.save()

    def destroy(self, request, *args, **kwargs):
        offer = self.get_object()
        if offer.orders.exists():
            return error_response(
                'Offer has trade orders against it; mark it Inactive instead',
                status.HTTP_409_CONFLICT,
            )
        offer.delete()
        return Response({"detail": "Offer deleted successfully"}, status=status.HTTP_200_OK)
