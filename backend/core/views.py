from __future__ import annotations

from django.db.models import Count, Q, Sum

from rest_framework import views
from rest_framework.response import Response

from accounts.models import CustomUser
from accounts.permissions import IsAdminRole
from confirmed_orders.models import ConfirmedPurchaseOrder, ConfirmedSalesOrder
from orders.models import PurchaseOrder, SaleOrder

from .utils import ZERO, q2


def _confirmed_totals(model):
    agg = model.objects.filter(is_trashed=False).aggregate(count=Count('id'), net=Sum('net_amount'))
    return agg['count'], q2(agg['net'] or ZERO)


class AdminStatsView(views.APIView):
    """Headline numbers for the console dashboard."""
    permission_classes = [IsAdminRole]

    def get(self, request):
        users = CustomUser.objects.aggregate(
            total=Count('id'),
            farmers=Count('id', filter=Q(role='farmer')),
            traders=Count('id', filter=Q(role='trader')),
            kyc_verified=Count('id', filter=Q(kyc_status='verified')),
        )
        sales_count, sales_net = _confirmed_totals(ConfirmedSalesOrder)
        purchase_count, purchase_net = _confirmed_totals(ConfirmedPurchaseOrder)

        return Response({
            'total_users': users['total'],
            'farmers': users['farmers'],
            'traders': users['traders'],
            'kyc_verified': users['kyc_verified'],
            'purchase_orders': PurchaseOrder.objects.count(),
            'sale_orders': SaleOrder.objects.count(),
            'confirmed_sales_orders': sales_count,
            'confirmed_sales_net_amount': sales_net,
            'confirmed_purchase_orders': purchase_count,
            'confirmed_purchase_net_amount': purchase_net,
        })
