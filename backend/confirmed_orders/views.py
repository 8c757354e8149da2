import logging

from django.conf import settings
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.models import CUSTOMER_ROLES, CustomUser
from accounts.permissions import IsAdminRole, IsSuperAdmin, is_admin_user, is_super_admin_user
from core.exceptions import error_response

from .models import APPROVAL_APPROVED, APPROVAL_PENDING, ConfirmedPurchaseOrder, ConfirmedSalesOrder
from .serializers import (
    ApprovalDecisionSerializer,
    BulkUploadSerializer,
    ConfirmedPurchaseOrderSerializer,
    ConfirmedSalesOrderSerializer,
)
from .services import approval as approval_service
from .services.column_mapping import available_columns, suggest_mapping
from .services.importer import PURCHASES, SALES, import_confirmed_orders
from .services.spreadsheets import SpreadsheetError, parse_file

logger = logging.getLogger(__name__)

APPROVAL_FIELDS = ('approval_status', 'approved_by', 'approved_at', 'declined_reason')


def _parse_flag(value):
    """Form flags arrive as strings; absent means no choice was made."""
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('true', '1', 'yes', 'on')


class _ConfirmedOrderViewSet(mixins.ListModelMixin,
                             mixins.RetrieveModelMixin,
                             mixins.CreateModelMixin,
                             mixins.UpdateModelMixin,
                             viewsets.GenericViewSet):
    """
    Shared CRUD and bulk upload for confirmed sales and purchase orders.

    Writes are console-only; customers read their own rows. Deletes only
    mark rows as trashed.
    """
    model = None
    profile = None
    party_field = None
    party_label = None
    label = None
    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        if self.action in ('retrieve', 'for_customer'):
            return [IsAuthenticated()]
        return [IsAuthenticated(), IsAdminRole()]

    def get_queryset(self):
        qs = self.model.objects.filter(is_trashed=False).select_related('customer', 'created_by')
        params = self.request.query_params
        if params.get('commodity'):
            qs = qs.filter(commodity__iexact=params['commodity'])
        if params.get('state'):
            qs = qs.filter(state__iexact=params['state'])
        return qs.order_by('-created_at')

    def customer_visible(self, qs, user):
        return qs

    def not_found(self):
        return error_response(f'Confirmed {self.label} order not found', status.HTTP_404_NOT_FOUND)

    def _load(self, pk):
        return self.get_queryset().filter(pk=pk).first()

    def retrieve(self, request, pk=None):
        order = self._load(pk)
        if order is None:
            return self.not_found()
        user = request.user
        if not is_admin_user(user):
            if order.customer_id != user.id:
                return error_response('Unauthorized', status.HTTP_403_FORBIDDEN)
            if not self.customer_visible(self.model.objects.filter(pk=order.pk), user).exists():
                return self.not_found()
        return Response(self.get_serializer(order).data)

    @action(detail=False, methods=['get'], url_path=r'customer/(?P<customer_id>\d+)')
    def for_customer(self, request, customer_id=None):
        user = request.user
        if not is_admin_user(user) and int(customer_id) != user.id:
            return error_response('Unauthorized', status.HTTP_403_FORBIDDEN)
        qs = self.get_queryset().filter(customer_id=customer_id)
        if not is_admin_user(user):
            qs = self.customer_visible(qs, user)
        return Response(self.get_serializer(qs, many=True).data)

    def _resolve_customer(self, data):
        """Customer by explicit id, else by the party name on the order."""
        if data.get('customer_id'):
            return None, None
        name = (data.get(self.party_field) or '').strip()
        if not name:
            return None, error_response(f'Customer ID or {self.party_label} is required')
        customer = CustomUser.objects.filter(role__in=CUSTOMER_ROLES, name=name).first()
        if customer is None:
            return None, error_response(
                f'Customer not found with {self.party_label.lower()}: {name}', status.HTTP_404_NOT_FOUND,
            )
        return customer, None

    def create(self, request, *args, **kwargs):
        customer, err = self._resolve_customer(request.data)
        if err:
            return err
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        extra = {'created_by': request.user}
        if customer is not None:
            extra['customer'] = customer
        order = serializer.save(**extra)
        logger.info("Confirmed %s order %s created by %s", self.label, order.pk, request.user.pk)
        return Response(self.get_serializer(order).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        order = self._load(kwargs.get('pk'))
        if order is None:
            return self.not_found()
        serializer = self.get_serializer(order, data=request.data, partial=kwargs.pop('partial', False))
        serializer.is_valid(raise_exception=True)
        order = serializer.save()
        return Response(self.get_serializer(order).data)

    def destroy(self, request, pk=None):
        order = self._load(pk)
        if order is None:
            return self.not_found()
        order.is_trashed = True
        order.save(update_fields=['is_trashed', 'updated_at'])
        logger.info("Confirmed %s order %s trashed by %s", self.label, order.pk, request.user.pk)
        return Response({'detail': f'Confirmed {self.label} order deleted successfully'})

    # ---- bulk upload ----
    def _read_upload(self, request):
        ser = BulkUploadSerializer(data=request.data)
        if not request.FILES.get('file'):
            return None, None, error_response('No file uploaded')
        ser.is_valid(raise_exception=True)
        upload = ser.validated_data['file']
        if upload.size > settings.BULK_UPLOAD_MAX_BYTES:
            return None, None, error_response(
                f'File too large (limit {settings.BULK_UPLOAD_MAX_BYTES // (1024 * 1024)} MB)',
            )
        try:
            records = parse_file(upload.read(), upload.name)
        except SpreadsheetError as e:
            return None, None, error_response(str(e))
        if not records:
            return None, None, error_response('File is empty or invalid')
        return records, ser.validated_data.get('columnMapping') or {}, None

    @action(detail=False, methods=['post'], url_path='bulk-upload/preview',
            parser_classes=[MultiPartParser, FormParser])
    def bulk_preview(self, request):
        records, _, err = self._read_upload(request)
        if err:
            return err
        columns = available_columns(records)
        fields = self.profile.fields
        return Response({
            'success': True,
            'columns': columns,
            'previewRows': records[:5],
            'totalRows': len(records),
            'fields': [f.as_dict() for f in fields],
            'suggestedMapping': suggest_mapping(columns, fields),
        })

    @action(detail=False, methods=['post'], url_path='bulk-upload',
            parser_classes=[MultiPartParser, FormParser])
    def bulk_upload(self, request):
        records, mapping, err = self._read_upload(request)
        if err:
            return err

        result = import_confirmed_orders(
            records,
            self.profile,
            column_mapping=mapping,
            skip_duplicates=_parse_flag(request.data.get('skipDuplicates')),
            user=request.user,
        )
        if result.requires_duplicate_choice:
            count = len(result.duplicate_rows)
            return Response({
                'success': False,
                'requiresDuplicateChoice': True,
                'duplicateCount': count,
                'totalRows': result.total_rows,
                'duplicateRowNumbers': result.duplicate_rows,
                'detail': (
                    f'{count} duplicate row(s) found. Choose "Skip duplicates" to keep first occurrence only, '
                    'or "Keep all" to upload all rows.'
                ),
            })
        if result.prepared == 0:
            return error_response('No valid orders found in file', errors=result.errors)

        first_ten = [o.invoice_number for o in result.saved[:10]]
        saved_preview = self.model.objects.filter(invoice_number__in=first_ten).select_related('customer', 'created_by')
        notes = []
        if result.duplicates_skipped:
            notes.append(f'{result.duplicates_skipped} duplicate row(s) skipped')
        if result.errors:
            notes.append(f'{len(result.errors)} failed')
        if result.warnings:
            notes.append(f'{len(result.warnings)} warnings')
        message = f'Successfully uploaded {len(result.saved)} confirmed {self.label} orders'
        if notes:
            message += ' (' + ', '.join(notes) + ')'
        return Response({
            'success': True,
            'detail': message,
            'count': len(result.saved),
            'totalRows': result.prepared,
            'duplicateSkipped': result.duplicates_skipped,
            'savedRows': len(result.saved),
            'errors': result.errors,
            'warnings': result.warnings,
            'orders': self.get_serializer(saved_preview.order_by('id'), many=True).data,
        })


class ConfirmedSalesOrderViewSet(_ConfirmedOrderViewSet):
    serializer_class = ConfirmedSalesOrderSerializer
    model = ConfirmedSalesOrder
    profile = SALES
    party_field = 'seller_name'
    party_label = 'Seller Name'
    label = 'sales'

    def get_permissions(self):
        if self.action == 'approval':
            return [IsAuthenticated(), IsSuperAdmin()]
        return super().get_permissions()

    def get_queryset(self):
        qs = super().get_queryset().select_related('approved_by')
        approval_status = self.request.query_params.get('approval_status')
        if approval_status:
            qs = qs.filter(approval_status=approval_status)
        return qs

    def customer_visible(self, qs, user):
        # Customers only see sales a super admin has signed off
        return qs.filter(approval_status=APPROVAL_APPROVED)

    def _locked_for(self, user, order):
        return user.role == 'admin' and order.approval_status == APPROVAL_APPROVED

    def update(self, request, *args, **kwargs):
        order = self._load(kwargs.get('pk'))
        if order is None:
            return self.not_found()
        user = request.user
        if self._locked_for(user, order):
            return error_response('Cannot edit after Super Admin approval', status.HTTP_403_FORBIDDEN)

        wants_decision = any(f in request.data for f in APPROVAL_FIELDS)
        if wants_decision and not is_super_admin_user(user):
            return error_response(
                'Only Super Admin can approve or decline confirmed sales orders', status.HTTP_403_FORBIDDEN,
            )
        if wants_decision and order.approval_status != APPROVAL_PENDING:
            return error_response('Approval already decided. Ask Admin to re-submit before reviewing again.')
        decision = request.data.get('approval_status')
        if decision == 'declined' and not str(request.data.get('declined_reason') or '').strip():
            return error_response('Decline reason is required')

        serializer = self.get_serializer(order, data=request.data, partial=kwargs.pop('partial', False))
        serializer.is_valid(raise_exception=True)
        if not is_super_admin_user(user):
            approval_service.reset_to_pending(order)
        order = serializer.save()

        if decision in approval_service.DECISIONS:
            try:
                approval_service.decide(order, decision, request.data.get('declined_reason', ''), user)
            except approval_service.ApprovalError as e:
                return error_response(str(e))
        return Response(self.get_serializer(order).data)

    def destroy(self, request, pk=None):
        order = self._load(pk)
        if order is None:
            return self.not_found()
        if self._locked_for(request.user, order):
            return error_response('Cannot delete after Super Admin approval', status.HTTP_403_FORBIDDEN)
        return super().destroy(request, pk=pk)

    @action(detail=True, methods=['patch'])
    def approval(self, request, pk=None):
        ser = ApprovalDecisionSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        if ser.validated_data['status'] not in approval_service.DECISIONS:
            return error_response('status must be approved or declined')
        order = self._load(pk)
        if order is None:
            return self.not_found()
        try:
            approval_service.decide(order, ser.validated_data['status'], ser.validated_data['reason'], request.user)
        except approval_service.ApprovalError as e:
            return error_response(str(e))
        return Response(self.get_serializer(order).data)


class ConfirmedPurchaseOrderViewSet(_ConfirmedOrderViewSet):
    serializer_class = ConfirmedPurchaseOrderSerializer
    model = ConfirmedPurchaseOrder
    profile = PURCHASES
    party_field = 'supplier_name'
    party_label = 'Supplier Name'
    label = 'purchase'
