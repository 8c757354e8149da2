"""
Bulk import of confirmed orders from an uploaded sheet.

The import is lenient: unknown customers, values missing from the master
lists and blank required columns produce warnings and defaults rather than
rejected rows, so a whole day's gate register can be loaded in one pass. Rows
go in batches; when a batch fails its rows are retried one by one so a single
bad row only costs itself.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.utils import timezone
from django.utils.crypto import get_random_string

from accounts.models import CUSTOMER_ROLES, CustomUser
from core.utils import ZERO, q2
from masters.services import MasterLists

from ..models import ConfirmedPurchaseOrder, ConfirmedSalesOrder
from .column_mapping import (
    COMMON_FIELDS,
    MAX_OTHER_DEDUCTIONS,
    NA,
    OTHER_DEDUCTION_FIELDS,
    SELLER_NAME_FIELD,
    SUPPLIER_NAME_FIELD,
    ImportField,
    get_mapped_value,
    import_fields,
    is_missing,
    parse_date,
    parse_numeric,
    to_na,
)
from .totals import compute_totals

logger = logging.getLogger(__name__)

INDIAN_STATES = {
    'ANDHRA PRADESH', 'ARUNACHAL PRADESH', 'ASSAM', 'BIHAR', 'CHHATTISGARH', 'GOA', 'GUJARAT',
    'HARYANA', 'HIMACHAL PRADESH', 'JHARKHAND', 'KARNATAKA', 'KERALA', 'MADHYA PRADESH',
    'MAHARASHTRA', 'MANIPUR', 'MEGHALAYA', 'MIZORAM', 'NAGALAND', 'ODISHA', 'PUNJAB', 'RAJASTHAN',
    'SIKKIM', 'TAMIL NADU', 'TELANGANA', 'TRIPURA', 'UTTAR PRADESH', 'UTTARAKHAND', 'WEST BENGAL',
    'ANDAMAN AND NICOBAR ISLANDS', 'CHANDIGARH', 'DADRA AND NAGAR HAVELI AND DAMAN AND DIU', 'DELHI',
    'JAMMU AND KASHMIR', 'LADAKH', 'LAKSHADWEEP', 'PUDUCHERRY',
}

DEFAULT_COMMODITY = 'Paddy'

_FIELDS = {f.key: f for f in COMMON_FIELDS + OTHER_DEDUCTION_FIELDS}

_TEXT_FIELDS = ('state', 'location', 'warehouse_name', 'chamber_no', 'variety', 'gate_pass_no',
                'weight_slip_no', 'delivery_location', 'remarks')
_DECIMAL_FIELDS = ('gross_weight_mt', 'tare_weight_mt', 'net_weight_mt', 'hlw_wheat', 'excess_hlw',
                   'moisture_moi', 'excess_moisture', 'bdoi', 'excess_bdoi', 'moi_bdoi', 'weight_deduction_kg')
_MONEY_FIELDS = ('rate_per_mt', 'gross_amount', 'deduction_amount_hlw', 'deduction_amount_moi_bdoi')


@dataclass(frozen=True)
class ImportProfile:
    model: type
    party_field: ImportField
    prefix: str
    label: str

    @property
    def fields(self) -> List[ImportField]:
        return import_fields(self.party_field)


SALES = ImportProfile(ConfirmedSalesOrder, SELLER_NAME_FIELD, 'SO', 'sales')
PURCHASES = ImportProfile(ConfirmedPurchaseOrder, SUPPLIER_NAME_FIELD, 'PO', 'purchase')


@dataclass
class ImportResult:
    total_rows: int = 0
    prepared: int = 0
    saved: List[Any] = field(default_factory=list)
    duplicate_rows: List[int] = field(default_factory=list)
    duplicates_skipped: int = 0
    requires_duplicate_choice: bool = False
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def _value(record, mapping: Dict[str, str], key: str, default: Any = '', field_def: Optional[ImportField] = None):
    f = field_def or _FIELDS[key]
    return get_mapped_value(record, mapping.get(key), f.fallbacks, default)


def _text(value) -> str:
    return '' if is_missing(value) else str(value).strip()


def _party_name(record, mapping, profile: ImportProfile) -> str:
    key = profile.party_field.key
    mapped = mapping.get(key) or mapping.get('customer_name')
    return to_na(get_mapped_value(record, mapped, profile.party_field.fallbacks, ''))


def _label_name(record, mapping, profile: ImportProfile, party_name: str) -> str:
    """The party column proper; differs from the customer when the sheet carries both."""
    key = profile.party_field.key
    name = to_na(get_mapped_value(record, mapping.get(key), profile.party_field.fallbacks, ''))
    return party_name if name == NA else name


def duplicate_key(record, mapping: Dict[str, str], profile: ImportProfile) -> str:
    """Rows agreeing on state, party, location, warehouse, date, vehicle and net weight are duplicates."""
    date_raw = _value(record, mapping, 'transaction_date')
    net_raw = _value(record, mapping, 'net_weight_mt')
    parts = [
        _text(_value(record, mapping, 'state')).upper(),
        _text(_party_name(record, mapping, profile)).replace(NA, ''),
        _text(_value(record, mapping, 'location')),
        _text(_value(record, mapping, 'warehouse_name')),
        parse_date(date_raw).isoformat() if not is_missing(date_raw) else '',
        _text(_value(record, mapping, 'vehicle_no')),
        str(parse_numeric(net_raw).normalize()) if not is_missing(net_raw) else '',
    ]
    return '|'.join(parts)


def find_duplicate_rows(records: List[Dict[str, Any]], mapping: Dict[str, str], profile: ImportProfile) -> List[int]:
    """Sheet row numbers (header is row 1) of every repeat after the first occurrence."""
    seen = set()
    dupes = []
    for i, record in enumerate(records):
        key = duplicate_key(record, mapping, profile)
        if key in seen:
            dupes.append(i + 2)
        else:
            seen.add(key)
    return dupes


def _other_deductions(record, mapping) -> List[Dict[str, Any]]:
    items = []
    for n in range(1, MAX_OTHER_DEDUCTIONS + 1):
        raw = _value(record, mapping, f'other_deduction_{n}')
        if is_missing(raw):
            continue
        amount = parse_numeric(raw)
        if amount > 0:
            remarks = _text(_value(record, mapping, f'other_deduction_{n}_remarks'))
            items.append({'amount': float(q2(amount)), 'remarks': remarks})
    return items


class _CustomerDirectory:
    def __init__(self):
        self.customers = list(
            CustomUser.objects.filter(role__in=CUSTOMER_ROLES).order_by('date_joined', 'id')
        )
        self.by_name = {}
        for c in self.customers:
            for name in (c.name, c.username):
                if name:
                    self.by_name.setdefault(name.strip().lower(), c)

    def resolve(self, name: str, row_num: int, warnings: List[str]):
        customer = self.by_name.get(name.strip().lower()) if name and name != NA else None
        if customer is not None:
            return customer
        if not self.customers:
            return None
        fallback = self.customers[0]
        if name and name != NA:
            warnings.append(f'Row {row_num}: Customer "{name}" not found. Using "{fallback.display_name}" instead.')
        return fallback


def build_order(record, mapping, profile: ImportProfile, customer, party_name: str, *,
                row_num: int, token: str, user, warnings: List[str], masters: Optional[MasterLists] = None):
    label_name = _label_name(record, mapping, profile, party_name)
    data: Dict[str, Any] = {
        'customer': customer,
        'invoice_number': f'INV-{token}-{row_num}',
        'unique_id': f'{profile.prefix}-{token}-{row_num}',
        'transaction_date': parse_date(_value(record, mapping, 'transaction_date')),
        profile.party_field.key: '' if label_name == NA else label_name,
        'commodity': _text(_value(record, mapping, 'commodity')) or DEFAULT_COMMODITY,
        'vehicle_no': _text(_value(record, mapping, 'vehicle_no')) or f'VEH-{row_num}',
        'no_of_bags': max(int(parse_numeric(_value(record, mapping, 'no_of_bags'))), 0),
        'other_deductions': _other_deductions(record, mapping),
        'quality_report': {},
        'created_by': user,
    }
    for key in _TEXT_FIELDS:
        data[key] = _text(_value(record, mapping, key))
    for key in _DECIMAL_FIELDS:
        data[key] = max(parse_numeric(_value(record, mapping, key)), ZERO)
    for key in _MONEY_FIELDS:
        data[key] = q2(max(parse_numeric(_value(record, mapping, key)), ZERO))

    total, net = compute_totals(
        data['gross_amount'], data['deduction_amount_hlw'], data['deduction_amount_moi_bdoi'], data['other_deductions'],
    )
    # Totals carried in the sheet win over the computed ones
    mapped_total = parse_numeric(_value(record, mapping, 'total_deduction', None), default=None)
    if mapped_total:
        total = q2(mapped_total)
    mapped_net = parse_numeric(_value(record, mapping, 'net_amount', None), default=None)
    net = q2(mapped_net) if mapped_net else q2(data['gross_amount'] - total)
    data['total_deduction'] = total
    data['net_amount'] = net

    state = data['state'].upper()
    if state and state not in INDIAN_STATES:
        warnings.append(f'Row {row_num}: State "{data["state"]}" not in master list, but accepting as-is.')
    if label_name != party_name and party_name != NA:
        warnings.append(
            f'Row {row_num}: {profile.party_field.label} "{label_name}" differs from Customer "{party_name}", '
            'but accepting as-is.'
        )
    if masters is not None:
        warnings.extend(masters.check_row(
            row_num, location=data['location'], warehouse=data['warehouse_name'],
            commodity=data['commodity'], variety=data['variety'],
        ))

    return profile.model(**data).normalize()


def _upload_token() -> str:
    return timezone.now().strftime('%Y%m%d%H%M%S') + get_random_string(4).upper()


def _save_batch(model, batch: List[Tuple[int, Any]], result: ImportResult) -> None:
    try:
        with transaction.atomic():
            saved = model.objects.bulk_create([obj for _, obj in batch])
        result.saved.extend(saved)
        return
    except (DatabaseError, ValidationError, ArithmeticError) as e:
        logger.warning("%s batch of %d failed (%s); retrying rows individually", model.__name__, len(batch), e)

    for row_num, obj in batch:
        try:
            with transaction.atomic():
                obj.pk = None
                obj.save()
            result.saved.append(obj)
        except (DatabaseError, ValidationError, ArithmeticError) as e:
            result.errors.append(f'Row {row_num}: {e}')


def import_confirmed_orders(
    records: List[Dict[str, Any]],
    profile: ImportProfile,
    *,
    column_mapping: Optional[Dict[str, str]] = None,
    skip_duplicates: Optional[bool] = None,
    user=None,
    batch_size: Optional[int] = None,
) -> ImportResult:
    """
    Import parsed sheet rows as confirmed orders.

    Args:
        records: header-keyed rows from ``parse_file``
        profile: ``SALES`` or ``PURCHASES``
        column_mapping: field key -> sheet column overrides
        skip_duplicates: ``None`` stops at duplicates so the caller can ask;
            ``True`` keeps the first of each; ``False`` imports them all
        user: recorded as ``created_by``
        batch_size: rows per insert, ``BULK_UPLOAD_BATCH_SIZE`` by default
    """
    mapping = {k: v for k, v in (column_mapping or {}).items() if isinstance(v, str) and v}
    batch_size = batch_size or getattr(settings, 'BULK_UPLOAD_BATCH_SIZE', 100)
    result = ImportResult(total_rows=len(records))

    result.duplicate_rows = find_duplicate_rows(records, mapping, profile)
    if result.duplicate_rows and skip_duplicates is None:
        result.requires_duplicate_choice = True
        return result
    skip_rows = set(result.duplicate_rows) if skip_duplicates else set()
    result.duplicates_skipped = len(skip_rows)

    directory = _CustomerDirectory()
    masters = MasterLists.load()
    token = _upload_token()
    prepared: List[Tuple[int, Any]] = []
    for i, record in enumerate(records):
        row_num = i + 2
        if row_num in skip_rows:
            continue
        try:
            party_name = _party_name(record, mapping, profile)
            customer = directory.resolve(party_name, row_num, result.warnings)
            if customer is None:
                result.errors.append(f'Row {row_num}: No customers found in system.')
                continue
            prepared.append((row_num, build_order(
                record, mapping, profile, customer, party_name,
                row_num=row_num, token=token, user=user, warnings=result.warnings, masters=masters,
            )))
        except (ValueError, ArithmeticError) as e:
            result.errors.append(f'Row {row_num}: {e}')
    result.prepared = len(prepared)

    for start in range(0, len(prepared), batch_size):
        _save_batch(profile.model, prepared[start:start + batch_size], result)

    logger.info(
        "Imported %d of %d %s rows (%d duplicates skipped, %d errors, %d warnings)",
        len(result.saved), result.total_rows, profile.label, result.duplicates_skipped,
        len(result.errors), len(result.warnings),
    )
    return result
