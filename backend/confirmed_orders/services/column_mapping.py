"""
Resolving spreadsheet columns to confirmed order fields.

Each field has a list of header names seen in warehouse and mandi exports.
An explicit column mapping from the upload form wins over those defaults.
"""
from __future__ import annotations

import datetime
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional, Sequence

from django.utils import timezone

from core.utils import q4

MISSING_MARKERS = {'', '-', 'not available', 'not applicable'}
NA = 'N/A'

_CURRENCY_RE = re.compile(r"[,\s₹$€£¥]")
_DATE_FORMATS = (
    '%d/%m/%Y', '%d/%m/%y', '%Y-%m-%d', '%d-%m-%Y', '%d-%m-%y', '%d.%m.%Y',
    '%Y/%m/%d', '%d %b %Y', '%d %B %Y', '%b %d, %Y', '%B %d, %Y', '%Y-%m-%dT%H:%M:%S',
)


@dataclass(frozen=True)
class ImportField:
    key: str
    label: str
    fallbacks: Sequence[str] = field(default_factory=tuple)
    required: bool = False

    def as_dict(self) -> Dict[str, Any]:
        return {'key': self.key, 'label': self.label, 'required': self.required}


MAX_OTHER_DEDUCTIONS = 9

COMMON_FIELDS: List[ImportField] = [
    ImportField('transaction_date', 'Date of Transaction',
                ('Date of Transaction', 'transaction_date', 'Transaction Date', 'Date'), True),
    ImportField('state', 'State', ('State', 'state')),
    ImportField('location', 'Location', ('Location', 'location')),
    ImportField('warehouse_name', 'Warehouse Name', ('Warehouse Name', 'warehouse_name', 'Warehouse')),
    ImportField('chamber_no', 'Chamber No.', ('Chamber No.', 'Chamber No', 'chamber_no', 'Chamber')),
    ImportField('commodity', 'Commodity', ('Commodity', 'commodity'), True),
    ImportField('variety', 'Variety', ('Variety', 'variety')),
    ImportField('gate_pass_no', 'Gate Pass No.', ('Gate Pass No.', 'Gate Pass No', 'gate_pass_no', 'Gate Pass')),
    ImportField('vehicle_no', 'Vehicle No.',
                ('Vehicle No.', 'Vehicle No', 'vehicle_no', 'Vehicle Number', 'Truck No'), True),
    ImportField('weight_slip_no', 'Weight Slip No.',
                ('Weight Slip No.', 'Weight Slip No', 'weight_slip_no', 'Weight Slip')),
    ImportField('gross_weight_mt', 'Gross Weight in MT (Vehicle + Goods)',
                ('Gross Weight in MT (Vehicle + Goods)', 'Gross Weight (MT)', 'gross_weight_mt', 'Gross Weight')),
    ImportField('tare_weight_mt', 'Tare Weight of Vehicle',
                ('Tare Weight of Vehicle', 'Tare Weight (MT)', 'tare_weight_mt', 'Tare Weight')),
    ImportField('no_of_bags', 'No. of Bags', ('No. of Bags', 'No of Bags', 'no_of_bags', 'Bags')),
    ImportField('net_weight_mt', 'Net Weight in MT',
                ('Net Weight in MT', 'Net Weight (MT)', 'net_weight_mt', 'Net Weight'), True),
    ImportField('rate_per_mt', 'Rate Per MT', ('Rate Per MT', 'Rate per MT', 'rate_per_mt', 'Rate'), True),
    ImportField('gross_amount', 'Gross Amount', ('Gross Amount', 'gross_amount'), True),
    ImportField('hlw_wheat', 'HLW (Hectolitre Weight) in Wheat',
                ('HLW (Hectolitre Weight) in Wheat', 'HLW', 'hlw_wheat', 'Hectolitre Weight')),
    ImportField('excess_hlw', 'Excess HLW', ('Excess HLW', 'excess_hlw')),
    ImportField('deduction_amount_hlw', 'Deduction Amount Rs. (HLW)',
                ('Deduction Amount Rs. (HLW)', 'Deduction Amount HLW', 'deduction_amount_hlw')),
    ImportField('moisture_moi', 'Moisture (MOI)', ('Moisture (MOI)', 'Moisture', 'moisture_moi')),
    ImportField('excess_moisture', 'Excess Moisture', ('Excess Moisture', 'excess_moisture')),
    ImportField('bdoi', 'Broken, Damage, Discolour, Immature (BDOI)',
                ('Broken, Damage, Discolour, Immature (BDOI)', 'BDOI', 'bdoi',
                 'Broken, Damage, Discolour, Immature (BDDI)', 'BDDI', 'bddi')),
    ImportField('excess_bdoi', 'Excess BDOI', ('Excess BDOI', 'excess_bdoi', 'Excess BDDI', 'excess_bddi')),
    ImportField('moi_bdoi', 'MOI+BDOI', ('MOI+BDOI', 'moi_bdoi', 'MOI+BDDI', 'moi_bddi')),
    ImportField('weight_deduction_kg', 'Weight Deduction in KG (MOI+BDOI)',
                ('Weight Deduction in KG (MOI+BDOI)', 'Weight Deduction (KG)', 'weight_deduction_kg',
                 'Weight Deduction in KG (MOI+BDDI)')),
    ImportField('deduction_amount_moi_bdoi', 'Deduction Amount Rs. (MOI+BDOI)',
                ('Deduction Amount Rs. (MOI+BDOI)', 'Deduction Amount MOI+BDOI', 'deduction_amount_moi_bdoi',
                 'Deduction Amount Rs. (MOI+BDDI)', 'deduction_amount_moi_bddi')),
    ImportField('total_deduction', 'Total Deduction',
                ('Total Deduction', 'total_deduction', 'Total Deduction Amount')),
    ImportField('net_amount', 'Net Amount', ('Net Amount', 'net_amount')),
    ImportField('delivery_location', 'Delivery Location', ('Delivery Location', 'delivery_location')),
    ImportField('remarks', 'Remarks', ('Remarks', 'remarks')),
]

OTHER_DEDUCTION_FIELDS: List[ImportField] = []
for _n in range(1, MAX_OTHER_DEDUCTIONS + 1):
    OTHER_DEDUCTION_FIELDS.append(ImportField(
        f'other_deduction_{_n}', f'Other Deduction {_n}',
        (f'Other Deduction {_n}', f'other_deduction_{_n}', f'Other Deduction {_n} Amount'),
    ))
    OTHER_DEDUCTION_FIELDS.append(ImportField(
        f'other_deduction_{_n}_remarks', f'Other Deduction {_n} Remarks',
        (f'Other Deduction {_n} Remarks', f'other_deduction_{_n}_remarks'),
    ))

SELLER_NAME_FIELD = ImportField(
    'seller_name', 'Seller Name', ('Seller Name', 'seller_name', 'Seller', 'Customer', 'customer'), True,
)
SUPPLIER_NAME_FIELD = ImportField(
    'supplier_name', 'Supplier Name', ('Supplier Name', 'supplier_name', 'Supplier', 'Customer', 'customer'), True,
)


def import_fields(party_field: ImportField) -> List[ImportField]:
    return [COMMON_FIELDS[0], party_field] + COMMON_FIELDS[1:] + OTHER_DEDUCTION_FIELDS


def _present(value) -> bool:
    if value is None:
        return False
    return not (isinstance(value, str) and value == '')


def get_mapped_value(record: Dict[str, Any], mapped_column: Optional[str], fallbacks: Iterable[str] = (),
                     default: Any = '') -> Any:
    """The mapped column's value if set, else the first populated fallback header, else ``default``."""
    if mapped_column and _present(record.get(mapped_column)):
        return record[mapped_column]
    for name in fallbacks:
        if _present(record.get(name)):
            return record[name]
    return default


def is_missing(value) -> bool:
    return value is None or str(value).strip().lower() in MISSING_MARKERS


def to_na(value) -> str:
    if is_missing(value):
        return NA
    return str(value).strip()


def parse_numeric(value, default: Optional[Decimal] = Decimal('0')) -> Optional[Decimal]:
    """
    Read a spreadsheet number.

    Handles Indian (1,54,026.00) and Western (154,026.00) grouping and
    currency symbols; rounds to four places. Unreadable input gives ``default``.
    """
    if isinstance(value, bool) or is_missing(value):
        return default
    if isinstance(value, (int, float, Decimal)):
        try:
            return q4(Decimal(str(value)))
        except InvalidOperation:
            return default
    cleaned = _CURRENCY_RE.sub('', str(value))
    try:
        parsed = Decimal(cleaned)
    except InvalidOperation:
        return default
    if not parsed.is_finite():
        return default
    return q4(parsed)


def parse_date(value) -> datetime.date:
    """
    Read a spreadsheet date; blanks and unreadable values resolve to today.

    Slash dates are day first (DD/MM/YY or DD/MM/YYYY); two-digit years are
    in the 2000s.
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if is_missing(value) or str(value).strip().upper() == NA:
        return timezone.localdate()

    text = str(value).strip()
    parts = text.split('/')
    if len(parts) == 3 and all(p.strip().isdigit() for p in parts):
        day, month, year = (p.strip() for p in parts)
        if len(year) == 2:
            year = '20' + year
        try:
            return datetime.date(int(year), int(month), int(day))
        except ValueError:
            pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.date.fromisoformat(text[:10])
    except ValueError:
        return timezone.localdate()


def available_columns(records: List[Dict[str, Any]]) -> List[str]:
    if not records:
        return []
    return [c for c in records[0].keys() if c]


def suggest_mapping(columns: Sequence[str], fields: Iterable[ImportField]) -> Dict[str, str]:
    """
    Guess a column for each field: the field key with underscores read as
    spaces (or spaces as underscores) equal to the column, or either one
    containing the other. First matching column wins.
    """
    mapping = {}
    for f in fields:
        spaced = f.key.lower().replace('_', ' ')
        underscored = re.sub(r'\s+', '_', f.key.lower())
        for col in columns:
            col_lower = col.lower().strip()
            if not col_lower:
                continue
            if (col_lower == spaced or col_lower == underscored
                    or spaced in col_lower or col_lower in spaced):
                mapping[f.key] = col
                break
    return mapping
