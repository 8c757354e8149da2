"""
Reading uploaded CSV and Excel workbooks into header-keyed rows.

Only the first worksheet of a workbook is read. Rows with no values at all
are dropped.
"""
from __future__ import annotations

import csv
import io
import logging
import os
from typing import Any, Dict, List

from openpyxl import load_workbook

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = {'.csv'}
EXCEL_EXTENSIONS = {'.xlsx', '.xlsm'}


class SpreadsheetError(Exception):
    """Raised when an uploaded file cannot be read as a table"""
    pass


class UnsupportedFileError(SpreadsheetError):
    """Raised for extensions other than CSV or XLSX"""
    pass


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == '')


def _clean(value):
    if isinstance(value, str):
        return value.strip()
    return value


def parse_csv(content: bytes) -> List[Dict[str, Any]]:
    try:
        text = content.decode('utf-8-sig')
    except UnicodeDecodeError:
        text = content.decode('latin-1')
    try:
        reader = csv.DictReader(io.StringIO(text))
        rows = []
        for raw in reader:
            # Short rows leave None under trailing headers; extra cells land under None
            record = {(k or '').strip(): _clean(v) for k, v in raw.items() if k is not None}
            if all(_is_blank(v) for v in record.values()):
                continue
            rows.append(record)
    except csv.Error as e:
        raise SpreadsheetError(f"CSV parsing error: {e}") from e
    return rows


def parse_xlsx(content: bytes) -> List[Dict[str, Any]]:
    try:
        wb = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except Exception as e:
        raise SpreadsheetError(f"Excel parsing error: {e}") from e
    try:
        ws = wb[wb.sheetnames[0]]
        rows_iter = ws.iter_rows(values_only=True)
        try:
            headers = next(rows_iter)
        except StopIteration:
            return []
        headers = [str(h).strip() if h is not None else '' for h in headers]

        rows = []
        for row in rows_iter:
            record = {}
            for i, h in enumerate(headers):
                if not h:
                    continue
                record[h] = _clean(row[i]) if i < len(row) else None
            if all(_is_blank(v) for v in record.values()):
                continue
            rows.append(record)
        return rows
    finally:
        wb.close()


def parse_file(content: bytes, filename: str) -> List[Dict[str, Any]]:
    """
    Parse an uploaded table by file extension.

    Raises:
        UnsupportedFileError: extension is not CSV or XLSX
        SpreadsheetError: the file could not be parsed
    """
    ext = os.path.splitext(filename or '')[1].lower()
    if ext in CSV_EXTENSIONS:
        rows = parse_csv(content)
    elif ext in EXCEL_EXTENSIONS:
        rows = parse_xlsx(content)
    else:
        raise UnsupportedFileError('Unsupported file format. Please use CSV or Excel (.xlsx) files.')
    logger.info("Parsed %s: %d data rows", filename, len(rows))
    return rows
