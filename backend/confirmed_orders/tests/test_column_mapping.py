import datetime
from decimal import Decimal
from unittest import mock

from django.test import SimpleTestCase

from confirmed_orders.services.column_mapping import (
    COMMON_FIELDS,
    SELLER_NAME_FIELD,
    get_mapped_value,
    import_fields,
    parse_date,
    parse_numeric,
    suggest_mapping,
    to_na,
)
from confirmed_orders.services.totals import clean_other_deductions, compute_totals


class MappedValueTests(SimpleTestCase):
    record = {"Seller": "Ramesh", "Seller Name": "", "Qty": None}

    def test_mapping_wins(self):
        self.assertEqual(get_mapped_value(self.record, "Seller", ["Seller Name"]), "Ramesh")

    def test_blank_mapping_falls_back(self):
        self.assertEqual(get_mapped_value(self.record, "Seller Name", ["Nope", "Seller"]), "Ramesh")

    def test_default(self):
        self.assertEqual(get_mapped_value(self.record, "Qty", ["Quantity"], "0"), "0")

    def test_to_na(self):
        self.assertEqual(to_na("  "), "N/A")
        self.assertEqual(to_na("-"), "N/A")
        self.assertEqual(to_na("Not Available"), "N/A")
        self.assertEqual(to_na(" WH-1 "), "WH-1")


class ParseNumericTests(SimpleTestCase):
    def test_indian_and_western_grouping(self):
        self.assertEqual(parse_numeric("1,54,026.00"), Decimal("154026.0000"))
        self.assertEqual(parse_numeric("154,026.00"), Decimal("154026.0000"))

    def test_currency_symbols(self):
        self.assertEqual(parse_numeric("₹ 2,500"), Decimal("2500.0000"))
        self.assertEqual(parse_numeric("$12.5"), Decimal("12.5000"))

    def test_missing_and_garbage(self):
        self.assertEqual(parse_numeric("-"), Decimal("0"))
        self.assertEqual(parse_numeric("Not Applicable"), Decimal("0"))
        self.assertIsNone(parse_numeric("abc", default=None))

    def test_rounds_to_four_places(self):
        self.assertEqual(parse_numeric(0.123456), Decimal("0.1235"))


class ParseDateTests(SimpleTestCase):
    def test_day_first_formats(self):
        self.assertEqual(parse_date("05/03/24"), datetime.date(2024, 3, 5))
        self.assertEqual(parse_date("5/3/2024"), datetime.date(2024, 3, 5))

    def test_iso(self):
        self.assertEqual(parse_date("2024-03-05"), datetime.date(2024, 3, 5))

    def test_datetime_cell(self):
        self.assertEqual(parse_date(datetime.datetime(2024, 3, 5, 10, 30)), datetime.date(2024, 3, 5))

    def test_other_parseable_form(self):
        self.assertEqual(parse_date("5 Mar 2024"), datetime.date(2024, 3, 5))

    def test_blank_is_today(self):
        today = datetime.date(2025, 1, 15)
        with mock.patch("confirmed_orders.services.column_mapping.timezone.localdate", return_value=today):
            self.assertEqual(parse_date(""), today)
            self.assertEqual(parse_date("N/A"), today)
            self.assertEqual(parse_date("sometime"), today)


class SuggestMappingTests(SimpleTestCase):
    def test_heuristic(self):
        columns = ["Date", "Seller Name", "vehicle_no", "Net Weight in MT", "Commodity"]
        mapping = suggest_mapping(columns, import_fields(SELLER_NAME_FIELD))
        self.assertEqual(mapping["seller_name"], "Seller Name")
        self.assertEqual(mapping["vehicle_no"], "vehicle_no")
        self.assertEqual(mapping["commodity"], "Commodity")
        # "net weight mt" is not contained in "net weight in mt"
        self.assertNotIn("net_weight_mt", mapping)

    def test_blank_columns_ignored(self):
        self.assertEqual(suggest_mapping(["", "  "], COMMON_FIELDS), {})


class TotalsTests(SimpleTestCase):
    def test_compute_totals(self):
        total, net = compute_totals(
            Decimal("624750"), Decimal("1500"), Decimal("320.50"),
            [{"amount": 250, "remarks": "Labour"}, {"amount": "100.25", "remarks": ""}],
        )
        self.assertEqual(total, Decimal("2170.75"))
        self.assertEqual(net, Decimal("622579.25"))

    def test_missing_inputs_count_as_zero(self):
        self.assertEqual(compute_totals(Decimal("1000")), (Decimal("0.00"), Decimal("1000.00")))

    def test_clean_other_deductions(self):
        self.assertEqual(
            clean_other_deductions([{"amount": "12.345", "remarks": " Bags "}]),
            [{"amount": 12.35, "remarks": "Bags"}],
        )
        with self.assertRaises(ValueError):
            clean_other_deductions(["oops"])
