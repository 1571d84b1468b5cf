"""
Unit tests for totals computation (subtotal, IGV, total).
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from envirops.services.totals import (
    compute_totals, line_amount, round2, convert_to_pen, IGV_RATE,
)


class TestComputeTotals:
    """Tests for compute_totals."""

    def test_single_item_with_days(self):
        """2 units x 100 x 3 days -> 600.00 / 108.00 / 708.00."""
        totals = compute_totals([{'quantity': 2, 'unit_price': 100, 'days': 3}])

        assert totals.subtotal == Decimal('600.00')
        assert totals.tax == Decimal('108.00')
        assert totals.total == Decimal('708.00')

    def test_empty_list_yields_zeros(self):
        totals = compute_totals([])

        assert totals.subtotal == Decimal('0.00')
        assert totals.tax == Decimal('0.00')
        assert totals.total == Decimal('0.00')

    def test_missing_days_counts_as_one(self):
        totals = compute_totals([
            {'quantity': 3, 'unit_price': '50.50'},
            {'quantity': 1, 'unit_price': 10, 'days': None},
        ])
        assert totals.subtotal == Decimal('161.50')

    def test_accepts_objects_with_attributes(self):
        items = [
            SimpleNamespace(quantity=Decimal('2'), unit_price=Decimal('100.00'), days=3),
            SimpleNamespace(quantity=Decimal('1'), unit_price=Decimal('40.00'), days=None),
        ]
        assert compute_totals(items).subtotal == Decimal('640.00')

    def test_tax_is_rounded_half_up(self):
        """0.18 x 10.25 = 1.845 -> 1.85."""
        totals = compute_totals([{'quantity': 1, 'unit_price': '10.25', 'days': 1}])
        assert totals.tax == Decimal('1.85')
        assert totals.total == Decimal('12.10')

    @pytest.mark.parametrize('items', [
        [{'quantity': 1, 'unit_price': '0.01', 'days': 1}],
        [{'quantity': 7, 'unit_price': '33.33', 'days': 2}, {'quantity': 3, 'unit_price': '19.99', 'days': 5}],
        [{'quantity': '1.5', 'unit_price': '1234.56', 'days': 9}],
        [{'quantity': 100, 'unit_price': 0, 'days': 1}],
    ])
    def test_total_equals_subtotal_plus_tax(self, items):
        totals = compute_totals(items)

        assert totals.total - totals.subtotal - totals.tax == 0
        assert totals.tax == round2(totals.subtotal * IGV_RATE)

    def test_does_not_mutate_input(self):
        items = [{'quantity': 2, 'unit_price': 100, 'days': 3}]
        snapshot = [dict(item) for item in items]

        compute_totals(items)

        assert items == snapshot

    def test_negative_values_are_not_rejected(self):
        totals = compute_totals([{'quantity': 1, 'unit_price': -100, 'days': 1}])
        assert totals.subtotal == Decimal('-100.00')
        assert totals.total == Decimal('-118.00')

    def test_float_inputs_have_no_binary_artefacts(self):
        totals = compute_totals([{'quantity': 3, 'unit_price': 0.1, 'days': 1}])
        assert totals.subtotal == Decimal('0.30')


class TestLineAmount:
    """Tests for line_amount."""

    def test_line_amount_multiplies_days(self):
        assert line_amount({'quantity': 2, 'unit_price': 100, 'days': 3}) == Decimal('600')

    def test_line_amount_zero_days_counts_as_one(self):
        assert line_amount({'quantity': 2, 'unit_price': 100, 'days': 0}) == Decimal('200')


class TestConvertToPen:
    """Tests for dashboard currency conversion."""

    def test_usd_is_converted_with_rate(self):
        assert convert_to_pen(Decimal('100'), 'USD', '3.7') == Decimal('370.0')

    def test_pen_is_unchanged(self):
        assert convert_to_pen(Decimal('100'), 'PEN', '3.7') == Decimal('100')

    def test_none_amount_is_zero(self):
        assert convert_to_pen(None, 'USD', '3.7') == Decimal('0')
