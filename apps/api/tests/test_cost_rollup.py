"""
Tests for the cost rollup shared by cost preview and the visit report.
"""
from decimal import Decimal

from apps.clinical.costs import (
    format_money, format_number, rollup, round_money, summary_lines, to_decimal,
)


class TestRollup:

    def test_quebec_rates(self):
        summary = rollup(Decimal('100'), Decimal('9.975'), Decimal('5'))

        assert summary.provincial_tax == Decimal('9.975')
        assert summary.federal_tax == Decimal('5')
        assert summary.total == Decimal('114.975')
        assert format_money(summary.total) == '$114.98'

    def test_float_and_none_inputs(self):
        summary = rollup(None, 9.975, 5)

        assert summary.subtotal == Decimal('0')
        assert summary.total == Decimal('0')
        assert to_decimal(9.975) == Decimal('9.975')

    def test_total_is_not_rounded(self):
        summary = rollup(Decimal('33.33'), Decimal('9.975'), Decimal('0'))
        assert summary.total == Decimal('33.33') + Decimal('33.33') * Decimal('9.975') / 100


class TestFormatting:

    def test_round_half_up(self):
        assert round_money(Decimal('0.005')) == Decimal('0.01')
        assert round_money(Decimal('2.675')) == Decimal('2.68')

    def test_format_number(self):
        assert format_number(Decimal('9.9750')) == '9.975'
        assert format_number(Decimal('5.0000')) == '5'
        assert format_number(Decimal('100')) == '100'
        assert format_number(None) == '0'

    def test_summary_lines(self):
        summary = rollup(Decimal('100'), Decimal('9.975'), Decimal('5'))

        assert summary_lines(summary, 'QST', Decimal('9.975'), 'GST', Decimal('5')) == [
            'Subtotal: $100.00',
            'QST (9.975%): $9.98',
            'GST (5%): $5.00',
            'Total: $114.98',
        ]

    def test_zero_rates_omit_tax_lines(self):
        summary = rollup(Decimal('50'), Decimal('0'), Decimal('0'))

        assert summary_lines(summary, 'QST', Decimal('0'), 'GST', Decimal('0')) == [
            'Subtotal: $50.00',
            'Total: $50.00',
        ]
