from decimal import Decimal

from apps.bills.services.bill import Bill
from apps.bills.services.summary_renderer import (
    NO_GUESTS_MESSAGE,
    RULE,
    SIGNATURE,
    format_money,
    format_rate,
    render_summary,
)
from apps.currencies.services.conversion_session import ConversionState, ConversionStatus


# =============================================================================
# Formatting helpers
# =============================================================================

class TestFormatting:

    def test_money_has_two_decimals(self):
        assert format_money(Decimal('4.8'), '$') == '$4.80'

    def test_money_rounds_half_up(self):
        assert format_money(Decimal('67.896'), '€') == '€67.90'
        assert format_money(Decimal('0.125'), '$') == '$0.13'

    def test_rate_has_four_decimals(self):
        assert format_rate(Decimal('0.92')) == '0.9200'
        assert format_rate(Decimal('149.123456')) == '149.1235'


# =============================================================================
# Plain summary
# =============================================================================

class TestRenderSummary:

    def test_no_guests(self, bill):
        assert render_summary([], bill) == NO_GUESTS_MESSAGE

    def test_full_text_without_conversion(self, guests, bill):
        expected = (
            'BILL SPLIT SUMMARY\n\n'
            'PAYMENT REQUESTS\n'
            f'{RULE}\n\n'
            'Alice owes $73.80\n'
            'Bob owes $49.20\n'
            '\nBILL DETAILS\n'
            f'{RULE}\n'
            'Subtotal: $100.00\n'
            'Tax: $8.00\n'
            'Tip: $15.00\n'
            'Total: $123.00\n'
            'Split between 2 people\n\n'
            'DETAILED BREAKDOWN\n'
            f'{RULE}\n\n'
            "Alice's TOTAL: $73.80\n"
            '   Items:\n'
            '   - Burger: $60.00\n'
            '   Subtotal: $60.00\n'
            '   Tax: $4.80\n'
            '   Tip: $9.00\n'
            '   Total: $73.80\n\n'
            "Bob's TOTAL: $49.20\n"
            '   Items:\n'
            '   - Salad: $40.00\n'
            '   Subtotal: $40.00\n'
            '   Tax: $3.20\n'
            '   Tip: $6.00\n'
            '   Total: $49.20\n\n'
            f'{RULE}\n'
            'Please Venmo or pay in cash!\n'
            'Sent via Flick2Split'
        )
        assert render_summary(guests, bill) == expected

    def test_is_pure(self, guests, bill, usd_to_eur):
        first = render_summary(guests, bill, usd_to_eur, 'alice')
        second = render_summary(guests, bill, usd_to_eur, 'alice')
        assert first == second
        assert usd_to_eur.rate == Decimal('0.92')

    def test_ends_with_signature(self, guests, bill):
        assert render_summary(guests, bill).endswith(SIGNATURE)

    def test_venmo_link(self, guests, bill):
        text = render_summary(guests, bill, venmo_username='alice-k')
        assert 'Pay me on Venmo: https://venmo.com/u/alice-k\n' in text
        assert 'Please Venmo or pay in cash!' not in text

    def test_bill_without_symbol_uses_dollar(self, guests):
        bill = Bill(subtotal=Decimal('100'), tax=Decimal('8'), tip=Decimal('15'))
        assert 'Alice owes $73.80' in render_summary(guests, bill)

    def test_bill_symbol_used(self, guests, bill_data):
        bill_data['currency_symbol'] = '£'
        bill = Bill.from_dict(bill_data)
        assert 'Alice owes £73.80' in render_summary(guests, bill)


# =============================================================================
# Converted summary
# =============================================================================

class TestConvertedSummary:

    def test_payment_requests_are_converted(self, guests, bill, usd_to_eur):
        text = render_summary(guests, bill, usd_to_eur)
        assert 'Alice owes €67.90\n' in text
        assert 'Bob owes €45.26\n' in text

    def test_bill_details_show_both_currencies(self, guests, bill, usd_to_eur):
        text = render_summary(guests, bill, usd_to_eur)
        assert 'Subtotal: $100.00 (€92.00)\n' in text
        assert 'Total: $123.00 (€113.16)\n' in text

    def test_conversion_section(self, guests, bill, usd_to_eur):
        text = render_summary(guests, bill, usd_to_eur)
        assert f'CURRENCY CONVERSION\n{RULE}\nUSD to EUR @ 0.9200\n\n' in text

    def test_breakdown_shows_original_and_converted(self, guests, bill, usd_to_eur):
        text = render_summary(guests, bill, usd_to_eur)
        assert "Alice's TOTAL: €67.90\n" in text
        assert '   - Burger: $60.00\n' in text
        assert '   Original Total: $73.80\n   Converted Total: €67.90\n\n' in text
        assert '   Total: $73.80' not in text

    def test_section_order(self, guests, bill, usd_to_eur):
        text = render_summary(guests, bill, usd_to_eur, 'alice')
        headings = [
            'BILL SPLIT SUMMARY',
            'PAYMENT REQUESTS',
            'BILL DETAILS',
            'CURRENCY CONVERSION',
            'DETAILED BREAKDOWN',
            'Pay me on Venmo',
            SIGNATURE,
        ]
        positions = [text.index(heading) for heading in headings]
        assert positions == sorted(positions)

    def test_inactive_conversion_is_ignored(self, guests, bill):
        stale = ConversionState(
            original_currency='EUR',
            target_currency='USD',
            rate=Decimal('0.92'),
            rate_pair=('USD', 'EUR'),
            status=ConversionStatus.PAIR_SELECTED,
        )
        assert render_summary(guests, bill, stale) == render_summary(guests, bill)

    def test_failed_conversion_is_ignored(self, guests, bill):
        failed = ConversionState(
            original_currency='USD',
            target_currency='EUR',
            status=ConversionStatus.FETCH_FAILED,
        )
        text = render_summary(guests, bill, failed)
        assert 'CURRENCY CONVERSION' not in text
        assert 'Alice owes $73.80' in text
