import pytest

from apps.currencies.data import CURRENCIES
from apps.currencies.services import currency_directory
from apps.currencies.services.currency_directory import (
    CurrencyDirectory,
    directory,
    get_currency_full,
    get_currency_label,
    get_currency_symbol,
)


# =============================================================================
# Lookup
# =============================================================================

class TestLookup:

    def test_known_code(self):
        entry = directory.lookup('USD')
        assert entry.code == 'USD'
        assert entry.symbol == '$'
        assert entry.name == 'US Dollar'

    def test_unknown_code_returns_none(self):
        assert directory.lookup('XYZ') is None

    def test_empty_code_returns_none(self):
        assert directory.lookup('') is None
        assert directory.lookup(None) is None

    def test_lookup_is_case_sensitive(self):
        assert directory.lookup('usd') is None

    def test_resolve_unknown_falls_back_to_dollar(self):
        entry = directory.resolve('XYZ')
        assert entry.symbol == '$'
        assert entry.code == 'XYZ'

    def test_contains(self):
        assert 'EUR' in directory
        assert 'XYZ' not in directory

    def test_every_table_row_is_listed(self):
        assert len(directory) == len(CURRENCIES)
        assert [entry.code for entry in directory] == [row[0] for row in CURRENCIES]

    def test_module_lookup_uses_shared_directory(self):
        assert currency_directory.lookup('GBP') is directory.lookup('GBP')


# =============================================================================
# Labels
# =============================================================================

class TestLabels:

    def test_symbol(self):
        assert get_currency_symbol('EUR') == '€'

    def test_symbol_unknown_defaults_to_dollar(self):
        assert get_currency_symbol('XYZ') == '$'

    def test_symbol_unknown_custom_default(self):
        assert get_currency_symbol('XYZ', default='?') == '?'

    def test_label(self):
        assert get_currency_label('USD') == 'USD ($)'

    def test_full_label(self):
        assert get_currency_full('USD') == 'USD ($) US Dollar'

    def test_labels_for_unknown_code_are_raw_code(self):
        assert get_currency_label('XYZ') == 'XYZ'
        assert get_currency_full('XYZ') == 'XYZ'


# =============================================================================
# Search
# =============================================================================

class TestSearch:

    def test_blank_query_returns_everything_in_order(self):
        assert directory.search('') == directory.all()
        assert directory.search('   ') == directory.all()
        assert directory.search(None) == directory.all()

    def test_matches_code_case_insensitively(self):
        codes = [entry.code for entry in directory.search('eur')]
        assert 'EUR' in codes

    def test_matches_name(self):
        codes = [entry.code for entry in directory.search('swiss')]
        assert codes == ['CHF']

    def test_matches_symbol(self):
        codes = [entry.code for entry in directory.search('£')]
        assert 'GBP' in codes

    def test_results_keep_table_order(self):
        results = directory.search('dollar')
        positions = [directory.all().index(entry) for entry in results]
        assert positions == sorted(positions)
        assert results[0].code == 'USD'

    def test_every_result_matches(self):
        for entry in directory.search('kr'):
            assert entry.matches('kr')

    def test_no_match(self):
        assert directory.search('zzzz-not-a-currency') == []


class TestDirectoryConstruction:

    def test_duplicate_codes_rejected(self):
        with pytest.raises(ValueError):
            CurrencyDirectory([('USD', '$', 'US Dollar'), ('USD', '$', 'Again')])

    def test_table_codes_are_unique(self):
        codes = [row[0] for row in CURRENCIES]
        assert len(codes) == len(set(codes))
