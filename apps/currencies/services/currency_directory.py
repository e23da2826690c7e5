"""
Static lookup of currency code -> symbol / display name.

The directory is built once, at import time, from the table in
``apps.currencies.data`` and never mutated afterwards.
"""
from dataclasses import dataclass

from apps.currencies.data import CURRENCIES

DEFAULT_SYMBOL = '$'


@dataclass(frozen=True)
class CurrencyEntry:
    code: str
    symbol: str
    name: str

    @property
    def label(self):
        return f'{self.code} ({self.symbol})'

    @property
    def full_label(self):
        return f'{self.code} ({self.symbol}) {self.name}'

    def matches(self, query):
        query = query.lower()
        return (
            query in self.code.lower()
            or query in self.symbol.lower()
            or query in self.name.lower()
        )


class CurrencyDirectory:
    """
    Ordered, read-only collection of :class:`CurrencyEntry` objects.

    Parameters
    ----------
    rows : iterable of tuple
        ``(code, symbol, name)`` triples. Codes must be unique.

    Raises
    ------
    ValueError
        If a code appears more than once.
    """

    def __init__(self, rows):
        entries = []
        by_code = {}
        for code, symbol, name in rows:
            if code in by_code:
                raise ValueError(f'Duplicate currency code in directory: {code}.')
            entry = CurrencyEntry(code=code, symbol=symbol, name=name)
            by_code[code] = entry
            entries.append(entry)
        self._entries = tuple(entries)
        self._by_code = by_code

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __contains__(self, code):
        return code in self._by_code

    def all(self):
        return list(self._entries)

    def lookup(self, code):
        """Return the entry for *code*, or ``None`` when it is unknown."""
        if not code:
            return None
        return self._by_code.get(code)

    def resolve(self, code):
        """
        Like :meth:`lookup`, but never returns ``None``.

        Unknown codes resolve to a sentinel entry that displays the raw
        code with the default ``$`` symbol.
        """
        entry = self.lookup(code)
        if entry is None:
            return CurrencyEntry(code=code or '', symbol=DEFAULT_SYMBOL, name=code or '')
        return entry

    def search(self, query):
        """
        Case-insensitive substring search over code, symbol and name.

        A blank query lists the whole directory. Results keep table order.
        """
        query = (query or '').strip()
        if not query:
            return self.all()
        return [entry for entry in self._entries if entry.matches(query)]


directory = CurrencyDirectory(CURRENCIES)


def lookup(code):
    return directory.lookup(code)


def search(query):
    return directory.search(query)


def get_currency_symbol(code, default=DEFAULT_SYMBOL):
    entry = directory.lookup(code)
    return entry.symbol if entry else default


def get_currency_label(code):
    """``"USD ($)"`` for known codes, the raw code otherwise."""
    entry = directory.lookup(code)
    return entry.label if entry else code


def get_currency_full(code):
    """``"USD ($) US Dollar"`` for known codes, the raw code otherwise."""
    entry = directory.lookup(code)
    return entry.full_label if entry else code
