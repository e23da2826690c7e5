"""
Static currency table used by the currency directory.

Each row is ``(code, symbol, name)``. Codes must be unique; the order of
the table is the order currencies are listed in the picker.
"""

CURRENCIES = (
    ('USD', '$', 'US Dollar'),
    ('EUR', '€', 'Euro'),
    ('GBP', '£', 'British Pound'),
    ('JPY', '¥', 'Japanese Yen'),
    ('CAD', 'C$', 'Canadian Dollar'),
    ('AUD', 'A$', 'Australian Dollar'),
    ('CHF', 'CHF', 'Swiss Franc'),
    ('CNY', '¥', 'Chinese Yuan'),
    ('HKD', 'HK$', 'Hong Kong Dollar'),
    ('NZD', 'NZ$', 'New Zealand Dollar'),
    ('SEK', 'kr', 'Swedish Krona'),
    ('NOK', 'kr', 'Norwegian Krone'),
    ('DKK', 'kr', 'Danish Krone'),
    ('ISK', 'kr', 'Icelandic Krona'),
    ('PLN', 'zł', 'Polish Zloty'),
    ('CZK', 'Kč', 'Czech Koruna'),
    ('HUF', 'Ft', 'Hungarian Forint'),
    ('RON', 'lei', 'Romanian Leu'),
    ('BGN', 'лв', 'Bulgarian Lev'),
    ('TRY', '₺', 'Turkish Lira'),
    ('RUB', '₽', 'Russian Ruble'),
    ('UAH', '₴', 'Ukrainian Hryvnia'),
    ('ILS', '₪', 'Israeli New Shekel'),
    ('AED', 'د.إ', 'UAE Dirham'),
    ('SAR', '﷼', 'Saudi Riyal'),
    ('QAR', '﷼', 'Qatari Riyal'),
    ('EGP', 'E£', 'Egyptian Pound'),
    ('MAD', 'DH', 'Moroccan Dirham'),
    ('ZAR', 'R', 'South African Rand'),
    ('NGN', '₦', 'Nigerian Naira'),
    ('KES', 'KSh', 'Kenyan Shilling'),
    ('GHS', 'GH₵', 'Ghanaian Cedi'),
    ('INR', '₹', 'Indian Rupee'),
    ('PKR', '₨', 'Pakistani Rupee'),
    ('LKR', 'Rs', 'Sri Lankan Rupee'),
    ('BDT', '৳', 'Bangladeshi Taka'),
    ('NPR', 'Rs', 'Nepalese Rupee'),
    ('SGD', 'S$', 'Singapore Dollar'),
    ('MYR', 'RM', 'Malaysian Ringgit'),
    ('THB', '฿', 'Thai Baht'),
    ('IDR', 'Rp', 'Indonesian Rupiah'),
    ('PHP', '₱', 'Philippine Peso'),
    ('VND', '₫', 'Vietnamese Dong'),
    ('KRW', '₩', 'South Korean Won'),
    ('TWD', 'NT$', 'New Taiwan Dollar'),
    ('MXN', 'Mex$', 'Mexican Peso'),
    ('BRL', 'R$', 'Brazilian Real'),
    ('ARS', 'AR$', 'Argentine Peso'),
    ('CLP', 'CLP$', 'Chilean Peso'),
    ('COP', 'COL$', 'Colombian Peso'),
    ('PEN', 'S/', 'Peruvian Sol'),
    ('UYU', '$U', 'Uruguayan Peso'),
    ('CRC', '₡', 'Costa Rican Colon'),
    ('DOP', 'RD$', 'Dominican Peso'),
    ('JMD', 'J$', 'Jamaican Dollar'),
)
