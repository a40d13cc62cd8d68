"""Display formatting for amounts, account types and dates"""

from datetime import date, datetime

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£", "JPY": "¥", "CAD": "CA$"}

ACCOUNT_TYPE_ACRONYMS = frozenset({"CD", "IRA", "HSA"})

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

EMPTY_DATE = "—"


def format_currency(amount: float, currency: str = "USD") -> str:
    """Format as en-US currency, e.g. 1234.5 -> "$1,234.50", -50 -> "-$50.00" """
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), f"{currency.upper()} ")
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_account_type(account_type: str) -> str:
    """Title-case each underscore-separated word unless it is a known acronym"""
    return " ".join(
        word if word in ACCOUNT_TYPE_ACRONYMS else word.capitalize()
        for word in account_type.upper().split("_")
    )


def _parse_date(value: str) -> date:
    # bare dates stay on their calendar day; timestamps keep their own date
    if "T" not in value:
        return date.fromisoformat(value)
    return datetime.fromisoformat(value.replace("Z", "+00:00")).date()


def format_date(value: str) -> str:
    """ "2026-02-03" or "2026-02-03T13:52:38Z" -> "Feb 3" """
    if not value:
        return EMPTY_DATE
    d = _parse_date(value)
    return f"{_MONTHS[d.month - 1]} {d.day}"


def format_date_long(value: str) -> str:
    """ "2026-02-03" -> "Feb 3, 2026" """
    if not value:
        return EMPTY_DATE
    d = _parse_date(value)
    return f"{_MONTHS[d.month - 1]} {d.day}, {d.year}"
