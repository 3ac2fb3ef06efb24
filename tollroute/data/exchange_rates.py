"""Manual reference exchange rates for estimate conversion."""

EXCHANGE_RATES_LAST_UPDATED = "2026-02-12"

EUR_PER_CURRENCY_UNIT: dict[str, float] = {
    "EUR": 1.0,
    "CHF": 1.06,
    "CZK": 0.040,
    "HUF": 0.0025,
    "BGN": 0.51,
    "RSD": 0.0085,
    "DKK": 0.134,
    "SEK": 0.089,
    "GBP": 1.17,
    "TRY": 0.028,
}


def convert_currency_to_eur(amount: float, currency: str) -> float:
    """Convert an amount to EUR. Raises KeyError for unknown currencies."""
    return amount * EUR_PER_CURRENCY_UNIT[currency]
