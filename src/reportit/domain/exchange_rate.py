"""Exchange rate domain service."""

from decimal import Decimal
from typing import Optional

from reportit.database.base import Database
from reportit.domain.currency import StaticRates
from reportit.domain.entities import ExchangeRate
from reportit.domain.errors import ValidationError
from reportit.utils.amount_parser import parse_currency_code


class ExchangeRateService:
    """Service for recording exchange rates and looking them up.

    A stored rate means ``1 base_currency = rate * currency``. Lookups fall
    back to the inverse pair when only that direction is stored.
    """

    def __init__(self, db: Database):
        """Initialize exchange rate service.

        Args:
            db: Database instance
        """
        self.db = db

    def set_rate(self, base_currency: str, currency: str, rate: Decimal) -> None:
        """Record a rate.

        Raises:
            ValidationError: If a code is malformed, the currencies are equal,
                or the rate is not positive
        """
        try:
            base_currency = parse_currency_code(base_currency)
            currency = parse_currency_code(currency)
        except ValueError as e:
            raise ValidationError(str(e))
        if base_currency == currency:
            raise ValidationError("Base currency and currency must differ")
        if rate <= 0:
            raise ValidationError(f"Exchange rate must be positive, got {rate}")
        self.db.set_exchange_rate(base_currency, currency, rate)

    def list_rates(self) -> list[ExchangeRate]:
        """List all stored rates."""
        return self.db.list_exchange_rates()

    def rate(self, from_currency: str, to_currency: str) -> Optional[Decimal]:
        """Return how many ``to_currency`` units one ``from_currency`` buys."""
        if from_currency == to_currency:
            return Decimal("1")
        direct = self.db.get_exchange_rate(from_currency, to_currency)
        if direct is not None and direct.rate:
            return direct.rate
        inverse = self.db.get_exchange_rate(to_currency, from_currency)
        if inverse is not None and inverse.rate:
            return Decimal("1") / inverse.rate
        return None

    def snapshot(self) -> StaticRates:
        """Load every stored rate into an in-memory lookup.

        Report computation uses the snapshot so worker threads never touch
        the database session.
        """
        return StaticRates(
            {(r.base_currency, r.currency): r.rate for r in self.db.list_exchange_rates()}
        )
