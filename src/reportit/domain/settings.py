"""Report settings domain service."""

from typing import Optional

from reportit.database.base import Database
from reportit.domain.entities import Settings
from reportit.domain.errors import ValidationError
from reportit.utils.amount_parser import parse_currency_code


class SettingsService:
    """Service for the base currency and the start day of month."""

    def __init__(self, db: Database):
        """Initialize settings service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_settings(self) -> Settings:
        return self.db.get_settings()

    def update_settings(
        self, currency: Optional[str] = None, start_day_of_month: Optional[int] = None
    ) -> Settings:
        """Update settings; None leaves a field unchanged.

        Raises:
            ValidationError: If the currency code is malformed or the start
                day is outside 1-31
        """
        if currency is not None:
            try:
                currency = parse_currency_code(currency)
            except ValueError as e:
                raise ValidationError(str(e))
        if start_day_of_month is not None and not 1 <= start_day_of_month <= 31:
            raise ValidationError(
                f"Start day of month must be between 1 and 31, got {start_day_of_month}"
            )
        self.db.update_settings(currency=currency, start_day_of_month=start_day_of_month)
        return self.db.get_settings()
