"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class InvalidFilterError(ValidationError):
    """Report filter cannot be applied (no transaction types or no period)."""


class ConversionError(DomainError):
    """Amount cannot be expressed in the base currency."""


class ExportError(DomainError):
    """Writing a report export failed."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_name_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def rate_unavailable(from_currency: str, to_currency: str) -> str:
    """Return message for a currency pair without an exchange rate."""
    return f"No exchange rate available for {from_currency} -> {to_currency}"


def transaction_account_missing(transaction_id: int, account_id: int) -> str:
    """Return message when a transaction references an unknown account."""
    return f"Transaction {transaction_id} references unknown account {account_id}"


def invalid_currency_code(code: str) -> str:
    """Return message for a malformed ISO currency code."""
    return f"Invalid currency code '{code}': expected three letters, e.g. USD"
