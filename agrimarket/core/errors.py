"""
Error kinds raised by the marketplace core.

Every kind carries a stable ``code`` so the HTTP layer can tell them apart
without inspecting messages.
"""


class AgriMarketError(Exception):
    code = "error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(AgriMarketError):
    code = "not_found"
    status_code = 404


class ValidationError(AgriMarketError):
    code = "validation_error"
    status_code = 400


class InsufficientQuantity(AgriMarketError):
    code = "insufficient_quantity"
    status_code = 409


class ListingUnavailable(AgriMarketError):
    code = "listing_unavailable"
    status_code = 409


class DuplicateTransactionId(AgriMarketError):
    code = "duplicate_transaction_id"
    status_code = 409


class PersistenceFailure(AgriMarketError):
    """Store or payment failure; the caller may retry with a new transaction id."""

    code = "persistence_failure"
    status_code = 503
