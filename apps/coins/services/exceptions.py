"""
Domain exceptions for coins app.

Coin errors are DRF ``APIException`` subclasses so services can raise them
straight through the views; DRF renders them as ``{"detail": ...}`` with
the status code set here.

Exception Hierarchy:
    CoinsServiceError (400)
    ├── TransactionNotFoundError (404)
    ├── InvalidTransactionStateError (400)
    ├── TransactionValidationError (400)
    ├── InsufficientBalanceError (400)
    ├── PendingEarnRequestsError (403)
    ├── AdminNotesRequiredError (400)
    ├── InvalidPaymentError (400)
    ├── DuplicatePaymentReferenceError (409)
    ├── InvalidAdjustmentError (400)
    ├── CoinUserNotFoundError (404)
    ├── InactiveUserError (400)
    ├── WelcomeBonusAlreadyProcessedError (409)
    ├── BrandUnavailableError (400)
    └── CoinBrandNotFoundError (404)
"""
from rest_framework.exceptions import APIException


class CoinsServiceError(APIException):
    """Base exception for coin service errors."""
    status_code = 400
    default_detail = 'Coin operation failed.'
    default_code = 'coins_error'


class TransactionNotFoundError(CoinsServiceError):
    status_code = 404
    default_detail = 'Transaction not found.'
    default_code = 'transaction_not_found'


class InvalidTransactionStateError(CoinsServiceError):
    """Wrong transaction type or status for the requested step."""
    status_code = 400
    default_detail = 'Transaction is not in a valid state for this operation.'
    default_code = 'invalid_transaction_state'


class TransactionValidationError(CoinsServiceError):
    """Earn or redeem request failed business validation."""
    status_code = 400
    default_detail = 'Transaction request is invalid.'
    default_code = 'transaction_validation_failed'


class InsufficientBalanceError(CoinsServiceError):
    status_code = 400
    default_detail = 'Insufficient coin balance.'
    default_code = 'insufficient_balance'


class PendingEarnRequestsError(CoinsServiceError):
    """Redeem approval while the user still has earn requests under review."""
    status_code = 403
    default_detail = (
        'Cannot approve redeem request. User has pending earn requests '
        'that must be processed first.'
    )
    default_code = 'pending_earn_requests'


class AdminNotesRequiredError(CoinsServiceError):
    status_code = 400
    default_detail = 'Admin notes are required for rejection.'
    default_code = 'admin_notes_required'


class InvalidPaymentError(CoinsServiceError):
    status_code = 400
    default_detail = 'Payment details are invalid.'
    default_code = 'invalid_payment'


class DuplicatePaymentReferenceError(CoinsServiceError):
    status_code = 409
    default_detail = 'Payment transaction ID is already in use.'
    default_code = 'duplicate_payment_reference'


class InvalidAdjustmentError(CoinsServiceError):
    status_code = 400
    default_detail = 'Adjustment amount must be non-zero.'
    default_code = 'invalid_adjustment'


class CoinUserNotFoundError(CoinsServiceError):
    status_code = 404
    default_detail = 'User not found.'
    default_code = 'user_not_found'


class InactiveUserError(CoinsServiceError):
    status_code = 400
    default_detail = 'User account is not active.'
    default_code = 'user_inactive'


class WelcomeBonusAlreadyProcessedError(CoinsServiceError):
    status_code = 409
    default_detail = 'Welcome bonus already processed for this user.'
    default_code = 'welcome_bonus_already_processed'


class CoinBrandNotFoundError(CoinsServiceError):
    status_code = 404
    default_detail = 'Brand not found.'
    default_code = 'brand_not_found'


class BrandUnavailableError(CoinsServiceError):
    status_code = 400
    default_detail = 'Brand is not active.'
    default_code = 'brand_inactive'
