"""Services for coins business logic."""

from .exceptions import (
    CoinsServiceError,
    TransactionNotFoundError,
    InvalidTransactionStateError,
    TransactionValidationError,
    InsufficientBalanceError,
    PendingEarnRequestsError,
    AdminNotesRequiredError,
    InvalidPaymentError,
    DuplicatePaymentReferenceError,
    InvalidAdjustmentError,
    CoinUserNotFoundError,
    InactiveUserError,
    WelcomeBonusAlreadyProcessedError,
    CoinBrandNotFoundError,
    BrandUnavailableError,
)
from .validation import ValidationResult, validate_earn_request, validate_redeem_request
from .balance import (
    get_or_create_balance,
    get_balance_summary,
    get_transaction_history,
    get_user_transaction,
    get_coin_user,
)
from .submissions import create_earn_request, create_redeem_request
from .approval import (
    approve_earn,
    reject_earn,
    approve_redeem,
    reject_redeem,
    list_transactions,
    list_pending_transactions,
)
from .payments import (
    process_payment,
    get_payment_summary,
    get_payment_stats,
    list_paid_transactions,
)
from .welcome_bonus import create_welcome_bonus, is_eligible_for_welcome_bonus, welcome_bonus_amount
from .adjustments import adjust_balance
from .statistics import get_transaction_stats

__all__ = [
    # Exceptions
    'CoinsServiceError',
    'TransactionNotFoundError',
    'InvalidTransactionStateError',
    'TransactionValidationError',
    'InsufficientBalanceError',
    'PendingEarnRequestsError',
    'AdminNotesRequiredError',
    'InvalidPaymentError',
    'DuplicatePaymentReferenceError',
    'InvalidAdjustmentError',
    'CoinUserNotFoundError',
    'InactiveUserError',
    'WelcomeBonusAlreadyProcessedError',
    'CoinBrandNotFoundError',
    'BrandUnavailableError',
    # Validation
    'ValidationResult',
    'validate_earn_request',
    'validate_redeem_request',
    # Balance
    'get_or_create_balance',
    'get_balance_summary',
    'get_transaction_history',
    'get_user_transaction',
    'get_coin_user',
    # Requests
    'create_earn_request',
    'create_redeem_request',
    # Approval
    'approve_earn',
    'reject_earn',
    'approve_redeem',
    'reject_redeem',
    'list_transactions',
    'list_pending_transactions',
    # Payments
    'process_payment',
    'get_payment_summary',
    'get_payment_stats',
    'list_paid_transactions',
    # Welcome bonus
    'create_welcome_bonus',
    'is_eligible_for_welcome_bonus',
    'welcome_bonus_amount',
    # Adjustments and stats
    'adjust_balance',
    'get_transaction_stats',
]
