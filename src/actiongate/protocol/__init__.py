from .enums import (
    ErrorCode,
    TrustLevel,
    SecurityLevel,
    TrustDomain,
    ExecutionStatus,
    ButtonVariant,
    DisclaimerVariant,
)
from .errors import (
    ActionGateError,
    ActionResolutionError,
    ActionValidationError,
    RegistryError,
    InvalidTransitionError,
    AdapterError,
)
from .models import (
    SecurityPolicy,
    TrustAssessment,
    SecurityVerdict,
    ActionParameter,
    TransactionResponse,
    SignResult,
    SignError,
    ActionContext,
    ExecutionState,
    ButtonView,
    InputView,
    Disclaimer,
    ActionView,
    is_sign_transaction_error,
)

__all__ = [
    "ErrorCode",
    "TrustLevel",
    "SecurityLevel",
    "TrustDomain",
    "ExecutionStatus",
    "ButtonVariant",
    "DisclaimerVariant",
    "ActionGateError",
    "ActionResolutionError",
    "ActionValidationError",
    "RegistryError",
    "InvalidTransitionError",
    "AdapterError",
    "SecurityPolicy",
    "TrustAssessment",
    "SecurityVerdict",
    "ActionParameter",
    "TransactionResponse",
    "SignResult",
    "SignError",
    "ActionContext",
    "ExecutionState",
    "ButtonView",
    "InputView",
    "Disclaimer",
    "ActionView",
    "is_sign_transaction_error",
]
