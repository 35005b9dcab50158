from typing import Optional
from .enums import ErrorCode


class ActionGateError(Exception):
    def __init__(self, message: str, code: Optional[ErrorCode] = None):
        super().__init__(message)
        self.code = code or ErrorCode.INTERNAL_ERROR


class ActionResolutionError(ActionGateError):
    """Raised when a discovered link does not resolve to an action."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.RESOLUTION_ERROR)


class ActionValidationError(ActionGateError):
    """Raised when action metadata or component input is malformed."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.VALIDATION_ERROR)


class RegistryError(ActionGateError):
    """Raised when the trust registry payload cannot be fetched or parsed."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.REGISTRY_ERROR)


class InvalidTransitionError(ActionGateError):
    """Raised when an execution event is not legal from the current status."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.TRANSITION_ERROR)


class AdapterError(ActionGateError):
    """Raised by transaction adapters for wallet-side failures."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.ADAPTER_ERROR)
