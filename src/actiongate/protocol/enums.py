from enum import Enum


class ErrorCode(str, Enum):
    RESOLUTION_ERROR = "resolution_error"
    VALIDATION_ERROR = "validation_error"
    REGISTRY_ERROR = "registry_error"
    TRANSITION_ERROR = "transition_error"
    ADAPTER_ERROR = "adapter_error"
    INTERNAL_ERROR = "internal_error"


class TrustLevel(str, Enum):
    """
    Registry classification of an action, website or interstitial.

    Ordered by restrictiveness: trusted < unknown < malicious.
    """

    TRUSTED = "trusted"
    UNKNOWN = "unknown"
    MALICIOUS = "malicious"

    @property
    def rank(self) -> int:
        return _TRUST_RANK[self]

    @classmethod
    def parse(cls, value: object) -> "TrustLevel":
        """Registry payload values we don't recognise degrade to UNKNOWN."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


_TRUST_RANK = {
    TrustLevel.TRUSTED: 0,
    TrustLevel.UNKNOWN: 1,
    TrustLevel.MALICIOUS: 2,
}


class SecurityLevel(str, Enum):
    ONLY_TRUSTED = "only-trusted"
    NON_MALICIOUS = "non-malicious"
    ALL = "all"


class TrustDomain(str, Enum):
    WEBSITES = "websites"
    INTERSTITIALS = "interstitials"
    ACTIONS = "actions"


class ExecutionStatus(str, Enum):
    IDLE = "idle"
    BLOCKED = "blocked"
    EXECUTING = "executing"
    SUCCESS = "success"
    ERROR = "error"


class ButtonVariant(str, Enum):
    DEFAULT = "default"
    SUCCESS = "success"
    ERROR = "error"


class DisclaimerVariant(str, Enum):
    WARNING = "warning"
    ERROR = "error"
