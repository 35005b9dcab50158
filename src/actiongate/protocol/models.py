# FILE: src/actiongate/protocol/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Union

from .enums import (
    ButtonVariant,
    DisclaimerVariant,
    ExecutionStatus,
    SecurityLevel,
    TrustDomain,
    TrustLevel,
)


# -------------------------
# SECURITY POLICY
# -------------------------

DEFAULT_SECURITY_LEVEL = SecurityLevel.ONLY_TRUSTED

PolicyInput = Union[
    "SecurityPolicy",
    SecurityLevel,
    str,
    Mapping[Union[str, TrustDomain], Union[str, SecurityLevel]],
    None,
]


@dataclass(frozen=True)
class SecurityPolicy:
    """
    Normalized per-domain admission thresholds.

    Always carries all three domains; built once per widget and never mutated.
    """
    websites: SecurityLevel = DEFAULT_SECURITY_LEVEL
    interstitials: SecurityLevel = DEFAULT_SECURITY_LEVEL
    actions: SecurityLevel = DEFAULT_SECURITY_LEVEL

    def for_domain(self, domain: TrustDomain) -> SecurityLevel:
        return getattr(self, TrustDomain(domain).value)

    @classmethod
    def uniform(cls, level: Union[SecurityLevel, str]) -> "SecurityPolicy":
        lvl = SecurityLevel(level)
        return cls(websites=lvl, interstitials=lvl, actions=lvl)

    @classmethod
    def normalize(cls, value: PolicyInput = None) -> "SecurityPolicy":
        """
        Expand a single level or a per-domain mapping into a SecurityPolicy.

        A mapping must name all three domains.
        """
        if value is None:
            return cls.uniform(DEFAULT_SECURITY_LEVEL)
        if isinstance(value, SecurityPolicy):
            return value
        if isinstance(value, (SecurityLevel, str)):
            return cls.uniform(value)

        levels = {TrustDomain(k).value: SecurityLevel(v) for k, v in dict(value).items()}
        missing = [d.value for d in TrustDomain if d.value not in levels]
        if missing:
            raise ValueError(f"Security policy is missing domains: {', '.join(missing)}")
        return cls(**levels)


@dataclass(frozen=True)
class TrustAssessment:
    """Registry classifications for an action and, optionally, its hosting origin."""
    action: TrustLevel
    origin: Optional[TrustLevel] = None
    origin_domain: Optional[TrustDomain] = None


@dataclass(frozen=True)
class SecurityVerdict:
    overall: TrustLevel
    admitted: bool


# -------------------------
# ACTION PAYLOADS
# -------------------------

@dataclass(frozen=True)
class ActionParameter:
    name: str
    label: Optional[str] = None
    required: bool = False


@dataclass(frozen=True)
class TransactionResponse:
    transaction: str
    message: Optional[str] = None


@dataclass(frozen=True)
class SignResult:
    signature: str


@dataclass(frozen=True)
class SignError:
    error: str


def is_sign_transaction_error(value: Any) -> bool:
    return isinstance(value, SignError)


@dataclass
class ActionContext:
    """Passed to every TransactionAdapter call."""
    action: Any
    action_type: TrustLevel
    original_url: str
    triggered_linked_action: Any


# -------------------------
# EXECUTION STATE
# -------------------------

@dataclass(frozen=True)
class ExecutionState:
    status: ExecutionStatus
    executing_action_id: Optional[str] = None
    error_message: Optional[str] = None
    success_message: Optional[str] = None


# -------------------------
# VIEW MODELS
# -------------------------

@dataclass(frozen=True)
class ButtonView:
    component_id: str
    text: str
    loading: bool
    disabled: bool
    variant: ButtonVariant


@dataclass(frozen=True)
class InputView:
    placeholder: Optional[str]
    name: str
    disabled: bool
    button: ButtonView


@dataclass(frozen=True)
class Disclaimer:
    variant: DisclaimerVariant
    message: str
    can_override: bool = False


@dataclass(frozen=True)
class ActionView:
    title: str
    description: str
    type: TrustLevel
    image: Optional[str] = None
    website_url: Optional[str] = None
    website_text: Optional[str] = None
    disclaimer: Optional[Disclaimer] = None
    buttons: List[ButtonView] = field(default_factory=list)
    inputs: List[InputView] = field(default_factory=list)
    error: Optional[str] = None
    success: Optional[str] = None
