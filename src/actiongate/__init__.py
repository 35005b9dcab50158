from .core.registry import TrustRegistry
from .core.security import SecurityGate
from .core.action import ActionModel, ActionComponent
from .core.controller import ExecutionController
from .core.orchestrator import ActionOrchestrator
from .core.callbacks import ActionCallbacks
from .core.adapter import TransactionAdapter
from .protocol import (
    TrustLevel,
    SecurityLevel,
    TrustDomain,
    ExecutionStatus,
    SecurityPolicy,
    SignResult,
    SignError,
)

__all__ = [
    "TrustRegistry",
    "SecurityGate",
    "ActionModel",
    "ActionComponent",
    "ExecutionController",
    "ActionOrchestrator",
    "ActionCallbacks",
    "TransactionAdapter",
    "TrustLevel",
    "SecurityLevel",
    "TrustDomain",
    "ExecutionStatus",
    "SecurityPolicy",
    "SignResult",
    "SignError",
]
