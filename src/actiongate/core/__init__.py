from .settings import ActionGateSettings, get_settings
from .scheduler import Scheduler, AsyncioScheduler, ScheduledHandle
from .registry import TrustRegistry, RegistrySnapshot, RegistrySource
from .security import SecurityGate, admits, merge, merge_all, evaluate
from .adapter import TransactionAdapter
from .action import ActionModel, ActionComponent, ActionResolver, HTTPActionResolver
from .execution import apply, initial_state
from .callbacks import ActionCallbacks, LoggingActionCallbacks
from .controller import ExecutionController
from .orchestrator import ActionOrchestrator

__all__ = [
    "ActionGateSettings",
    "get_settings",
    "Scheduler",
    "AsyncioScheduler",
    "ScheduledHandle",
    "TrustRegistry",
    "RegistrySnapshot",
    "RegistrySource",
    "SecurityGate",
    "admits",
    "merge",
    "merge_all",
    "evaluate",
    "TransactionAdapter",
    "ActionModel",
    "ActionComponent",
    "ActionResolver",
    "HTTPActionResolver",
    "apply",
    "initial_state",
    "ActionCallbacks",
    "LoggingActionCallbacks",
    "ExecutionController",
    "ActionOrchestrator",
]
