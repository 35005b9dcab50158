from __future__ import annotations

from typing import Optional, Protocol, Union, runtime_checkable

from actiongate.protocol.models import ActionContext, SignError, SignResult


@runtime_checkable
class TransactionAdapter(Protocol):
    """
    Wallet/session integration driven by ExecutionController.

    Lifecycle per execution:
      - connect(context)                        -> account, or None if declined
      - sign_transaction(payload, context)      -> SignResult | SignError | None
      - confirm_transaction(signature, context) -> None

    Any of the three may raise; the controller records the message.
    """

    async def connect(self, context: ActionContext) -> Optional[str]:  # pragma: no cover - interface
        ...

    async def sign_transaction(
        self, payload: str, context: ActionContext
    ) -> Union[SignResult, SignError, None]:  # pragma: no cover - interface
        ...

    async def confirm_transaction(self, signature: str, context: ActionContext) -> None:  # pragma: no cover - interface
        ...
