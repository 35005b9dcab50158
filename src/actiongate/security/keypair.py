"""
Local keypair transaction adapter.

Signs transaction payloads with an Ed25519 key held in process. Useful for
demos, tests and headless hosts; production hosts plug in a wallet-backed
TransactionAdapter instead.

REQUIREMENTS:
- Account identifier is the hex-encoded raw 32-byte public key
- Transactions arrive base64 encoded; the signature covers the decoded bytes
- Signatures are returned base64 encoded (64 raw bytes)
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import logging
from typing import Awaitable, Callable, Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from actiongate.protocol.errors import AdapterError
from actiongate.protocol.models import ActionContext, SignError, SignResult

logger = logging.getLogger("actiongate.security.keypair")

Approver = Callable[[ActionContext], bool]
Confirmer = Callable[[str, ActionContext], Awaitable[Optional[bool]]]


class KeypairAdapter:
    """
    Implements the TransactionAdapter protocol.

    Usage:
        adapter = KeypairAdapter.generate()
        orchestrator = ActionOrchestrator(adapter)

    `approve` may decline a connection (connect returns None); `confirmer`
    performs confirmation, e.g. polling a backend until the signature lands,
    and returns False when it did not.
    """

    def __init__(
        self,
        private_key: Ed25519PrivateKey,
        *,
        approve: Optional[Approver] = None,
        confirmer: Optional[Confirmer] = None,
    ) -> None:
        self._private_key = private_key
        self._public_key = private_key.public_key()
        self._approve = approve
        self._confirmer = confirmer

        public_bytes = self.public_key_bytes
        self._account = public_bytes.hex()
        # Key ID is SHA256 of public key bytes (first 16 chars for readability)
        self._key_id = hashlib.sha256(public_bytes).hexdigest()[:16]

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def generate(cls, **kwargs) -> "KeypairAdapter":
        """
        Generate a fresh keypair.

        WARNING: Use only for testing and demos.
        """
        return cls(Ed25519PrivateKey.generate(), **kwargs)

    @classmethod
    def from_private_bytes(cls, key_bytes: bytes, **kwargs) -> "KeypairAdapter":
        return cls(Ed25519PrivateKey.from_private_bytes(key_bytes), **kwargs)

    @classmethod
    def from_pem_file(cls, path: str, password: Optional[bytes] = None, **kwargs) -> "KeypairAdapter":
        with open(path, "rb") as f:
            private_key = serialization.load_pem_private_key(f.read(), password=password)
        if not isinstance(private_key, Ed25519PrivateKey):
            raise TypeError(f"Expected Ed25519 private key, got {type(private_key)}")
        return cls(private_key, **kwargs)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------
    @property
    def account(self) -> str:
        return self._account

    @property
    def key_id(self) -> str:
        return self._key_id

    @property
    def public_key_bytes(self) -> bytes:
        return self._public_key.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )

    # ------------------------------------------------------------------
    # TransactionAdapter
    # ------------------------------------------------------------------
    async def connect(self, context: ActionContext) -> Optional[str]:
        if self._approve is not None and not self._approve(context):
            logger.info("Key %s declined connection for %s", self._key_id, context.original_url)
            return None
        logger.debug("Key %s connected for %s", self._key_id, context.original_url)
        return self._account

    async def sign_transaction(self, payload: str, context: ActionContext) -> Union[SignResult, SignError]:
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as ex:
            return SignError(error=f"Malformed transaction payload: {ex}")

        signature = self._private_key.sign(data)
        return SignResult(signature=base64.b64encode(signature).decode("ascii"))

    async def confirm_transaction(self, signature: str, context: ActionContext) -> None:
        if self._confirmer is None:
            return
        # A confirmer reports failure by raising or by returning False.
        if await self._confirmer(signature, context) is False:
            raise AdapterError(f"Transaction {signature[:16]} was not confirmed")

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------
    def verify(self, payload: str, signature: str) -> bool:
        return verify_signature(self.public_key_bytes, payload, signature)


def verify_signature(public_key_bytes: bytes, payload: str, signature: str) -> bool:
    """
    Verify a base64 signature over a base64 payload.

    Returns False for invalid signatures and undecodable inputs.
    """
    try:
        public_key = Ed25519PublicKey.from_public_bytes(public_key_bytes)
        public_key.verify(base64.b64decode(signature), base64.b64decode(payload))
        return True
    except (InvalidSignature, binascii.Error, ValueError):
        return False
