from .keypair import KeypairAdapter, verify_signature

__all__ = ["KeypairAdapter", "verify_signature"]
