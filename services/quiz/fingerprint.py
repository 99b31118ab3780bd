"""Content fingerprints used for duplicate suppression."""

import hashlib


def fingerprint(text: str) -> str:
    """SHA-256 hex digest of the exact prompt text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
