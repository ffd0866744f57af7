from hashlib import sha256


def fingerprint(value: str) -> str:
    """SHA-256 hex digest of the UTF-8 encoded value; doubles as the record id."""
    # surrogatepass keeps lone surrogates hashable instead of raising
    return sha256(value.encode("utf-8", "surrogatepass")).hexdigest()
