"""Throttling key derivation shared by tracker backends."""


def attempt_key(identity: str, origin: str | None, *, key_by_origin: bool) -> str:
    """Build the counter key for an identity.

    Identity is case-folded, so an unknown identity typed as "Ghost" or
    "ghost" hits one counter. Known accounts are keyed by user id upstream.

    Args:
        identity: User id, or the username or email as typed.
        origin: Client IP address.
        key_by_origin: Include the origin in the key.

    Returns:
        Counter key.
    """
    normalized = identity.strip().casefold()
    if key_by_origin and origin:
        return f"{normalized}|{origin}"
    return normalized
