"""Card secret derivation and comparison."""

import secrets

# Card secrets are 6-digit numerals in [100000, 999999]
SECRET_MODULUS = 900000
SECRET_FLOOR = 100000


def derive_card_secret(sequence: int, multiplier: int, offset: int) -> str:
    """Derive the printed secret for a card from its sequence number.

    The derivation is plain integer arithmetic so that cards already handed
    out stay valid across releases. Changing ``multiplier`` or ``offset``
    invalidates every distributed card of that series.

    Args:
        sequence: Card sequence number (1-based)
        multiplier: Series multiplier
        offset: Series offset

    Returns:
        Six-digit secret as a string
    """
    return str(((sequence * multiplier + offset) % SECRET_MODULUS) + SECRET_FLOOR)


def verify_secret(submitted: str, expected: str) -> bool:
    """Compare a submitted secret against the expected one in constant time."""
    return secrets.compare_digest(submitted.encode("utf-8"), expected.encode("utf-8"))
