# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application:
# - numeric tags used to version stored avatars
# - base64 helpers for the cached avatar payload
# =============================================================================

import base64
import binascii
import random
import string

# Length of the identifier tag attached to every avatar record
TAG_LENGTH = 15


# =============================================================================
# Identifier Tags
# =============================================================================

def generate_numeric_tag(length: int = TAG_LENGTH) -> str:
    """
    Generate a pseudo-random numeric token.

    The tag is an opaque content/version marker for an avatar record.
    It is not a secret and must never be used as a credential.

    Args:
        length: Number of digits (default: 15)

    Returns:
        String of `length` decimal digits (leading zeros allowed)

    Example:
        generate_numeric_tag()   # "042918273645510"
        generate_numeric_tag(4)  # "7731"
    """
    if length < 1:
        raise ValueError("length must be at least 1")
    return "".join(random.choices(string.digits, k=length))


# =============================================================================
# Base64 Helpers
# =============================================================================

def to_base64(content: bytes) -> str:
    """Encode raw bytes to an ASCII base64 string."""
    return base64.b64encode(content).decode("ascii")


def from_base64(value: str) -> bytes:
    """
    Decode a base64 string back to raw bytes.

    Raises:
        ValueError: If the value is not valid base64
    """
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e

