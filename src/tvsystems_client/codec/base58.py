"""
Base58 helpers (Bitcoin alphabet) for keys, addresses and signatures.
"""

from typing import Union

import base58


def b58encode(data: bytes) -> str:
    """
    Encode bytes as Base58 text.

    Args:
        data: Raw bytes

    Returns:
        Base58 string
    """
    return base58.b58encode(data).decode("ascii")


def b58decode(text: Union[str, bytes]) -> bytes:
    """
    Decode Base58 text to bytes.

    Args:
        text: Base58 string

    Returns:
        Raw bytes

    Raises:
        ValueError: If the text contains characters outside the alphabet,
            whitespace included
    """
    # base58 silently drops trailing whitespace
    if text != text.strip():
        raise ValueError("Base58 text must not carry surrounding whitespace")
    return base58.b58decode(text)
