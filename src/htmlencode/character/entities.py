"""Named entity table for the five reserved HTML characters.

The table is bidirectional but deliberately asymmetric for the apostrophe:
``&apos;`` and ``&#39;`` both decode to ``'``, while encoding always produces
``&#39;`` because ``&apos;`` is not understood by every HTML consumer.
"""

from typing import Dict, Optional

AMPERSAND = 0x26
SEMICOLON = 0x3B
APOSTROPHE = 0x27

# Byte value -> entity name
ENTITY_NAMES: Dict[int, bytes] = {
    ord("<"): b"lt",
    ord(">"): b"gt",
    ord("&"): b"amp",
    ord('"'): b"quot",
    APOSTROPHE: b"apos",
}

# Entity token (text between '&' and ';') -> byte value
NAMED_ENTITIES: Dict[bytes, int] = {
    name: byte for byte, name in ENTITY_NAMES.items()
}
NAMED_ENTITIES[b"#39"] = APOSTROPHE

# Full reference emitted by the encoder for each reserved byte
NAMED_REFERENCES: Dict[int, bytes] = {
    byte: b"&" + name + b";" for byte, name in ENTITY_NAMES.items()
}
NAMED_REFERENCES[APOSTROPHE] = b"&#39;"


def named_reference(byte: int) -> Optional[bytes]:
    """Return the reference the encoder uses for a reserved byte.

    Args:
        byte: Byte value in 0..255

    Returns:
        The reference such as ``b"&lt;"``, or None if the byte has no named form
    """
    return NAMED_REFERENCES.get(byte)


def resolve_name(token: bytes) -> Optional[int]:
    """Resolve an entity token with an exact named match.

    Args:
        token: Text between ``&`` and ``;``

    Returns:
        Byte value, or None if the token is not one of the known names
    """
    return NAMED_ENTITIES.get(token)
