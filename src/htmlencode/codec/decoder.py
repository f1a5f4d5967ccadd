"""HTML entity decoder.

A two-state machine over the input bytes. In passthrough state bytes are
copied to the output until an ``&`` starts an entity token; in token state
bytes are collected until ``;`` and the token is resolved to a single byte.

Malformed input is never repaired. The first bad entity raises a
``MalformedEntityError`` and the decoder refuses further input; the caller
decides whether that ends the process.
"""

import re
from typing import Iterable, Iterator, Optional

from htmlencode.character import AMPERSAND, SEMICOLON, resolve_name
from htmlencode.shared.config import TranscodeConfig
from htmlencode.shared.logging import get_logger

# Longest token (text between '&' and ';') that is accepted
MAX_ENTITY_LENGTH = 31

# Numeric bodies follow C scanf conversions: leading space, sign, optional 0x
_HEX_NUMBER = re.compile(
    rb"[ \t\n\v\f\r]*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]+)"
)
_DECIMAL_NUMBER = re.compile(rb"[ \t\n\v\f\r]*([+-]?)([0-9]+)")


class MalformedEntityError(Exception):
    """Base exception for entity references that cannot be decoded.

    Attributes:
        token: Raw bytes collected between ``&`` and ``;``
        position: Input offset of the ``&`` that started the token
        output: Bytes decoded from the current chunk before the failure
    """

    label = "Bad entity"
    terminated = True

    def __init__(self, token: bytes, position: int = 0, output: bytes = b"") -> None:
        self.token = bytes(token)
        self.position = position
        self.output = output
        super().__init__(self.describe())

    def describe(self) -> str:
        """Diagnostic naming the offending token."""
        text = self.token.decode("utf-8", "backslashreplace")
        closing = ";" if self.terminated else ""
        return f"{self.label}: `&{text}{closing}'"


class UnterminatedEntityError(MalformedEntityError):
    """Input ended, or the token grew too long, before the closing ``;``."""

    label = "Bad entity"
    terminated = False


class BadHexEntityError(MalformedEntityError):
    """``&#x...;`` reference without a hexadecimal number."""

    label = "Bad hex entity"


class BadDecimalEntityError(MalformedEntityError):
    """``&#...;`` reference without a decimal number."""

    label = "Bad decimal entity"


class UnknownEntityError(MalformedEntityError):
    """Token is neither a known name nor a numeric reference."""

    label = "Unknown entity"


def _parse_number(pattern: "re.Pattern[bytes]", body: bytes, base: int) -> Optional[int]:
    match = pattern.match(body)
    if match is None:
        return None
    value = int(match.group(2), base)
    if match.group(1) == b"-":
        value = -value
    return value & 0xFF


def resolve_entity(token: bytes, position: int = 0) -> int:
    """Resolve an entity token to the byte it stands for.

    Numeric values outside 0..255 are reduced to their low byte, and bytes
    after the digits are ignored, so ``&#65x;`` decodes to ``A``.

    Args:
        token: Text between ``&`` and ``;``
        position: Input offset of the ``&``, used for error reporting

    Returns:
        Byte value in 0..255

    Raises:
        BadHexEntityError: ``#x`` or ``#X`` not followed by a hex number
        BadDecimalEntityError: ``#`` not followed by a decimal number
        UnknownEntityError: Anything else that is not a known name
    """
    named = resolve_name(token)
    if named is not None:
        return named

    if token[:1] == b"#":
        if token[1:2] in (b"x", b"X"):
            value = _parse_number(_HEX_NUMBER, token[2:], 16)
            if value is None:
                raise BadHexEntityError(token, position)
        else:
            value = _parse_number(_DECIMAL_NUMBER, token[1:], 10)
            if value is None:
                raise BadDecimalEntityError(token, position)
        return value

    raise UnknownEntityError(token, position)


class EntityDecoder:
    """Incremental decoder from entity-encoded bytes to raw bytes.

    A token may span chunk boundaries. ``close`` must be called at the end
    of input so an unterminated token is reported.
    """

    def __init__(
        self,
        config: Optional[TranscodeConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or TranscodeConfig.decoding()
        self.logger = get_logger(__name__, correlation_id, "decoder")
        self.bytes_read = 0
        self.entities_decoded = 0
        self.failed = False
        self.closed = False
        self._token: Optional[bytearray] = None
        self._token_start = 0

    @property
    def in_token(self) -> bool:
        """Whether an ``&`` has been read without its closing ``;``."""
        return self._token is not None

    def _fail(self, error: MalformedEntityError) -> MalformedEntityError:
        self.failed = True
        self._token = None
        self.logger.debug(
            "Malformed entity",
            extra={"token": error.token, "position": error.position}
        )
        return error

    def feed(self, data: bytes) -> bytes:
        """Decode a chunk of input.

        Raises:
            MalformedEntityError: On the first entity that cannot be decoded;
                its ``output`` holds what this chunk decoded before it
            RuntimeError: If the decoder already failed or was closed
        """
        if self.failed or self.closed:
            raise RuntimeError("Cannot feed a decoder that has failed or been closed")

        base = self.bytes_read
        self.bytes_read += len(data)
        out = bytearray()
        index = 0
        length = len(data)

        while index < length:
            token = self._token
            if token is None:
                amp = data.find(AMPERSAND, index)
                if amp < 0:
                    out += data[index:]
                    break
                out += data[index:amp]
                self._token = bytearray()
                self._token_start = base + amp
                index = amp + 1
                continue

            byte = data[index]
            index += 1
            if byte == SEMICOLON:
                try:
                    out.append(resolve_entity(bytes(token), self._token_start))
                except MalformedEntityError as e:
                    e.output = bytes(out)
                    raise self._fail(e) from None
                self.entities_decoded += 1
                self._token = None
            elif len(token) >= MAX_ENTITY_LENGTH:
                raise self._fail(
                    UnterminatedEntityError(token, self._token_start, bytes(out))
                )
            else:
                token.append(byte)

        return bytes(out)

    def close(self) -> bytes:
        """Finish decoding.

        Raises:
            UnterminatedEntityError: If input ended inside an entity token
        """
        if self.closed:
            return b""
        self.closed = True
        if self._token is not None:
            raise self._fail(UnterminatedEntityError(self._token, self._token_start))
        self.logger.debug(
            "Decoding finished",
            extra={
                "bytes_read": self.bytes_read,
                "entities_decoded": self.entities_decoded,
            }
        )
        return b""

    def iter_decode(self, chunks: Iterable[bytes]) -> Iterator[bytes]:
        """Decode an iterable of chunks, yielding each non-empty output chunk.

        On a malformed entity the output decoded before it is yielded first,
        then the error is raised.
        """
        for chunk in chunks:
            try:
                output = self.feed(chunk)
            except MalformedEntityError as e:
                if e.output:
                    yield e.output
                raise
            if output:
                yield output
        self.close()
