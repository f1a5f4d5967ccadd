"""Public API for htmlencode."""

from htmlencode.codec.stream import transcode

from .functions import decode, encode

__all__ = ["decode", "encode", "transcode"]
