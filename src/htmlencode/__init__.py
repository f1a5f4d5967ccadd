"""htmlencode.

Translate to and from HTML entity encoding. Designated bytes are encoded as
named or numeric character references, and references are decoded back into
raw bytes.

Progressive API Disclosure:
- Level 1: Simple functions - encode(), decode(), transcode()
- Level 2: Incremental codecs - EntityEncoder, EntityDecoder
"""

__version__ = "0.1.0"
__author__ = "htmlencode developers"

from .api import decode, encode, transcode
from .codec import (
    EntityDecoder,
    EntityEncoder,
    MalformedEntityError,
)
from .shared.config import ConfigError, ConfigValidationError, TranscodeConfig
from .shared.result import TranscodeMetrics

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "encode",
    "decode",
    "transcode",

    # Level 2: Incremental codecs
    "EntityEncoder",
    "EntityDecoder",

    # Configuration, results and errors
    "TranscodeConfig",
    "TranscodeMetrics",
    "ConfigError",
    "ConfigValidationError",
    "MalformedEntityError",
]
