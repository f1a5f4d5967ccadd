"""Run statistics for htmlencode transcoding operations."""

from dataclasses import dataclass
from typing import Any, Dict

MS_PER_SECOND = 1000.0


@dataclass
class TranscodeMetrics:
    """Counters collected over one transcoding pass.

    Attributes:
        mode: "encode" or "decode"
        bytes_read: Input bytes consumed
        bytes_written: Output bytes produced
        entities_encoded: Input bytes replaced by an entity reference
        entities_decoded: Entity references resolved back to a byte
        chunks_processed: Number of input chunks fed to the codec
        processing_time_ms: Wall-clock duration of the pass
    """

    mode: str = "encode"
    bytes_read: int = 0
    bytes_written: int = 0
    entities_encoded: int = 0
    entities_decoded: int = 0
    chunks_processed: int = 0
    processing_time_ms: float = 0.0

    def __post_init__(self) -> None:
        """Validate metrics mode."""
        if self.mode not in ("encode", "decode"):
            raise ValueError(f"mode must be 'encode' or 'decode', got {self.mode!r}")

    @property
    def bytes_per_second(self) -> float:
        """Calculate input bytes consumed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.bytes_read * MS_PER_SECOND) / self.processing_time_ms

    @property
    def expansion_ratio(self) -> float:
        """Output size relative to input size."""
        if self.bytes_read == 0:
            return 0.0
        return self.bytes_written / self.bytes_read

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary representation."""
        return {
            "mode": self.mode,
            "bytes_read": self.bytes_read,
            "bytes_written": self.bytes_written,
            "entities_encoded": self.entities_encoded,
            "entities_decoded": self.entities_decoded,
            "chunks_processed": self.chunks_processed,
            "processing_time_ms": self.processing_time_ms,
            "bytes_per_second": self.bytes_per_second,
        }
