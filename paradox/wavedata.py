"""Reading PCM sound from RIFF/WAVE files."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from pathlib import Path


class AudioFormat(enum.IntEnum):
    """Sample layouts, numbered as the audio library expects them."""

    MONO8 = 0x1100
    MONO16 = 0x1101
    STEREO8 = 0x1102
    STEREO16 = 0x1103


_FORMATS = {
    (1, 8): AudioFormat.MONO8,
    (1, 16): AudioFormat.MONO16,
    (2, 8): AudioFormat.STEREO8,
    (2, 16): AudioFormat.STEREO16,
}

_RIFF_HEADER = struct.Struct("<4si4s")
_FMT_CHUNK = struct.Struct("<4sihhiihh")
_DATA_HEADER = struct.Struct("<4sI")


class WaveFormatError(ValueError):
    """Raised when bytes are not a WAVE file this reader understands."""


@dataclass(frozen=True)
class WaveData:
    """Sample bytes of a sound with their size, rate and layout.

    ``format`` is None when the channel count or bit depth has no layout.
    """

    size: int
    frequency: int
    format: AudioFormat | None
    data: bytes


def _unpack(layout: struct.Struct, data: bytes, offset: int, what: str) -> tuple[tuple, int]:
    if offset + layout.size > len(data):
        raise WaveFormatError(f"truncated {what}")
    return layout.unpack_from(data, offset), offset + layout.size


def parse_wav(data) -> WaveData:
    """Parse a WAVE file held in memory.

    The header is accepted when either the ``RIFF`` id or the ``WAVE`` tag is
    present. The ``fmt `` chunk must directly follow it and the ``data``
    chunk must directly follow that.
    """
    data = bytes(data)
    (chunk_id, _, riff_format), offset = _unpack(_RIFF_HEADER, data, 0, "RIFF header")
    if chunk_id != b"RIFF" and riff_format != b"WAVE":
        raise WaveFormatError("invalid RIFF or WAVE header")

    fields, offset = _unpack(_FMT_CHUNK, data, offset, "wave format")
    fmt_id, fmt_size, _audio_format, channels, sample_rate, _byte_rate, _block_align, bits = fields
    if fmt_id != b"fmt ":
        raise WaveFormatError("invalid wave format")
    if fmt_size > 16:
        offset += 2

    (data_id, data_size), offset = _unpack(_DATA_HEADER, data, offset, "data header")
    if data_id != b"data":
        raise WaveFormatError("invalid data header")
    samples = data[offset : offset + data_size]
    if data_size == 0 or len(samples) < data_size:
        raise WaveFormatError("error loading wave data")

    return WaveData(data_size, sample_rate, _FORMATS.get((channels, bits)), samples)


def load_wav(path) -> WaveData:
    """Read and parse a WAVE file from disk."""
    return parse_wav(Path(path).read_bytes())