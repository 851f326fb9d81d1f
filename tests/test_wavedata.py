import struct
import wave

import pytest

from paradox.wavedata import AudioFormat, WaveFormatError, load_wav, parse_wav


def _wav(
    channels=1,
    bits=16,
    rate=22050,
    payload=b"\x01\x02\x03\x04",
    fmt_size=16,
    riff=b"RIFF",
    tag=b"WAVE",
    fmt_id=b"fmt ",
    data_id=b"data",
    declared_size=None,
):
    block = channels * bits // 8
    fmt = struct.pack("<4sihhiihh", fmt_id, fmt_size, 1, channels, rate, rate * block, block, bits)
    if fmt_size > 16:
        fmt += b"\x00\x00"
    size = len(payload) if declared_size is None else declared_size
    body = tag + fmt[0:0]
    chunks = fmt + struct.pack("<4sI", data_id, size) + payload
    return struct.pack("<4si", riff, 4 + len(chunks)) + body + chunks


def test_mono16_fields():
    result = parse_wav(_wav(1, 16, 22050, b"\x10\x20\x30\x40"))
    assert result.format is AudioFormat.MONO16
    assert result.frequency == 22050
    assert result.size == 4
    assert result.data == b"\x10\x20\x30\x40"


@pytest.mark.parametrize(
    "channels,bits,code",
    [
        (1, 8, 0x1100),
        (1, 16, 0x1101),
        (2, 8, 0x1102),
        (2, 16, 0x1103),
    ],
)
def test_format_codes(channels, bits, code):
    assert int(parse_wav(_wav(channels, bits)).format) == code


@pytest.mark.parametrize(
    "channels,bits,expected",
    [
        (1, 8, AudioFormat.MONO8),
        (2, 8, AudioFormat.STEREO8),
        (2, 16, AudioFormat.STEREO16),
    ],
)
def test_layouts(channels, bits, expected):
    assert parse_wav(_wav(channels, bits)).format is expected


def test_unknown_bit_depth_has_no_format():
    result = parse_wav(_wav(1, 24, payload=b"\x00" * 6))
    assert result.format is None
    assert result.size == 6


def test_extended_fmt_chunk_is_skipped():
    result = parse_wav(_wav(fmt_size=18, payload=b"abcd"))
    assert result.data == b"abcd"


def test_round_trip_with_stdlib_writer(tmp_path):
    path = tmp_path / "tone.wav"
    frames = bytes(range(0, 200, 2))
    with wave.open(str(path), "wb") as writer:
        writer.setnchannels(2)
        writer.setsampwidth(2)
        writer.setframerate(44100)
        writer.writeframes(frames)
    result = load_wav(path)
    assert result.format is AudioFormat.STEREO16
    assert result.frequency == 44100
    assert result.data == frames
    assert result.size == len(frames)


def test_either_riff_or_wave_tag_is_enough():
    assert parse_wav(_wav(riff=b"RIFX")).data == b"\x01\x02\x03\x04"
    assert parse_wav(_wav(tag=b"WAVX")).data == b"\x01\x02\x03\x04"


def test_both_header_tags_wrong_raises():
    with pytest.raises(WaveFormatError):
        parse_wav(_wav(riff=b"RIFX", tag=b"WAVX"))


def test_bad_fmt_id_raises():
    with pytest.raises(WaveFormatError):
        parse_wav(_wav(fmt_id=b"fmtx"))


def test_bad_data_id_raises():
    with pytest.raises(WaveFormatError):
        parse_wav(_wav(data_id=b"list"))


def test_truncated_samples_raise():
    with pytest.raises(WaveFormatError):
        parse_wav(_wav(payload=b"\x01\x02", declared_size=8))


def test_empty_samples_raise():
    with pytest.raises(WaveFormatError):
        parse_wav(_wav(payload=b""))


def test_truncated_header_raises():
    with pytest.raises(WaveFormatError):
        parse_wav(b"RIFF\x00\x00")


def test_error_is_value_error():
    with pytest.raises(ValueError):
        parse_wav(b"")


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_wav(tmp_path / "absent.wav")