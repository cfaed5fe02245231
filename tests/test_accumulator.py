import pytest

from workbook_rpc.accumulator import (
    CobsAccumulator,
    CobsDecodeError,
    Consumed,
    DeserError,
    OverFull,
    Success,
    cobs_decode,
    cobs_encode,
)

PAYLOADS = [
    b"",
    b"\x00",
    b"\x00\x00",
    b"hello",
    b"\x11\x22\x00\x33",
    bytes(range(1, 255)),
    bytes(range(1, 256)),
    bytes(range(256)) * 3,
    b"\x00" + b"\x01" * 300 + b"\x00",
]


def frame(payload):
    return cobs_encode(payload) + b"\x00"


def test_encode_known_examples():
    assert cobs_encode(b"\x00") == b"\x01\x01"
    assert cobs_encode(b"\x11\x22\x00\x33") == b"\x03\x11\x22\x02\x33"


@pytest.mark.parametrize("payload", PAYLOADS)
def test_round_trip(payload):
    encoded = cobs_encode(payload)
    assert 0 not in encoded
    assert cobs_decode(encoded) == payload
    assert cobs_decode(encoded + b"\x00") == payload


def test_decode_stops_at_zero():
    assert cobs_decode(frame(b"abc") + b"garbage") == b"abc"


def test_decode_overrun_raises():
    with pytest.raises(CobsDecodeError):
        cobs_decode(b"\x05\x11\x00")


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        CobsAccumulator(-1)


def test_empty_feed_is_consumed():
    acc = CobsAccumulator(16)
    assert acc.feed(b"") == Consumed()


def test_whole_frame():
    acc = CobsAccumulator(64)
    assert acc.feed(frame(b"hello")) == Success(b"hello", b"")
    assert len(acc) == 0


def test_frame_split_across_chunks():
    acc = CobsAccumulator(64)
    wire = frame(b"\x11\x22\x00\x33")
    assert acc.feed(wire[:2]) == Consumed()
    assert len(acc) == 2
    assert acc.feed(wire[2:]) == Success(b"\x11\x22\x00\x33", b"")


def test_byte_by_byte():
    acc = CobsAccumulator(64)
    wire = frame(b"byte by byte")
    results = [acc.feed(wire[i : i + 1]) for i in range(len(wire))]
    assert all(r == Consumed() for r in results[:-1])
    assert results[-1] == Success(b"byte by byte", b"")


def test_two_frames_in_one_chunk():
    acc = CobsAccumulator(64)
    second = frame(b"second")
    result = acc.feed(frame(b"first") + second)
    assert result == Success(b"first", second)
    assert acc.feed(result.remaining) == Success(b"second", b"")


def test_overfull_without_terminator():
    acc = CobsAccumulator(4)
    data = b"\x01\x02\x03\x04\x05\x06"
    assert acc.feed(data) == OverFull(data[4:])
    assert len(acc) == 0


def test_overfull_after_partial_fill():
    acc = CobsAccumulator(4)
    assert acc.feed(b"\x01\x02\x03") == Consumed()
    data = b"\x04\x05\x06"
    assert acc.feed(data) == OverFull(data[1:])


def test_overfull_with_terminator_drops_frame_and_recovers():
    acc = CobsAccumulator(4)
    tail = frame(b"ok")
    assert acc.feed(frame(b"too long") + tail) == OverFull(tail)
    assert acc.feed(tail) == Success(b"ok", b"")


def test_frame_exactly_fits():
    wire = frame(b"abc")
    acc = CobsAccumulator(len(wire))
    assert acc.feed(wire) == Success(b"abc", b"")


def test_bad_frame_reports_error_and_recovers():
    acc = CobsAccumulator(64)
    rest = frame(b"next")
    result = acc.feed(b"\x05\x11\x00" + rest)
    assert result == DeserError(rest)
    assert len(acc) == 0
    assert acc.feed(result.remaining) == Success(b"next", b"")


def test_empty_frame_decodes_to_nothing():
    acc = CobsAccumulator(8)
    assert acc.feed(b"\x00") == Success(b"", b"")