from qoi_codec import QOIDecoder, decode_with_events

from helpers import qoi_stream

A = (10, 20, 30, 40)


def _events(width, chunks, channels=4):
    events = []
    header = decode_with_events(qoi_stream(width, 1, channels, chunks), events.append)
    return header, events


def test_header_then_one_event_per_chunk():
    header, events = _events(3, [0xFF, *A, 0x8B, 0x28])

    assert header == {"width": 3, "height": 1, "channels": 4, "colorspace": 0}
    assert events == [
        {"type": "HEADER", "width": 3, "height": 1, "channels": 4, "colorspace": 0},
        {"type": "COLOR", "offset": 14, "r": 10, "g": 20, "b": 30, "a": 40},
        {"type": "DIFF_8", "offset": 19, "r": -2, "g": 0, "b": 1},
        {"type": "INDEX", "offset": 20, "index": 40},
    ]


def test_run_events():
    _, events = _events(45, [0xFF, *A, 0x41, 0x60, 0x07])

    assert events[2] == {"type": "RUN_8", "offset": 19, "run": 1}
    assert events[3] == {"type": "RUN_16", "offset": 20, "run": 39}


def test_diff_events():
    _, events = _events(3, [0xFF, *A, 0xC0, 0xF0, 0xEF, 0x82, 0xAD])

    assert events[2] == {"type": "DIFF_16", "offset": 19, "r": -16, "g": 7, "b": -8}
    assert events[3] == {
        "type": "DIFF_24",
        "offset": 21,
        "r": 15,
        "g": -16,
        "b": 5,
        "a": -3,
    }


def test_color_event_lists_present_channels_only():
    _, events = _events(1, [0xF5, 99, 7])
    assert events[1] == {"type": "COLOR", "offset": 14, "g": 99, "a": 7}


def test_run_pixels_emit_no_events():
    """Chunks are reported, not pixels: a long run is a single event."""
    _, events = _events(1000, [0x60, 0xFF])
    assert [event["type"] for event in events] == ["HEADER", "RUN_16"]


def test_events_follow_decode():
    stream = qoi_stream(4, 1, 4, [0xFF, *A, 0x8B, 0x41])
    events = []
    QOIDecoder.decode_with_events(stream, events.append)

    decoded = QOIDecoder.decode(stream)
    assert len(events) == 4
    assert decoded["data"][-4:] == bytes([8, 20, 31, 40])
