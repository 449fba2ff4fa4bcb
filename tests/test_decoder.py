from qoi_codec import QOIDecoder, decode

from helpers import pixels, qoi_stream

A = (10, 20, 30, 40)
COLOR_A = [0xFF, *A]


def _decode(width, chunks, channels=4):
    return pixels(decode(qoi_stream(width, 1, channels, chunks)))


def test_index_before_any_store():
    assert _decode(1, [0x00]) == [(0, 0, 0, 0)]


def test_index_rgb_slots_are_opaque():
    """3-channel streams start with every index slot at alpha 255."""
    assert _decode(1, [0x05], channels=3) == [(0, 0, 0, 255)]


def test_index_after_store():
    # A lands in slot 10 ^ 20 ^ 30 ^ 40 = 40
    assert _decode(3, COLOR_A + [0xFF, 1, 2, 3, 4, 0x28]) == [A, (1, 2, 3, 4), A]


def test_run_8():
    assert _decode(3, COLOR_A + [0x41]) == [A] * 3


def test_run_16():
    # run = (0 << 8 | 7) + 32 = 39 repeats after the chunk's own pixel
    assert _decode(41, COLOR_A + [0x60, 0x07]) == [A] * 41


def test_diff_8():
    # r-2, g+0, b+1
    assert _decode(2, COLOR_A + [0x8B]) == [A, (8, 20, 31, 40)]


def test_diff_8_wraps_from_start_color():
    # r-1 from the opaque black the stream is predicted from
    assert _decode(1, [0x9A]) == [(255, 0, 0, 255)]


def test_diff_16():
    # r-16, g+7, b-8
    assert _decode(2, COLOR_A + [0xC0, 0xF0]) == [A, (250, 27, 22, 40)]


def test_diff_24():
    # r+15, g-16, b+5, a-3
    assert _decode(2, COLOR_A + [0xEF, 0x82, 0xAD]) == [A, (25, 4, 35, 37)]


def test_color_partial():
    # flags 0101: only g and a follow
    assert _decode(2, COLOR_A + [0xF5, 99, 7]) == [A, (10, 99, 30, 7)]


def test_truncated_stream_repeats_last_color():
    """Missing chunks are not an error: the last decoded color repeats."""
    assert _decode(4, COLOR_A + [0x8B]) == [A] + [(8, 20, 31, 40)] * 3


def test_empty_stream_fills_white():
    assert _decode(2, []) == [(255, 255, 255, 255)] * 2


def test_each_call_starts_with_a_fresh_index():
    stored = qoi_stream(2, 1, 4, COLOR_A + [0x28])
    assert pixels(decode(stored)) == [A, A]
    # Slot 40 must not remember A from the previous call
    assert pixels(decode(qoi_stream(1, 1, 4, [0x28]))) == [(0, 0, 0, 0)]


def test_rows_are_row_major():
    decoded = decode(qoi_stream(2, 2, 4, COLOR_A + [0x8B, 0x8B, 0x8B]))
    assert decoded["width"] == 2 and decoded["height"] == 2
    assert pixels(decoded)[-1] == (4, 20, 33, 40)


def test_decode_without_dimensions():
    decoded = QOIDecoder.decode(qoi_stream(1, 1, 4, COLOR_A), with_dimensions=False)

    assert "width" not in decoded and "height" not in decoded
    assert decoded["channels"] == 4
    assert decoded["data"] == bytes(A)


def test_decode_embedded_stream():
    stream = qoi_stream(1, 1, 4, COLOR_A)
    wrapped = b"junk" + stream + b"trailer"

    decoded = QOIDecoder.decode(wrapped, byte_offset=4, byte_length=len(stream))
    assert decoded["data"] == bytes(A)


def test_chunk_payload_reaching_into_end_marker():
    """A COLOR tag right before the marker reads marker bytes and does not fail."""
    assert _decode(3, [0xFF]) == [(0, 0, 0, 0)] * 3


def test_truncated_two_byte_chunk():
    assert _decode(2, COLOR_A + [0xC0]) == [A, (250, 12, 22, 40)]
