import struct


def qoi_stream(width, height, channels, chunks, colorspace=0):
    """Build a QOI stream around hand-written chunk bytes."""
    return (
        b"qoif"
        + struct.pack(">IIBB", width, height, channels, colorspace)
        + bytes(chunks)
        + b"\x00\x00\x00\x00"
    )


def chunks_of(encoded):
    """Strip header and end marker from an encoded stream."""
    assert encoded[-4:] == b"\x00\x00\x00\x00", "Missing end marker!"
    return encoded[14:-4]


def pixels(decoded):
    data = decoded["data"]
    return [tuple(data[i : i + 4]) for i in range(0, len(data), 4)]
