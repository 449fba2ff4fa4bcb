from .color_index import ColorIndex
from .decoder import QOIDecoder
from .encoder import QOIEncoder
from .errors import (
    IllegalChannels,
    IllegalColorSpace,
    IllegalDataLength,
    IllegalHeight,
    IllegalWidth,
    MagicMismatch,
    QOIError,
    ShortInput,
)
from .qoi import QOI
from .utils import load_image, save_image, to_array


def encode(image: dict) -> bytes:
    """Encode an image dict (width, height, channels, colorspace, data) to QOI bytes."""
    return QOIEncoder.encode(image["data"], image)


def decode(data: bytes) -> dict:
    """Decode QOI bytes to an image dict with RGBA ``data``."""
    return QOIDecoder.decode(data)


def decode_with_events(data: bytes, event_sink) -> dict:
    """Report the header and every chunk of QOI bytes to ``event_sink``; returns the header."""
    return QOIDecoder.decode_with_events(data, event_sink)


__all__ = [
    "QOIEncoder",
    "QOIDecoder",
    "QOI",
    "ColorIndex",
    "QOIError",
    "ShortInput",
    "MagicMismatch",
    "IllegalWidth",
    "IllegalHeight",
    "IllegalChannels",
    "IllegalColorSpace",
    "IllegalDataLength",
    "encode",
    "decode",
    "decode_with_events",
    "load_image",
    "save_image",
    "to_array",
]
