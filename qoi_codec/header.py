import operator
import struct

from .errors import (
    IllegalChannels,
    IllegalColorSpace,
    IllegalHeight,
    IllegalWidth,
    MagicMismatch,
    ShortInput,
)
from .qoi import QOI

# > : Big Endian
# 4s: 4-byte string (magic)
# I : unsigned int (4 bytes)
# B : unsigned char (1 byte)
_HEADER = struct.Struct(">4sIIBB")


def _check_channels(channels, where):
    if channels not in (3, 4):
        raise IllegalChannels(
            f"QOI.{where}: illegal number of channels: {channels}, must be 3 or 4"
        )


def _check_colorspace(colorspace, where):
    # high nibble is reserved and must be zero
    if colorspace & ~0x0F:
        raise IllegalColorSpace(
            f"QOI.{where}: illegal color space: 0x{colorspace:02x}"
        )


def read_header(data) -> dict:
    """
    Parse and validate the 14-byte header at the start of ``data``.

    Checks run in a fixed order (length, magic, width, height, channels,
    color space) and the first failing one raises.

    :param data: Bytes containing the whole QOI stream, end marker included.
    :return: Dictionary containing width, height, channels and colorspace.
    """
    if len(data) < QOI.QOI_HEADER_SIZE + QOI.QOI_PADDING:
        raise ShortInput(
            f"QOI.decode: file too short ({len(data)} bytes), need at least "
            f"{QOI.QOI_HEADER_SIZE + QOI.QOI_PADDING}"
        )

    magic, width, height, channels, colorspace = _HEADER.unpack_from(data, 0)

    if magic != QOI.QOI_MAGIC:
        raise MagicMismatch(f"QOI.decode: illegal file magic: 0x{magic.hex()}")

    if width == 0:
        raise IllegalWidth(f"QOI.decode: illegal width: {width}")

    if height == 0:
        raise IllegalHeight(f"QOI.decode: illegal height: {height}")

    _check_channels(channels, "decode")
    _check_colorspace(colorspace, "decode")

    return {
        "width": width,
        "height": height,
        "channels": channels,
        "colorspace": colorspace,
    }


def _as_int(value, error, name):
    # numpy integers are accepted, floats and None are not
    try:
        return operator.index(value)
    except TypeError:
        raise error(f"QOI.encode: illegal {name}: {value!r}") from None


def validate_description(description: dict) -> tuple:
    """Validate an encode description and return (width, height, channels, colorspace)."""
    width = _as_int(description.get("width"), IllegalWidth, "width")
    if not (0 < width <= QOI.QOI_MAX_DIMENSION):
        raise IllegalWidth(f"QOI.encode: illegal width: {width}")

    height = _as_int(description.get("height"), IllegalHeight, "height")
    if not (0 < height <= QOI.QOI_MAX_DIMENSION):
        raise IllegalHeight(f"QOI.encode: illegal height: {height}")

    channels = _as_int(description.get("channels"), IllegalChannels, "number of channels")
    _check_channels(channels, "encode")

    colorspace = _as_int(description.get("colorspace", 0), IllegalColorSpace, "color space")
    _check_colorspace(colorspace, "encode")

    return width, height, channels, colorspace


def write_header(buffer: bytearray, width, height, channels, colorspace) -> int:
    """Write the header at the start of ``buffer``; returns the next write offset."""
    _HEADER.pack_into(buffer, 0, QOI.QOI_MAGIC, width, height, channels, colorspace)
    return QOI.QOI_HEADER_SIZE
