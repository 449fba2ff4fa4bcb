class QOI:
    # Chunk tags
    QOI_INDEX   = 0x00  # 00xxxxxx
    QOI_RUN_8   = 0x40  # 010xxxxx
    QOI_RUN_16  = 0x60  # 011xxxxx
    QOI_DIFF_8  = 0x80  # 10xxxxxx
    QOI_DIFF_16 = 0xC0  # 110xxxxx
    QOI_DIFF_24 = 0xE0  # 1110xxxx
    QOI_COLOR   = 0xF0  # 1111xxxx

    QOI_MASK_2 = 0xC0  # 11000000
    QOI_MASK_3 = 0xE0  # 11100000
    QOI_MASK_4 = 0xF0  # 11110000

    QOI_HEADER_SIZE = 14
    QOI_PADDING = 4
    QOI_MAGIC = b"qoif"
    QOI_MAX_DIMENSION = 0xFFFF
    QOI_MAX_RUN = 0x2020  # 8224 = 32 + 0x1FFF + 1
    QOI_INDEX_SIZE = 64

    # The stream is predicted from opaque black; a decoder that has not
    # read any chunk yet fills with opaque white.
    QOI_START_COLOR = (0, 0, 0, 255)
    QOI_FILL_COLOR = (255, 255, 255, 255)

    @staticmethod
    def color_hash(r, g, b, a):
        """Calculates the index position for the color array."""
        return (r ^ g ^ b ^ a) % 64


# Signed deltas are stored with a bias so that the field is unsigned:
#   2 bits: [-2, 1]   bias 2
#   4 bits: [-8, 7]   bias 8
#   5 bits: [-16, 15] bias 16
def bias(delta: int, bits: int) -> int:
    """Map a signed delta onto an unsigned ``bits``-wide field."""
    return (delta + (1 << (bits - 1))) & ((1 << bits) - 1)


def unbias(field: int, bits: int) -> int:
    """Inverse of :func:`bias`; ``field`` must already be masked."""
    return field - (1 << (bits - 1))


def fits(delta: int, bits: int) -> bool:
    """True if ``delta`` lies in the signed range of a ``bits``-wide field."""
    half = 1 << (bits - 1)
    return -half <= delta < half
