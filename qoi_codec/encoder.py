import numpy as np

from .color_index import ColorIndex
from .errors import IllegalDataLength
from .header import validate_description, write_header
from .qoi import QOI, bias, fits


class QOIEncoder:
    @staticmethod
    def encode(color_data, description: dict) -> bytes:
        """
        Encode a QOI file.

        :param color_data: Bytes-like object (bytes, bytearray, list of ints, numpy uint8 array)
                           containing width * height RGBA quadruples. Alpha is ignored for
                           3-channel images.
        :param description: Dictionary containing 'width', 'height', 'channels', 'colorspace'.
        :return: bytes object containing the QOI file content.
        """
        # --- Validation ---
        width, height, channels, colorspace = validate_description(description)

        if isinstance(color_data, np.ndarray):
            color_data = np.ascontiguousarray(color_data, dtype=np.uint8).tobytes()
        else:
            color_data = bytes(color_data)

        pixel_length = width * height * 4
        if len(color_data) != pixel_length:
            raise IllegalDataLength(
                f"QOI.encode: The length of colorData is incorrect: got "
                f"{len(color_data)}, expected {pixel_length} (RGBA)"
            )

        # --- Initialization ---
        # Worst case is a full COLOR chunk for every pixel; the buffer is
        # allocated once and cut down to the written length at the end.
        result = bytearray(
            QOI.QOI_HEADER_SIZE + QOI.QOI_PADDING + width * height * (channels + 1)
        )
        p = write_header(result, width, height, channels, colorspace)

        # Encoding State
        prev_r, prev_g, prev_b, prev_a = QOI.QOI_START_COLOR
        prev_v = prev_r << 24 | prev_g << 16 | prev_b << 8 | prev_a
        run = 0
        index = ColorIndex()
        a = 255
        last_pos = pixel_length - 4

        # --- Pixel Loop ---
        for i in range(0, pixel_length, 4):
            r = color_data[i]
            g = color_data[i + 1]
            b = color_data[i + 2]
            if channels == 4:
                a = color_data[i + 3]

            v = r << 24 | g << 16 | b << 8 | a

            if v == prev_v:
                run += 1

            if run > 0 and (run == QOI.QOI_MAX_RUN or v != prev_v or i == last_pos):
                if run <= 32:
                    # QOI_RUN_8
                    result[p] = QOI.QOI_RUN_8 | (run - 1)
                    p += 1
                else:
                    # QOI_RUN_16
                    run -= 33
                    result[p] = QOI.QOI_RUN_16 | (run >> 8)
                    result[p + 1] = run & 0xFF
                    p += 2
                run = 0

            if v != prev_v:
                color = (r, g, b, a)

                if index.probe(color):
                    # QOI_INDEX
                    result[p] = QOI.QOI_INDEX | QOI.color_hash(r, g, b, a)
                    p += 1
                else:
                    index.store(color)
                    p = _write_delta(
                        result, p, color, r - prev_r, g - prev_g, b - prev_b, a - prev_a
                    )

            prev_r, prev_g, prev_b, prev_a = r, g, b, a
            prev_v = v

        # --- End Marker ---
        # 4 bytes of 0x00, already zero in the preallocated buffer
        p += QOI.QOI_PADDING

        return bytes(result[:p])


def _write_delta(result, p, color, vr, vg, vb, va):
    """Write the smallest DIFF or COLOR chunk for the given deltas at ``p``."""
    if fits(vr, 5) and fits(vg, 5) and fits(vb, 5) and fits(va, 5):
        # QOI_DIFF_8
        if va == 0 and fits(vr, 2) and fits(vg, 2) and fits(vb, 2):
            result[p] = QOI.QOI_DIFF_8 | bias(vr, 2) << 4 | bias(vg, 2) << 2 | bias(vb, 2)
            return p + 1

        # QOI_DIFF_16
        if va == 0 and fits(vg, 4) and fits(vb, 4):
            result[p] = QOI.QOI_DIFF_16 | bias(vr, 5)
            result[p + 1] = bias(vg, 4) << 4 | bias(vb, 4)
            return p + 2

        # QOI_DIFF_24: 5 bits each of r, g, b, a spread over 3 bytes
        fr, fg, fb, fa = bias(vr, 5), bias(vg, 5), bias(vb, 5), bias(va, 5)
        result[p] = QOI.QOI_DIFF_24 | fr >> 1
        result[p + 1] = (fr & 0x01) << 7 | fg << 2 | fb >> 3
        result[p + 2] = (fb & 0x07) << 5 | fa
        return p + 3

    # QOI_COLOR: only the channels that changed are written
    deltas = (vr, vg, vb, va)
    tag = QOI.QOI_COLOR
    for flag, delta in zip((0x08, 0x04, 0x02, 0x01), deltas):
        if delta:
            tag |= flag
    result[p] = tag
    p += 1
    for value, delta in zip(color, deltas):
        if delta:
            result[p] = value
            p += 1
    return p
