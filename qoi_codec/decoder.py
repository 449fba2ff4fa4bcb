from .color_index import ColorIndex
from .header import read_header
from .qoi import QOI, unbias


class QOIDecoder:
    """
    A class to decode QOI (Quite OK Image) files into raw RGBA pixel data.
    """

    @staticmethod
    def decode(
        file_data: bytes,
        byte_offset: int = 0,
        byte_length: int = None,
        with_dimensions: bool = True,
    ) -> dict:
        """
        Decode a QOI file given as a bytes/bytearray object.

        The returned pixel data is always RGBA (4 bytes per pixel); for a
        3-channel file the alpha bytes are 255.

        :param file_data: Bytes containing the QOI file.
        :param byte_offset: Offset to the start of the QOI file in file_data.
        :param byte_length: Length of the QOI file in bytes.
        :param with_dimensions: Include width and height in the result.
        :return: Dictionary containing width, height, colorspace, channels, and data (bytes).
        """
        data = _slice(file_data, byte_offset, byte_length)
        header = read_header(data)

        result = bytearray(header["width"] * header["height"] * 4)
        _decode_chunks(data, header, result, None)

        decoded = {
            "channels": header["channels"],
            "colorspace": header["colorspace"],
            "data": bytes(result),
        }
        if with_dimensions:
            decoded["width"] = header["width"]
            decoded["height"] = header["height"]
        return decoded

    @staticmethod
    def decode_with_events(
        file_data: bytes,
        event_sink,
        byte_offset: int = 0,
        byte_length: int = None,
    ) -> dict:
        """
        Walk a QOI file chunk by chunk and report each one to ``event_sink``.

        The sink is called once with a ``HEADER`` event and then once per
        chunk consumed. No pixel buffer is produced.

        :param event_sink: Callable receiving one event dict per call.
        :return: The parsed header.
        """
        data = _slice(file_data, byte_offset, byte_length)
        header = read_header(data)

        event_sink({"type": "HEADER", **header})
        _decode_chunks(data, header, None, event_sink)
        return header


def _slice(file_data, byte_offset, byte_length):
    if byte_length is None:
        byte_length = len(file_data) - byte_offset
    return file_data[byte_offset : byte_offset + byte_length]


def _decode_chunks(data, header, pixels, event_sink):
    """
    Run the chunk state machine over ``data`` for width*height pixels.

    Writes RGBA quadruples into ``pixels`` when it is not None and reports
    every consumed chunk to ``event_sink`` when that is not None.
    """
    emit = event_sink is not None
    index = ColorIndex.for_decode(header["channels"])

    r, g, b, a = QOI.QOI_FILL_COLOR
    run = 0
    read_pos = QOI.QOI_HEADER_SIZE
    write_pos = 0

    # The last 4 bytes are the end marker and never hold a chunk tag
    chunks_length = len(data) - QOI.QOI_PADDING

    for _ in range(header["width"] * header["height"]):
        # 1. Continue a run: no byte is consumed, the index is not touched
        if run > 0:
            run -= 1

        # 2. Read the next chunk
        elif read_pos < chunks_length:
            if read_pos == QOI.QOI_HEADER_SIZE:
                # The encoder predicts the first chunk from QOI_START_COLOR, not
                # QOI_FILL_COLOR; starting from white here breaks round trips.
                r, g, b, a = QOI.QOI_START_COLOR

            offset = read_pos
            b1 = data[read_pos]
            read_pos += 1

            # QOI_INDEX (00xxxxxx)
            if (b1 & QOI.QOI_MASK_2) == QOI.QOI_INDEX:
                slot = b1 & 0x3F
                r, g, b, a = index.lookup(slot)
                if emit:
                    event_sink({"type": "INDEX", "offset": offset, "index": slot})

            # QOI_RUN_8 (010xxxxx)
            elif (b1 & QOI.QOI_MASK_3) == QOI.QOI_RUN_8:
                run = b1 & 0x1F
                if emit:
                    event_sink({"type": "RUN_8", "offset": offset, "run": run})

            # QOI_RUN_16 (011xxxxx xxxxxxxx)
            elif (b1 & QOI.QOI_MASK_3) == QOI.QOI_RUN_16:
                b2 = data[read_pos]
                read_pos += 1
                run = (((b1 & 0x1F) << 8) | b2) + 32
                if emit:
                    event_sink({"type": "RUN_16", "offset": offset, "run": run})

            # QOI_DIFF_8 (10rrggbb)
            elif (b1 & QOI.QOI_MASK_2) == QOI.QOI_DIFF_8:
                dr = unbias((b1 >> 4) & 0x03, 2)
                dg = unbias((b1 >> 2) & 0x03, 2)
                db = unbias(b1 & 0x03, 2)

                r = (r + dr) & 0xFF
                g = (g + dg) & 0xFF
                b = (b + db) & 0xFF
                if emit:
                    event_sink(
                        {"type": "DIFF_8", "offset": offset, "r": dr, "g": dg, "b": db}
                    )

            # QOI_DIFF_16 (110rrrrr ggggbbbb)
            elif (b1 & QOI.QOI_MASK_3) == QOI.QOI_DIFF_16:
                b2 = data[read_pos]
                read_pos += 1

                dr = unbias(b1 & 0x1F, 5)
                dg = unbias(b2 >> 4, 4)
                db = unbias(b2 & 0x0F, 4)

                r = (r + dr) & 0xFF
                g = (g + dg) & 0xFF
                b = (b + db) & 0xFF
                if emit:
                    event_sink(
                        {"type": "DIFF_16", "offset": offset, "r": dr, "g": dg, "b": db}
                    )

            # QOI_DIFF_24 (1110rrrr rgggggbb bbbaaaaa)
            elif (b1 & QOI.QOI_MASK_4) == QOI.QOI_DIFF_24:
                b2 = data[read_pos]
                b3 = data[read_pos + 1]
                read_pos += 2

                dr = unbias(((b1 & 0x0F) << 1) | (b2 >> 7), 5)
                dg = unbias((b2 & 0x7C) >> 2, 5)
                db = unbias(((b2 & 0x03) << 3) | (b3 >> 5), 5)
                da = unbias(b3 & 0x1F, 5)

                r = (r + dr) & 0xFF
                g = (g + dg) & 0xFF
                b = (b + db) & 0xFF
                a = (a + da) & 0xFF
                if emit:
                    event_sink(
                        {
                            "type": "DIFF_24",
                            "offset": offset,
                            "r": dr,
                            "g": dg,
                            "b": db,
                            "a": da,
                        }
                    )

            # QOI_COLOR (1111rgba, then one byte per flagged channel)
            else:
                event = {"type": "COLOR", "offset": offset}
                if b1 & 0x08:
                    r = event["r"] = data[read_pos]
                    read_pos += 1
                if b1 & 0x04:
                    g = event["g"] = data[read_pos]
                    read_pos += 1
                if b1 & 0x02:
                    b = event["b"] = data[read_pos]
                    read_pos += 1
                if b1 & 0x01:
                    a = event["a"] = data[read_pos]
                    read_pos += 1
                if emit:
                    event_sink(event)

            index.store((r, g, b, a))

        # 3. Otherwise the stream is exhausted and the last color repeats

        # 4. Write Pixel to Result
        if pixels is not None:
            pixels[write_pos] = r
            pixels[write_pos + 1] = g
            pixels[write_pos + 2] = b
            pixels[write_pos + 3] = a
            write_pos += 4
