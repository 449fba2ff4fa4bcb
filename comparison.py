#! Our QOI codec is pure Python while Pillow's PNG writer is C, so the timings
#! are not a fair race; the byte sizes are the interesting part.

import argparse
import io
import time

import numpy as np
from PIL import Image

from qoi_codec import QOIDecoder, QOIEncoder, load_image

INPUT_IMAGE = "fruits.png"


def time_compare(pixel_data: np.ndarray, desc: dict, repeat: int = 1) -> dict:
    start_time = time.time()
    for _ in range(repeat):
        encoded = QOIEncoder.encode(pixel_data, desc)
    qoi_encode = (time.time() - start_time) / repeat
    print(f"Encoded QOI to {len(encoded)} bytes in {qoi_encode:.2f} seconds")

    start_time = time.time()
    for _ in range(repeat):
        decoded = QOIDecoder.decode(encoded)
    qoi_decode = (time.time() - start_time) / repeat
    print(f"Decoded QOI in {qoi_decode:.2f} seconds")

    assert decoded["data"] == _expected_rgba(pixel_data, desc), "Round trip mismatch!"

    # Encode to PNG in C using Pillow
    image = Image.fromarray(pixel_data)
    if desc["channels"] == 3:
        image = image.convert("RGB")

    start_time = time.time()
    for _ in range(repeat):
        png = io.BytesIO()
        image.save(png, format="PNG")
    png_encode = (time.time() - start_time) / repeat
    print(f"Encoded PNG to {png.tell()} bytes in {png_encode:.2f} seconds")

    return {
        "qoi_bytes": len(encoded),
        "png_bytes": png.tell(),
        "qoi_encode": qoi_encode,
        "qoi_decode": qoi_decode,
        "png_encode": png_encode,
    }


def _expected_rgba(pixel_data, desc):
    rgba = np.array(pixel_data, dtype=np.uint8)
    if desc["channels"] == 3:
        rgba[..., 3] = 255
    return rgba.tobytes()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Compare QOI and PNG on one image.")
    parser.add_argument("image", nargs="?", default=INPUT_IMAGE)
    parser.add_argument("--repeat", type=int, default=1)
    args = parser.parse_args()

    pixel_data, desc = load_image(args.image)
    print(
        f"Loaded image {args.image}: {desc['width']}x{desc['height']} Channels: {desc['channels']}"
    )
    print(f"Original {args.image} {pixel_data.nbytes} bytes")

    time_compare(pixel_data, desc, args.repeat)
