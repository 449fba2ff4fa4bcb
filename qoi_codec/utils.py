import numpy as np
from PIL import Image

RAW_EXTENSIONS = ("dng", "cr2", "nef", "arw", "raw")


def load_image(filepath: str) -> tuple[np.ndarray, dict]:
    """
    Load an image and return RGBA pixel data as numpy array + description.

    The description reports 3 channels when every alpha value is 255 and
    4 otherwise, so opaque images are written without an alpha channel.
    """

    ext = filepath.lower().split(".")[-1]

    if ext in RAW_EXTENSIONS:
        # RAW formats - requires rawpy
        import rawpy

        with rawpy.imread(filepath) as raw:
            rgb = raw.postprocess()
        img = Image.fromarray(rgb)
    else:
        # Standard formats (PNG, JPEG, etc.)
        img = Image.open(filepath)

    # The codec always works on RGBA in memory
    rgba = np.array(img.convert("RGBA"), dtype=np.uint8)
    channels = 3 if np.all(rgba[..., 3] == 255) else 4

    return rgba, {
        "width": img.size[0],
        "height": img.size[1],
        "channels": channels,
        "colorspace": 0,
    }


def to_array(decoded: dict) -> np.ndarray:
    """View decoded RGBA data as a (height, width, 4) uint8 array."""
    return np.frombuffer(decoded["data"], dtype=np.uint8).reshape(
        decoded["height"], decoded["width"], 4
    )


def save_image(filepath: str, decoded: dict) -> None:
    """Save a decoded image with Pillow; the format follows the file extension."""
    img = Image.fromarray(to_array(decoded))
    if decoded["channels"] == 3:
        img = img.convert("RGB")
    img.save(filepath)
