import argparse
import sys

from qoi_codec import QOIDecoder, QOIEncoder, load_image, save_image


def _is_qoi(path):
    return path.lower().endswith(".qoi")


def image_to_qoi(image_path, qoi_path, channels=None, colorspace=0):
    pixel_data, desc = load_image(image_path)
    if channels is not None:
        desc["channels"] = channels
    desc["colorspace"] = colorspace

    encoded = QOIEncoder.encode(pixel_data, desc)

    with open(qoi_path, "wb") as f:
        f.write(encoded)
    print(f"Converted {image_path} to {qoi_path} ({len(encoded)} bytes)")


def qoi_to_image(qoi_path, image_path):
    with open(qoi_path, "rb") as f:
        content = f.read()

    decoded = QOIDecoder.decode(content)
    save_image(image_path, decoded)
    print(f"Converted {qoi_path} to {image_path}")


def qoi_to_qoi(in_path, out_path, channels=None, colorspace=None):
    with open(in_path, "rb") as f:
        decoded = QOIDecoder.decode(f.read())

    if channels is not None:
        decoded["channels"] = channels
    if colorspace is not None:
        decoded["colorspace"] = colorspace

    encoded = QOIEncoder.encode(decoded["data"], decoded)
    with open(out_path, "wb") as f:
        f.write(encoded)
    print(f"Converted {in_path} to {out_path} ({len(encoded)} bytes)")


def convert(infile, outfile, channels=None, colorspace=0):
    """Convert between QOI and any format Pillow understands, by file extension."""
    if _is_qoi(infile) and _is_qoi(outfile):
        qoi_to_qoi(infile, outfile, channels, colorspace)
    elif _is_qoi(infile):
        qoi_to_image(infile, outfile)
    elif _is_qoi(outfile):
        image_to_qoi(infile, outfile, channels, colorspace)
    else:
        raise ValueError(
            f"Neither {infile} nor {outfile} has the .qoi file name extension."
        )


def parse_cli_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="qoi-convert",
        description="Convert image.png to image.qoi or image.qoi to image.png.",
    )
    parser.add_argument("infile", help="Input image (.qoi, .png, ...)")
    parser.add_argument("outfile", help="Output image (.qoi, .png, ...)")
    parser.add_argument(
        "--channels",
        type=int,
        choices=[3, 4],
        default=None,
        help="Channels written to a .qoi file. Default: 3 if fully opaque, else 4.",
    )
    parser.add_argument(
        "--colorspace",
        type=int,
        default=0,
        help="Color space byte written to a .qoi file (0-15).",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_cli_args(argv)
    try:
        convert(args.infile, args.outfile, args.channels, args.colorspace)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
