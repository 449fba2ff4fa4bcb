import argparse
import sys

from qoi_codec import QOIDecoder


def format_event(event: dict) -> str:
    """Render one decoder event as ``[offset] TYPE key=value ...``."""
    fields = " ".join(
        f"{key}={value}"
        for key, value in event.items()
        if key not in ("type", "offset")
    )
    if "offset" in event:
        return f"[{event['offset']:>8}] {event['type']:<7} {fields}".rstrip()
    return f"{event['type']} {fields}"


def text_sink(stream):
    def sink(event):
        print(format_event(event), file=stream)

    return sink


def dump(qoi_path, stream=None) -> dict:
    with open(qoi_path, "rb") as f:
        content = f.read()
    return QOIDecoder.decode_with_events(content, text_sink(stream or sys.stderr))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="qoi-debug", description="Print every chunk of a QOI file."
    )
    parser.add_argument("qoifile", help="QOI file to inspect")
    parser.add_argument(
        "--stdout", action="store_true", help="Write to stdout instead of stderr"
    )
    args = parser.parse_args(argv)

    try:
        dump(args.qoifile, sys.stdout if args.stdout else sys.stderr)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
