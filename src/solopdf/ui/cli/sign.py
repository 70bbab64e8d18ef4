"""Watermark and signing command handlers for SoloPDF CLI."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from ..._io import atomic_write
from ...api import apply_annotation_file, get_page_count, sign_file
from ...config import get_annotation_defaults, get_key_file, get_signature_text
from ...constants import DEFAULT_OPACITY, DEFAULT_ROTATION, ENV_KEY_FILE
from ...core.appearance import AnnotationSpec
from ...core.pdf import POSITION_ALIASES
from ..helpers import default_record_path, fail, read_text_or_exit


def add_appearance_args(parser: argparse.ArgumentParser, *, short_flags: bool) -> None:
    """Add the overlay appearance options shared by ``watermark`` and ``sign``.

    Font size, colour and position default to None so saved config
    values can fill them in.
    """

    def flags(short: str, long: str) -> list[str]:
        return [short, long] if short_flags else [long]

    presets = ", ".join(f"{name} ({alias})" for alias, name in sorted(POSITION_ALIASES.items()))
    parser.add_argument(*flags("-s", "--font-size"), type=float, help="Font size in points")
    parser.add_argument(*flags("-c", "--color"), help="Text colour: name or #rrggbb")
    parser.add_argument("-x", type=float, default=None, help="X coordinate (with -y)")
    parser.add_argument("-y", type=float, default=None, help="Y coordinate (with -x)")
    parser.add_argument(
        *flags("-P", "--position"),
        help=f"Position preset: {presets}. Ignored when -x and -y are given",
    )
    parser.add_argument(
        *flags("-r", "--rotation"),
        type=float,
        default=DEFAULT_ROTATION,
        help="Rotation in degrees, counter-clockwise (default: 0)",
    )
    parser.add_argument(
        *flags("-o", "--opacity"),
        type=float,
        default=DEFAULT_OPACITY,
        help="Opacity from 0 to 1 (default: 1)",
    )


def _build_spec(args: argparse.Namespace, text: str, pages: str) -> AnnotationSpec:
    """Merge command-line options over the saved overlay defaults."""
    defaults = get_annotation_defaults()
    return AnnotationSpec(
        text=text,
        font_size=args.font_size if args.font_size is not None else float(defaults["font_size"]),
        color=args.color if args.color is not None else str(defaults["color"]),
        position=args.position if args.position is not None else str(defaults["position"]),
        x=args.x,
        y=args.y,
        pages=pages,
        rotation=args.rotation,
        opacity=args.opacity,
    )


def cmd_watermark(args: argparse.Namespace) -> None:
    """Stamp text onto the selected pages."""
    in_path = Path(args.file)
    out_path = Path(args.output)
    if not in_path.exists():
        fail(f"PDF not found: {in_path}")

    spec = _build_spec(args, args.text, args.pages)
    count = apply_annotation_file(in_path, out_path, args.text, spec)
    total = get_page_count(in_path)
    print(f"Watermarked {count} of {total} page(s) -> {out_path}")


def cmd_sign(args: argparse.Namespace) -> None:
    """Sign a PDF and store the signature record next to the output."""
    in_path = Path(args.file)
    out_path = Path(args.output)
    if not in_path.exists():
        fail(f"PDF not found: {in_path}")

    key_path = Path(args.key) if args.key else get_key_file()
    if key_path is None:
        fail(
            "No key file. Pass -k KEYFILE, set "
            f"{ENV_KEY_FILE}, or run 'solopdf config --key-file PATH'."
        )
    key_data = read_text_or_exit(key_path, "key file")

    if args.invisible:
        visible_text = None
    elif args.text is not None:
        visible_text = args.text
    else:
        visible_text = get_signature_text()
    annotation = None
    if visible_text is not None:
        annotation = _build_spec(args, visible_text, args.page_spec)

    blob = sign_file(in_path, out_path, key_data, visible_text, annotation=annotation)
    record_path = Path(args.record) if args.record else default_record_path(out_path)
    atomic_write(record_path, (blob + "\n").encode("utf-8"))

    info = json.loads(blob)["signature_info"]
    print(f"Signed {in_path.name} -> {out_path}")
    print(f"  Key:    {info['signer_fingerprint']}")
    print(f"  Hash:   {info['document_hash']}")
    print(f"  Record: {record_path}")
    if visible_text is not None:
        print(f"  Mark:   {info['visible_text']}")
        print(f"  Verify against the original: solopdf verify {in_path} -r {record_path} -k KEY")
