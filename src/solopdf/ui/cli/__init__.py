"""
Command-line interface for SoloPDF.

Argument parsing, dispatch, and the inspection/config subcommands.
Annotation and signing live in ``sign``, key files in ``keys``,
verification in ``verify``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ...api import get_checksum, get_page_count, get_pdf_info
from ...config import (
    get_annotation_defaults,
    get_config_path,
    get_key_file,
    get_signature_text,
    reset_all,
    update_config,
)
from ...constants import (
    DEFAULT_SIGNATURE_PAGES,
    ENV_KEY_FILE,
    ENV_SIGNATURE_TEXT,
    __version__,
)
from ...core.pdf import PAGE_SENTINELS
from ...errors import SoloPDFError
from ..helpers import fail, format_size_kb
from .keys import cmd_keygen, cmd_keyinfo
from .sign import add_appearance_args, cmd_sign, cmd_watermark
from .verify import cmd_verify


_PAGE_CHOICES = ", ".join(PAGE_SENTINELS) + ", or a list like 1,3,5"


def _cmd_pages(args: argparse.Namespace) -> None:
    """Print the page count."""
    print(get_page_count(Path(args.file)))


def _cmd_info(args: argparse.Namespace) -> None:
    """Print structural details of a PDF."""
    path = Path(args.file)
    info = get_pdf_info(path)
    print(f"File:     {path.name} ({format_size_kb(info.byte_length)})")
    if info.pdf_version:
        print(f"Version:  PDF {info.pdf_version}")
    print(f"Pages:    {info.page_count}")
    print(f"Checksum: {get_checksum(path)}")
    for number, (width, height) in enumerate(info.page_sizes, start=1):
        print(f"  Page {number}: {width:g} x {height:g} pt")


def _cmd_checksum(args: argparse.Namespace) -> None:
    """Print the content checksum (short form unless --full)."""
    print(get_checksum(Path(args.file), full=args.full))


def _cmd_config(args: argparse.Namespace) -> None:
    """Show or change saved defaults."""
    if args.reset:
        reset_all()
        print("All configuration cleared.")
        return

    updates: dict[str, object] = {}
    if args.key_file is not None:
        updates["key_file"] = str(Path(args.key_file).expanduser().resolve())
    if args.signature_text is not None:
        updates["signature_text"] = args.signature_text
    if args.font_size is not None:
        updates["font_size"] = args.font_size
    if args.color is not None:
        updates["color"] = args.color
    if args.position is not None:
        updates["position"] = args.position

    if updates:
        update_config(updates)
        print(f"Saved {', '.join(sorted(updates))} to {get_config_path()}")
        return

    key_file = get_key_file()
    defaults = get_annotation_defaults()
    print(f"Config file:    {get_config_path()}")
    print(f"Key file:       {key_file if key_file else '(not set)'}")
    print(f"Signature text: {get_signature_text()}")
    print(f"Font size:      {defaults['font_size']:g}")
    print(f"Color:          {defaults['color']}")
    print(f"Position:       {defaults['position']}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solopdf",
        description="Inspect, watermark, sign, and verify PDF documents.",
        epilog=(
            "Environment variables:\n"
            f"  {ENV_KEY_FILE}        Default key file for 'sign'\n"
            f"  {ENV_SIGNATURE_TEXT}  Default visible signature text\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-V", "--version", action="version", version=f"solopdf {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=False, help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command", help="Available commands")

    # pages
    p_pages = sub.add_parser("pages", help="Print the number of pages")
    p_pages.add_argument("file", help="PDF file")

    # info
    p_info = sub.add_parser("info", help="Show page count, version, and page sizes")
    p_info.add_argument("file", help="PDF file")

    # checksum
    p_checksum = sub.add_parser("checksum", help="Print the SHA-256 content checksum")
    p_checksum.add_argument("file", help="File to hash")
    p_checksum.add_argument(
        "--full",
        action="store_true",
        default=False,
        help="Print the full base64 digest instead of the 16-character short form",
    )

    # watermark
    p_wm = sub.add_parser("watermark", help="Stamp text onto pages")
    p_wm.add_argument("file", help="Input PDF")
    p_wm.add_argument("text", help="Text to stamp")
    p_wm.add_argument("output", help="Output PDF")
    p_wm.add_argument(
        "-p",
        "--pages",
        default="all",
        help=f"Pages: {_PAGE_CHOICES} (default: all)",
    )
    add_appearance_args(p_wm, short_flags=True)

    # keygen
    p_keygen = sub.add_parser("keygen", help="Generate an ECDSA P-256 key pair")
    p_keygen.add_argument("-o", "--output", help="Write the key file here (default: stdout)")
    p_keygen.add_argument(
        "--force", action="store_true", default=False, help="Overwrite an existing key file"
    )

    # keyinfo
    p_keyinfo = sub.add_parser("keyinfo", help="Show fingerprint and details of a key file")
    p_keyinfo.add_argument("file", help="Key file (JSON)")
    p_keyinfo.add_argument(
        "--public",
        action="store_true",
        default=False,
        help="Print the shareable public-key JSON for verifiers",
    )

    # sign
    p_sign = sub.add_parser("sign", help="Sign a PDF and write a signature record")
    p_sign.add_argument("file", help="PDF to sign")
    p_sign.add_argument("output", help="Output PDF")
    p_sign.add_argument(
        "-k", "--key", help=f"Key file (default: from config or ${ENV_KEY_FILE})"
    )
    text_group = p_sign.add_mutually_exclusive_group()
    text_group.add_argument("-t", "--text", help="Visible signature text")
    text_group.add_argument(
        "--invisible",
        action="store_true",
        default=False,
        help="Do not stamp a visible mark",
    )
    p_sign.add_argument(
        "--record", help="Signature record output path (default: <output>.sig.json)"
    )
    p_sign.add_argument(
        "--page-spec",
        default=DEFAULT_SIGNATURE_PAGES,
        help=(
            f"Pages for the visible mark: {_PAGE_CHOICES} "
            f"(default: {DEFAULT_SIGNATURE_PAGES})"
        ),
    )
    add_appearance_args(p_sign, short_flags=False)

    # verify
    p_verify = sub.add_parser(
        "verify",
        help="Verify a PDF against a signature record",
        description=(
            "The signature covers the document as it was before the visible mark "
            "was stamped: verify the original input, or the output of an "
            "--invisible signature."
        ),
    )
    p_verify.add_argument("file", help="PDF that was signed")
    p_verify.add_argument("-r", "--record", required=True, help="Signature record (JSON)")
    key_group = p_verify.add_mutually_exclusive_group(required=True)
    key_group.add_argument("-k", "--key", help="Key file or public-key file (JSON)")
    key_group.add_argument("--public-key", help="Base64 public key")

    # config
    p_config = sub.add_parser("config", help="Show or change saved defaults")
    p_config.add_argument("--key-file", help="Default key file for 'sign'")
    p_config.add_argument("--signature-text", help="Default visible signature text")
    p_config.add_argument("--font-size", type=float, help="Default font size")
    p_config.add_argument("--color", help="Default text colour")
    p_config.add_argument("--position", help="Default position preset")
    p_config.add_argument(
        "--reset", action="store_true", default=False, help="Clear all saved settings"
    )

    return parser


_COMMANDS = {
    "pages": _cmd_pages,
    "info": _cmd_info,
    "checksum": _cmd_checksum,
    "watermark": cmd_watermark,
    "keygen": cmd_keygen,
    "keyinfo": cmd_keyinfo,
    "sign": cmd_sign,
    "verify": cmd_verify,
    "config": _cmd_config,
}


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    handler = _COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)

    try:
        handler(args)
    except (SoloPDFError, OSError) as e:
        fail(str(e))


if __name__ == "__main__":
    main()
