"""Verification command handler for SoloPDF CLI."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from ...api import verify_file
from ...core.appearance import parse_appearance_suffix
from ..helpers import fail, read_text_or_exit


def cmd_verify(args: argparse.Namespace) -> None:
    """Verify a PDF against a signature record.

    A failed check prints INVALID and still exits 0; only unusable
    inputs are errors.
    """
    pdf_path = Path(args.file)
    if not pdf_path.exists():
        fail(f"PDF not found: {pdf_path}")

    record = read_text_or_exit(Path(args.record), "signature record")
    public_key = args.public_key
    if args.key:
        public_key = read_text_or_exit(Path(args.key), "key file")

    print(f"Verifying {pdf_path.name}...")
    result = json.loads(verify_file(pdf_path, record, public_key))

    status = "VALID" if result["is_valid"] else "INVALID"
    print(f"  {status}: {result['message']}")
    info = result["signature_info"]
    if info:
        print(f"  Signed at:   {info['timestamp']}")
        print(f"  Signer key:  {info['signer_fingerprint']}")
        if info.get("visible_text"):
            text, appearance = parse_appearance_suffix(info["visible_text"])
            print(f"  Visible mark: {text}")
            if appearance:
                details = ", ".join(f"{k}={v}" for k, v in appearance.items())
                print(f"    ({details})")
    print(f"  Checked at:  {result['verified_at']}")
