"""Key file command handlers for SoloPDF CLI."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from ..._io import atomic_write
from ...api import generate_key_pair_json, parse_key_info_json
from ...core.keys import parse_key_info, parse_key_pair, public_key_info
from ..helpers import fail, read_text_or_exit

# Key files hold an unencrypted private key
_KEY_FILE_MODE = 0o600


def cmd_keygen(args: argparse.Namespace) -> None:
    """Generate a key pair and write it to a file or stdout."""
    blob = generate_key_pair_json()
    if not args.output:
        print(blob)
        return

    out_path = Path(args.output)
    if out_path.exists() and not args.force:
        fail(f"{out_path} already exists (use --force to overwrite)")
    atomic_write(out_path, (blob + "\n").encode("utf-8"), mode=_KEY_FILE_MODE)

    info = parse_key_info_json(blob)
    print(f"Key pair written to {out_path}")
    print(f"  Fingerprint: {info['fingerprint']}")
    print("  Keep this file private; share 'solopdf keyinfo --public' output with verifiers.")


def cmd_keyinfo(args: argparse.Namespace) -> None:
    """Show key file details, or export its public half."""
    blob = read_text_or_exit(Path(args.file), "key file")

    if args.public:
        print(json.dumps(public_key_info(parse_key_pair(blob)), indent=2))
        return

    info = parse_key_info(blob)
    print(f"Fingerprint: {info.fingerprint}")
    print(f"Algorithm:   {info.algorithm}")
    print(f"Created:     {info.created_at or '(unknown)'}")
    print(f"Private key: {'present' if info.has_private_key else 'absent'}")
    print(f"Public key:  {info.public_key}")
