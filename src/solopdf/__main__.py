"""
Entry point for `python -m solopdf`.

Usage:
    python -m solopdf info document.pdf
    python -m solopdf sign document.pdf signed.pdf -k key.json
    python -m solopdf verify document.pdf -r signed.pdf.sig.json -k key.json
"""

from .ui.cli import main

main()
