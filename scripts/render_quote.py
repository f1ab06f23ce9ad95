#!/usr/bin/env python3
"""Render a quote JSON file to PDF for a manual visual check.

Usage: python scripts/render_quote.py quote.json out.pdf [--issuer "Nome"]

The JSON is the order-lookup shape (camelCase or snake_case). Relative
photo paths resolve against --media-root (default: TORQUEHUB_MEDIA_ROOT
or the current directory).
"""
import os
import sys
import json
import argparse

# Ensure repo root is in path
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, REPO_ROOT)

from torquehub.core.logging_config import setup_logging  # noqa: E402
from torquehub.forms.image_fetcher import ImageFetcher  # noqa: E402
from torquehub.forms.quote_model import QuoteDataError  # noqa: E402
from torquehub.forms.quote_pdf import generate_quote_pdf  # noqa: E402


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render a TorqueHub quote PDF")
    parser.add_argument("quote_json", help="Order JSON file")
    parser.add_argument("out_pdf", help="Where to write the PDF")
    parser.add_argument("--issuer", help='Shown as "Emitido por"')
    parser.add_argument("--media-root", help="Directory relative photo URLs resolve against")
    args = parser.parse_args(argv)

    setup_logging()

    with open(args.quote_json, encoding="utf-8") as f:
        data = json.load(f)

    try:
        pdf = generate_quote_pdf(data, issued_by_name=args.issuer,
                                 fetcher=ImageFetcher(media_root=args.media_root))
    except QuoteDataError as e:
        print(f"❌ {args.quote_json}: {e}")
        return 1

    with open(args.out_pdf, "wb") as f:
        f.write(pdf)
    print(f"✅ {args.out_pdf} ({len(pdf):,} bytes)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
