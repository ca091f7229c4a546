#!/usr/bin/env python3
"""
Pre-load the lawmakers table by running zip code lookups in bulk.

Useful before a campaign push so stance and funding data can be curated
for every lawmaker ahead of time.

Usage:
    python seed_lawmakers.py --zip 90210 --zip 10001,60601
    python seed_lawmakers.py --zip-file zips.txt --dry-run
"""

from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from hempaction.config import configure_logging, load_settings
from hempaction.errors import HempActionError, ValidationError
from hempaction.lawmakers import LawmakerResolver, validate_zip_code
from hempaction.services import build_resolver, build_supabase

from import_utils import log_header, log_step, read_zip_file, split_zip_args


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Look up federal lawmakers for a list of zip codes and store them in Supabase"
    )
    parser.add_argument(
        "--zip",
        dest="zips",
        action="append",
        help="Zip code to look up. Can be provided multiple times or as a comma-separated list.",
    )
    parser.add_argument(
        "--zip-file",
        type=Path,
        default=None,
        help="File with one zip code per line ('#' starts a comment)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate the zip code list without calling any API",
    )
    args = parser.parse_args(argv)
    if not args.zips and not args.zip_file:
        parser.error("provide --zip or --zip-file")
    return args


def collect_zips(args: argparse.Namespace) -> List[str]:
    zips = split_zip_args(args.zips)
    if args.zip_file:
        for zip_code in read_zip_file(args.zip_file):
            if zip_code not in zips:
                zips.append(zip_code)
    return zips


def seed(resolver: Optional[LawmakerResolver], zips: List[str], dry_run: bool = False) -> int:
    """Run lookups for every zip code; returns the number of failed zips."""
    failed = 0
    total_found = 0

    for i, zip_code in enumerate(zips, 1):
        try:
            validate_zip_code(zip_code)
        except ValidationError as e:
            failed += 1
            log_step(f"⚠️ [{i}/{len(zips)}] {zip_code!r}: {e}")
            continue

        if dry_run:
            log_step(f"[{i}/{len(zips)}] {zip_code}: ok (dry run)")
            continue

        try:
            result = resolver.lookup(zip_code)
        except HempActionError as e:
            failed += 1
            log_step(f"❌ [{i}/{len(zips)}] {zip_code}: {e}")
            continue

        found = result.all()
        total_found += len(found)
        names = ", ".join(lm.name for lm in found) or "no lawmakers found"
        log_step(f"✅ [{i}/{len(zips)}] {zip_code}: {names}")

    log_header("Summary")
    print(f"  Zip codes processed: {len(zips)}")
    print(f"  Lawmaker sightings:  {total_found}")
    print(f"  Failures:            {failed}")
    return failed


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    zips = collect_zips(args)

    log_header(f"🏛️ Seeding lawmakers for {len(zips)} zip codes")

    resolver = None
    if not args.dry_run:
        settings = load_settings()
        configure_logging(settings.log_level)
        try:
            resolver = build_resolver(settings, build_supabase(settings))
        except HempActionError as e:
            print(f"❌ {e}")
            return 1

    failed = seed(resolver, zips, dry_run=args.dry_run)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
