#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys

from src.cli.commands.characters import build_parser


def main(argv: list[str] | None = None) -> int:
    raw_args = sys.argv[1:] if argv is None else argv

    parser = build_parser()
    try:
        args = parser.parse_args(raw_args)
    except argparse.ArgumentError as exc:
        parser.error(str(exc))

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
