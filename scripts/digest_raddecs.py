#!/usr/bin/env python3
"""Decode DirAct packets from a file of JSON-lines raddecs.

Each input line is one raddec object (at least ``packets`` and,
optionally, ``timestamp``).  Every proximity report and completed
digest is written to stdout as one JSON line tagged with its type::

    {"type": "proximity", "instanceId": "...", ...}
    {"type": "digest", "instanceId": "...", "interactions": [...], ...}

Use this to replay captured raddec streams while developing.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import IO

from pydantic import ValidationError

# Allow running from repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pydiract import DirActConfig, DirActDigester  # noqa: E402
from pydiract.config import CountPolicy  # noqa: E402
from pydiract.models import DirActDigest, ProximityReport, Raddec  # noqa: E402

_LOG = logging.getLogger("digest_raddecs")


def _emit(out: IO[str], kind: str, record: ProximityReport | DirActDigest) -> None:
    payload = {"type": kind, **record.model_dump(mode="json", by_alias=True)}
    out.write(json.dumps(payload) + "\n")


def replay(lines: Iterable[str], config: DirActConfig, out: IO[str]) -> int:
    """Feed raddec lines through a digester; returns the number of records written."""
    written = 0

    def on_proximity(report: ProximityReport) -> None:
        nonlocal written
        _emit(out, "proximity", report)
        written += 1

    def on_digest(digest: DirActDigest) -> None:
        nonlocal written
        _emit(out, "digest", digest)
        written += 1

    digester = DirActDigester(config, on_proximity=on_proximity, on_digest=on_digest)
    for line_no, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            raddec = Raddec.model_validate(json.loads(line))
        except json.JSONDecodeError:
            _LOG.warning("Line %d is not JSON, skipping", line_no)
            continue
        except ValidationError as exc:
            _LOG.warning("Line %d is not a raddec, skipping: %s", line_no, exc.errors()[0]["msg"])
            continue
        digester.handle_raddec(raddec)

    if digester.decode_errors:
        _LOG.warning("%d packet(s) failed to decode", digester.decode_errors)
    return written


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Decode DirAct proximity reports and digests from JSON-lines raddecs.",
    )
    parser.add_argument("input", nargs="?", help="Raddec file (default: stdin)")
    parser.add_argument(
        "--count-policy",
        choices=[policy.value for policy in CountPolicy],
        default=None,
        help="Digest count decoding (default: DIRACT_COUNT_POLICY or verbatim)",
    )
    parser.add_argument("--strict", action="store_true", help="Abort on the first undecodable packet")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, object] = {}
    if args.count_policy is not None:
        overrides["count_policy"] = args.count_policy
    if args.strict:
        overrides["raise_on_decode_error"] = True
    config = DirActConfig.from_env(**overrides)

    if args.input:
        with open(args.input, encoding="utf-8") as handle:
            replay(handle, config, sys.stdout)
    else:
        replay(sys.stdin, config, sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
