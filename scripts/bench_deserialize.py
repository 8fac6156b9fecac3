from __future__ import annotations

import argparse
import json
from pathlib import Path
import timeit

from pydantic import BaseModel

from jsonext import Ext, ObjectMap, loads


class RawHost(BaseModel):
    ext: Ext


class MapHost(BaseModel):
    ext: ObjectMap


def _sample_document(members: int) -> str:
    """Build a host document whose extension carries ``members`` records."""
    payload = {
        f"item_{i}": {"id": i, "name": f"name-{i}", "score": i * 1.25, "tags": ["a", "b"]}
        for i in range(members)
    }
    return json.dumps({"ext": payload})


def main() -> int:
    """Time host-document deserialization with raw and owned extensions."""
    parser = argparse.ArgumentParser(description="Benchmark extension deserialization.")
    parser.add_argument("--input", type=Path, help="JSON document with an 'ext' member")
    parser.add_argument("--members", type=int, default=200)
    parser.add_argument("--number", type=int, default=200)
    args = parser.parse_args()

    if args.input is not None:
        text = args.input.read_text(encoding="utf-8")
    else:
        text = _sample_document(args.members)

    for label, model in (("ext", RawHost), ("object_map", MapHost)):
        seconds = timeit.timeit(lambda: loads(text, model), number=args.number)
        per_call = seconds / args.number * 1e6
        print(f"{label:>10}: {per_call:10.1f} us/iter ({len(text)} chars)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
