from __future__ import annotations

import argparse
from pathlib import Path
import sys

from pydantic import BaseModel, ConfigDict, Field, create_model

from jsonext import DumpOptions, Ext, ObjectMap, dumps, loads


def _ensure_utf8_stdout() -> None:
    """Reconfigure stdout to UTF-8 when supported.

    Extension fragments are written verbatim and may carry non-ASCII text that
    legacy console encodings cannot represent.
    """

    try:
        sys.stdout.reconfigure(encoding="utf-8", errors="strict")
    except (AttributeError, ValueError):
        return


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        description="Validate and print an extension member of a JSON document."
    )
    parser.add_argument("input", type=Path, help="JSON document to read")
    parser.add_argument(
        "--field",
        default="ext",
        help="Top-level member holding the extension (default: ext).",
    )
    parser.add_argument(
        "--object-map",
        action="store_true",
        help="Decode the member as an object map (null is rejected).",
    )
    parser.add_argument(
        "--materialize",
        action="store_true",
        help="Decode the extension and re-emit it instead of passing it through.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output path. If omitted, writes to stdout.",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print re-emitted JSON (indent=2). Raw fragments are unchanged.",
    )
    return parser


def build_host_model(field: str, *, object_map: bool = False) -> type[BaseModel]:
    """Create a host document model with a single extension member.

    Args:
        field: JSON member name of the extension.
        object_map: Use ObjectMap instead of Ext for the member.

    Returns:
        Pydantic model class ignoring all other members.
    """
    slot: type[Ext] | type[ObjectMap] = ObjectMap if object_map else Ext
    return create_model(
        "Document",
        __config__=ConfigDict(extra="ignore"),
        slot=(slot, Field(alias=field)),
    )


def render_extension(text: str, args: argparse.Namespace) -> str:
    """Validate the extension member of ``text`` and render it per ``args``."""
    model = build_host_model(args.field, object_map=args.object_map)
    document = loads(text, model)
    slot = document.slot  # type: ignore[attr-defined]
    options = DumpOptions(pretty=args.pretty)
    if args.materialize:
        return dumps(slot.try_into(), options)
    return dumps(slot, options)


def main(argv: list[str] | None = None) -> int:
    """Run the CLI entrypoint.

    Args:
        argv: Optional argument list for testing.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    _ensure_utf8_stdout()
    parser = build_parser()
    args = parser.parse_args(argv)

    input_path: Path = args.input
    if not input_path.exists():
        print(f"File not found: {input_path}", file=sys.stderr, flush=True)
        return 1

    try:
        rendered = render_extension(input_path.read_text(encoding="utf-8"), args)
        if args.output is not None:
            args.output.write_text(rendered, encoding="utf-8")
        else:
            print(rendered, flush=True)
        return 0
    except (ValueError, TypeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr, flush=True)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
