from __future__ import annotations

from .deserialize import loads
from .serialize import DumpOptions, dumps, save_as_json, to_raw_value

__all__ = ["DumpOptions", "dumps", "loads", "save_as_json", "to_raw_value"]
