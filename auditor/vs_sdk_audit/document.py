# vs_sdk_audit/document.py
"""
Single in-memory shape for a parsed state record.

Whatever decoder produced it, a document is a tree of plain JSON values:
None, bool, int, float, str, list and dict with str keys. Typed objects
(dataclasses) are folded back into that tree by `to_document`, using the
`key` metadata of each field as the JSON name.
"""
from __future__ import annotations
from dataclasses import fields, is_dataclass
from typing import Any, Union

Document = Union[None, bool, int, float, str, list, dict]

_SCALARS = (type(None), bool, int, float, str)


def to_document(value: Any) -> Document:
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, dict):
        return {str(k): to_document(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_document(v) for v in value]
    if is_dataclass(value) and not isinstance(value, type):
        out = {}
        spill = {}
        for f in fields(value):
            v = getattr(value, f.name)
            if f.metadata.get("spill"):
                spill = v or {}
                continue
            out[f.metadata.get("key", f.name)] = to_document(v)
        # unmodelled keys kept by the typed decoder
        for k, v in spill.items():
            out.setdefault(str(k), to_document(v))
        return out
    raise TypeError(f"cannot represent {type(value).__name__} in a document")


def lookup(doc: Document, *path: str, default=None):
    """Walk nested mappings; any missing or non-mapping step yields `default`."""
    cur = doc
    for key in path:
        if not isinstance(cur, dict) or key not in cur:
            return default
        cur = cur[key]
    return cur
