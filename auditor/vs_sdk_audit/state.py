# vs_sdk_audit/state.py
from __future__ import annotations
import json
from dataclasses import dataclass, field
from pathlib import Path

from .document import Document, to_document
from .errors import StateRecordMissing, StateRecordParseError
from .paths import state_record_path

# Keys the typed decoder knows about; everything else is carried in `extra`.
_PKG_KEYS = {"id": "id", "version": "version", "type": "type",
             "chip": "chip", "language": "language", "selectedState": "selected_state"}


@dataclass
class StateRecord:
    instance_id: str
    path: Path
    document: Document


# ----- typed (schema-driven) representation -----

@dataclass
class SelectedPackage:
    id: str | None = None
    version: str | None = None
    type: str | None = None
    chip: str | None = None
    language: str | None = None
    selected_state: str | None = field(default=None, metadata={"key": "selectedState"})
    extra: dict = field(default_factory=dict, metadata={"spill": True})

    @staticmethod
    def from_json(data: dict) -> "SelectedPackage":
        known = {attr: data[key] for key, attr in _PKG_KEYS.items() if key in data}
        if "id" in known and not isinstance(known["id"], str):
            known["id"] = None
        extra = {k: v for k, v in data.items() if k not in _PKG_KEYS}
        return SelectedPackage(**known, extra=extra)


@dataclass
class StateSchema:
    installation_name: str | None = field(default=None, metadata={"key": "installationName"})
    selected_packages: list[SelectedPackage] | None = field(default=None, metadata={"key": "selectedPackages"})
    extra: dict = field(default_factory=dict, metadata={"spill": True})

    @staticmethod
    def from_json(data: dict) -> "StateSchema":
        pkgs = data.get("selectedPackages")
        if not isinstance(pkgs, list):
            pkgs = None
        else:
            pkgs = [SelectedPackage.from_json(p) for p in pkgs if isinstance(p, dict)]
        extra = {k: v for k, v in data.items() if k not in ("installationName", "selectedPackages")}
        return StateSchema(
            installation_name=data.get("installationName"),
            selected_packages=pkgs,
            extra=extra,
        )


# ----- decoding strategies -----

def _decode_json(text: str) -> dict:
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"top level is a {type(data).__name__}, expected an object")
    return data

def decode_generic(text: str) -> Document:
    """Plain nested dict/list parse; the tolerant default."""
    return _decode_json(text)

def decode_schema(text: str) -> Document:
    """Map onto StateSchema first, then fold back into a document."""
    return to_document(StateSchema.from_json(_decode_json(text)))

STRATEGIES = {
    "generic": decode_generic,
    "schema": decode_schema,
}
DEFAULT_STRATEGY = "generic"


def load_state(instance_id: str,
               root: str | Path | None = None,
               strategy: str = DEFAULT_STRATEGY) -> StateRecord:
    """
    Read <root>/<instance_id>/state.json.

    Raises StateRecordMissing when the file is absent and
    StateRecordParseError when it cannot be read or decoded.
    """
    decode = STRATEGIES[strategy]
    path = state_record_path(instance_id, root)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (FileNotFoundError, NotADirectoryError):
        raise StateRecordMissing(instance_id, path)
    except (OSError, UnicodeDecodeError) as e:
        raise StateRecordParseError(instance_id, path, str(e)) from e
    try:
        doc = decode(text)
    except (ValueError, TypeError) as e:  # JSONDecodeError is a ValueError
        raise StateRecordParseError(instance_id, path, str(e)) from e
    return StateRecord(instance_id=instance_id, path=path, document=doc)
