# vs_sdk_audit/extract.py
from __future__ import annotations

from .document import lookup
from .state import StateRecord

SELECTED_PACKAGES_KEY = "selectedPackages"


def _entry_id(entry) -> str | None:
    if isinstance(entry, dict):
        val = entry.get("id")
    else:
        val = getattr(entry, "id", None)
    return val if isinstance(val, str) else None


def installed_packages(record) -> frozenset[str]:
    """
    Ids listed under selectedPackages.

    Accepts a StateRecord, a bare document, or anything whose entries
    are mappings or objects with an `id` attribute. No selectedPackages
    means nothing optional was picked: an empty set, not an error.
    Entries without a usable id are skipped.
    """
    doc = record.document if isinstance(record, StateRecord) else record
    if isinstance(doc, dict):
        pkgs = lookup(doc, SELECTED_PACKAGES_KEY)
    else:
        pkgs = getattr(doc, "selected_packages", None)
    if not isinstance(pkgs, (list, tuple)):
        return frozenset()
    ids = (_entry_id(p) for p in pkgs)
    return frozenset(i for i in ids if i is not None)
