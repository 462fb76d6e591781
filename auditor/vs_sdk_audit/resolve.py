# vs_sdk_audit/resolve.py
from __future__ import annotations
from typing import Iterable, Mapping

# Microsoft.Net.Component.<label>.SDK is the .NET Framework targeting pack + SDK
DEFAULT_TEMPLATE = "Microsoft.Net.Component.{version}.SDK"

# Known labels; callers pass this in, the engine never reads it on its own.
KNOWN_SDKS: dict[str, str] = {
    "4.7.2": "Microsoft.Net.Component.4.7.2.SDK",
    "4.8":   "Microsoft.Net.Component.4.8.SDK",
    "4.8.1": "Microsoft.Net.Component.4.8.1.SDK",
}


class TemplateIdentifiers:
    """Build the component id straight from the label."""

    def __init__(self, template: str = DEFAULT_TEMPLATE):
        try:
            a = template.format(version="a")
            b = template.format(version="b")
        except (KeyError, IndexError, ValueError, AttributeError) as e:
            raise ValueError(f"bad template {template!r}: {e!r}") from e
        if a == b:
            raise ValueError(f"template has no {{version}} placeholder: {template!r}")
        self.template = template

    def identifier(self, label: str) -> str | None:
        return self.template.format(version=label)

    def __repr__(self) -> str:
        return f"TemplateIdentifiers({self.template!r})"


class TableIdentifiers:
    """
    Look the label up in a fixed table.

    Labels outside the table go to `fallback` when one is given, and
    otherwise have no identifier at all (and so can never be present).
    """

    def __init__(self, table: Mapping[str, str], fallback: TemplateIdentifiers | None = None):
        self.table = dict(table)
        self.fallback = fallback

    def identifier(self, label: str) -> str | None:
        if label in self.table:
            return self.table[label]
        if self.fallback is not None:
            return self.fallback.identifier(label)
        return None

    def labels(self) -> list[str]:
        return list(self.table)

    def __repr__(self) -> str:
        return f"TableIdentifiers({len(self.table)} labels, fallback={self.fallback!r})"


def agreement(table: Mapping[str, str], template: TemplateIdentifiers) -> dict[str, tuple[str, str]]:
    """Labels where the table and the template disagree: {label: (table_id, built_id)}."""
    bad = {}
    for label, ident in table.items():
        built = template.identifier(label)
        if built != ident:
            bad[label] = (ident, built)
    return bad


def resolve(requested: Iterable[str], installed: frozenset[str] | set[str],
            strategy=None) -> list[tuple[str, bool]]:
    """
    (label, present) for every requested label, in request order.

    Matching is exact string equality on the identifier; no case folding.
    """
    strategy = strategy or TemplateIdentifiers()
    out = []
    for label in requested:
        ident = strategy.identifier(label)
        out.append((label, ident is not None and ident in installed))
    return out
