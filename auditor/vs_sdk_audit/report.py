# vs_sdk_audit/report.py
from __future__ import annotations
import json

from .models import PresenceResult, ProductInstance


def narrative(instances: list[ProductInstance], results: list[PresenceResult]) -> str:
    """Instance header, then one status line per requested version."""
    if not instances:
        return "No Visual Studio instances found."
    by_id: dict[str, list[PresenceResult]] = {}
    for r in results:
        by_id.setdefault(r.instance.instance_id, []).append(r)

    lines = []
    for inst in instances:
        lines.append(f"{inst.display_name} ({inst.version})")
        lines.append(f" Path     {inst.install_path}")
        lines.append(f" Instance {inst.instance_id}")
        for r in by_id.get(inst.instance_id, []):
            lines.append(f"  .NET Framework {r.version:<8} {r.status.value}")
        lines.append("")
    return "\n".join(lines).rstrip("\n")


def table(results: list[PresenceResult]) -> str:
    """Positive matches only: version label and owning instance."""
    rows = [(r.version, r.instance.display_name) for r in results if r.present]
    head = ("Version", "Instance")
    w = max([len(head[0])] + [len(v) for v, _ in rows])
    lines = [f"{head[0]:<{w}}  {head[1]}", f"{'-' * w}  {'-' * len(head[1])}"]
    lines += [f"{v:<{w}}  {name}" for v, name in rows]
    return "\n".join(lines)


def as_json(results: list[PresenceResult]) -> str:
    return json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False)
