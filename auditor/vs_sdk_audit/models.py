# vs_sdk_audit/models.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ProductInstance:
    instance_id: str
    display_name: str
    version: str
    install_path: str
    product_id: str | None = None
    channel_id: str | None = None

    @staticmethod
    def from_vswhere(entry: dict) -> "ProductInstance":
        """Build from one element of `vswhere -format json` output."""
        catalog = entry.get("catalog")
        if not isinstance(catalog, dict):
            catalog = {}
        return ProductInstance(
            instance_id=str(entry.get("instanceId", "")),
            display_name=str(entry.get("displayName") or entry.get("instanceId", "")),
            version=str(entry.get("installationVersion")
                        or catalog.get("productDisplayVersion", "")),
            install_path=str(entry.get("installationPath", "")),
            product_id=entry.get("productId"),
            channel_id=entry.get("channelId"),
        )


class Presence(Enum):
    PRESENT = "installed"
    ABSENT = "not installed"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PresenceResult:
    version: str
    instance: ProductInstance
    status: Presence
    reason: str | None = None

    @property
    def present(self) -> bool:
        return self.status is Presence.PRESENT

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "instance_id": self.instance.instance_id,
            "display_name": self.instance.display_name,
            "instance_version": self.instance.version,
            "install_path": self.instance.install_path,
            "present": self.present,
            "status": self.status.name.lower(),
            "reason": self.reason,
        }
