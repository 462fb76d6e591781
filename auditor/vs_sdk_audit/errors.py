# vs_sdk_audit/errors.py
from __future__ import annotations


class AuditError(Exception):
    """Base class for everything the audit raises on purpose."""
    pass


# ----- tool scoped: abort the whole run -----

class ToolError(AuditError):
    pass

class ToolMissing(ToolError):
    """vswhere.exe could not be found."""
    def __init__(self, path: str | None = None):
        self.path = path
        where = f" at {path}" if path else ""
        super().__init__(f"discovery tool not found{where}")

class ToolInvocationFailed(ToolError):
    """vswhere ran but failed, timed out or printed something that is not JSON."""
    pass


# ----- instance scoped: warn and move on -----

class InstanceError(AuditError):
    def __init__(self, instance_id: str, message: str):
        self.instance_id = instance_id
        super().__init__(message)

class StateRecordMissing(InstanceError):
    def __init__(self, instance_id: str, path):
        self.path = path
        super().__init__(instance_id, f"state record not found: {path}")

class StateRecordParseError(InstanceError):
    def __init__(self, instance_id: str, path, cause: str):
        self.path = path
        self.cause = cause
        super().__init__(instance_id, f"state record unreadable: {path}: {cause}")
