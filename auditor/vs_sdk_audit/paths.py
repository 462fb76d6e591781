# vs_sdk_audit/paths.py
from __future__ import annotations
import os, shutil
from pathlib import Path

from .registry import program_data_dir

# ---- Environment overrides ----
ENV_STATE_ROOT = "VS_SDK_AUDIT_STATE_ROOT"
ENV_VSWHERE    = "VS_SDK_AUDIT_VSWHERE"

# ---- Discovery tool (vswhere ships with the VS installer) ----
VSWHERE_NAME: str  = "vswhere.exe"
VSWHERE_SUBDIR     = ("Microsoft Visual Studio", "Installer")
VSWHERE_TIMEOUT: float = 60.0

# ---- State records: <ProgramData>/Microsoft/VisualStudio/Packages/_Instances/<id>/state.json ----
STATE_SUBDIR       = ("Microsoft", "VisualStudio", "Packages", "_Instances")
STATE_FILE: str    = "state.json"


def default_state_root() -> Path:
    """Directory holding one sub-folder per installed instance."""
    env = os.environ.get(ENV_STATE_ROOT)
    if env:
        return Path(env)
    return Path(program_data_dir(), *STATE_SUBDIR)


def state_record_path(instance_id: str, root: str | Path | None = None) -> Path:
    base = Path(root) if root is not None else default_state_root()
    return base / instance_id / STATE_FILE


def default_vswhere() -> str | None:
    """
    Locate vswhere.exe.

    1) VS_SDK_AUDIT_VSWHERE, taken as-is.
    2) %ProgramFiles(x86)%/Microsoft Visual Studio/Installer/vswhere.exe
    3) Anything called vswhere on PATH.
    Returns None if nothing is found.
    """
    env = os.environ.get(ENV_VSWHERE)
    if env:
        return env
    for var in ("ProgramFiles(x86)", "ProgramFiles"):
        base = os.environ.get(var)
        if not base:
            continue
        cand = Path(base, *VSWHERE_SUBDIR, VSWHERE_NAME)
        if cand.is_file():
            return str(cand)
    return shutil.which("vswhere")


__all__ = [
    "ENV_STATE_ROOT", "ENV_VSWHERE",
    "VSWHERE_NAME", "VSWHERE_SUBDIR", "VSWHERE_TIMEOUT",
    "STATE_SUBDIR", "STATE_FILE",
    "default_state_root", "state_record_path", "default_vswhere",
]
