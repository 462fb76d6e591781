# vs_sdk_audit/discovery.py
from __future__ import annotations
import json, os, subprocess

from .errors import ToolInvocationFailed, ToolMissing
from .models import ProductInstance
from .paths import VSWHERE_TIMEOUT, default_vswhere
from .proc import run_quiet

# every instance (incl. previews and incomplete ones), JSON, no banner
VSWHERE_ARGS = ["-all", "-prerelease", "-format", "json", "-nologo", "-utf8"]


def parse_instances(text: str) -> list[ProductInstance]:
    """Turn vswhere's JSON array into ProductInstance objects (discovery order)."""
    text = text.strip()
    if not text:
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ToolInvocationFailed(f"vswhere output is not JSON: {e}") from e
    if not isinstance(data, list):
        raise ToolInvocationFailed(f"vswhere output is a {type(data).__name__}, expected a list")
    out = []
    for entry in data:
        if not isinstance(entry, dict) or not entry.get("instanceId"):
            continue
        out.append(ProductInstance.from_vswhere(entry))
    return out


def list_instances(vswhere: str | None = None,
                   timeout: float | None = VSWHERE_TIMEOUT,
                   runner=run_quiet) -> list[ProductInstance]:
    """
    Enumerate installed instances via vswhere.

    Zero instances is a valid answer. A missing executable raises
    ToolMissing; errors, timeouts and garbage output raise
    ToolInvocationFailed.
    """
    exe = vswhere or default_vswhere()
    if not exe or not os.path.isfile(exe):
        raise ToolMissing(exe)

    cmd = [exe, *VSWHERE_ARGS]
    try:
        res = runner(cmd, timeout=timeout, check=True)
    except FileNotFoundError as e:
        raise ToolMissing(exe) from e
    except subprocess.TimeoutExpired as e:
        raise ToolInvocationFailed(f"vswhere timed out after {e.timeout}s") from e
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or "").strip() or f"exit code {e.returncode}"
        raise ToolInvocationFailed(f"vswhere failed: {detail}") from e
    except OSError as e:
        raise ToolInvocationFailed(f"vswhere could not be started: {e}") from e
    return parse_instances(res.stdout or "")
