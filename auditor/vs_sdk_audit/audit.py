# vs_sdk_audit/audit.py
from __future__ import annotations
import io, os, sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from tqdm import tqdm

from .discovery import list_instances
from .errors import InstanceError
from .extract import installed_packages
from .models import Presence, PresenceResult, ProductInstance
from .paths import VSWHERE_TIMEOUT
from .resolve import TemplateIdentifiers, resolve
from .state import DEFAULT_STRATEGY, load_state

ENV_TQDM = "VS_SDK_AUDIT_TQDM"


def _log(msg: str):
    """tqdm.write so warnings don't tear the progress bar; plain stderr otherwise."""
    try:
        tqdm.write(msg, file=_tqdm_file())
        return
    except (OSError, ValueError):
        pass
    if getattr(sys, "stderr", None) is not None:
        print(msg, file=sys.stderr)
    else:
        print(msg)

def _tqdm_file():
    f = getattr(sys, "stderr", None)
    return f if (f is not None and hasattr(f, "write")) else io.StringIO()

def _tqdm_disable():
    """
    Env override: VS_SDK_AUDIT_TQDM=0 forces the bar on, =1 forces it off.
    Otherwise shown only when stderr is a terminal.
    """
    env = os.environ.get(ENV_TQDM)
    if env == "0":
        return False
    if env == "1":
        return True
    f = getattr(sys, "stderr", None)
    return not (f is not None and hasattr(f, "isatty") and f.isatty())


def audit_instance(instance: ProductInstance, requested: list[str], strategy,
                   state_root: str | Path | None = None,
                   loader: str = DEFAULT_STRATEGY,
                   log=_log) -> list[PresenceResult]:
    """Presence of every requested label in one instance. Never raises InstanceError."""
    try:
        record = load_state(instance.instance_id, state_root, loader)
    except InstanceError as e:
        log(f"WARNING: skipping {instance.display_name} ({instance.instance_id}): {e}")
        return [PresenceResult(v, instance, Presence.UNKNOWN, reason=str(e)) for v in requested]

    installed = installed_packages(record)
    return [
        PresenceResult(label, instance, Presence.PRESENT if ok else Presence.ABSENT)
        for label, ok in resolve(requested, installed, strategy)
    ]


def audit_instances(instances: list[ProductInstance], requested: list[str],
                    strategy=None,
                    state_root: str | Path | None = None,
                    loader: str = DEFAULT_STRATEGY,
                    workers: int = 1,
                    log=_log) -> list[PresenceResult]:
    """
    Audit every instance; results are grouped per instance in discovery
    order, and within an instance follow the request order.
    """
    strategy = strategy or TemplateIdentifiers()
    requested = list(requested)
    if not instances:
        return []

    def one(inst: ProductInstance) -> list[PresenceResult]:
        return audit_instance(inst, requested, strategy, state_root, loader, log)

    results: list[PresenceResult] = []
    with tqdm(total=len(instances), desc="Reading state", unit="instance",
              file=_tqdm_file(), disable=_tqdm_disable()) as bar:
        if workers and workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as ex:
                # map() yields in submission order
                for chunk in ex.map(one, instances):
                    results.extend(chunk)
                    bar.update(1)
        else:
            for inst in instances:
                results.extend(one(inst))
                bar.update(1)
    return results


def run_audit(requested: list[str], strategy=None,
              vswhere: str | None = None,
              timeout: float | None = VSWHERE_TIMEOUT,
              state_root: str | Path | None = None,
              loader: str = DEFAULT_STRATEGY,
              workers: int = 1,
              log=_log,
              runner=None) -> tuple[list[ProductInstance], list[PresenceResult]]:
    """Discover instances then audit them. ToolError propagates to the caller."""
    kwargs = {"runner": runner} if runner is not None else {}
    instances = list_instances(vswhere, timeout=timeout, **kwargs)
    if not instances:
        log("No Visual Studio instances found.")
    results = audit_instances(instances, requested, strategy, state_root, loader, workers, log)
    return instances, results
