# vs_sdk_audit/registry.py
import os

_PROFILE_LIST_KEY = r"SOFTWARE\Microsoft\Windows NT\CurrentVersion\ProfileList"
_FALLBACK_PROGRAM_DATA = r"C:\ProgramData"


def _query_hklm(path: str, name: str) -> str | None:
    if os.name != "nt":
        return None
    import winreg
    try:
        with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, path, access=winreg.KEY_READ) as k:
            val, _ = winreg.QueryValueEx(k, name)
            return val
    except OSError:
        return None


def program_data_dir() -> str:
    """
    Locate the machine-wide ProgramData folder.

    1) %ProgramData% (set in every normal Windows session).
    2) ProfileList\\ProgramData in HKLM, expanded.
    3) C:\\ProgramData.
    """
    env = os.environ.get("ProgramData") or os.environ.get("PROGRAMDATA")
    if env:
        return env
    val = _query_hklm(_PROFILE_LIST_KEY, "ProgramData")
    if val:
        return os.path.expandvars(val)
    return _FALLBACK_PROGRAM_DATA
