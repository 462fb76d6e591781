# vs_sdk_audit/proc.py
from __future__ import annotations
import os, subprocess, threading, time

# Windows flags to hide console windows
CREATE_NO_WINDOW = 0x08000000
STARTF_USESHOWWINDOW = 0x00000001
SW_HIDE = 0


def _startupinfo_windows():
    if os.name != "nt":
        return None
    si = subprocess.STARTUPINFO()
    si.dwFlags |= STARTF_USESHOWWINDOW
    si.wShowWindow = SW_HIDE
    return si

def _reader(pipe, sink_list):
    """Drain one pipe into sink_list until EOF."""
    try:
        for line in iter(pipe.readline, ''):
            sink_list.append(line)
    finally:
        pipe.close()

def _stop(p: subprocess.Popen) -> None:
    p.terminate()
    try:
        p.wait(timeout=0.5)
    except subprocess.TimeoutExpired:
        p.kill()
        p.wait()

def run_quiet(cmd: list[str],
              timeout: float | None = None,
              cwd: str | None = None,
              env: dict | None = None,
              check: bool = True,
              encoding: str = "utf-8",
              poll_interval: float = 0.05) -> subprocess.CompletedProcess:
    """
    Spawn a process with NO console window (on Windows) and capture its output.

    Raises FileNotFoundError if the executable does not exist,
    subprocess.TimeoutExpired if it outlives `timeout` seconds (the child
    is terminated first) and subprocess.CalledProcessError on a non-zero
    exit when `check` is set.
    """
    p = subprocess.Popen(
        cmd, cwd=cwd, env=env, shell=False,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE, stderr=subprocess.PIPE,
        text=True, encoding=encoding, errors="replace", bufsize=1,
        startupinfo=_startupinfo_windows(),
        creationflags=CREATE_NO_WINDOW if os.name == "nt" else 0,
    )

    out_chunks: list[str] = []
    err_chunks: list[str] = []
    t_out = threading.Thread(target=_reader, args=(p.stdout, out_chunks), daemon=True)
    t_err = threading.Thread(target=_reader, args=(p.stderr, err_chunks), daemon=True)
    t_out.start()
    t_err.start()

    deadline = None if timeout is None else time.monotonic() + timeout
    while p.poll() is None:
        if deadline is not None and time.monotonic() >= deadline:
            _stop(p)
            t_out.join(timeout=0.5)
            t_err.join(timeout=0.5)
            raise subprocess.TimeoutExpired(cmd, timeout, "".join(out_chunks), "".join(err_chunks))
        time.sleep(poll_interval)

    # join readers (drain)
    t_out.join()
    t_err.join()

    out = "".join(out_chunks)
    err = "".join(err_chunks)
    if check and p.returncode != 0:
        raise subprocess.CalledProcessError(p.returncode, cmd, out, err)
    return subprocess.CompletedProcess(cmd, p.returncode, out, err)
