"""Tracking of the active Hyprland monitor."""

from __future__ import annotations

import json
import logging
import os
import socket
import threading
import time
from pathlib import Path
from typing import Callable, Mapping, Optional

log = logging.getLogger(__name__)

MAX_CONSECUTIVE_FAILURES = 10
CIRCUIT_BREAKER_TIMEOUT = 60.0
_RETRY_SECONDS = 2.0
_OPEN_CIRCUIT_WAIT_SECONDS = 10.0
_COMMAND_SOCKET = ".socket.sock"
_EVENT_SOCKET = ".socket2.sock"
_IPC_TIMEOUT = 2.0
_FOCUSED_MONITOR_EVENT = "focusedmon"


class CircuitBreaker:
    """Stops retrying for a cool-down period after repeated failures."""

    def __init__(
        self,
        max_failures: int = MAX_CONSECUTIVE_FAILURES,
        cooldown: float = CIRCUIT_BREAKER_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_failures = max_failures
        self.cooldown = cooldown
        self._clock = clock
        self._lock = threading.Lock()
        self.consecutive_failures = 0
        self._open_until: Optional[float] = None

    def record_success(self) -> None:
        with self._lock:
            self.consecutive_failures = 0

    def record_failure(self) -> bool:
        """Count a failure; return True if this failure opened the circuit."""
        with self._lock:
            self.consecutive_failures += 1
            if self.consecutive_failures >= self.max_failures:
                self._open_until = self._clock() + self.cooldown
                self.consecutive_failures = 0
                return True
            return False

    def is_open(self) -> bool:
        with self._lock:
            return self._open_until is not None and self._clock() < self._open_until


_monitor_lock = threading.Lock()
_active_monitor: Optional[str] = None


def get_active_monitor() -> Optional[str]:
    """The currently active monitor name, or None before tracking starts."""
    with _monitor_lock:
        return _active_monitor


def set_active_monitor(name: str) -> str:
    """Record a new active monitor name; return the previous one ("" if none)."""
    global _active_monitor
    with _monitor_lock:
        previous = _active_monitor or ""
        _active_monitor = name
        return previous


def hyprland_socket_path(
    environ: Optional[Mapping[str, str]] = None, name: str = _COMMAND_SOCKET
) -> Optional[Path]:
    """Path of a Hyprland IPC socket, or None if the session is unknown."""
    env = os.environ if environ is None else environ
    signature = env.get("HYPRLAND_INSTANCE_SIGNATURE")
    runtime_dir = env.get("XDG_RUNTIME_DIR")
    if not signature:
        log.debug("HYPRLAND_INSTANCE_SIGNATURE not set")
        return None
    if not runtime_dir:
        log.debug("XDG_RUNTIME_DIR not set")
        return None
    return Path(runtime_dir) / "hypr" / signature / name


def refresh_hyprland_environment(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Whether the Hyprland command socket of the current session exists."""
    path = hyprland_socket_path(environ, _COMMAND_SOCKET)
    if path is None:
        return False
    if path.exists():
        log.debug("Hyprland socket verified: %s", path)
        return True
    log.debug("Hyprland socket not found at: %s", path)
    return False


def _hyprland_request(command: bytes) -> bytes:
    path = hyprland_socket_path(None, _COMMAND_SOCKET)
    if path is None:
        raise OSError("Hyprland session not found")
    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
        sock.settimeout(_IPC_TIMEOUT)
        sock.connect(str(path))
        sock.sendall(command)
        chunks = []
        while True:
            chunk = sock.recv(8192)
            if not chunk:
                break
            chunks.append(chunk)
    return b"".join(chunks)


def get_active_monitor_sync() -> Optional[str]:
    """Ask Hyprland for the focused monitor; None when that is not possible."""
    try:
        monitors = json.loads(_hyprland_request(b"j/monitors").decode("utf-8"))
    except (OSError, ValueError):
        return None
    if not isinstance(monitors, list):
        return None
    for monitor in monitors:
        if isinstance(monitor, dict) and monitor.get("focused"):
            name = monitor.get("name")
            return name if isinstance(name, str) else None
    return None


def parse_monitor_event(line: str) -> Optional[str]:
    """Monitor name from a focused-monitor event line, else None."""
    event, sep, data = line.strip().partition(">>")
    if not sep or event != _FOCUSED_MONITOR_EVENT:
        return None
    return data.split(",", 1)[0]


def _listen_for_events(reload_flag: Optional[threading.Event]) -> None:
    path = hyprland_socket_path(None, _EVENT_SOCKET)
    if path is None:
        raise OSError("Hyprland session not found")
    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
        sock.connect(str(path))
        with sock.makefile("r", encoding="utf-8", errors="replace") as stream:
            for line in stream:
                name = parse_monitor_event(line)
                if name is None:
                    continue
                previous = set_active_monitor(name)
                log.debug("Active monitor changed from '%s' to '%s'", previous, name)
                if reload_flag is not None and previous != name:
                    log.debug("Setting reload flag for monitor switch")
                    reload_flag.set()


def _listener_loop(reload_flag: Optional[threading.Event], breaker: CircuitBreaker) -> None:
    while True:
        if breaker.is_open():
            log.debug("Circuit breaker open, waiting before retry")
            time.sleep(_OPEN_CIRCUIT_WAIT_SECONDS)
            continue

        refresh_hyprland_environment()
        try:
            _listen_for_events(reload_flag)
        except OSError as exc:
            failures = breaker.consecutive_failures + 1
            if breaker.record_failure():
                log.warning(
                    "Hyprland monitor listener failed %d times, "
                    "opening circuit breaker for %ds: %s",
                    failures,
                    int(breaker.cooldown),
                    exc,
                )
            else:
                log.warning(
                    "Hyprland event listener error (attempt %d/%d): %s",
                    failures,
                    breaker.max_failures,
                    exc,
                )
                time.sleep(_RETRY_SECONDS)
        else:
            breaker.record_success()
            log.debug("Hyprland monitor listener connected successfully")


def spawn_active_monitor_listener(
    reload_flag: Optional[threading.Event] = None,
) -> threading.Thread:
    """Start a background thread that follows active monitor changes.

    When a reload flag is given, it is set whenever the monitor changes.
    """
    initial = get_active_monitor_sync()
    log.info("Initial active monitor from Hyprland IPC: %s", initial)
    set_active_monitor(initial or "")

    thread = threading.Thread(
        target=_listener_loop,
        args=(reload_flag, CircuitBreaker()),
        name="hyprland-monitor-listener",
        daemon=True,
    )
    thread.start()
    return thread