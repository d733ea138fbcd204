import json
import shutil
import socket
import tempfile
import threading
import time
from pathlib import Path

import pytest

from voicedictation.monitor import (
    CircuitBreaker,
    get_active_monitor,
    get_active_monitor_sync,
    hyprland_socket_path,
    parse_monitor_event,
    refresh_hyprland_environment,
    set_active_monitor,
    spawn_active_monitor_listener,
)


@pytest.fixture
def hypr_env(monkeypatch):
    runtime = tempfile.mkdtemp(prefix="vd-", dir="/tmp")
    socket_dir = Path(runtime, "hypr", "sig")
    socket_dir.mkdir(parents=True)
    monkeypatch.setenv("XDG_RUNTIME_DIR", runtime)
    monkeypatch.setenv("HYPRLAND_INSTANCE_SIGNATURE", "sig")
    yield socket_dir
    shutil.rmtree(runtime, ignore_errors=True)


def _serve_once(path, reply, received):
    server = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    server.bind(str(path))
    server.listen(1)

    def run():
        try:
            conn, _ = server.accept()
            with conn:
                conn.settimeout(0.2)
                try:
                    received.append(conn.recv(1024))
                except socket.timeout:
                    received.append(b"")
                conn.sendall(reply)
        finally:
            server.close()

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return thread


def test_circuit_breaker_opens_after_max_failures_and_closes_after_cooldown():
    now = [0.0]
    breaker = CircuitBreaker(max_failures=3, cooldown=60.0, clock=lambda: now[0])
    assert breaker.record_failure() is False
    assert breaker.record_failure() is False
    assert breaker.is_open() is False
    assert breaker.record_failure() is True
    assert breaker.is_open() is True
    assert breaker.consecutive_failures == 0
    now[0] = 59.0
    assert breaker.is_open() is True
    now[0] = 60.0
    assert breaker.is_open() is False


def test_circuit_breaker_success_resets_failures():
    now = [0.0]
    breaker = CircuitBreaker(max_failures=2, cooldown=5.0, clock=lambda: now[0])
    breaker.record_failure()
    breaker.record_success()
    assert breaker.consecutive_failures == 0
    assert breaker.record_failure() is False
    assert breaker.is_open() is False


def test_set_and_get_active_monitor():
    set_active_monitor("eDP-1")
    previous = set_active_monitor("HDMI-A-1")
    assert previous == "eDP-1"
    assert get_active_monitor() == "HDMI-A-1"


def test_hyprland_socket_path():
    env = {"HYPRLAND_INSTANCE_SIGNATURE": "abc", "XDG_RUNTIME_DIR": "/run/user/1000"}
    assert hyprland_socket_path(env, ".socket.sock") == Path(
        "/run/user/1000/hypr/abc/.socket.sock"
    )


def test_hyprland_socket_path_requires_environment():
    assert hyprland_socket_path({"XDG_RUNTIME_DIR": "/run"}, ".socket.sock") is None
    assert hyprland_socket_path({"HYPRLAND_INSTANCE_SIGNATURE": "x"}, ".socket.sock") is None


def test_refresh_hyprland_environment(tmp_path):
    env = {"HYPRLAND_INSTANCE_SIGNATURE": "sig", "XDG_RUNTIME_DIR": str(tmp_path)}
    assert refresh_hyprland_environment(env) is False
    socket_dir = tmp_path / "hypr" / "sig"
    socket_dir.mkdir(parents=True)
    (socket_dir / ".socket.sock").touch()
    assert refresh_hyprland_environment(env) is True
    assert refresh_hyprland_environment({}) is False


@pytest.mark.parametrize(
    "line, expected",
    [
        ("focusedmon>>DP-1,2", "DP-1"),
        ("focusedmon>>HDMI-A-1,web\n", "HDMI-A-1"),
        ("workspace>>3", None),
        ("garbage", None),
    ],
)
def test_parse_monitor_event(line, expected):
    assert parse_monitor_event(line) == expected


def test_get_active_monitor_sync_without_session(monkeypatch):
    monkeypatch.delenv("HYPRLAND_INSTANCE_SIGNATURE", raising=False)
    assert get_active_monitor_sync() is None


def test_get_active_monitor_sync_with_missing_socket(hypr_env):
    assert get_active_monitor_sync() is None


def test_get_active_monitor_sync_finds_focused(hypr_env):
    monitors = [
        {"name": "eDP-1", "focused": False},
        {"name": "HDMI-A-1", "focused": True},
    ]
    received = []
    thread = _serve_once(
        hypr_env / ".socket.sock", json.dumps(monitors).encode("utf-8"), received
    )
    assert get_active_monitor_sync() == "HDMI-A-1"
    thread.join(5)
    assert received == [b"j/monitors"]


def test_spawn_listener_follows_monitor_events(hypr_env):
    received = []
    thread = _serve_once(
        hypr_env / ".socket2.sock",
        b"workspace>>2\nfocusedmon>>DP-2,3\n",
        received,
    )
    flag = threading.Event()
    listener = spawn_active_monitor_listener(flag)
    assert flag.wait(5) is True
    deadline = time.monotonic() + 5
    while get_active_monitor() != "DP-2" and time.monotonic() < deadline:
        time.sleep(0.01)
    assert get_active_monitor() == "DP-2"
    assert listener.daemon is True
    thread.join(5)