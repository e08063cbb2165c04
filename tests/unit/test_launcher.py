"""
Tests for launching Sober.
"""

import subprocess
from unittest.mock import MagicMock, patch

from linuxblox.launcher import launch


def test_launch_success():
    proc = MagicMock(pid=4242)
    with patch("linuxblox.launcher.subprocess.Popen", return_value=proc) as popen:
        result = launch()

    assert result.ok
    assert result.pid == 4242
    args, kwargs = popen.call_args
    assert args[0] == ["flatpak", "run", "org.vinegarhq.Sober"]
    assert kwargs["start_new_session"] is True
    assert kwargs["stdout"] is subprocess.DEVNULL


def test_missing_executable_reported():
    result = launch(["definitely-not-a-real-binary-linuxblox"])
    assert not result.ok
    assert result.pid is None
    assert result.message.startswith("Launch failed. Is 'definitely-not-a-real-binary-linuxblox' installed")


def test_os_error_reported():
    with patch("linuxblox.launcher.subprocess.Popen", side_effect=PermissionError("denied")):
        result = launch(["flatpak"])
    assert not result.ok
    assert "denied" in result.message


def test_empty_command():
    result = launch([])
    assert not result.ok
