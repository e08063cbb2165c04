"""Starting Sober."""

import logging
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence

from .constants import DEFAULT_LAUNCH_COMMAND

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LaunchResult:
    ok: bool
    message: str
    pid: Optional[int] = None


def launch(command: Sequence[str] = DEFAULT_LAUNCH_COMMAND) -> LaunchResult:
    """
    Start ``command`` detached from this process.

    Failures are reported in the result, never raised.
    """
    cmd = list(command)
    if not cmd:
        return LaunchResult(False, "Launch failed: no launch command configured.")

    logger.info(f"Launching: {' '.join(cmd)}")
    try:
        proc = subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        logger.error(f"Launch of {cmd[0]} failed: {e}")
        return LaunchResult(
            False, f"Launch failed. Is '{cmd[0]}' installed & Sober available? Error: {e}"
        )

    logger.debug(f"Started pid={proc.pid}")
    return LaunchResult(True, "Launching Roblox via Sober...", proc.pid)
