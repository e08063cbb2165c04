"""Location of the Sober config document."""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from .constants import SOBER_CONFIG_RELATIVE_PATH

logger = logging.getLogger(__name__)


def resolve_config_path(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """
    Derive the absolute path of Sober's config.json from ``HOME``.

    Returns:
        The path as a string, or None when ``HOME`` is unset or empty.
    """
    env = os.environ if environ is None else environ
    home = env.get("HOME")
    if not home:
        logger.warning("Cannot determine HOME directory; Sober config path unavailable")
        return None
    path = Path(home) / SOBER_CONFIG_RELATIVE_PATH
    logger.debug(f"Resolved Sober config path: {path}")
    return str(path)
