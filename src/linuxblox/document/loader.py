"""
Config document loading.

Reads the Sober config JSON into a plain ``dict``. Every failure mode is
reported through an ``Outcome`` together with an empty document, so callers
can keep operating and overwrite a broken file on the next save.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from .outcome import Outcome

logger = logging.getLogger(__name__)

ConfigDocument = Dict[str, Any]


def empty_document() -> ConfigDocument:
    return {}


class ConfigDocumentLoader:
    """Loads the external config document. Never writes to the file."""

    @staticmethod
    def load(path: Optional[Union[str, Path]]) -> Tuple[ConfigDocument, Outcome]:
        """
        Load and parse the config document at ``path``.

        Args:
            path: Absolute path of the document, or None/"" when it could
                not be determined.

        Returns:
            Tuple of (document, outcome). The document is empty unless the
            outcome kind is LOADED.
        """
        if not path:
            logger.warning("No config path available; using an empty document")
            return empty_document(), Outcome.path_unavailable()

        file_path = Path(path)
        path_str = str(file_path)

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                content = f.read()
        except FileNotFoundError:
            logger.info(f"Config file not found, starting from an empty document: {path_str}")
            return empty_document(), Outcome.not_found(path_str)
        except PermissionError as e:
            logger.warning(f"Permission denied reading config file {path_str}: {e}")
            return empty_document(), Outcome.access_denied(path_str, str(e))
        except UnicodeDecodeError as e:
            logger.warning(f"Config file {path_str} is not valid UTF-8: {e}")
            return empty_document(), Outcome.malformed(path_str, f"file encoding error: {e}")
        except OSError as e:
            logger.warning(f"Failed to read config file {path_str}: {e}")
            return empty_document(), Outcome.io_failure(path_str, str(e))

        return ConfigDocumentLoader._parse(content, path_str)

    @staticmethod
    def _parse(content: str, path_str: str) -> Tuple[ConfigDocument, Outcome]:
        if not content.strip():
            logger.info(f"Config file is empty: {path_str}")
            return empty_document(), Outcome.empty(path_str)

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            detail = f"{e.msg} (line {e.lineno}, column {e.colno})"
            logger.warning(f"Config file {path_str} is malformed: {detail}")
            return empty_document(), Outcome.malformed(path_str, detail)
        except (ValueError, RecursionError) as e:
            # Oversized integer literals or nesting deeper than the parser allows
            logger.warning(f"Config file {path_str} could not be parsed: {e}")
            return empty_document(), Outcome.malformed(path_str, str(e))

        if not isinstance(data, dict):
            logger.warning(f"Config file {path_str} has a {type(data).__name__} root, expected an object")
            return empty_document(), Outcome.malformed(path_str, "root of config must be a JSON object")

        logger.debug(f"Loaded config document with {len(data)} top-level keys from {path_str}")
        return data, Outcome.loaded(path_str)


def load_document(path: Optional[Union[str, Path]]) -> Tuple[ConfigDocument, Outcome]:
    """Convenience wrapper around ConfigDocumentLoader.load."""
    return ConfigDocumentLoader.load(path)
