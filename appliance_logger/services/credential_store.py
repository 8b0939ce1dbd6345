import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

import yaml

logger = logging.getLogger(__name__)


class CredentialStore:
    """Client authorization blob kept as a single YAML file.

    A missing or unreadable file loads as an empty state; saving always
    replaces the whole file.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def load(self) -> Dict[str, Any]:
        try:
            with self.path.open() as f:
                state = yaml.safe_load(f)
        except FileNotFoundError:
            logger.info(f"No credentials at {self.path}, starting empty")
            return {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Ignoring unreadable credentials at {self.path}: {e}")
            return {}
        if not isinstance(state, dict):
            logger.warning(f"Ignoring malformed credentials at {self.path}")
            return {}
        return state

    def save(self, state: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w") as f:
                yaml.safe_dump(state, f, default_flow_style=False)
            os.replace(tmp, self.path)
        except Exception:
            os.unlink(tmp)
            raise
        logger.debug(f"Saved credentials to {self.path}")
