import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "cargo": "cargo",
    "everything": False,
    "release": False,
    "intel": False,
    "optimize": False,
    "color": "auto",
}


class ConfigManager:
    """
    User defaults for cargo-disassemble, stored in
    ~/.cargo-disassemble/config.json. Missing keys fall back to DEFAULT_CONFIG.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else Path.home() / ".cargo-disassemble"
        self.config_file = self.config_dir / "config.json"
        self.config = self.load_config()

    def load_config(self) -> Dict[str, Any]:
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.debug("cannot create %s: %s", self.config_dir, e)

        config = DEFAULT_CONFIG.copy()
        if not self.config_file.exists():
            return config

        try:
            with open(self.config_file, "r") as f:
                user_config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("ignoring unreadable config %s: %s", self.config_file, e)
            return config

        if not isinstance(user_config, dict):
            logger.warning("ignoring config %s: expected a JSON object", self.config_file)
            return config

        config.update(user_config)
        return config

    def save_config(self):
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            json.dump(self.config, f, indent=4)

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def set(self, key: str, value: Any):
        self.config[key] = value
        self.save_config()
