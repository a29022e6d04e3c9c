from pathlib import Path
from typing import Any, Optional

import yaml

from predictlab.commons.types import Settings

DEFAULT_SETTINGS = Path(__file__).resolve().parent.parent / "configs" / "settings.yaml"


def load_cfg(path: Optional[str] = None) -> dict:
    # rutas relativas se resuelven contra el directorio de trabajo
    config_path = Path(path).resolve() if path else DEFAULT_SETTINGS
    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_settings(config_path_or_obj: Any = None) -> Settings:
    """Build a Settings model from a YAML path, a loaded dict or a Settings instance.

    ``None`` loads the bundled defaults.
    """
    if isinstance(config_path_or_obj, Settings):
        return config_path_or_obj
    if isinstance(config_path_or_obj, (str, Path)):
        with open(config_path_or_obj, "r", encoding="utf-8") as f:
            return Settings.model_validate(yaml.safe_load(f) or {})
    if isinstance(config_path_or_obj, dict):
        return Settings.model_validate(config_path_or_obj)
    return Settings.model_validate(load_cfg())
