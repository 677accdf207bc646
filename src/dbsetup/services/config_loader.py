"""Configuration loader for dbsetup."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from dbsetup.errors import SetupError
from dbsetup.models import ProviderChoice


class ConfigLoader:
    """Loads YAML configuration files that preset prompt answers and CLI defaults."""

    SUPPORTED_KEYS = {
        "provider",
        "env_path",
        "variable_name",
        "verbose",
        "log_file",
    }

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        path = Path(config_path)
        if not path.exists():
            raise SetupError(f"Config file not found: {config_path}")

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as exc:
            raise SetupError(f"Invalid config file '{config_path}': {exc}") from exc

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise SetupError("Config file must contain a YAML mapping at the root.")

        unknown = sorted(set(parsed.keys()) - self.SUPPORTED_KEYS)
        if unknown:
            unknown_list = ", ".join(unknown)
            raise SetupError(f"Unknown configuration keys: {unknown_list}")

        provider = parsed.get("provider")
        if provider is not None:
            valid = [choice.value for choice in ProviderChoice]
            if provider not in valid:
                raise SetupError(
                    f"Invalid provider '{provider}' in config. Supported: {', '.join(valid)}"
                )

        return parsed
