"""
Settings for the Latin command line.

Loads an optional YAML file. The library itself takes explicit arguments and
never reads these settings.
"""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

from latin.file import LINE_SEP, UNIX_LINE_SEP, WINDOWS_LINE_SEP


LINE_SEPARATORS = {
    "native": LINE_SEP,
    "unix": UNIX_LINE_SEP,
    "windows": WINDOWS_LINE_SEP,
}

DEFAULT_CONFIG_PATH = "latin.yaml"


@dataclass
class Settings:
    """Values read from the `latin:` section of the config file."""
    line_separator: str = "native"
    follow_symlinks: bool = False
    audit: bool = True
    audit_log: str = "data/audit_log.jsonl"

    @property
    def line_sep(self) -> bytes:
        """
        Terminator bytes for the configured line separator.

        Raises:
            ValueError: If line_separator is not native, unix or windows
        """
        _check_line_separator(self.line_separator)
        return LINE_SEPARATORS[self.line_separator]

    def validate(self) -> None:
        """
        Check that every value can be applied.

        Raises:
            ValueError: If a setting has an unusable value
        """
        _check_line_separator(self.line_separator)
        if not isinstance(self.follow_symlinks, bool):
            raise ValueError(f"follow_symlinks must be true or false, got {self.follow_symlinks!r}")
        if not isinstance(self.audit, bool):
            raise ValueError(f"audit must be true or false, got {self.audit!r}")
        if not isinstance(self.audit_log, str) or not self.audit_log:
            raise ValueError(f"audit_log must be a file path, got {self.audit_log!r}")

    @classmethod
    def load(cls, config_path: str = DEFAULT_CONFIG_PATH) -> "Settings":
        """
        Load settings from a YAML file.

        A missing, unreadable or malformed file gives the defaults.

        Args:
            config_path: Path to the YAML configuration file
        """
        section = _read_section(Path(config_path))
        if not isinstance(section, dict):
            return cls()

        known = {k: v for k, v in section.items() if k in cls.__dataclass_fields__}
        return cls(**known)

    def save(self, config_path: str = DEFAULT_CONFIG_PATH) -> None:
        """Write these settings back, keeping other keys already in the file."""
        path = Path(config_path)
        config: Dict[str, Any] = {}

        if path.exists():
            existing = _read_document(path)
            if isinstance(existing, dict):
                config = existing

        section = config.get("latin")
        if not isinstance(section, dict):
            section = {}
        section.update(asdict(self))
        config["latin"] = section

        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(config, f, default_flow_style=False)


def _check_line_separator(value: Any) -> None:
    if not isinstance(value, str) or value not in LINE_SEPARATORS:
        raise ValueError(
            f"Unknown line_separator {value!r}, "
            f"expected one of: {', '.join(LINE_SEPARATORS)}"
        )


def _read_document(path: Path) -> Optional[Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return None


def _read_section(path: Path) -> Optional[Any]:
    if not path.exists():
        return None

    config = _read_document(path) or {}
    if isinstance(config, dict):
        return config.get("latin", config)
    return None
