"""
Chart config persistence for socialcharts (platformdirs + JSON).

Persisted items (schema v1):
- chart_states: list of ChartState dict representations
- data_dir: optional override for the CSV directory

Behavior:
- If config file missing or unreadable -> defaults are used
- If schema_version mismatches:
  - default: reset to defaults
  - optional: keep loaded but update version
- Unknown keys in loaded JSON are ignored with warnings
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from platformdirs import user_config_dir

from socialcharts.utils.logging import get_logger
from socialcharts.chart_widget.chart_state import ChartState

logger = get_logger(__name__)

# Increment when you make a breaking change to the on-disk JSON schema.
SCHEMA_VERSION: int = 1

DEFAULT_APP_NAME = "socialcharts"
DEFAULT_FILENAME = "chart_config.json"


@dataclass
class ChartConfigData:
    """
    JSON-serializable config payload.

    Schema v1:
    - chart_states: List[Dict[str, Any]] - list of ChartState dicts
    - data_dir: Optional[str] - CSV directory; None means the bundled data dir
    """
    schema_version: int = SCHEMA_VERSION
    chart_states: list[Dict[str, Any]] = field(default_factory=list)
    data_dir: Optional[str] = None

    def to_json_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "schema_version": self.schema_version,
            "chart_states": self.chart_states,
            "data_dir": self.data_dir,
        }

    @classmethod
    def from_json_dict(cls, d: Dict[str, Any]) -> "ChartConfigData":
        """
        Tolerant loader:
        - ignores unknown keys
        - tolerates partially missing values
        """
        schema_version = int(d.get("schema_version", -1))

        chart_states: list[Dict[str, Any]] = []
        raw_states = d.get("chart_states", [])
        if isinstance(raw_states, list):
            chart_states = [s for s in raw_states if isinstance(s, dict)]
            if len(chart_states) != len(raw_states):
                logger.warning("Dropped non-dict entries from chart_states")
        else:
            logger.warning("chart_states is not a list, using empty list")

        data_dir = d.get("data_dir")
        if data_dir is not None and not isinstance(data_dir, str):
            logger.warning(f"data_dir is not a string ({data_dir!r}), ignoring")
            data_dir = None

        known_keys = {"schema_version", "chart_states", "data_dir"}
        for key in d.keys():
            if key not in known_keys:
                logger.warning(f"Unknown key '{key}' in chart config, ignoring")

        return cls(
            schema_version=schema_version,
            chart_states=chart_states,
            data_dir=data_dir,
        )


class ChartConfig:
    """
    Manager for loading/saving ChartConfigData to disk.
    """

    def __init__(self, *, path: Path, data: Optional[ChartConfigData] = None):
        self.path = path
        self.data = data if data is not None else ChartConfigData()

    @staticmethod
    def default_config_path(
        app_name: str = DEFAULT_APP_NAME,
        filename: str = DEFAULT_FILENAME,
        app_author: str | None = None,
    ) -> Path:
        """
        Determine OS-appropriate per-user config path.

        macOS:   ~/Library/Application Support/socialcharts/chart_config.json
        Linux:   ~/.config/socialcharts/chart_config.json
        Windows: %APPDATA%\\socialcharts\\chart_config.json
        """
        return Path(user_config_dir(app_name, app_author)) / filename

    @classmethod
    def load(
        cls,
        *,
        config_path: Optional[Path] = None,
        app_name: str = DEFAULT_APP_NAME,
        filename: str = DEFAULT_FILENAME,
        app_author: str | None = None,
        schema_version: int = SCHEMA_VERSION,
        reset_on_version_mismatch: bool = True,
        create_if_missing: bool = False,
    ) -> "ChartConfig":
        """
        Load config from disk.

        If file doesn't exist or is unreadable -> defaults.
        If schema mismatch:
          - reset_on_version_mismatch=True -> defaults
          - else -> keep loaded but overwrite schema_version

        If create_if_missing=True and file is missing -> immediately write defaults.
        """
        path = config_path or cls.default_config_path(app_name=app_name, filename=filename, app_author=app_author)
        default_data = ChartConfigData(schema_version=schema_version)

        try:
            parsed = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(parsed, dict):
                logger.warning(f"Chart config file at {path} does not contain a dict, using defaults")
                return cls(path=path, data=default_data)

            loaded = ChartConfigData.from_json_dict(parsed)

            if int(loaded.schema_version) != int(schema_version):
                if reset_on_version_mismatch:
                    logger.warning(
                        f"Chart config schema version mismatch: loaded={loaded.schema_version}, "
                        f"expected={schema_version}, resetting to defaults"
                    )
                    return cls(path=path, data=default_data)
                loaded.schema_version = int(schema_version)

            return cls(path=path, data=loaded)
        except FileNotFoundError:
            logger.debug(f"Chart config file not found at {path}, using defaults")
            cfg = cls(path=path, data=default_data)
            if create_if_missing:
                cfg.save()
            return cfg
        except json.JSONDecodeError as e:
            logger.warning(f"Chart config file at {path} is not valid JSON: {e}, using defaults")
            return cls(path=path, data=default_data)
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Error loading chart config from {path}: {e}, using defaults")
            return cls(path=path, data=default_data)

    def save(self) -> None:
        """Write config to disk."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self.data.to_json_dict(), indent=2), encoding="utf-8")
            logger.info(f"Saved chart config to {self.path}")
        except OSError as e:
            logger.error(f"Error saving chart config to {self.path}: {e}")
            raise

    def get_chart_states(self) -> list[ChartState]:
        """Get list of ChartState objects from config; bad entries are skipped."""
        result = []
        for state_dict in self.data.chart_states:
            try:
                result.append(ChartState.from_dict(state_dict))
            except (TypeError, ValueError) as e:
                logger.warning(f"Error deserializing ChartState from config: {e}")
        return result

    def set_chart_states(self, chart_states: list[ChartState]) -> None:
        """Set list of ChartState objects in config."""
        self.data.chart_states = [s.to_dict() for s in chart_states]

    def get_data_dir(self) -> Optional[Path]:
        return Path(self.data.data_dir) if self.data.data_dir else None

    def set_data_dir(self, data_dir: Optional[Path]) -> None:
        self.data.data_dir = str(data_dir) if data_dir is not None else None
