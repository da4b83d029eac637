"""
Configuration manager for loading and saving settings from YAML/JSON files.
"""
import yaml
import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field, asdict
import os
from dotenv import load_dotenv

from ..core.exceptions import ConfigurationError, error_context


DEFINER_HOME = Path("~/.definer")
DEFAULT_CONFIG_PATH = DEFINER_HOME / "config.yaml"


@dataclass
class StorageConfig:
    """Configuration for the definitions file."""
    data_path: str = str(DEFINER_HOME / "definitions.json")
    export_dir: str = "."


@dataclass
class MatchingConfig:
    """Configuration for term lookup."""
    suggestion_threshold: int = 3


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    log_dir: str = str(DEFINER_HOME / "logs")
    log_level: str = "INFO"
    console_level: str = "ERROR"
    max_bytes: int = 5_000_000
    backup_count: int = 3
    use_colors: bool = True


@dataclass
class UIConfig:
    """Configuration for the interactive shell."""
    prompt: str = "> "
    show_welcome: bool = True


@dataclass
class AppConfig:
    """Main application configuration."""
    storage: StorageConfig = field(default_factory=StorageConfig)
    matching: MatchingConfig = field(default_factory=MatchingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    ui: UIConfig = field(default_factory=UIConfig)


class ConfigManager:
    """
    Configuration manager for loading/saving application settings.
    Supports YAML and JSON formats, environment variables, and defaults.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config manager.

        Args:
            config_path: Path to config file (YAML or JSON)
        """
        self.config_path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
        self.config: AppConfig = AppConfig()

        load_dotenv()

        if self.config_path.exists():
            self.load()
        else:
            self.save()
            self._apply_env_vars()

    def load(self) -> AppConfig:
        """
        Load configuration from file.

        Returns:
            AppConfig instance

        Raises:
            ConfigurationError: For an unknown file format or invalid keys
        """
        if not self.config_path.exists():
            return self.config

        if self.config_path.suffix not in ['.yaml', '.yml', '.json']:
            raise ConfigurationError(f"Unsupported config format: {self.config_path.suffix}")

        with error_context("loading configuration", ConfigurationError, key=str(self.config_path)):
            if self.config_path.suffix == '.json':
                data = self._load_json()
            else:
                data = self._load_yaml()

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration must be a mapping: {self.config_path}")

        self.config = self._parse_config(data)
        self._apply_env_vars()

        return self.config

    def save(self, config: Optional[AppConfig] = None):
        """
        Save configuration to file.

        Args:
            config: Config to save (uses current if None)
        """
        if config:
            self.config = config

        data = self._config_to_dict(self.config)

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.suffix in ['.yaml', '.yml']:
            self._save_yaml(data)
        elif self.config_path.suffix == '.json':
            self._save_json(data)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot notation key.

        Args:
            key: Configuration key (e.g., 'storage.data_path')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        parts = key.split('.')
        value = self.config

        for part in parts:
            if hasattr(value, part):
                value = getattr(value, part)
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """
        Set configuration value by dot notation key.

        Args:
            key: Configuration key
            value: Value to set
        """
        parts = key.split('.')
        obj = self.config

        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise ConfigurationError(f"Invalid config key: {key}", key=key)

        if not hasattr(obj, parts[-1]):
            raise ConfigurationError(f"Invalid config key: {key}", key=key)
        setattr(obj, parts[-1], value)

    def _load_yaml(self) -> Dict[str, Any]:
        with open(self.config_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def _load_json(self) -> Dict[str, Any]:
        with open(self.config_path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def _save_yaml(self, data: Dict[str, Any]):
        with open(self.config_path, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False, allow_unicode=True, indent=2)

    def _save_json(self, data: Dict[str, Any]):
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def _parse_config(self, data: Dict[str, Any]) -> AppConfig:
        """Parse dictionary to AppConfig."""
        config = AppConfig()

        sections = {
            'storage': StorageConfig,
            'matching': MatchingConfig,
            'logging': LoggingConfig,
            'ui': UIConfig,
        }
        for name, section_class in sections.items():
            if name not in data:
                continue
            try:
                setattr(config, name, section_class(**(data[name] or {})))
            except TypeError as e:
                raise ConfigurationError(f"Invalid '{name}' section: {e}", key=name)

        return config

    def _config_to_dict(self, config: AppConfig) -> Dict[str, Any]:
        return asdict(config)

    def _apply_env_vars(self):
        """Override config with environment variables."""
        if os.getenv('DEFINER_DATA_PATH'):
            self.config.storage.data_path = os.getenv('DEFINER_DATA_PATH')
        if os.getenv('DEFINER_EXPORT_DIR'):
            self.config.storage.export_dir = os.getenv('DEFINER_EXPORT_DIR')

        threshold = os.getenv('DEFINER_SUGGESTION_THRESHOLD')
        if threshold:
            try:
                self.config.matching.suggestion_threshold = int(threshold)
            except ValueError:
                raise ConfigurationError(
                    f"DEFINER_SUGGESTION_THRESHOLD must be an integer, got {threshold!r}",
                    key='matching.suggestion_threshold'
                )

        if os.getenv('LOG_LEVEL'):
            self.config.logging.log_level = os.getenv('LOG_LEVEL')

    def export_template(self, output_path: Path):
        """
        Export configuration template with comments.

        Args:
            output_path: Path to save template
        """
        template = """# Definer Configuration

# Definitions storage
storage:
  data_path: ~/.definer/definitions.json   # Collection file (env DEFINER_DATA_PATH)
  export_dir: .                            # Where 'export' writes definitions.json

# Term lookup
matching:
  suggestion_threshold: 3   # Max edit distance for "Did you mean" suggestions

# Logging Settings
logging:
  log_dir: ~/.definer/logs  # Log directory
  log_level: INFO           # File log level (env LOG_LEVEL)
  console_level: ERROR      # Console output level
  max_bytes: 5000000        # Max log file size (5MB)
  backup_count: 3           # Number of backup files
  use_colors: true          # Colored console output

# Shell Settings
ui:
  prompt: "> "              # Input prompt
  show_welcome: true        # Print the banner on start and after 'clear'
"""

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(template)


# ===== Global Config Instance =====

_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_path: Optional[Path] = None) -> ConfigManager:
    """
    Get global config manager instance.

    Args:
        config_path: Path to config file

    Returns:
        ConfigManager instance
    """
    global _config_manager
    if _config_manager is None or (
        config_path is not None
        and Path(config_path).expanduser() != _config_manager.config_path
    ):
        _config_manager = ConfigManager(config_path)
    return _config_manager
