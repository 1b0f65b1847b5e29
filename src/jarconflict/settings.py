import os
import tomllib
from pathlib import Path

# Environment variable naming the settings file when --settings is not given
SETTINGS_ENV = 'JARCONFLICT_SETTINGS'

# Settings key constants
SETTING_CHECK = 'scan.check'
SETTING_EXCLUDE = 'scan.exclude'
SETTING_JOBS = 'scan.jobs'
SETTING_LOG_PATH = 'logging.path'
SETTING_LOG_LEVEL = 'logging.level'


class ConfigurationError(Exception):
    """Raised for invalid run configuration, before any archive is opened."""


class ScanSettings:
    """Read-only view of a TOML settings file.

    The file is optional; without it every get() returns its default. Values are
    not interpreted here beyond the typed accessors below, which raise
    ConfigurationError when a value has the wrong shape.

    Example settings file:

        [scan]
        check = "crc"
        exclude = ["org/slf4j/impl/", "module-info"]
        jobs = 4

        [logging]
        path = "/tmp/jarconflict.log"
        level = "DEBUG"
    """

    def __init__(self, settings_file: str | os.PathLike | None = None):
        """Load settings from settings_file.

        Args:
            settings_file: Path of the TOML file, or None for empty settings

        Raises:
            ConfigurationError: The file does not exist or is not valid TOML
        """
        self._settings_file = Path(settings_file) if settings_file is not None else None
        self._settings = {}

        if self._settings_file is not None:
            try:
                with open(self._settings_file, 'rb') as f:
                    self._settings = tomllib.load(f)
            except FileNotFoundError:
                raise ConfigurationError(f"Settings file not found: {self._settings_file}") from None
            except tomllib.TOMLDecodeError as e:
                raise ConfigurationError(f"Invalid settings file {self._settings_file}: {e}") from None

    @classmethod
    def load(cls, settings_file: str | os.PathLike | None = None) -> "ScanSettings":
        """Load from settings_file, falling back to $JARCONFLICT_SETTINGS, then to empty settings."""
        if settings_file is None:
            settings_file = os.environ.get(SETTINGS_ENV) or None
        return cls(settings_file)

    @property
    def settings_file(self) -> Path | None:
        return self._settings_file

    def get(self, key: str, default=None):
        """Get a setting value by dot-separated key path.

        Examples:
            >>> settings.get('scan.check', 'size')
            'crc'
            >>> settings.get('nonexistent.key', 'fallback')
            'fallback'
        """
        value = self._settings

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_str(self, key: str, default: str | None = None) -> str | None:
        value = self.get(key, default)
        if value is not None and not isinstance(value, str):
            raise ConfigurationError(f"Setting {key} must be a string, got {value!r}")
        return value

    def get_int(self, key: str, default: int | None = None) -> int | None:
        value = self.get(key, default)
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            raise ConfigurationError(f"Setting {key} must be an integer, got {value!r}")
        return value

    def get_str_list(self, key: str) -> list[str]:
        value = self.get(key, [])
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigurationError(f"Setting {key} must be a list of strings, got {value!r}")
        return list(value)
