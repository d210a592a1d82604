# =============================================================================
# Configuration Management
# =============================================================================
# Loads figprint configuration.
#
# XDG Base Directory Compliance (https://specifications.freedesktop.org/basedir-spec/):
#   - Config:  $XDG_CONFIG_HOME/figprint/  (default: ~/.config/figprint/)
#   - Data:    $XDG_DATA_HOME/figprint/    (default: ~/.local/share/figprint/)
#
# Files:
#   - config.toml: Render defaults (font, layout, colors)
#   - fonts/: Default font directory (in data directory)
#
# The configuration is read-only: figprint never writes settings back.
# =============================================================================

import logging
import os
import tomllib  # Built into Python 3.11+
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from figprint.core import LayoutMode

logger = logging.getLogger(__name__)


# =============================================================================
# XDG Directory Management
# =============================================================================

# Application identifier used in all XDG paths
APP_NAME = "figprint"

# Extensions tried, in order, when resolving a font name
FONT_EXTENSIONS = (".flf", ".FLF", ".flz", "")

# Files listed as fonts in a font directory
FONT_GLOBS = ("*.flf", "*.flz", "*.tlf")


def get_xdg_config_home() -> Path:
    """
    Returns the XDG config directory for figprint.

    Respects $XDG_CONFIG_HOME if set, otherwise uses ~/.config/figprint/
    This is where config.toml lives.
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        base = Path(xdg_config)
    else:
        base = Path.home() / ".config"
    return base / APP_NAME


def get_xdg_data_home() -> Path:
    """
    Returns the XDG data directory for figprint.

    Respects $XDG_DATA_HOME if set, otherwise uses ~/.local/share/figprint/
    User-installed fonts go in its fonts/ subdirectory.
    """
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        base = Path(xdg_data)
    else:
        base = Path.home() / ".local" / "share"
    return base / APP_NAME


# =============================================================================
# Configuration Data Structures
# =============================================================================

@dataclass
class Config:
    """
    Render defaults for figprint.

    Attributes:
        font: Font name (looked up in font_directory) or path to a font
              file. Empty means the bundled font.
        font_directory: Directory searched for font names. Empty means
                        the XDG data fonts/ directory.
        layout: Layout mode name ("full", "kerning" or "smushing").
        line_separator: String placed between rendered rows.
        ansi_colors: Pass ANSI color sequences through to the output.
        paragraph_mode: Render each input line as its own block.

    Usage:
        >>> config = Config.load()
        >>> config.layout_mode
        <LayoutMode.SMUSHING: 1>
    """
    font: str = ""
    font_directory: str = ""
    layout: str = "smushing"
    line_separator: str = "\n"
    ansi_colors: bool = False
    paragraph_mode: bool = True

    # -------------------------------------------------------------------------
    # Derived Values
    # -------------------------------------------------------------------------

    @property
    def layout_mode(self) -> LayoutMode:
        """
        The configured layout as a LayoutMode.

        Raises:
            ConfigError: If the layout name is not recognized.
        """
        try:
            return LayoutMode.from_name(self.layout)
        except ValueError as e:
            raise ConfigError(str(e)) from e

    @property
    def fonts_dir(self) -> Path:
        """Returns the directory searched for font names."""
        if self.font_directory:
            return Path(self.font_directory).expanduser()
        return get_xdg_data_home() / "fonts"

    @staticmethod
    def config_file_path() -> Path:
        """Returns the path to the main config file."""
        return get_xdg_config_home() / "config.toml"

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """
        Load configuration from the config file.

        If the config file doesn't exist, returns default configuration.

        Args:
            path: Config file to read. Defaults to the XDG location.

        Returns:
            Loaded Config object.

        Raises:
            ConfigError: If the config file exists but is invalid.
        """
        config_path = path or cls.config_file_path()

        if not config_path.exists():
            # No config file yet - return defaults
            logger.debug(f"No config file at {config_path}, using defaults")
            return cls()

        # Load and parse the TOML file
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file: {e}") from e

        logger.debug(f"Loaded config from {config_path}")
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Config":
        """
        Create a Config object from a dictionary (parsed TOML).

        Settings live under a [render] table:

            [render]
            font = "standard"
            layout = "kerning"
        """
        render = data.get("render", {})
        if not isinstance(render, dict):
            raise ConfigError("[render] must be a table")

        defaults = cls()
        values: dict[str, Any] = {}
        for f in fields(cls):
            default = getattr(defaults, f.name)
            value = render.get(f.name, default)
            # bool is checked exactly; TOML has no implicit conversions
            if type(value) is not type(default):
                raise ConfigError(
                    f"render.{f.name} must be a {type(default).__name__}, "
                    f"got {type(value).__name__}"
                )
            values[f.name] = value

        unknown = set(render) - set(values)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")

        return cls(**values)


# =============================================================================
# Exceptions
# =============================================================================

class ConfigError(Exception):
    """Raised when there's an error loading or parsing configuration."""
    pass


# =============================================================================
# Font Lookup
# =============================================================================

def resolve_font_path(name: str, directory: Path) -> Path | None:
    """
    Find the font file for a name.

    An existing path is used as-is. Otherwise the name is looked up in
    `directory`, trying the usual FIGfont extensions.

    Returns:
        The font path, or None if nothing matches.
    """
    candidate = Path(name).expanduser()
    if candidate.is_file():
        return candidate

    for ext in FONT_EXTENSIONS:
        path = directory / f"{name}{ext}"
        if path.is_file():
            return path

    return None


def list_fonts(directory: Path) -> list[str]:
    """Returns the sorted font names available in a directory."""
    if not directory.is_dir():
        return []

    names = {path.stem for pattern in FONT_GLOBS for path in directory.glob(pattern)}
    return sorted(names)
