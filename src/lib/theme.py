"""
Theme loader for highlighted code blocks.

A theme is a directory containing theme.yaml:

    name: default
    plain:                      # base style of the code block
      color: rgb(169, 183, 198)
      background-color: rgb(43, 43, 43)
    styles:                     # per token type
      - types: [class-name, builtin]
        style:
          color: '#e2777a'
    lines:                      # per line override (added, removed, ...)
      added:
        background-color: rgba(80, 160, 80, 0.2)
    undefined:                  # tokens of inactive preprocessor branches
      opacity: 0.5

Themes are turned into CSS keyed on the token type classes written by the
renderer.
"""

import re
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional

from ..config import appsettings


class ThemeError(Exception):
    """Raised when theme loading or validation fails"""
    pass


def property_normalize(name: str) -> str:
    """backgroundColor → background-color"""
    return re.sub(r'(?<!^)([A-Z])', r'-\1', name).lower()


def declarations_format(style: Dict[str, Any]) -> str:
    return " ".join(f"{property_normalize(str(key))}: {value};" for key, value in style.items())


class Theme:
    """
    Represents a codetint theme.

    A theme consists of the configuration (colors, fonts) from theme.yaml.
    """

    def __init__(self, theme_name: str, themes_dir: Optional[str] = None):
        """
        Load a theme by name.

        Args:
            theme_name: Name of the theme directory (e.g., "default")
            themes_dir: Path to themes directory (default: packaged themes)

        Raises:
            ThemeError: If theme directory or theme.yaml doesn't exist
        """
        self.name = theme_name
        self.themes_dir = Path(themes_dir) if themes_dir else appsettings.themesDir_get()
        self.theme_dir = self.themes_dir / theme_name

        # Validate theme directory exists
        if not self.theme_dir.exists():
            raise ThemeError(
                f"Theme '{theme_name}' not found. "
                f"Expected directory: {self.theme_dir}"
            )

        # Load configuration
        self.config_path = self.theme_dir / "theme.yaml"
        if not self.config_path.exists():
            raise ThemeError(
                f"Theme '{theme_name}' missing theme.yaml"
            )

        self.config = self._config_load()

    def _config_load(self) -> Dict[str, Any]:
        """Load and parse theme.yaml"""
        try:
            with open(self.config_path, 'r') as f:
                config: Any = yaml.safe_load(f)
                if config is None:
                    config = {}
                if not isinstance(config, dict):
                    raise ThemeError("theme.yaml must contain a mapping")
                return config
        except yaml.YAMLError as e:
            raise ThemeError(f"Failed to parse theme.yaml: {e}")
        except OSError as e:
            raise ThemeError(f"Failed to load theme.yaml: {e}")

    def config_get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value from theme.yaml.

        Supports nested keys with dot notation:
          theme.config_get('plain.color', '#fff')

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default
        """
        keys: list[str] = key.split('.')
        value: Any = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def styles_get(self) -> List[Dict[str, Any]]:
        """Per token type style rules, validated"""
        styles = self.config_get('styles', []) or []
        if not isinstance(styles, list):
            raise ThemeError(f"Theme '{self.name}': 'styles' must be a list")
        for rule in styles:
            if not isinstance(rule, dict) or 'types' not in rule or 'style' not in rule:
                raise ThemeError(f"Theme '{self.name}': style rules need 'types' and 'style'")
        return styles

    def css_generate(self, scope: str = ".code-block") -> str:
        """
        Generate the stylesheet for this theme.

        Args:
            scope: Selector every rule is nested under

        Returns:
            CSS text
        """
        rules: List[str] = []

        plain = self.config_get('plain', {}) or {}
        rules.append(f"{scope} {{ white-space: pre; {declarations_format(plain)} }}")

        for rule in self.styles_get():
            selectors = ", ".join(f"{scope} .{kind}" for kind in rule['types'])
            rules.append(f"{selectors} {{ {declarations_format(rule['style'])} }}")

        for override, style in (self.config_get('lines', {}) or {}).items():
            rules.append(f"{scope} .{override} {{ {declarations_format(style)} }}")

        undefined = self.config_get('undefined', {'opacity': 0.5})
        rules.append(f"{scope} .{appsettings.undefined_type} {{ {declarations_format(undefined)} }}")

        return "\n".join(rules)

    def __repr__(self) -> str:
        return f"Theme(name='{self.name}', path='{self.theme_dir}')"


def themes_listAvailable(themes_dir: Optional[str] = None) -> list[str]:
    """
    List all available theme names.

    Args:
        themes_dir: Path to themes directory (default: packaged themes)

    Returns:
        List of theme names (directory names with valid theme.yaml)
    """
    themes_path: Path = Path(themes_dir) if themes_dir else appsettings.themesDir_get()

    if not themes_path.exists():
        return []

    themes: list[str] = []
    for item in themes_path.iterdir():
        if item.is_dir():
            # Check if it has a theme.yaml
            if (item / "theme.yaml").exists():
                themes.append(item.name)

    return sorted(themes)
