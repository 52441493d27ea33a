"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use CODETINT_ prefix (e.g., CODETINT_EXTRA_NAMESPACES='["chrono"]').

Settings can also be loaded from a .env file in the project root.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use CODETINT_ prefix. List-valued settings are
    given as JSON.

    Examples:
        CODETINT_EXTRA_NAMESPACES='["chrono"]'
        CODETINT_STRIP_OPERATOR_TYPE=false
        CODETINT_DEFAULT_THEME=darcula
    """

    model_config = SettingsConfigDict(
        env_prefix="CODETINT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Highlighter configuration
    extra_namespaces: List[str] = Field(
        default_factory=list,
        description="Namespace names known before scanning, in addition to 'std'",
    )

    extra_classes: List[str] = Field(
        default_factory=list,
        description="Class names known before scanning, in addition to the standard containers",
    )

    undefined_type: str = Field(
        default="undefined",
        description="Type tag appended to tokens inside inactive preprocessor branches",
    )

    strip_operator_type: bool = Field(
        default=True,
        description="Remove the 'operator' type from tokens before rendering",
    )

    # Theme configuration
    default_theme: str = Field(
        default="default",
        description="Theme used when none is given on the command line",
    )

    themes_dir: Optional[str] = Field(
        default=None,
        description="Directory holding theme subdirectories (defaults to the packaged themes)",
    )

    def themesDir_get(self) -> Path:
        """
        Resolve the themes directory.

        Returns:
            Configured themes directory, or the one shipped with the package
        """
        if self.themes_dir:
            return Path(self.themes_dir)
        return Path(__file__).parent.parent / "themes"


# Singleton instance - import this in your code
appsettings = AppSettings()
