"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use INKY_ prefix (e.g., INKY_COLUMN_COUNT=16).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use INKY_ prefix.

    Examples:
        INKY_COLUMN_COUNT=16
        INKY_RAW_PLACEHOLDER_PREFIX=@@RAW
        INKY_MAX_REWRITES=50000
    """

    model_config = SettingsConfigDict(
        env_prefix="INKY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Grid configuration
    column_count: int = Field(
        default=12,
        description="Default grid width used when an engine is built without columnCount",
    )

    # Raw block shielding
    raw_placeholder_prefix: str = Field(
        default="###RAW",
        description="Prefix for raw block placeholders in the shielded document",
    )

    raw_placeholder_suffix: str = Field(
        default="###",
        description="Suffix for raw block placeholders in the shielded document",
    )

    # Tree parser configuration
    entity_placeholder: str = Field(
        default="\ue000",
        description="Private-use character standing in for '&' while entities must not be decoded",
    )

    parser_features: str = Field(
        default="html.parser",
        description="BeautifulSoup tree builder used for documents and generated fragments",
    )

    # Rewrite driver
    max_rewrites: int = Field(
        default=10000,
        description="Upper bound on component rewrites in a single conversion",
    )

    def rawPlaceHolder_make(self, index: int) -> str:
        """
        Generate a placeholder string for the raw block at given index.

        Args:
            index: Zero-based index of the raw block

        Returns:
            Placeholder string (e.g., "###RAW0###")

        Example:
            >>> settings = AppSettings()
            >>> settings.rawPlaceHolder_make(0)
            '###RAW0###'
        """
        return f"{self.raw_placeholder_prefix}{index}{self.raw_placeholder_suffix}"

    def rawIndex_extract(self, placeholder: str) -> int | None:
        """
        Extract raw block index from a placeholder string.

        Args:
            placeholder: Placeholder string to parse

        Returns:
            Raw block index if valid placeholder, None otherwise

        Example:
            >>> settings = AppSettings()
            >>> settings.rawIndex_extract('###RAW3###')
            3
        """
        if not placeholder.startswith(self.raw_placeholder_prefix):
            return None
        if not placeholder.endswith(self.raw_placeholder_suffix):
            return None

        content = placeholder[len(self.raw_placeholder_prefix) : -len(self.raw_placeholder_suffix)]

        try:
            return int(content)
        except ValueError:
            return None


# Singleton instance - import this in your code
appsettings = AppSettings()
