"""
Configuration data model for codevault.

Defines the structure of .codevault.json and ~/.config/codevault/config.json
files, with validation via Pydantic.
"""

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


def get_xdg_data_home() -> Path:
    """
    Get XDG data home directory.

    Returns:
        Path to data directory (defaults to ~/.local/share)
    """
    if xdg_home := os.environ.get("XDG_DATA_HOME"):
        return Path(xdg_home)
    return Path.home() / ".local" / "share"


def default_data_file() -> Path:
    """Default location of the snippet collection."""
    return get_xdg_data_home() / "codevault" / "codevault.json"


class VaultConfig(BaseModel):
    """
    Top-level codevault configuration.

    Example:
        >>> config = VaultConfig()
        >>> config.export_dir
        'snippet_exports'
    """

    data_file: Path = Field(
        default_factory=default_data_file,
        description="JSON file holding the snippet collection",
    )
    export_dir: str = Field(
        default="snippet_exports",
        min_length=1,
        description="Default export directory, relative to the working directory",
    )
    theme: str = Field(
        default="monokai",
        min_length=1,
        description="Pygments style name used for syntax highlighting",
    )
    line_numbers: bool = Field(
        default=False,
        description="Show line numbers when displaying code",
    )
    confirm_batch: bool = Field(
        default=True,
        description="Ask before deleting snippets or exporting more than one",
    )

    model_config = ConfigDict(
        extra="ignore",
    )

    @field_validator("data_file", mode="before")
    @classmethod
    def expand_data_file(cls, v: object) -> object:
        """Expand ~ in configured paths."""
        if isinstance(v, str):
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v
