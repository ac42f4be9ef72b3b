"""Configuration loading for dirscan."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dirscan.paths import sub_home

if TYPE_CHECKING:
    from dirscan.filters import PathFilter

CONFIG_RELPATH = Path("config") / "dirscan.yaml"


class IgnoreConfig(BaseModel):
    """Settings for the ignore filter."""

    use_gitignore: bool = True
    use_dirscanignore: bool = True
    extra_patterns: list[str] = Field(default_factory=list)


class ScanConfig(BaseModel):
    """Settings for what a scan reports."""

    recursive: bool = True
    extensions: list[str] = Field(default_factory=list)
    max_file_size_kb: int = 0  # 0 = no limit


class LoggingConfig(BaseModel):
    """Settings for log output."""

    verbose: bool = False


class DirscanConfig(BaseSettings):
    """Main dirscan configuration, loaded from YAML + environment variables."""

    model_config = SettingsConfigDict(env_prefix="DIRSCAN_", env_nested_delimiter="__")

    root: str = "."
    scan: ScanConfig = Field(default_factory=ScanConfig)
    ignore: IgnoreConfig = Field(default_factory=IgnoreConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> "DirscanConfig":
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        if data is None:
            data = {}
        return cls(**data)

    @classmethod
    def load(cls, project_root: Path | None = None) -> "DirscanConfig":
        """Load configuration, searching for config/dirscan.yaml relative to project root."""
        if project_root is None:
            project_root = Path.cwd()

        config_path = project_root / CONFIG_RELPATH
        if config_path.exists():
            config = cls.from_yaml(config_path)
        else:
            config = cls()

        # Resolve scan root to absolute path
        root = Path(sub_home(config.root))
        if not root.is_absolute():
            root = project_root / root
        config.root = os.path.abspath(root)

        return config

    def build_filter(self) -> "PathFilter":
        """Compose the extension, size and ignore settings into one filter."""
        from dirscan.filters import IgnoreFilter, all_of, extension_filter, size_filter

        filters: list[PathFilter] = []
        if self.scan.extensions:
            filters.append(extension_filter(*self.scan.extensions))
        if self.scan.max_file_size_kb > 0:
            filters.append(size_filter(self.scan.max_file_size_kb))
        filters.append(IgnoreFilter(self.root, self.ignore))
        return all_of(*filters)
