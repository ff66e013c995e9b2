"""Configuration management."""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

import yaml

from mdrss.core import FeedConfig
from mdrss.core.front_matter import DEFAULT_DELIMITER
from mdrss.core.post_parser import DEFAULT_DATE_FORMATS, DEFAULT_DESCRIPTION_MAX_LENGTH

DEFAULT_CONFIG_PATH = Path("mdrss.yaml")


@dataclass
class FeedSection:
    """Channel settings."""
    title: str = ""
    link: str = ""
    description: str = ""
    language: Optional[str] = None
    copyright: Optional[str] = None
    managing_editor: Optional[str] = None
    webmaster: Optional[str] = None
    category: Optional[str] = None
    generator: Optional[str] = "mdrss"
    docs: Optional[str] = None
    ttl: Optional[str] = None


@dataclass
class ParsingConfig:
    """Front matter and post parsing settings."""
    delimiter: str = DEFAULT_DELIMITER
    description_max_length: int = DEFAULT_DESCRIPTION_MAX_LENGTH
    date_formats: list[str] = field(default_factory=lambda: list(DEFAULT_DATE_FORMATS))


@dataclass
class PathsConfig:
    """Path settings."""
    input_dir: Path = Path("posts")
    output_path: Path = Path("rss.xml")


@dataclass
class BuildConfig:
    """Build behaviour."""
    skip_invalid: bool = True
    recursive: bool = True
    extensions: list[str] = field(default_factory=lambda: [".md", ".markdown"])
    max_workers: int = 1


@dataclass
class Settings:
    """Application settings."""

    feed: FeedSection = field(default_factory=FeedSection)
    parsing: ParsingConfig = field(default_factory=ParsingConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    build: BuildConfig = field(default_factory=BuildConfig)

    @property
    def input_dir(self) -> Path:
        return self.paths.input_dir

    @property
    def output_path(self) -> Path:
        return self.paths.output_path

    def feed_config(self) -> FeedConfig:
        """Build the validated channel config.

        Raises:
            InvalidFeedConfig: If title, link or description is empty
        """
        values = {f.name: getattr(self.feed, f.name) for f in fields(self.feed)}
        if values["ttl"] is not None:
            values["ttl"] = str(values["ttl"])
        return FeedConfig(**values)


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    return data


def _apply(section: object, values: dict, section_name: str) -> None:
    known = {f.name for f in fields(section)}
    for key, value in values.items():
        if key not in known:
            raise ValueError(f"Unknown option '{key}' in section '{section_name}'")
        setattr(section, key, value)


def _section(config: dict, name: str) -> dict:
    values = config.get(name)
    if values is None:
        return {}
    if not isinstance(values, dict):
        raise ValueError(f"Section '{name}' must be a mapping")
    return values


def get_settings(config_path: Path = DEFAULT_CONFIG_PATH) -> Settings:
    """Get application settings from YAML config.

    Raises:
        ValueError: If a section is not a mapping, an option is unknown
            or a path is empty
    """
    config = load_config(config_path)

    settings = Settings()

    _apply(settings.feed, _section(config, "feed"), "feed")
    _apply(settings.parsing, _section(config, "parsing"), "parsing")

    for key, value in _section(config, "paths").items():
        if value is None or not str(value).strip():
            raise ValueError(f"Path '{key}' cannot be empty")
        _apply(settings.paths, {key: Path(value)}, "paths")

    _apply(settings.build, _section(config, "build"), "build")

    return settings
