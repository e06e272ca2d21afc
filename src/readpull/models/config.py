"""Pydantic configuration models for readpull."""

import re
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .. import grouping


class TuningConfig(BaseModel):
    """Numeric constants used by scoring and pruning."""

    bad_multiplier: float = Field(
        0.1,
        gt=0,
        le=1,
        description="Score multiplier applied to nodes classified as low-value content",
    )
    reject_cutoff: float = Field(
        20.0,
        description="Nodes scoring below this value become candidates for removal",
    )
    reject_multiplier: float = Field(
        1.5,
        ge=0,
        description="Nodes with more tags than score * multiplier become candidates for removal",
    )

    model_config = {"extra": "forbid", "frozen": True}


class GroupingConfig(BaseModel):
    """Tag classification tables consumed by the tree builder and serializer."""

    block_tags: frozenset[str] = Field(
        grouping.BLOCK_TAGS,
        description="Tags serialized with paragraph breaks around them",
    )
    autoclose_tags: frozenset[str] = Field(
        grouping.AUTOCLOSE_TAGS,
        description="Tags closed immediately after they are opened",
    )
    skip_tags: frozenset[str] = Field(
        grouping.SKIP_TAGS,
        description="Tags whose content is left out of the tree",
    )
    bad_tags: frozenset[str] = Field(
        grouping.BAD_TAGS,
        description="Tags whose subtree is demoted as low-value content",
    )
    hyperlink_tags: frozenset[str] = Field(
        grouping.HYPERLINK_TAGS,
        description="Tags whose text counts as hyperlink text",
    )
    bad_attribute_pattern: str = Field(
        grouping.BAD_ATTRIBUTE_PATTERN,
        description="Regex matched against class/id values to demote a subtree",
    )

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("block_tags", "autoclose_tags", "skip_tags", "bad_tags", "hyperlink_tags")
    @classmethod
    def _lowercase_tags(cls, v: frozenset[str]) -> frozenset[str]:
        return frozenset(tag.lower() for tag in v)

    @field_validator("bad_attribute_pattern")
    @classmethod
    def _valid_pattern(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as err:
            raise ValueError(f"Invalid bad_attribute_pattern: {err}") from err
        return v


class OutputConfig(BaseModel):
    """Configuration for what the extractor returns."""

    format: Literal["text", "markdown", "html"] = Field(
        "text",
        description="Output format",
    )
    prune: bool = Field(True, description="Remove low-scoring nodes from the best candidate")
    frontmatter: bool = Field(
        False,
        description="Prefix markdown output with YAML frontmatter (title, source, score)",
    )

    model_config = {"extra": "forbid"}


class ReadpullConfig(BaseModel):
    """
    Root configuration model for readpull.

    Example:
        config = ReadpullConfig(
            tuning=TuningConfig(reject_cutoff=10),
            output=OutputConfig(format="markdown"),
        )

    YAML format:
        tuning:
          bad_multiplier: 0.2
        output:
          format: markdown
          prune: false
    """

    tuning: TuningConfig = Field(default_factory=TuningConfig)
    grouping: GroupingConfig = Field(default_factory=GroupingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        data = self.model_dump(mode="json", exclude_none=True)
        # frozensets dump as unordered lists; keep the file stable
        for key, value in data["grouping"].items():
            if isinstance(value, list):
                data["grouping"][key] = sorted(value)
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ReadpullConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "ReadpullConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())
