"""
Skill models for qaskills.

Defines the data structures passed between the classifier, fetcher,
validator and installer.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from qaskills.storage.paths import sanitize_skill_name


class SourceKind(str, Enum):
    """Where a skill's content comes from."""

    LOCAL = "local"
    GITHUB = "github"
    REGISTRY = "registry"


class ResolvedSource(BaseModel):
    """A classified skill identifier."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Skill name (final path segment or registry slug)")
    kind: SourceKind = Field(..., description="Source kind")
    locator: str = Field(..., description="Absolute path or URL to fetch from")

    @property
    def safe_name(self) -> str:
        """Filesystem-safe version of the name."""
        return sanitize_skill_name(self.name)


class InstallRecord(BaseModel):
    """Where an installed skill was fetched from, kept next to the install."""

    identifier: str = Field(..., description="Identifier to fetch the skill again")
    source: ResolvedSource = Field(..., description="Source the install came from")


class SkillMetadata(BaseModel):
    """Schema for SKILL.md frontmatter.

    Field names in documents are camelCase; the aliases below map them.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=10, max_length=500)
    version: str = Field(..., pattern=r"^\d+\.\d+\.\d+$")
    author: str = Field(..., min_length=1, max_length=100)
    license: str = Field(..., min_length=1)

    tags: list[str] = Field(default_factory=list)
    testing_types: list[str] = Field(alias="testingTypes")
    frameworks: list[str] = Field(default_factory=list)
    languages: list[str]
    domains: list[str] = Field(default_factory=list)
    agents: list[str] = Field(default_factory=list)

    min_tokens: float | None = Field(default=None, alias="minTokens")
    max_tokens: float | None = Field(default=None, alias="maxTokens")

    @field_validator("testing_types")
    @classmethod
    def _require_testing_type(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("At least one testing type is required")
        return value

    @field_validator("languages")
    @classmethod
    def _require_language(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("At least one language is required")
        return value


class ParsedSkill(BaseModel):
    """A SKILL.md document split into normalized frontmatter and body."""

    frontmatter: dict[str, Any] = Field(default_factory=dict)
    content: str = Field(default="", description="Markdown body, trimmed")
    raw: str = Field(default="", description="Original document text")


@dataclass
class ValidationIssue:
    """One validation error or warning."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass
class QualityBreakdown:
    """Quality score split into its four buckets.

    Ceilings are schema 30, documentation 30, completeness 25, freshness 15.
    """

    schema: int = 0
    documentation: int = 0
    completeness: int = 0
    freshness: int = 0

    @property
    def total(self) -> int:
        return self.schema + self.documentation + self.completeness + self.freshness

    def to_dict(self) -> dict[str, int]:
        return {
            "schema": self.schema,
            "documentation": self.documentation,
            "completeness": self.completeness,
            "freshness": self.freshness,
            "total": self.total,
        }


@dataclass
class ValidationResult:
    """Outcome of validating a SKILL.md document."""

    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)
    breakdown: QualityBreakdown = field(default_factory=QualityBreakdown)

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def quality_score(self) -> int:
        return self.breakdown.total

    def warnings_for(self, field_name: str) -> list[ValidationIssue]:
        """Get warnings raised against one field (e.g. "safety")."""
        return [w for w in self.warnings if w.field == field_name]

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used by the registry API."""
        return {
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "qualityScore": self.quality_score,
            "qualityBreakdown": self.breakdown.to_dict(),
        }


class AgentTarget(BaseModel):
    """An AI coding agent that skills can be installed into.

    Directory templates may start with ``~``; they are resolved at install
    time, never when the target is created.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    config_dir: str = Field(..., description="Directory whose presence signals the agent")
    skills_dir: str = Field(..., description="Directory template skills are installed under")
    install_method: Literal["symlink", "copy", "config"] = "copy"
    description: str = ""
    website: str = ""


@dataclass
class InstallOutcome:
    """Per-agent result of an install or uninstall."""

    agent: AgentTarget
    path: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
