"""
SKILL.md validator for qaskills.

Checks a document against the frontmatter schema, size limits and a list
of suspicious shell/code patterns, and computes its quality score.
Findings are returned as data; nothing here raises on bad input.
"""

import logging
import math
import re
from datetime import date
from pathlib import Path

from pydantic import ValidationError

from qaskills.skills.models import (
    QualityBreakdown,
    SkillMetadata,
    ValidationIssue,
    ValidationResult,
)
from qaskills.skills.parser import SkillParseError, parse_skill_md
from qaskills.skills.scoring import calculate_quality_score

logger = logging.getLogger(__name__)

MAX_SKILL_LINES = 500
MAX_SKILL_TOKENS = 5000
MIN_CONTENT_CHARS = 100

# Advisory only: skill bodies are instructions, not executed code
DANGEROUS_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"rm\s+-rf\s+/"),
    re.compile(r"(curl|wget)\s+.*\|\s*(ba|z)?sh\b"),
    re.compile(r"\beval\s*\("),
    re.compile(r"\bexec\s*\("),
    re.compile(r"child_process"),
    re.compile(r"process\.env\.\w+"),
    re.compile(r"os\.environ"),
    re.compile(r"require\(['\"]fs['\"]\)"),
    re.compile(r"\bsudo\s+"),
    re.compile(r"chmod\s+777"),
]


def estimate_tokens(text: str) -> int:
    """Rough token estimate: one token per four characters."""
    return math.ceil(len(text) / 4)


def _schema_errors(frontmatter: dict) -> list[ValidationIssue]:
    try:
        SkillMetadata.model_validate(frontmatter)
    except ValidationError as e:
        issues = []
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            if error["type"] == "value_error":
                message = str(error["ctx"]["error"])
            else:
                message = error["msg"]
            issues.append(ValidationIssue(field=field, message=message))
        return issues
    return []


def scan_for_dangerous_patterns(content: str) -> list[ValidationIssue]:
    """Return one safety warning per dangerous pattern found in ``content``."""
    return [
        ValidationIssue(
            field="safety",
            message=f"Potentially dangerous pattern found: {pattern.pattern}",
        )
        for pattern in DANGEROUS_PATTERNS
        if pattern.search(content)
    ]


def validate_skill_content(
    raw: str,
    max_lines: int = MAX_SKILL_LINES,
    max_tokens: int = MAX_SKILL_TOKENS,
    min_content_chars: int = MIN_CONTENT_CHARS,
    today: date | None = None,
) -> ValidationResult:
    """Validate a SKILL.md document.

    Every check runs even when an earlier one failed, so an invalid
    document still gets its warnings and quality breakdown. Only an
    unparsable document short-circuits.

    Args:
        raw: Full document text.
        max_lines: Line count above which a warning is emitted.
        max_tokens: Estimated token count above which a warning is emitted.
        min_content_chars: Body length below which a warning is emitted.
        today: Reference date for the freshness score.

    Returns:
        ValidationResult.
    """
    try:
        parsed = parse_skill_md(raw)
    except SkillParseError as e:
        logger.debug(f"Frontmatter parse failed: {e}")
        return ValidationResult(
            errors=[
                ValidationIssue(field="frontmatter", message="Failed to parse SKILL.md frontmatter")
            ],
            breakdown=QualityBreakdown(),
        )

    errors = _schema_errors(parsed.frontmatter)
    warnings: list[ValidationIssue] = []

    line_count = len(raw.split("\n"))
    if line_count > max_lines:
        warnings.append(
            ValidationIssue(
                field="content",
                message=f"Skill has {line_count} lines (recommended max: {max_lines})",
            )
        )

    tokens = estimate_tokens(raw)
    if tokens > max_tokens:
        warnings.append(
            ValidationIssue(
                field="content",
                message=f"Estimated {tokens} tokens (recommended max: {max_tokens})",
            )
        )

    if len(parsed.content) < min_content_chars:
        warnings.append(
            ValidationIssue(
                field="content",
                message=(
                    f"Skill content is very short (< {min_content_chars} characters). "
                    "Consider adding more instructions."
                ),
            )
        )

    warnings.extend(scan_for_dangerous_patterns(parsed.content))

    return ValidationResult(
        errors=errors,
        warnings=warnings,
        breakdown=calculate_quality_score(parsed, today),
    )


def validate_skill_file(path: Path, **limits) -> ValidationResult:
    """Read and validate a SKILL.md file.

    Args:
        path: Path to the SKILL.md file.
        **limits: Passed through to validate_skill_content.

    Raises:
        OSError: If the file cannot be read.
    """
    raw = Path(path).resolve().read_text(encoding="utf-8")
    return validate_skill_content(raw, **limits)
