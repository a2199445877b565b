"""
Quality scoring for qaskills.

Scores a parsed SKILL.md out of 100 across four buckets. The individual
weights are policy and may be tuned; the bucket names and ceilings
(30/30/25/15) are relied on by the registry's ranking and leaderboard.
"""

from datetime import date, datetime
from typing import Any

from qaskills.skills.models import ParsedSkill, QualityBreakdown

SCHEMA_MAX = 30
DOCUMENTATION_MAX = 30
COMPLETENESS_MAX = 25
FRESHNESS_MAX = 15

FRESHNESS_KEYS = ("updatedAt", "updated", "lastUpdated")


def calculate_quality_score(skill: ParsedSkill, today: date | None = None) -> QualityBreakdown:
    """Compute the quality breakdown for a parsed skill.

    Args:
        skill: Parsed skill document.
        today: Reference date for freshness (defaults to today).

    Returns:
        QualityBreakdown whose total is the sum of the four buckets.
    """
    return QualityBreakdown(
        schema=score_schema(skill),
        documentation=score_documentation(skill),
        completeness=score_completeness(skill),
        freshness=score_freshness(skill, today or date.today()),
    )


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _items(fm: dict[str, Any], key: str) -> list[Any]:
    value = fm.get(key)
    return value if isinstance(value, list) else []


def score_schema(skill: ParsedSkill) -> int:
    fm = skill.frontmatter
    score = 0
    if fm.get("name"):
        score += 5
    if len(_text(fm.get("description"))) >= 20:
        score += 5
    if fm.get("version"):
        score += 3
    if fm.get("author"):
        score += 3
    if fm.get("license"):
        score += 2
    if _items(fm, "testingTypes"):
        score += 4
    if _items(fm, "frameworks"):
        score += 3
    if _items(fm, "languages"):
        score += 3
    if _items(fm, "domains"):
        score += 2
    return min(SCHEMA_MAX, score)


def score_documentation(skill: ParsedSkill) -> int:
    content = skill.content
    score = 0
    if len(content) > 100:
        score += 5
    if len(content) > 500:
        score += 5
    if len(content) > 1000:
        score += 5
    if "## " in content or "### " in content:
        score += 5
    if "```" in content:
        score += 5
    if "- " in content or "* " in content:
        score += 3
    if "](" in content or "|---" in content or "| ---" in content:
        score += 2
    return min(DOCUMENTATION_MAX, score)


def score_completeness(skill: ParsedSkill) -> int:
    fm = skill.frontmatter
    agents = _items(fm, "agents")
    score = 0
    if len(_items(fm, "tags")) >= 3:
        score += 5
    if _items(fm, "testingTypes"):
        score += 5
    if _items(fm, "frameworks"):
        score += 5
    if len(agents) >= 3:
        score += 5
    if len(agents) >= 10:
        score += 5
    return min(COMPLETENESS_MAX, score)


def _as_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def score_freshness(skill: ParsedSkill, today: date) -> int:
    """Score recency from an update date in the frontmatter.

    Documents without any date signal get the full score.
    """
    updated = None
    for key in FRESHNESS_KEYS:
        updated = _as_date(skill.frontmatter.get(key))
        if updated is not None:
            break

    if updated is None:
        return FRESHNESS_MAX

    age_days = (today - updated).days
    if age_days <= 90:
        return 15
    if age_days <= 180:
        return 10
    if age_days <= 365:
        return 5
    return 0
