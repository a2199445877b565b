"""
SKILL.md parser and serializer for qaskills.

Parses YAML frontmatter + markdown documents into ParsedSkill models and
renders frontmatter back out from registry metadata.
"""

from collections.abc import Callable
from typing import Any

import yaml

from qaskills.skills.models import ParsedSkill

SKILL_MD_FILENAME = "SKILL.md"

ARRAY_FIELDS = ("tags", "testingTypes", "frameworks", "languages", "domains", "agents")


class SkillParseError(Exception):
    """Error parsing a SKILL.md document."""

    pass


# =============================================================================
# Parsing
# =============================================================================


def split_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split a markdown document into its YAML frontmatter and body.

    Frontmatter is delimited by --- lines at the very start of the
    document. A document without a frontmatter block yields an empty
    mapping and the whole text as body.

    Args:
        content: The full markdown content.

    Returns:
        Tuple of (frontmatter dict, remaining content).

    Raises:
        SkillParseError: If the frontmatter is not valid YAML or not a mapping.
    """
    text = content.lstrip("\ufeff").replace("\r\n", "\n")
    lines = text.split("\n")

    if not lines or lines[0].strip() != "---":
        return {}, text

    end_index = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == "---":
            end_index = i
            break

    if end_index is None:
        raise SkillParseError("Frontmatter block is not closed with ---")

    frontmatter_text = "\n".join(lines[1:end_index])
    body = "\n".join(lines[end_index + 1 :])

    try:
        data = yaml.safe_load(frontmatter_text)
    except yaml.YAMLError as e:
        raise SkillParseError(f"Invalid YAML frontmatter: {e}") from e

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise SkillParseError("Frontmatter must be a YAML mapping")

    return data, body


def _to_string_list(value: Any) -> list[str]:
    if isinstance(value, list):
        return [str(v) for v in value]
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return []


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def normalize_frontmatter(data: dict[str, Any]) -> dict[str, Any]:
    """Fill defaults and coerce category arrays before schema validation.

    Scalars keep their original type so that the schema can still reject
    e.g. a numeric name; only missing or empty values are defaulted.
    """
    normalized: dict[str, Any] = {
        "name": data.get("name") or "",
        "description": data.get("description") or "",
        "version": data.get("version") or "1.0.0",
        "author": data.get("author") or "",
        "license": data.get("license") or "MIT",
    }
    for key in ARRAY_FIELDS:
        normalized[key] = _to_string_list(data.get(key))

    for key in ("minTokens", "maxTokens"):
        if _is_number(data.get(key)):
            normalized[key] = data[key]

    # Freshness signals are not part of the schema but feed the score
    for key in ("updatedAt", "updated", "lastUpdated"):
        if data.get(key) is not None:
            normalized[key] = data[key]

    return normalized


def parse_skill_md(raw: str) -> ParsedSkill:
    """Parse a SKILL.md document.

    Args:
        raw: The SKILL.md file content.

    Returns:
        ParsedSkill with normalized frontmatter and trimmed body.

    Raises:
        SkillParseError: If the frontmatter cannot be parsed.
    """
    data, body = split_frontmatter(raw)
    return ParsedSkill(frontmatter=normalize_frontmatter(data), content=body.strip(), raw=raw)


# =============================================================================
# Serialization
# =============================================================================


def _escape(value: Any) -> str:
    """Escape a value for use inside a YAML double-quoted scalar."""
    out: list[str] = []
    for ch in str(value):
        if ch == "\\":
            out.append("\\\\")
        elif ch == '"':
            out.append('\\"')
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\r":
            out.append("\\r")
        elif ch == "\t":
            out.append("\\t")
        elif ord(ch) < 0x20 or ch == "\x7f":
            out.append(f"\\x{ord(ch):02x}")
        else:
            out.append(ch)
    return "".join(out)


def render_scalar(key: str, value: Any) -> str:
    """Render ``key: "value"``."""
    return f'{key}: "{_escape(value)}"'


def render_string_list(key: str, value: Any) -> str:
    """Render ``key: ["a", "b"]``; non-list values fall back to a scalar."""
    if not isinstance(value, (list, tuple)):
        return render_scalar(key, value)
    items = ", ".join(f'"{_escape(item)}"' for item in value)
    return f"{key}: [{items}]"


Renderer = Callable[[str, Any], str]

# Ordered allow-list of frontmatter fields that may be written out
FRONTMATTER_FIELDS: list[tuple[str, Renderer]] = [
    ("name", render_scalar),
    ("description", render_scalar),
    ("version", render_scalar),
    ("author", render_scalar),
    ("license", render_scalar),
    ("tags", render_string_list),
    ("testingTypes", render_string_list),
    ("frameworks", render_string_list),
    ("languages", render_string_list),
    ("domains", render_string_list),
    ("agents", render_string_list),
]


def render_frontmatter(data: dict[str, Any]) -> str:
    """Render the allow-listed fields of ``data`` as frontmatter lines.

    Missing, None and empty-string values are skipped; everything outside
    the allow-list is dropped.
    """
    lines = []
    for key, renderer in FRONTMATTER_FIELDS:
        value = data.get(key)
        if value is None or value == "":
            continue
        lines.append(renderer(key, value))
    return "\n".join(lines)


def serialize_skill_md(data: dict[str, Any], content: str) -> str:
    """Build a SKILL.md document from metadata and a markdown body."""
    return f"---\n{render_frontmatter(data)}\n---\n\n{content}\n"


def build_skill_md(data: dict[str, Any]) -> str:
    """Reconstruct a SKILL.md document from registry metadata JSON.

    The body is ``fullDescription`` when present, otherwise a heading plus
    the short description.
    """
    full_description = data.get("fullDescription")
    if isinstance(full_description, str) and full_description:
        body = full_description
    else:
        body = f"# {data.get('name') or 'Skill'}\n\n{data.get('description') or ''}"

    return serialize_skill_md(data, body)
