"""Tool recommendation scoring.

Scores are additive points driven by a versioned rule file, not a
normalized probability. Ranking is stable so ties keep catalog order.
"""

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from mvp_studio.catalog import get_catalog
from mvp_studio.types import ComplexityTier, ProjectAttributes, ToolProfile, ToolRecommendation

# Default rules directory
RULES_DIR = Path(__file__).parent / "rules"

DEFAULT_RULES_VERSION = "tool_fit_v1"

# UI-facing list length
DEFAULT_LIMIT = 3

_rules_cache: dict[str, dict] = {}


@dataclass(frozen=True)
class ScoreBreakdown:
    """Points for one tool plus the reason behind each award."""

    points: int
    reasons: tuple[str, ...]


def load_rules(version: str = DEFAULT_RULES_VERSION, rules_dir: Optional[Path] = None) -> dict:
    """Load a scoring rule set by version name."""
    directory = rules_dir or RULES_DIR
    key = str(directory / version)
    if key in _rules_cache:
        return _rules_cache[key]

    path = directory / f"{version}.json"
    if not path.exists():
        raise ValueError(f"Scoring rules not found: {version}")

    with open(path, encoding="utf-8") as f:
        rules = json.load(f)

    _rules_cache[key] = rules
    return rules


def list_rule_versions(rules_dir: Optional[Path] = None) -> list[str]:
    """List all available rule versions."""
    return sorted(p.stem for p in (rules_dir or RULES_DIR).glob("*.json"))


def _context_text(attrs: ProjectAttributes) -> list[str]:
    return [attrs.description.lower()] + [f.lower() for f in attrs.key_features]


def _mentions(texts: Iterable[str], keywords: Iterable[str] = (), whole_words: Iterable[str] = ()) -> bool:
    """
    True if any text mentions a keyword.

    Keywords match at the start of a word, so "shop" also finds "shopping".
    Whole words must stand alone, so "ai" does not fire on "email".
    """
    patterns = [re.compile(r"\b" + re.escape(k.lower())) for k in keywords]
    patterns += [re.compile(r"\b" + re.escape(w.lower()) + r"\b") for w in whole_words]
    texts = list(texts)
    return any(pattern.search(text) for pattern in patterns for text in texts)


def explain(tool: ToolProfile, attrs: ProjectAttributes, rules: Optional[dict] = None) -> ScoreBreakdown:
    """Score a tool for a project and say why."""
    rules = rules or load_rules()
    points = 0
    reasons = []
    app_type = attrs.app_type.value if attrs.app_type else None

    fit = rules["app_type_fit"].get(app_type, {})
    if attrs.app_type in tool.app_types:
        if tool.id in fit.get("primary", []):
            points += rules["fit_points"]["primary"]
            reasons.append(f"Top pick for {attrs.app_type.label} projects")
        elif tool.id in fit.get("secondary", []):
            points += rules["fit_points"]["secondary"]
            reasons.append(f"Solid option for {attrs.app_type.label} projects")

    if attrs.has_context:
        texts = _context_text(attrs)
        for bonus in rules["keyword_bonuses"]:
            if tool.id in bonus["tools"] and _mentions(texts, bonus["keywords"], bonus.get("whole_words", ())):
                points += bonus["points"]
                reasons.append(f"Strong with {bonus['label']}")

    if tool.complexity_tier == ComplexityTier.BEGINNER:
        points += rules["beginner_points"]
        reasons.append("Beginner-friendly")

    mobile = set(rules["mobile_platforms"])
    wants_mobile = any(p.value in mobile for p in attrs.platforms)
    if wants_mobile and any(p.value in mobile for p in tool.platforms):
        points += rules["mobile_points"]
        reasons.append("Ships to mobile platforms")

    return ScoreBreakdown(points=max(points, 0), reasons=tuple(reasons))


def score(tool: ToolProfile, attrs: ProjectAttributes, rules: Optional[dict] = None) -> int:
    """Numeric affinity of a tool for a project."""
    return explain(tool, attrs, rules).points


def is_compatible(tool: ToolProfile, attrs: ProjectAttributes) -> bool:
    """Hard filter: app type must match, platforms must overlap once chosen."""
    if attrs.app_type not in tool.app_types:
        return False
    if attrs.platforms and not tool.platforms.intersection(attrs.platforms):
        return False
    return True


def find_insight(tool: ToolProfile, attrs: ProjectAttributes, rules: Optional[dict] = None) -> Optional[dict]:
    """First contextual insight that applies to this tool, if any."""
    rules = rules or load_rules()
    if not attrs.has_context:
        return None

    texts = _context_text(attrs)
    chosen = {p.value for p in attrs.platforms}
    for insight in rules.get("insights", []):
        if insight["tool"] != tool.id:
            continue
        if "keywords" in insight and _mentions(texts, insight["keywords"]):
            return insight
        if "platforms" in insight and chosen.intersection(insight["platforms"]):
            return insight
    return None


def _rationale(breakdown: ScoreBreakdown, attrs: ProjectAttributes, insight: Optional[dict] = None) -> str:
    label = attrs.app_type.label if attrs.app_type else "app"
    if not attrs.has_context:
        return f"Great choice for {label} development"
    reasons = list(breakdown.reasons)
    if insight:
        reasons.insert(0, insight["reason"])
    if not reasons:
        return f"Compatible with {label} development"
    return "; ".join(reasons)


def compatible_tools(
    attrs: ProjectAttributes,
    catalog: Optional[Iterable[ToolProfile]] = None,
    rules: Optional[dict] = None,
) -> list[ToolRecommendation]:
    """Every compatible tool, best first."""
    rules = rules or load_rules()
    catalog = get_catalog() if catalog is None else catalog
    confidence = rules["confidence"]["default"] if attrs.has_context else rules["confidence"]["low"]

    scored = []
    for tool in catalog:
        if not is_compatible(tool, attrs):
            continue
        breakdown = explain(tool, attrs, rules)
        insight = find_insight(tool, attrs, rules)
        scored.append(ToolRecommendation(
            tool=tool,
            score=breakdown.points,
            rationale=_rationale(breakdown, attrs, insight),
            confidence=insight["confidence"] if insight else confidence,
        ))

    # sorted() is stable, so equal scores keep catalog order
    return sorted(scored, key=lambda rec: rec.score, reverse=True)


def recommend(
    attrs: ProjectAttributes,
    catalog: Optional[Iterable[ToolProfile]] = None,
    limit: int = DEFAULT_LIMIT,
    rules: Optional[dict] = None,
) -> list[ToolRecommendation]:
    """Top-N tools for a project."""
    return compatible_tools(attrs, catalog, rules)[:limit]
