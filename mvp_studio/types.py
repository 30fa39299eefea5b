"""Data types for the MVP wizard."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class _StringEnum(Enum):
    """Enum whose members are looked up by their string value."""

    @classmethod
    def from_string(cls, value: str):
        """Convert a string to a member, raising ValueError if unknown."""
        normalized = value.lower().strip().replace("_", "-").replace(" ", "-")
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unknown {cls.__name__}: {value}")

    @property
    def label(self) -> str:
        return self.value.replace("-", " ")


class AppType(_StringEnum):
    """Kinds of application the wizard can plan."""

    WEB_APP = "web-app"
    MOBILE_APP = "mobile-app"
    SAAS_TOOL = "saas-tool"
    CHROME_EXTENSION = "chrome-extension"
    AI_APP = "ai-app"


class Theme(_StringEnum):
    DARK = "dark"
    LIGHT = "light"


class DesignStyle(_StringEnum):
    MINIMAL = "minimal"
    PLAYFUL = "playful"
    BUSINESS = "business"


class Platform(_StringEnum):
    """Target platforms for the generated app."""

    WEB = "web"
    ANDROID = "android"
    IOS = "ios"
    CROSS_PLATFORM = "cross-platform"


class PromptStyle(_StringEnum):
    DETAILED = "detailed"
    CONCISE = "concise"
    TECHNICAL = "technical"


class ComplexityTier(_StringEnum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class PromptKind(_StringEnum):
    FRAMEWORK = "framework"
    SCREEN = "screen"
    LINKING = "linking"


@dataclass
class ProjectAttributes:
    """Everything the user told the wizard about their project."""

    app_name: str = ""
    app_type: Optional[AppType] = AppType.WEB_APP
    theme: Theme = Theme.DARK
    design_style: DesignStyle = DesignStyle.MINIMAL
    platforms: tuple[Platform, ...] = (Platform.WEB,)
    description: str = ""
    key_features: list[str] = field(default_factory=list)
    target_audience: str = ""
    vision_text: str = ""
    color_preference: str = ""
    target_users: str = ""
    prompt_style: PromptStyle = PromptStyle.DETAILED

    def __post_init__(self):
        # Keep first-seen order, drop repeats
        seen = []
        for platform in self.platforms:
            if platform not in seen:
                seen.append(platform)
        self.platforms = tuple(seen)

    @property
    def has_context(self) -> bool:
        """True when there is a description or at least one key feature."""
        return bool(self.description.strip()) or any(f.strip() for f in self.key_features)

    def to_dict(self) -> dict:
        """Convert to dictionary for export."""
        return {
            "app_name": self.app_name,
            "app_type": self.app_type.value if self.app_type else None,
            "theme": self.theme.value,
            "design_style": self.design_style.value,
            "platforms": [p.value for p in self.platforms],
            "description": self.description,
            "key_features": list(self.key_features),
            "target_audience": self.target_audience,
            "vision_text": self.vision_text,
            "color_preference": self.color_preference,
            "target_users": self.target_users,
            "prompt_style": self.prompt_style.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProjectAttributes":
        """Create from dictionary. Missing or null fields take their defaults."""
        app_type = data.get("app_type")
        return cls(
            app_name=data.get("app_name") or "",
            app_type=AppType.from_string(app_type) if app_type else None,
            theme=Theme.from_string(data.get("theme") or "dark"),
            design_style=DesignStyle.from_string(data.get("design_style") or "minimal"),
            platforms=tuple(Platform.from_string(p) for p in data.get("platforms") or []),
            description=data.get("description") or "",
            key_features=list(data.get("key_features") or []),
            target_audience=data.get("target_audience") or "",
            vision_text=data.get("vision_text") or "",
            color_preference=data.get("color_preference") or "",
            target_users=data.get("target_users") or "",
            prompt_style=PromptStyle.from_string(data.get("prompt_style") or "detailed"),
        )


@dataclass(frozen=True)
class ToolProfile:
    """Static description of a no-code/AI app builder."""

    id: str
    name: str
    description: str
    category: str
    complexity_tier: ComplexityTier
    app_types: frozenset[AppType]
    platforms: frozenset[Platform]
    best_for_tags: tuple[str, ...]
    pricing_tier: str
    reference_url: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "complexity_tier": self.complexity_tier.value,
            "app_types": sorted(a.value for a in self.app_types),
            "platforms": sorted(p.value for p in self.platforms),
            "best_for_tags": list(self.best_for_tags),
            "pricing_tier": self.pricing_tier,
            "reference_url": self.reference_url,
        }


@dataclass(frozen=True)
class ToolRecommendation:
    """A ranked catalog entry for a given set of project attributes."""

    tool: ToolProfile
    score: int
    rationale: str
    confidence: float

    def to_dict(self) -> dict:
        return {
            "tool": self.tool.to_dict(),
            "score": self.score,
            "rationale": self.rationale,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class ScreenSpec:
    """One screen of the app being planned."""

    name: str
    description: str = ""
    components: tuple[str, ...] = ()
    layout_kind: str = "default"
    user_roles: tuple[str, ...] = ("User",)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "components": list(self.components),
            "layout_kind": self.layout_kind,
            "user_roles": list(self.user_roles),
        }


@dataclass(frozen=True)
class PromptArtifact:
    """A prompt shown to the user. Never mutated once created."""

    kind: PromptKind
    title: str
    body: str
    screen_index: Optional[int] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "title": self.title,
            "body": self.body,
            "screen_index": self.screen_index,
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class ArtifactBundle:
    """Everything a completed run hands back to the caller."""

    framework_prompt: PromptArtifact
    screen_prompts: list[PromptArtifact]
    linking_prompt: Optional[PromptArtifact]
    recommended_tools: list[ToolRecommendation]
    attributes: ProjectAttributes
    framework_response: str = ""

    @property
    def prompts(self) -> list[PromptArtifact]:
        """All prompts in delivery order."""
        ordered = [self.framework_prompt, *self.screen_prompts]
        if self.linking_prompt is not None:
            ordered.append(self.linking_prompt)
        return ordered

    def to_dict(self) -> dict:
        return {
            "attributes": self.attributes.to_dict(),
            "framework_prompt": self.framework_prompt.to_dict(),
            "screen_prompts": [p.to_dict() for p in self.screen_prompts],
            "linking_prompt": self.linking_prompt.to_dict() if self.linking_prompt else None,
            "recommended_tools": [r.to_dict() for r in self.recommended_tools],
            "framework_response": self.framework_response,
        }
