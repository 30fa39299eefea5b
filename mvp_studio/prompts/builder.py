"""Rendering of the framework, screen and linking prompts.

All functions here are pure: the same attributes always render the same text.
"""

import re
from dataclasses import dataclass
from typing import Optional, Sequence

import tiktoken

from mvp_studio.errors import EmptyScreenListError
from mvp_studio.prompts import load_template
from mvp_studio.types import Platform, ProjectAttributes, PromptKind, PromptStyle, ScreenSpec, ToolProfile

PLATFORM_LABELS = {
    Platform.WEB: "Web",
    Platform.ANDROID: "Android",
    Platform.IOS: "iOS",
    Platform.CROSS_PLATFORM: "Cross-platform",
}

MOBILE_PLATFORMS = {Platform.ANDROID, Platform.IOS}

STYLE_INSTRUCTIONS = {
    PromptStyle.DETAILED: "Provide a comprehensive, detailed analysis.",
    PromptStyle.CONCISE: "Keep the analysis concise and focused.",
    PromptStyle.TECHNICAL: "Favor technical precision: data models, APIs and component contracts.",
}

# Lazy-loaded encoding
_encoding = None


def _get_encoding():
    global _encoding
    if _encoding is None:
        _encoding = tiktoken.get_encoding("cl100k_base")
    return _encoding


def count_tokens(text: str) -> int:
    """Count tokens in text using tiktoken."""
    return len(_get_encoding().encode(text))


@dataclass(frozen=True)
class RenderedPrompt:
    """A rendered prompt plus its size estimate."""

    kind: PromptKind
    text: str

    @property
    def estimated_tokens(self) -> int:
        return count_tokens(self.text)


def platform_list(platforms: Sequence[Platform]) -> str:
    """Human-readable platform list, each platform named once."""
    return ", ".join(PLATFORM_LABELS[p] for p in platforms)


def slugify(name: str) -> str:
    """Turn a screen name into a lowercase, hyphenated path segment."""
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or "screen"


def _tool_section(tool: Optional[ToolProfile]) -> str:
    if tool is None:
        return ""
    return (
        f"\n**Target Builder:** {tool.name} ({tool.category}). Phrase every instruction so it can be "
        f"pasted directly into {tool.name} and use its native conventions.\n"
    )


def _context_section(attrs: ProjectAttributes) -> str:
    if not attrs.description.strip():
        return ""
    return f"\n**Additional Context:**\n{attrs.description.strip()}\n"


def _design_extras(attrs: ProjectAttributes) -> str:
    lines = []
    if attrs.color_preference:
        lines.append(f"- Color Preference: {attrs.color_preference}")
    if attrs.target_audience:
        lines.append(f"- Target Audience: {attrs.target_audience}")
    if attrs.target_users:
        lines.append(f"- Target Users: {attrs.target_users}")
    features = [f.strip() for f in attrs.key_features if f.strip()]
    if features:
        lines.append(f"- Key Features: {', '.join(features)}")
    return "\n".join(lines) + "\n" if lines else ""


def _platform_guidance(platforms: Sequence[Platform]) -> str:
    lines = []
    if Platform.WEB in platforms:
        lines.append(
            "   - Responsive breakpoints: mobile (< 640px), tablet (640-1024px) and "
            "desktop (> 1024px) viewports"
        )
    if MOBILE_PLATFORMS.intersection(platforms):
        lines.append(
            "   - Touch-first design: tap targets of at least 44pt, primary actions within "
            "thumb reach, swipe and long-press gestures"
        )
    if not lines:
        lines.append("   - Optimize for the target platform requirements")
    return "\n".join(lines)


def navigation_style(platforms: Sequence[Platform]) -> str:
    """Pick the primary navigation pattern for a platform mix."""
    has_web = Platform.WEB in platforms
    has_mobile = bool(MOBILE_PLATFORMS.intersection(platforms))
    if has_mobile and not has_web:
        return "bottom navigation bar with up to five destinations"
    if has_web and not has_mobile and Platform.CROSS_PLATFORM not in platforms:
        return "collapsible sidebar with a header menu for account actions"
    return "tabs: top tabs on wide screens, collapsing to a bottom tab bar on phones"


def _platform_navigation(platforms: Sequence[Platform]) -> str:
    lines = []
    if Platform.WEB in platforms:
        lines.extend([
            "   - Browser back/forward buttons",
            "   - URL sharing and bookmarking",
        ])
    if MOBILE_PLATFORMS.intersection(platforms) or Platform.CROSS_PLATFORM in platforms:
        lines.extend([
            "   - Gesture-based navigation",
            "   - Hardware back button handling",
        ])
    return "\n".join(lines)


def render_framework_prompt(attrs: ProjectAttributes, selected_tool: Optional[ToolProfile] = None) -> RenderedPrompt:
    """Render the prompt that asks for the app's overall framework and screens."""
    template = load_template("framework")
    text = template.format(
        app_type=attrs.app_type.label,
        app_name=attrs.app_name,
        platform_list=platform_list(attrs.platforms),
        tool_section=_tool_section(selected_tool),
        vision_text=attrs.vision_text.strip(),
        context_section=_context_section(attrs),
        theme=attrs.theme.value,
        design_style=attrs.design_style.value,
        design_extras=_design_extras(attrs),
        style_instruction=STYLE_INSTRUCTIONS[attrs.prompt_style],
    )
    return RenderedPrompt(kind=PromptKind.FRAMEWORK, text=text)


def render_screen_prompt(
    screen: ScreenSpec,
    attrs: ProjectAttributes,
    selected_tool: Optional[ToolProfile] = None,
) -> RenderedPrompt:
    """Render the UI prompt for a single screen."""
    template = load_template("screen")
    text = template.format(
        screen_name=screen.name,
        app_name=attrs.app_name,
        tool_section=_tool_section(selected_tool),
        theme=attrs.theme.value,
        design_style=attrs.design_style.value,
        app_type=attrs.app_type.label,
        platform_list=platform_list(attrs.platforms),
        purpose=screen.description or "Not specified",
        layout_kind=screen.layout_kind or "Not specified",
        components=", ".join(screen.components) or "Not specified",
        user_roles=", ".join(screen.user_roles) or "All users",
        platform_guidance=_platform_guidance(attrs.platforms),
    )
    return RenderedPrompt(kind=PromptKind.SCREEN, text=text)


def render_linking_prompt(
    screen_names: Sequence[str],
    attrs: ProjectAttributes,
    selected_tool: Optional[ToolProfile] = None,
) -> RenderedPrompt:
    """
    Render the navigation and routing prompt that ties all screens together.

    Raises:
        EmptyScreenListError: if screen_names is empty
    """
    if not screen_names:
        raise EmptyScreenListError("Cannot render a linking prompt without screens")

    template = load_template("linking")
    screen_list = "\n".join(
        f"{i}. {name} (`/{slugify(name)}`)" for i, name in enumerate(screen_names, start=1)
    )
    text = template.format(
        app_name=attrs.app_name,
        app_type=attrs.app_type.label,
        tool_section=_tool_section(selected_tool),
        screen_list=screen_list,
        navigation_style=navigation_style(attrs.platforms),
        default_path=f"/{slugify(screen_names[0])}",
        platform_navigation=_platform_navigation(attrs.platforms),
    )
    return RenderedPrompt(kind=PromptKind.LINKING, text=text)


def render_refinement_prompt(
    screen: ScreenSpec,
    current_body: str,
    attrs: ProjectAttributes,
    selected_tool: Optional[ToolProfile] = None,
) -> RenderedPrompt:
    """Ask the gateway to sharpen an existing screen prompt."""
    target = selected_tool.name if selected_tool else "an AI app builder"
    text = (
        f'Rewrite the following UI prompt for the "{screen.name}" screen of "{attrs.app_name}" '
        f"so it can be pasted directly into {target}. Keep every requirement, make component "
        f"names and layout instructions explicit, and return only the rewritten prompt.\n\n"
        f"---\n{current_body}\n---"
    )
    return RenderedPrompt(kind=PromptKind.SCREEN, text=text)
