"""MCP tool functions over the catalog, scorer and prompt builder."""

from typing import Optional

from mvp_studio.catalog import filter_tools, get_tool
from mvp_studio.errors import AttributeValidationError, FrameworkParseError, UnknownToolError
from mvp_studio.types import AppType, ComplexityTier, Platform, ProjectAttributes


def _attributes(data: dict) -> ProjectAttributes:
    try:
        return ProjectAttributes.from_dict(data)
    except (ValueError, TypeError, AttributeError) as e:
        raise AttributeValidationError("attributes", f"Malformed attributes: {e}") from e


def list_tools_tool(
    category: Optional[str] = None,
    platform: Optional[str] = None,
    app_type: Optional[str] = None,
    complexity: Optional[str] = None,
    pricing: Optional[str] = None,
) -> dict:
    """
    List catalog tools, optionally filtered.

    Args:
        category: ai-coding, no-code, low-code, design
        platform: web, android, ios, cross-platform
        app_type: web-app, mobile-app, saas-tool, chrome-extension, ai-app
        complexity: beginner, intermediate, advanced
        pricing: free, freemium, paid
    """
    try:
        tools = filter_tools(
            category=category,
            platform=Platform.from_string(platform) if platform else None,
            app_type=AppType.from_string(app_type) if app_type else None,
            complexity=ComplexityTier.from_string(complexity) if complexity else None,
            pricing=pricing,
        )
    except ValueError as e:
        return {"error": str(e)}

    return {"count": len(tools), "tools": [t.to_dict() for t in tools]}


def get_tool_details(tool_id: str) -> dict:
    """Get one catalog tool by id."""
    try:
        return get_tool(tool_id).to_dict()
    except UnknownToolError as e:
        return {"error": str(e)}


def recommend_tools_tool(attributes: dict, limit: int = 3) -> dict:
    """
    Rank the best-fit builders for a project.

    Args:
        attributes: Project attributes (app_type, platforms, description, key_features, ...)
        limit: How many tools to return
    """
    from mvp_studio.recommendation.scorer import recommend

    try:
        attrs = _attributes(attributes)
    except AttributeValidationError as e:
        return {"error": str(e)}
    if attrs.app_type is None:
        return {"error": "app_type is required"}

    results = recommend(attrs, limit=limit)
    return {
        "app_type": attrs.app_type.value,
        "recommendations": [r.to_dict() for r in results],
    }


def render_prompts_tool(
    attributes: dict,
    screens: Optional[list] = None,
    tool_id: Optional[str] = None,
) -> dict:
    """
    Render the framework prompt, and screen plus linking prompts when screens are given.

    Args:
        attributes: Project attributes; must pass setup validation
        screens: Screen names to render prompts for
        tool_id: Catalog id of the target builder
    """
    from mvp_studio.prompts.builder import (
        render_framework_prompt,
        render_linking_prompt,
        render_screen_prompt,
    )
    from mvp_studio.types import ScreenSpec
    from mvp_studio.validation import require_valid

    try:
        attrs = require_valid(_attributes(attributes))
        tool = get_tool(tool_id) if tool_id else None
    except AttributeValidationError as e:
        return {"error": str(e), "field": e.field}
    except UnknownToolError as e:
        return {"error": str(e)}

    result = {
        "framework": render_framework_prompt(attrs, tool).text,
        "screens": [],
        "linking": None,
    }
    if screens:
        specs = [ScreenSpec(name=name) for name in screens]
        result["screens"] = [
            {"name": spec.name, "prompt": render_screen_prompt(spec, attrs, tool).text}
            for spec in specs
        ]
        result["linking"] = render_linking_prompt(screens, attrs, tool).text
    return result


def parse_framework_tool(text: str) -> dict:
    """
    Extract the screen list from a framework response.

    Falls back to the default screen set when the response has no usable JSON block.
    """
    from mvp_studio.prompts.parser import DEFAULT_SCREENS, parse_framework_response

    try:
        screens = parse_framework_response(text)
    except FrameworkParseError as e:
        return {
            "used_fallback_screens": True,
            "reason": str(e),
            "screens": [s.to_dict() for s in DEFAULT_SCREENS],
        }

    return {
        "used_fallback_screens": False,
        "screens": [s.to_dict() for s in screens],
    }
