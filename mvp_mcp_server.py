#!/usr/bin/env python3
"""
MCP Server wrapper for MVP Studio tools.

Exposes the builder catalog, tool recommendation and prompt rendering
to MCP clients.
"""
from fastmcp import FastMCP

from mvp_studio.mcp_server import (
    get_tool_details,
    list_tools_tool,
    parse_framework_tool,
    recommend_tools_tool,
    render_prompts_tool,
)

# Create MCP server
mcp = FastMCP("mvp-studio")


@mcp.tool()
def list_tools(
    category: str = None,
    platform: str = None,
    app_type: str = None,
    complexity: str = None,
    pricing: str = None
) -> dict:
    """List app builders. Filter by category, platform, app_type, complexity or pricing."""
    return list_tools_tool(
        category=category,
        platform=platform,
        app_type=app_type,
        complexity=complexity,
        pricing=pricing
    )

@mcp.tool()
def tool_details(tool_id: str) -> dict:
    """Get one app builder by id (e.g. 'lovable', 'flutterflow')."""
    return get_tool_details(tool_id)

@mcp.tool()
def recommend(attributes: dict, limit: int = 3) -> dict:
    """Rank the best app builders for a project. Returns score, rationale, confidence."""
    return recommend_tools_tool(attributes, limit=limit)

@mcp.tool()
def render_prompts(attributes: dict, screens: list = None, tool_id: str = None) -> dict:
    """
    Render the framework prompt for a project.
    Pass screen names to also get per-screen and linking prompts.
    """
    return render_prompts_tool(attributes, screens=screens, tool_id=tool_id)

@mcp.tool()
def parse_framework(text: str) -> dict:
    """Extract the screen list from a generated framework response."""
    return parse_framework_tool(text)


if __name__ == "__main__":
    mcp.run()
