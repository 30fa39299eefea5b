"""Catalog of no-code and AI app builders the wizard can recommend."""

from typing import Optional

from mvp_studio.errors import UnknownToolError
from mvp_studio.types import AppType, ComplexityTier, Platform, ToolProfile

_A = AppType
_P = Platform
_C = ComplexityTier


def _tool(id, name, description, category, complexity, app_types, platforms, best_for, pricing, url):
    return ToolProfile(
        id=id,
        name=name,
        description=description,
        category=category,
        complexity_tier=complexity,
        app_types=frozenset(app_types),
        platforms=frozenset(platforms),
        best_for_tags=tuple(best_for),
        pricing_tier=pricing,
        reference_url=url,
    )


# Catalog order is the tie-break order for recommendations
TOOL_PROFILES: tuple[ToolProfile, ...] = (
    _tool(
        "lovable", "Lovable.dev",
        "React/TypeScript development with Supabase integration",
        "ai-coding", _C.INTERMEDIATE,
        [_A.WEB_APP, _A.SAAS_TOOL], [_P.WEB],
        ["React applications", "TypeScript projects", "Supabase integration",
         "Component optimization", "Responsive design"],
        "freemium", "https://lovable.dev",
    ),
    _tool(
        "bolt", "Bolt.new",
        "Enhancement-driven development with WebContainer and rapid prototyping",
        "ai-coding", _C.INTERMEDIATE,
        [_A.WEB_APP, _A.SAAS_TOOL], [_P.WEB],
        ["Rapid prototyping", "Web applications", "JavaScript projects",
         "Iterative development", "Code refinement"],
        "freemium", "https://bolt.new",
    ),
    _tool(
        "cursor", "Cursor",
        "Schema-driven development with AI assistance in the editor",
        "ai-coding", _C.ADVANCED,
        [_A.WEB_APP, _A.SAAS_TOOL, _A.AI_APP, _A.CHROME_EXTENSION], [_P.WEB, _P.CROSS_PLATFORM],
        ["Code editing", "AI-assisted development", "Schema-driven projects",
         "Parallel processing", "Professional development"],
        "freemium", "https://cursor.sh",
    ),
    _tool(
        "v0", "v0 by Vercel",
        "Production-ready React components with modern design patterns",
        "ai-coding", _C.INTERMEDIATE,
        [_A.WEB_APP, _A.SAAS_TOOL], [_P.WEB],
        ["React components", "Production-ready code", "Modern design patterns",
         "Component libraries", "UI development"],
        "freemium", "https://v0.dev",
    ),
    _tool(
        "cline", "Cline",
        "Step-by-step iterative development with detailed guidance",
        "ai-coding", _C.BEGINNER,
        [_A.WEB_APP, _A.SAAS_TOOL, _A.CHROME_EXTENSION], [_P.WEB, _P.CROSS_PLATFORM],
        ["Step-by-step development", "Iterative processes", "Detailed guidance",
         "Learning projects", "Structured development"],
        "free", "https://github.com/clinebot/cline",
    ),
    _tool(
        "windsurf", "Windsurf",
        "Explanatory development with async handling and thorough documentation",
        "ai-coding", _C.INTERMEDIATE,
        [_A.WEB_APP, _A.SAAS_TOOL, _A.AI_APP, _A.CHROME_EXTENSION], [_P.WEB, _P.CROSS_PLATFORM],
        ["Explanatory development", "Async handling", "Documentation",
         "Complex workflows", "Educational projects"],
        "freemium", "https://windsurf.ai",
    ),
    _tool(
        "devin", "Devin AI",
        "Autonomous planning with security focus and project management",
        "ai-coding", _C.ADVANCED,
        [_A.WEB_APP, _A.SAAS_TOOL, _A.AI_APP], [_P.WEB, _P.CROSS_PLATFORM],
        ["Autonomous development", "Security-focused projects", "Project planning",
         "Complex applications", "Enterprise solutions"],
        "paid", "https://devin.ai",
    ),
    _tool(
        "bubble", "Bubble",
        "Visual programming platform for web applications without code",
        "no-code", _C.BEGINNER,
        [_A.WEB_APP, _A.SAAS_TOOL], [_P.WEB],
        ["Visual development", "No-code solutions", "Web applications",
         "Database integration", "Workflow automation"],
        "freemium", "https://bubble.io",
    ),
    _tool(
        "flutterflow", "FlutterFlow",
        "Visual Flutter development for cross-platform mobile and web apps",
        "low-code", _C.INTERMEDIATE,
        [_A.MOBILE_APP, _A.WEB_APP], [_P.WEB, _P.ANDROID, _P.IOS, _P.CROSS_PLATFORM],
        ["Flutter development", "Cross-platform apps", "Mobile applications",
         "Visual development", "Firebase integration"],
        "freemium", "https://flutterflow.io",
    ),
    _tool(
        "framer", "Framer",
        "Design and development platform with advanced animations and interactions",
        "design", _C.INTERMEDIATE,
        [_A.WEB_APP], [_P.WEB],
        ["Design systems", "Animations", "Interactive prototypes",
         "Landing pages", "Marketing sites"],
        "freemium", "https://framer.com",
    ),
    _tool(
        "adalo", "Adalo",
        "No-code mobile and web app builder with native functionality",
        "no-code", _C.BEGINNER,
        [_A.MOBILE_APP, _A.WEB_APP], [_P.ANDROID, _P.IOS, _P.WEB],
        ["Mobile apps", "No-code development", "Native functionality",
         "Database integration", "User authentication"],
        "freemium", "https://adalo.com",
    ),
    _tool(
        "uizard", "Uizard",
        "AI-powered design tool that converts sketches to digital designs",
        "design", _C.BEGINNER,
        [_A.MOBILE_APP, _A.WEB_APP], [_P.WEB, _P.ANDROID, _P.IOS],
        ["Design conversion", "Sketch to digital", "Rapid prototyping",
         "UI design", "Design automation"],
        "freemium", "https://uizard.io",
    ),
    _tool(
        "roocode", "RooCode",
        "AI-powered development platform for rapid application building",
        "ai-coding", _C.INTERMEDIATE,
        [_A.WEB_APP, _A.SAAS_TOOL], [_P.WEB, _P.CROSS_PLATFORM],
        ["Rapid development", "AI assistance", "Application building",
         "Code generation", "Development automation"],
        "freemium", "https://roocode.com",
    ),
    _tool(
        "manus", "Manus",
        "Manual-first development approach with detailed documentation",
        "ai-coding", _C.BEGINNER,
        [_A.WEB_APP, _A.SAAS_TOOL], [_P.WEB, _P.CROSS_PLATFORM],
        ["Documentation-driven development", "Manual processes", "Detailed guidance",
         "Educational content", "Process documentation"],
        "free", "https://manus.dev",
    ),
    _tool(
        "same_dev", "Same.dev",
        "Collaborative development platform with shared environments",
        "ai-coding", _C.INTERMEDIATE,
        [_A.WEB_APP, _A.SAAS_TOOL], [_P.WEB, _P.CROSS_PLATFORM],
        ["Collaborative development", "Shared environments", "Team projects",
         "Code sharing", "Development collaboration"],
        "freemium", "https://same.dev",
    ),
)

_BY_ID = {tool.id: tool for tool in TOOL_PROFILES}


def get_catalog() -> tuple[ToolProfile, ...]:
    """Return every tool profile in catalog order."""
    return TOOL_PROFILES


def get_tool(tool_id: str) -> ToolProfile:
    """Look up a tool profile by id."""
    try:
        return _BY_ID[tool_id]
    except KeyError:
        raise UnknownToolError(tool_id) from None


def filter_tools(
    category: Optional[str] = None,
    platform: Optional[Platform] = None,
    app_type: Optional[AppType] = None,
    complexity: Optional[ComplexityTier] = None,
    pricing: Optional[str] = None,
) -> list[ToolProfile]:
    """Filter the catalog by any combination of criteria."""
    results = []
    for tool in TOOL_PROFILES:
        if category and tool.category != category:
            continue
        if platform and platform not in tool.platforms:
            continue
        if app_type and app_type not in tool.app_types:
            continue
        if complexity and tool.complexity_tier != complexity:
            continue
        if pricing and tool.pricing_tier != pricing:
            continue
        results.append(tool)
    return results
