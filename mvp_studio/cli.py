"""MVP Studio CLI."""

import asyncio

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

console = Console()

APP_TYPES = ["web-app", "mobile-app", "saas-tool", "chrome-extension", "ai-app"]
PLATFORMS = ["web", "android", "ios", "cross-platform"]


def _build_attributes(name, app_type, theme, style, platforms, vision, description, features, prompt_style="detailed"):
    from .types import AppType, DesignStyle, Platform, ProjectAttributes, PromptStyle, Theme

    return ProjectAttributes(
        app_name=name,
        app_type=AppType.from_string(app_type),
        theme=Theme.from_string(theme),
        design_style=DesignStyle.from_string(style),
        platforms=tuple(Platform.from_string(p) for p in platforms),
        description=description,
        key_features=list(features),
        vision_text=vision,
        prompt_style=PromptStyle.from_string(prompt_style),
    )


@click.group()
def main():
    """MVP Studio - turn an app idea into a chain of builder prompts."""
    pass


@main.command()
def version():
    """Show version."""
    from . import __version__
    console.print(f"mvp-studio v{__version__}")


@main.command()
@click.option("--app-type", "-a", type=click.Choice(APP_TYPES), default=None, help="Only tools for this app type")
@click.option("--platform", "-p", type=click.Choice(PLATFORMS), default=None, help="Only tools for this platform")
@click.option("--complexity", "-c", type=click.Choice(["beginner", "intermediate", "advanced"]), default=None)
def tools(app_type, platform, complexity):
    """List the app builder catalog."""
    from .catalog import filter_tools
    from .types import AppType, ComplexityTier, Platform

    results = filter_tools(
        app_type=AppType.from_string(app_type) if app_type else None,
        platform=Platform.from_string(platform) if platform else None,
        complexity=ComplexityTier.from_string(complexity) if complexity else None,
    )

    if not results:
        console.print("[yellow]No tools match those filters[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Complexity")
    table.add_column("Pricing")

    for tool in results:
        table.add_row(tool.id, tool.name, tool.category, tool.complexity_tier.value, tool.pricing_tier)

    console.print(table)


@main.command()
@click.option("--app-type", "-a", type=click.Choice(APP_TYPES), required=True, help="What you are building")
@click.option("--platform", "-p", type=click.Choice(PLATFORMS), multiple=True, help="Target platform (repeatable)")
@click.option("--description", "-d", default="", help="Short project description")
@click.option("--feature", "-f", multiple=True, help="Key feature (repeatable)")
@click.option("--limit", "-n", default=3, help="How many tools to show")
@click.option("--all", "show_all", is_flag=True, help="Show every compatible tool")
def recommend(app_type, platform, description, feature, limit, show_all):
    """Rank the best-fit app builders for a project."""
    from .recommendation import compatible_tools, recommend as rank

    attrs = _build_attributes("", app_type, "dark", "minimal", platform, "", description, feature)
    results = compatible_tools(attrs) if show_all else rank(attrs, limit=limit)

    if not results:
        console.print("[yellow]No compatible tools[/yellow]")
        return

    console.print(f"\n[bold]Recommended tools for {attrs.app_type.label}:[/bold]\n")
    for position, rec in enumerate(results, start=1):
        conf_style = "green" if rec.confidence >= 0.8 else "yellow"
        console.print(f"  {position}. [cyan]{rec.tool.name}[/cyan] ({rec.score} pts, [{conf_style}]{rec.confidence:.0%}[/{conf_style}])")
        console.print(f"     [dim]{rec.rationale}[/dim]")


@main.command()
@click.option("--name", "-n", prompt="App name", help="Name of the app")
@click.option("--app-type", "-a", type=click.Choice(APP_TYPES), default="web-app")
@click.option("--theme", type=click.Choice(["dark", "light"]), default="dark")
@click.option("--style", type=click.Choice(["minimal", "playful", "business"]), default="minimal")
@click.option("--platform", "-p", type=click.Choice(PLATFORMS), multiple=True)
@click.option("--vision", "-v", prompt="Describe your vision", help="What the app should do (20+ characters)")
@click.option("--description", "-d", default="")
@click.option("--feature", "-f", multiple=True)
@click.option("--tool", "-t", "tool_id", default=None, help="Catalog id of the target builder")
def render(name, app_type, theme, style, platform, vision, description, feature, tool_id):
    """Render the framework prompt without calling a provider."""
    from .catalog import get_tool
    from .errors import WizardError
    from .prompts.builder import render_framework_prompt
    from .validation import require_valid

    attrs = _build_attributes(name, app_type, theme, style, platform, vision, description, feature)
    try:
        require_valid(attrs)
        tool = get_tool(tool_id) if tool_id else None
    except WizardError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    rendered = render_framework_prompt(attrs, tool)
    console.print(rendered.text, markup=False, highlight=False)


@main.command()
@click.option("--name", "-n", prompt="App name", help="Name of the app")
@click.option("--app-type", "-a", type=click.Choice(APP_TYPES), default="web-app")
@click.option("--theme", type=click.Choice(["dark", "light"]), default="dark")
@click.option("--style", type=click.Choice(["minimal", "playful", "business"]), default="minimal")
@click.option("--prompt-style", type=click.Choice(["detailed", "concise", "technical"]), default="detailed")
@click.option("--platform", "-p", type=click.Choice(PLATFORMS), multiple=True)
@click.option("--vision", "-v", prompt="Describe your vision", help="What the app should do (20+ characters)")
@click.option("--description", "-d", default="")
@click.option("--feature", "-f", multiple=True)
@click.option("--tool", "-t", "tool_id", default=None, help="Catalog id of the target builder")
@click.option("--export-dir", "-o", type=click.Path(), default=None, help="Write each prompt to this directory")
@click.option("--format", "fmt", type=click.Choice(["markdown", "json", "plain"]), default="markdown")
@click.option("--timeout", default=None, type=float, help="Gateway timeout in seconds")
def run(name, app_type, theme, style, prompt_style, platform, vision, description, feature,
        tool_id, export_dir, fmt, timeout):
    """Run the wizard end to end against the configured provider."""
    from .config import WizardConfig
    from .errors import WizardError
    from .export import write_bundle
    from .gateway import build_gateway
    from .wizard import WizardRun, WizardStage

    config = WizardConfig.from_env()
    attrs = _build_attributes(name, app_type, theme, style, platform, vision, description, feature, prompt_style)
    wizard = WizardRun(build_gateway(config), attributes=attrs, config=config)

    try:
        if tool_id:
            wizard.select_tool(tool_id)
        wizard.finalize_setup()

        recs = wizard.recommendations()
        if recs:
            console.print(f"[dim]Suggested tools: {', '.join(r.tool.name for r in recs)}[/dim]")

        console.print(f"[blue]Generating framework with {wizard.gateway.name}...[/blue]")
        screens = asyncio.run(wizard.generate_framework(timeout=timeout or config.gateway_timeout))
        if wizard.state.used_fallback_screens:
            console.print("[yellow]Could not read screens from the response; using the default set[/yellow]")
        console.print(f"[green]{len(screens)} screens planned[/green]")

        artifact = wizard.displayed_prompt()
        while True:
            if artifact is not None:
                console.print(Panel(Text(artifact.body), title=artifact.title, expand=False))
            if wizard.state.stage == WizardStage.COMPLETE:
                break
            artifact = wizard.next()
    except WizardError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    bundle = wizard.bundle()
    console.print(f"[green]Complete! {len(bundle.prompts)} prompts generated.[/green]")

    if export_dir:
        tool_name = wizard.selected_tool.name if wizard.selected_tool else None
        paths = write_bundle(bundle, export_dir, fmt, tool_name=tool_name)
        console.print(f"[blue]Exported {len(paths)} files to {export_dir}[/blue]")


if __name__ == "__main__":
    main()
