"""Export prompts in copy-paste friendly formats."""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from mvp_studio.prompts.builder import slugify
from mvp_studio.types import ArtifactBundle, PromptArtifact

logger = logging.getLogger(__name__)

FORMATS = ("markdown", "json", "plain")

EXTENSIONS = {
    "markdown": ".md",
    "json": ".json",
    "plain": ".txt",
}


def _check_format(fmt: str) -> str:
    fmt = fmt.lower()
    if fmt not in FORMATS:
        raise ValueError(f"Unknown export format: {fmt} (expected one of {', '.join(FORMATS)})")
    return fmt


def format_artifact(artifact: PromptArtifact, fmt: str = "markdown", tool_name: Optional[str] = None) -> str:
    """Render one prompt as markdown, json or plain text."""
    fmt = _check_format(fmt)
    if fmt == "json":
        data = artifact.to_dict()
        if tool_name:
            data["tool"] = tool_name
        return json.dumps(data, indent=2)
    if fmt == "plain":
        return artifact.body

    header = [f"# {artifact.title}", ""]
    if tool_name:
        header.append(f"**Tool:** {tool_name}")
    header.append(f"**Kind:** {artifact.kind.value}")
    return "\n".join(header) + f"\n\n{artifact.body}\n"


def format_bundle(bundle: ArtifactBundle, fmt: str = "markdown", tool_name: Optional[str] = None) -> str:
    """Render a whole bundle as one document."""
    fmt = _check_format(fmt)
    if fmt == "json":
        data = bundle.to_dict()
        data["tool"] = tool_name
        return json.dumps(data, indent=2)

    parts = [format_artifact(a, fmt, tool_name) for a in bundle.prompts]
    if fmt == "plain":
        return "\n\n".join(parts)

    title = bundle.attributes.app_name or "MVP"
    intro = f"# {title} - Prompt Chain\n\n{len(parts)} prompts, paste them in order.\n"
    return intro + "\n---\n\n" + "\n---\n\n".join(parts)


def artifact_filename(position: int, artifact: PromptArtifact, fmt: str) -> str:
    """Ordered, slugified file name for a prompt."""
    return f"{position:02d}-{slugify(artifact.title)}{EXTENSIONS[_check_format(fmt)]}"


def write_bundle(
    bundle: ArtifactBundle,
    directory: Union[str, Path],
    fmt: str = "markdown",
    tool_name: Optional[str] = None,
) -> list[Path]:
    """
    Write one file per prompt into directory.

    Returns:
        Paths written, in delivery order
    """
    fmt = _check_format(fmt)
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    written = []
    for position, artifact in enumerate(bundle.prompts, start=1):
        path = directory / artifact_filename(position, artifact, fmt)
        path.write_text(format_artifact(artifact, fmt, tool_name), encoding="utf-8")
        written.append(path)

    logger.info(f"Wrote {len(written)} prompts to {directory}")
    return written
