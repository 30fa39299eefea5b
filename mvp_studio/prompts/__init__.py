"""Prompt template loading."""

from pathlib import Path

PROMPTS_DIR = Path(__file__).parent


def load_template(name: str) -> str:
    """Load a prompt template by name."""
    path = PROMPTS_DIR / f"{name}.txt"
    if not path.exists():
        raise ValueError(f"Prompt template not found: {name}")
    return path.read_text(encoding="utf-8")
