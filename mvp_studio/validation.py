"""Validation of project attributes before the prompt flow starts."""

from dataclasses import dataclass

from mvp_studio.config import MIN_VISION_LENGTH
from mvp_studio.errors import AttributeValidationError
from mvp_studio.types import AppType, DesignStyle, Platform, ProjectAttributes, Theme


@dataclass(frozen=True)
class ValidationIssue:
    """A single unmet validation rule."""

    field: str
    message: str


def validate_attributes(attrs: ProjectAttributes) -> list[ValidationIssue]:
    """
    Check every required field.

    Issues are returned in the order the wizard asks for the fields, so the
    first entry is the one the user should fix first.
    """
    issues = []

    if not attrs.app_name or not attrs.app_name.strip():
        issues.append(ValidationIssue("app_name", "App name is required"))

    if not isinstance(attrs.app_type, AppType):
        issues.append(ValidationIssue("app_type", "App type is required"))

    if not isinstance(attrs.theme, Theme):
        issues.append(ValidationIssue("theme", "Theme is required"))

    if not isinstance(attrs.design_style, DesignStyle):
        issues.append(ValidationIssue("design_style", "Design style is required"))

    if not attrs.platforms or not all(isinstance(p, Platform) for p in attrs.platforms):
        issues.append(ValidationIssue("platforms", "At least one platform is required"))

    if len((attrs.vision_text or "").strip()) < MIN_VISION_LENGTH:
        issues.append(ValidationIssue(
            "vision_text",
            f"Vision text must be at least {MIN_VISION_LENGTH} characters",
        ))

    return issues


def require_valid(attrs: ProjectAttributes) -> ProjectAttributes:
    """
    Validate attributes, raising on the first unmet rule.

    Raises:
        AttributeValidationError: names the first failing field and carries all issues
    """
    issues = validate_attributes(attrs)
    if issues:
        first = issues[0]
        raise AttributeValidationError(first.field, first.message, issues=issues)
    return attrs
