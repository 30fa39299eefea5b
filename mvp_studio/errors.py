# mvp_studio/errors.py
"""Custom error types for the wizard."""

from typing import Optional


class WizardError(Exception):
    """Base error for wizard operations."""
    pass


class AttributeValidationError(WizardError):
    """Project attributes failed validation. Fixable by editing input."""

    def __init__(self, field: str, message: str, issues: Optional[list] = None):
        super().__init__(message)
        self.field = field
        self.issues = issues or []


class FrameworkParseError(WizardError):
    """Framework response did not contain the structured screens block."""

    def __init__(self, message: str, response_excerpt: str = ""):
        super().__init__(message)
        self.response_excerpt = response_excerpt


class GatewayError(WizardError):
    """Text generation failed (network, provider, timeout)."""

    def __init__(self, message: str, retryable: bool = True, provider: Optional[str] = None):
        super().__init__(message)
        self.retryable = retryable
        self.provider = provider


class InvalidTransitionError(WizardError):
    """Action is not allowed from the current stage."""

    def __init__(self, message: str, from_stage: Optional[str] = None, action: Optional[str] = None):
        super().__init__(message)
        self.from_stage = from_stage
        self.action = action


class WizardBusyError(WizardError):
    """A generation call is in flight; transitions are locked."""
    pass


class StaleResultError(WizardError):
    """A generation result arrived after the run moved on."""

    def __init__(self, message: str, token: Optional[int] = None):
        super().__init__(message)
        self.token = token


class EmptyScreenListError(WizardError, ValueError):
    """Linking prompt requested without any screens."""
    pass


class UnknownToolError(WizardError, KeyError):
    """Tool id is not in the catalog."""

    def __init__(self, tool_id: str):
        super().__init__(f"Unknown tool: {tool_id}")
        self.tool_id = tool_id

    def __str__(self) -> str:
        return self.args[0]
