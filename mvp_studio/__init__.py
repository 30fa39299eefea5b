"""MVP Studio - turns a startup idea into a chain of app-builder prompts."""

__version__ = "0.1.0"
