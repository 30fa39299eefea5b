"""Parsing of the framework response into screen specs."""

import json
import logging
import re

from mvp_studio.errors import FrameworkParseError
from mvp_studio.types import ScreenSpec

logger = logging.getLogger(__name__)

# Used when the framework response cannot be parsed
DEFAULT_SCREENS: tuple[ScreenSpec, ...] = (
    ScreenSpec(
        name="Landing Page",
        description="Main entry point and marketing page",
        components=("Hero", "Features", "CTA"),
        layout_kind="vertical",
        user_roles=("Guest",),
    ),
    ScreenSpec(
        name="Login",
        description="User authentication",
        components=("LoginForm", "SocialLogin", "ForgotPassword"),
        layout_kind="centered",
        user_roles=("Guest",),
    ),
    ScreenSpec(
        name="Dashboard",
        description="Main user interface after login",
        components=("Navigation", "Overview", "QuickActions", "Stats"),
        layout_kind="sidebar",
        user_roles=("User", "Admin"),
    ),
    ScreenSpec(
        name="Profile",
        description="User profile management",
        components=("ProfileForm", "Avatar", "PersonalInfo"),
        layout_kind="vertical",
        user_roles=("User", "Admin"),
    ),
    ScreenSpec(
        name="Settings",
        description="App configuration and preferences",
        components=("SettingsForm", "Preferences", "SecuritySettings"),
        layout_kind="vertical",
        user_roles=("User", "Admin"),
    ),
)

_FENCED_JSON = re.compile(r"```json\s*(.*?)```", re.DOTALL | re.IGNORECASE)

# Screen name fragment -> components, first match wins
_COMPONENT_HINTS = (
    ("dashboard", ("Navigation", "Overview", "QuickActions", "Stats")),
    ("profile", ("ProfileForm", "Avatar", "PersonalInfo")),
    ("login", ("LoginForm", "SocialLogin", "ForgotPassword")),
    ("sign in", ("LoginForm", "SocialLogin", "ForgotPassword")),
    ("register", ("RegisterForm", "TermsCheckbox", "EmailVerification")),
    ("sign up", ("RegisterForm", "TermsCheckbox", "EmailVerification")),
    ("settings", ("SettingsForm", "Preferences", "SecuritySettings")),
    ("admin", ("AdminNav", "DataTable", "Analytics")),
)


def infer_components(name: str, description: str = "") -> tuple[str, ...]:
    """Guess a component list from a screen's name and description."""
    lowered = name.lower()
    components = ["Header", "Content", "Footer"]
    for fragment, hinted in _COMPONENT_HINTS:
        if fragment in lowered:
            components = list(hinted)
            break

    desc = description.lower()
    if "form" in desc and "Form" not in components:
        components.append("Form")
    if ("table" in desc or "list" in desc) and "DataTable" not in components:
        components.append("DataTable")
    if "chart" in desc or "analytics" in desc:
        components.append("Charts")
    if "search" in desc:
        components.append("SearchBar")
    return tuple(components)


def _extract_payload(text: str) -> dict:
    """Pull the structured JSON object out of a response."""
    match = _FENCED_JSON.search(text)
    if match:
        candidate = match.group(1)
    else:
        start = text.find("{")
        end = text.rfind("}") + 1
        if start == -1 or end <= start:
            raise FrameworkParseError("Response has no structured screens block", text[:200])
        candidate = text[start:end]

    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise FrameworkParseError(f"Failed to parse screens block as JSON: {e}", candidate[:200])

    if not isinstance(payload, dict):
        raise FrameworkParseError("Screens block is not a JSON object", candidate[:200])
    return payload


def _as_strings(value) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return ()
    return tuple(str(v).strip() for v in value if str(v).strip())


def parse_framework_response(text: str) -> list[ScreenSpec]:
    """
    Parse the framework response into screens.

    Args:
        text: Raw generated text, expected to end with a fenced json block

    Returns:
        Screens in response order, duplicates dropped. May be empty if the
        block lists no screens.

    Raises:
        FrameworkParseError: if the block is missing, malformed or has no screen array
    """
    payload = _extract_payload(text)
    raw_screens = payload.get("screens", payload.get("pages"))
    if not isinstance(raw_screens, list):
        raise FrameworkParseError("Screens block has no 'screens' array", json.dumps(payload)[:200])

    screens = []
    seen = set()
    for entry in raw_screens:
        if isinstance(entry, str):
            entry = {"name": entry}
        if not isinstance(entry, dict):
            continue
        name = str(entry.get("name", "")).strip()
        if not name or name.lower() in seen:
            if name:
                logger.warning(f"Dropping duplicate screen: {name}")
            continue
        seen.add(name.lower())

        description = str(entry.get("description", "")).strip()
        components = _as_strings(entry.get("components")) or infer_components(name, description)
        roles = _as_strings(entry.get("userRoles", entry.get("user_roles"))) or ("User",)
        screens.append(ScreenSpec(
            name=name,
            description=description,
            components=components,
            layout_kind=str(entry.get("layout") or entry.get("layout_kind") or "default").strip(),
            user_roles=roles,
        ))

    return screens
