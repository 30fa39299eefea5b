"""Shared test fixtures."""

import asyncio
import json

import pytest

from mvp_studio.gateway.base import GenerationGateway, GenerationOptions, GenerationResult


FRAMEWORK_SCREENS = [
    {"name": "Home", "description": "Overview of today's tasks", "components": ["TaskList", "QuickAdd"],
     "layout": "vertical", "userRoles": ["User"]},
    {"name": "Task Detail", "description": "Edit a single task", "components": ["TaskForm"],
     "layout": "centered", "userRoles": ["User"]},
    {"name": "Settings", "description": "Preferences", "layout": "vertical"},
]


def framework_response(screens=None) -> str:
    """A framework response in the shape the framework prompt asks for."""
    payload = {
        "screens": FRAMEWORK_SCREENS if screens is None else screens,
        "navigation": {"type": "tabs", "structure": []},
        "techStack": {"recommended": "React", "alternatives": []},
    }
    return "## Framework\n\nSome analysis.\n\n```json\n" + json.dumps(payload, indent=2) + "\n```\n"


class FakeGateway(GenerationGateway):
    """Scripted gateway. Each call pops the next response; exceptions are raised."""

    def __init__(self, responses=None, gateway_name: str = "fake"):
        self.responses = list(responses or [])
        self.prompts = []
        self.options = []
        self.hold = None
        self._name = gateway_name

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def generate(self, prompt: str, options: GenerationOptions) -> GenerationResult:
        self.prompts.append(prompt)
        self.options.append(options)
        if self.hold is not None:
            await self.hold.wait()
        item = self.responses.pop(0) if self.responses else framework_response()
        if isinstance(item, BaseException):
            raise item
        return GenerationResult(text=item, provider=self._name, model="fake-model")


@pytest.fixture
def valid_attrs():
    from mvp_studio.types import AppType, Platform, ProjectAttributes

    return ProjectAttributes(
        app_name="TaskMaster",
        app_type=AppType.MOBILE_APP,
        platforms=(Platform.ANDROID, Platform.IOS),
        vision_text="A focused to-do app for busy people",
        description="Task management with reminders",
        key_features=["Reminders", "Shared lists"],
    )


@pytest.fixture
def web_attrs():
    from mvp_studio.types import AppType, Platform, ProjectAttributes

    return ProjectAttributes(
        app_name="ShopFront",
        app_type=AppType.WEB_APP,
        platforms=(Platform.WEB,),
        vision_text="An online store for handmade ceramics",
    )


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def wizard(gateway, valid_attrs):
    from mvp_studio.wizard import WizardRun

    return WizardRun(gateway, attributes=valid_attrs)


def run_async(coro):
    """Drive a coroutine to completion from a sync test."""
    return asyncio.run(coro)
