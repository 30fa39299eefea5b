# mvp_studio/wizard/machine.py
"""Wizard run - drives one project from setup to a complete prompt chain."""

import asyncio
import dataclasses
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Iterable, Optional

from mvp_studio.catalog import get_catalog
from mvp_studio.config import WizardConfig
from mvp_studio.errors import (
    FrameworkParseError,
    GatewayError,
    InvalidTransitionError,
    StaleResultError,
    UnknownToolError,
    WizardBusyError,
)
from mvp_studio.gateway.base import GenerationGateway, GenerationOptions, GenerationResult
from mvp_studio.logging import WizardLogger
from mvp_studio.prompts.builder import (
    render_framework_prompt,
    render_linking_prompt,
    render_refinement_prompt,
    render_screen_prompt,
)
from mvp_studio.prompts.parser import DEFAULT_SCREENS, parse_framework_response
from mvp_studio.recommendation.scorer import load_rules, recommend
from mvp_studio.types import (
    ArtifactBundle,
    ProjectAttributes,
    PromptArtifact,
    PromptKind,
    ScreenSpec,
    ToolProfile,
    ToolRecommendation,
)
from mvp_studio.validation import require_valid
from mvp_studio.wizard.states import WizardStage, can_go_back, can_transition

logger = logging.getLogger(__name__)

FRAMEWORK_TITLE = "Project Framework"
LINKING_TITLE = "Navigation & Linking"


@dataclass
class CompletedFlags:
    """Which prompts the user has moved past."""

    framework: bool = False
    per_screen: list[bool] = field(default_factory=list)
    linking: bool = False


@dataclass
class RunState:
    """Mutable state of a single wizard run."""

    stage: WizardStage = WizardStage.SETUP
    current_screen_index: int = 0
    screens: list[ScreenSpec] = field(default_factory=list)
    prompt_history: list[PromptArtifact] = field(default_factory=list)
    completed: CompletedFlags = field(default_factory=CompletedFlags)
    framework_response: str = ""
    used_fallback_screens: bool = False


class WizardRun:
    """
    Orchestrates one wizard run.

    Flow:
    1. setup: collect attributes, pick a tool, validate (finalize_setup)
    2. framework: generate the framework through the gateway and parse screens
    3. screen(i): deliver one prompt per screen
    4. linking: deliver the navigation prompt
    5. complete: hand back the artifact bundle

    previous() only moves the cursor. Gateway failures leave the run untouched.
    """

    def __init__(
        self,
        gateway: GenerationGateway,
        attributes: Optional[ProjectAttributes] = None,
        config: Optional[WizardConfig] = None,
        catalog: Optional[Iterable[ToolProfile]] = None,
    ):
        self.gateway = gateway
        self.config = config or WizardConfig()
        self.catalog = tuple(catalog) if catalog is not None else get_catalog()
        self.attributes = attributes or ProjectAttributes()
        self.selected_tool: Optional[ToolProfile] = None
        self.state = RunState()
        self.run_id = uuid.uuid4().hex
        self.events = WizardLogger()

        self._request_token = 0
        self._in_flight: Optional[int] = None

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    @property
    def busy(self) -> bool:
        """True while a gateway call is in flight."""
        return self._in_flight is not None

    @property
    def request_token(self) -> int:
        return self._request_token

    def _ensure_idle(self):
        if self.busy:
            raise WizardBusyError("A generation is in progress; wait for it or cancel it")

    def _require_stage(self, action: str, *stages: WizardStage):
        if self.state.stage not in stages:
            raise InvalidTransitionError(
                f"Cannot {action} from stage '{self.state.stage.value}'",
                from_stage=self.state.stage.value,
                action=action,
            )

    def _move(self, to_stage: WizardStage, screen_index: int = 0):
        """Move the cursor with logging."""
        from_stage = self.state.stage
        self.state.stage = to_stage
        self.state.current_screen_index = screen_index
        self.events.stage_transition(
            self.run_id,
            from_stage.value,
            to_stage.value,
            screen_index if to_stage == WizardStage.SCREEN else None,
        )

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def update_attributes(self, attributes: ProjectAttributes):
        """Replace the project attributes. Only allowed during setup."""
        self._ensure_idle()
        self._require_stage("update attributes", WizardStage.SETUP)
        self.attributes = attributes

    def select_tool(self, tool_id: Optional[str]):
        """Pick the builder the prompts should target, or clear the choice."""
        self._ensure_idle()
        self._require_stage("select a tool", WizardStage.SETUP)
        if tool_id is None:
            self.selected_tool = None
            return
        for tool in self.catalog:
            if tool.id == tool_id:
                self.selected_tool = tool
                return
        raise UnknownToolError(tool_id)

    def recommendations(self) -> list[ToolRecommendation]:
        """Top tools for the current attributes, computed fresh on every call."""
        if self.attributes.app_type is None:
            return []
        return recommend(
            self.attributes,
            catalog=self.catalog,
            limit=self.config.recommendation_limit,
            rules=load_rules(self.config.rules_version),
        )

    def finalize_setup(self):
        """
        Validate attributes and move from setup to framework.

        Raises:
            AttributeValidationError: first unmet rule; the run stays in setup
        """
        self._ensure_idle()
        self._require_stage("finalize setup", WizardStage.SETUP)
        require_valid(self.attributes)
        if not can_transition(self.state.stage, WizardStage.FRAMEWORK):
            raise InvalidTransitionError("Setup cannot advance", self.state.stage.value, "finalize_setup")
        self._move(WizardStage.FRAMEWORK)

    # ------------------------------------------------------------------
    # Gateway calls
    # ------------------------------------------------------------------

    async def _call_gateway(self, prompt: str, kind: PromptKind, timeout: Optional[float]) -> GenerationResult:
        """Run one gateway call under a request token."""
        self._ensure_idle()
        self._request_token += 1
        token = self._request_token
        self._in_flight = token

        options = GenerationOptions(max_tokens=self.config.max_tokens, temperature=self.config.temperature)
        self.events.generation_started(self.run_id, kind.value, token, self.gateway.name)
        start_time = time.time()

        try:
            call = self.gateway.generate(prompt, options)
            if timeout is not None:
                result = await asyncio.wait_for(call, timeout)
            else:
                result = await call
        except asyncio.TimeoutError:
            self.events.generation_failed(self.run_id, kind.value, "TimeoutError", f"Exceeded {timeout}s")
            raise GatewayError(f"Generation timed out after {timeout}s", provider=self.gateway.name)
        except GatewayError as e:
            self.events.generation_failed(self.run_id, kind.value, type(e).__name__, str(e))
            raise
        except Exception as e:
            self.events.generation_failed(self.run_id, kind.value, type(e).__name__, str(e))
            raise GatewayError(f"Generation failed: {e}", provider=self.gateway.name) from e
        finally:
            if self._in_flight == token:
                self._in_flight = None

        if token != self._request_token:
            self.events.stale_result_discarded(self.run_id, token, self._request_token)
            raise StaleResultError("Generation result arrived after the run moved on", token=token)

        self.events.generation_complete(self.run_id, kind.value, token, time.time() - start_time)
        return result

    def cancel_pending(self) -> bool:
        """
        Abandon the in-flight generation, if any.

        A result that arrives later carries a stale token and is discarded.
        """
        if not self.busy:
            return False
        self._request_token += 1
        self._in_flight = None
        return True

    async def generate_framework(self, timeout: Optional[float] = None) -> list[ScreenSpec]:
        """
        Generate the framework and parse it into screens.

        Returns:
            The screens for this run (the default set if parsing degraded)

        Raises:
            GatewayError: generation failed; the run is unchanged and can retry
            StaleResultError: the call was cancelled before it finished
        """
        self._require_stage("generate the framework", WizardStage.FRAMEWORK)
        if self._artifact(PromptKind.FRAMEWORK) is not None:
            raise InvalidTransitionError(
                "Framework already generated", self.state.stage.value, "generate_framework"
            )

        rendered = render_framework_prompt(self.attributes, self.selected_tool)
        result = await self._call_gateway(rendered.text, PromptKind.FRAMEWORK, timeout)

        used_fallback = False
        try:
            screens = parse_framework_response(result.text)
        except FrameworkParseError as e:
            screens = list(DEFAULT_SCREENS)
            used_fallback = True
            self.events.parse_fallback(self.run_id, str(e), len(screens))

        # Apply everything at once so a failure above never leaves partial state
        self.state.screens = screens
        self.state.framework_response = result.text
        self.state.used_fallback_screens = used_fallback
        self.state.completed = CompletedFlags(per_screen=[False] * len(screens))
        self.state.prompt_history.append(PromptArtifact(
            kind=PromptKind.FRAMEWORK,
            title=FRAMEWORK_TITLE,
            body=rendered.text,
        ))
        logger.info(f"Framework ready with {len(screens)} screens (fallback={used_fallback})")
        return list(screens)

    async def regenerate_screen(self, index: int, timeout: Optional[float] = None) -> PromptArtifact:
        """
        Refine an already delivered screen prompt through the gateway.

        The new artifact takes the old one's place in history.
        """
        self._require_stage(
            "regenerate a screen", WizardStage.FRAMEWORK, WizardStage.SCREEN, WizardStage.LINKING
        )
        position = self._history_position(PromptKind.SCREEN, index)
        if position is None:
            raise InvalidTransitionError(
                f"Screen {index} has not been delivered yet", self.state.stage.value, "regenerate_screen"
            )

        current = self.state.prompt_history[position]
        screen = self.state.screens[index]
        rendered = render_refinement_prompt(screen, current.body, self.attributes, self.selected_tool)
        result = await self._call_gateway(rendered.text, PromptKind.SCREEN, timeout)

        refined = dataclasses.replace(current, body=result.text)
        self.state.prompt_history[position] = refined
        return refined

    # ------------------------------------------------------------------
    # Prompt delivery
    # ------------------------------------------------------------------

    def _history_position(self, kind: PromptKind, screen_index: Optional[int] = None) -> Optional[int]:
        for position, artifact in enumerate(self.state.prompt_history):
            if artifact.kind == kind and artifact.screen_index == screen_index:
                return position
        return None

    def _artifact(self, kind: PromptKind, screen_index: Optional[int] = None) -> Optional[PromptArtifact]:
        position = self._history_position(kind, screen_index)
        return None if position is None else self.state.prompt_history[position]

    def _enter_screen(self, index: int):
        if self._artifact(PromptKind.SCREEN, index) is None:
            screen = self.state.screens[index]
            rendered = render_screen_prompt(screen, self.attributes, self.selected_tool)
            self.state.prompt_history.append(PromptArtifact(
                kind=PromptKind.SCREEN,
                title=f"{screen.name} UI",
                body=rendered.text,
                screen_index=index,
            ))
        self._move(WizardStage.SCREEN, index)

    def _enter_linking(self):
        # A run without screens has no linking prompt to render
        if self.state.screens and self._artifact(PromptKind.LINKING) is None:
            rendered = render_linking_prompt(
                [s.name for s in self.state.screens], self.attributes, self.selected_tool
            )
            self.state.prompt_history.append(PromptArtifact(
                kind=PromptKind.LINKING,
                title=LINKING_TITLE,
                body=rendered.text,
            ))
        self._move(WizardStage.LINKING)

    def next(self) -> Optional[PromptArtifact]:
        """Advance to the next prompt and return it."""
        self._ensure_idle()
        stage = self.state.stage

        if stage == WizardStage.FRAMEWORK:
            if self._artifact(PromptKind.FRAMEWORK) is None:
                raise InvalidTransitionError("Framework has not been generated yet", stage.value, "next")
            self.state.completed.framework = True
            if self.state.screens:
                self._enter_screen(0)
            else:
                self._enter_linking()

        elif stage == WizardStage.SCREEN:
            index = self.state.current_screen_index
            self.state.completed.per_screen[index] = True
            if index + 1 < len(self.state.screens):
                self._enter_screen(index + 1)
            else:
                self._enter_linking()

        elif stage == WizardStage.LINKING:
            self.state.completed.linking = True
            self._move(WizardStage.COMPLETE)
            self.events.run_complete(self.run_id, len(self.state.screens), len(self.state.prompt_history))

        else:
            raise InvalidTransitionError(f"Cannot go to next from '{stage.value}'", stage.value, "next")

        return self.displayed_prompt()

    def previous(self) -> Optional[PromptArtifact]:
        """Move the cursor back one prompt without regenerating anything."""
        self._ensure_idle()
        stage = self.state.stage
        index = self.state.current_screen_index

        if stage == WizardStage.SCREEN and index > 0:
            target = (WizardStage.SCREEN, index - 1)
        elif stage == WizardStage.SCREEN:
            target = (WizardStage.FRAMEWORK, 0)
        elif stage == WizardStage.LINKING and self.state.screens:
            target = (WizardStage.SCREEN, len(self.state.screens) - 1)
        elif stage == WizardStage.LINKING:
            target = (WizardStage.FRAMEWORK, 0)
        else:
            raise InvalidTransitionError(f"Cannot go to previous from '{stage.value}'", stage.value, "previous")

        if not can_go_back(stage, target[0]):
            raise InvalidTransitionError(f"Cannot go back to '{target[0].value}'", stage.value, "previous")
        self._move(*target)
        return self.displayed_prompt()

    def displayed_prompt(self) -> Optional[PromptArtifact]:
        """The prompt at the cursor, looked up from stored artifacts only."""
        stage = self.state.stage
        if stage == WizardStage.FRAMEWORK:
            return self._artifact(PromptKind.FRAMEWORK)
        if stage == WizardStage.SCREEN:
            return self._artifact(PromptKind.SCREEN, self.state.current_screen_index)
        if stage == WizardStage.LINKING:
            return self._artifact(PromptKind.LINKING)
        return None

    def progress(self) -> dict:
        """Delivery progress for display."""
        completed = self.state.completed
        done = int(completed.framework) + sum(completed.per_screen) + int(completed.linking)
        total = 2 + len(self.state.screens)
        return {
            "stage": self.state.stage.value,
            "current_screen_index": self.state.current_screen_index,
            "completed": done,
            "total": total,
            "history_length": len(self.state.prompt_history),
        }

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    def bundle(self) -> ArtifactBundle:
        """Everything the run produced. Only available once complete."""
        self._require_stage("build the bundle", WizardStage.COMPLETE)
        screen_prompts = sorted(
            (a for a in self.state.prompt_history if a.kind == PromptKind.SCREEN),
            key=lambda a: a.screen_index,
        )
        return ArtifactBundle(
            framework_prompt=self._artifact(PromptKind.FRAMEWORK),
            screen_prompts=screen_prompts,
            linking_prompt=self._artifact(PromptKind.LINKING),
            recommended_tools=self.recommendations(),
            attributes=self.attributes,
            framework_response=self.state.framework_response,
        )

    def reset(self):
        """Start over from setup, keeping the attributes and tool choice."""
        self._ensure_idle()
        self._request_token += 1
        self.state = RunState()
        self.run_id = uuid.uuid4().hex
