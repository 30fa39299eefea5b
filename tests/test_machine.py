"""Tests for the wizard run state machine."""

import pytest
import asyncio

from conftest import FakeGateway, framework_response, run_async


def _to_framework(wizard):
    wizard.finalize_setup()
    run_async(wizard.generate_framework())
    return wizard


def _walk_to_complete(wizard):
    from mvp_studio.wizard import WizardStage

    while wizard.state.stage != WizardStage.COMPLETE:
        wizard.next()
    return wizard


def test_new_run_starts_in_setup(wizard):
    from mvp_studio.wizard import WizardStage

    assert wizard.state.stage == WizardStage.SETUP
    assert wizard.state.prompt_history == []
    assert wizard.displayed_prompt() is None
    assert len(wizard.run_id) == 32


def test_short_vision_stays_in_setup(wizard, valid_attrs):
    from dataclasses import replace
    from mvp_studio.errors import AttributeValidationError
    from mvp_studio.wizard import WizardStage

    wizard.update_attributes(replace(valid_attrs, vision_text="Too short!"))

    with pytest.raises(AttributeValidationError) as exc:
        wizard.finalize_setup()

    assert exc.value.field == "vision_text"
    assert wizard.state.stage == WizardStage.SETUP


def test_taskmaster_setup_succeeds_with_mobile_tools(wizard):
    from mvp_studio.types import Platform
    from mvp_studio.wizard import WizardStage

    wizard.finalize_setup()

    assert wizard.state.stage == WizardStage.FRAMEWORK
    recs = wizard.recommendations()
    assert recs
    assert all(r.tool.platforms & {Platform.ANDROID, Platform.IOS} for r in recs)


def test_recommendations_recomputed_after_update(wizard, web_attrs):
    before = [r.tool.id for r in wizard.recommendations()]

    wizard.update_attributes(web_attrs)
    after = [r.tool.id for r in wizard.recommendations()]

    assert before != after
    assert "lovable" in after


def test_select_tool_unknown_raises(wizard):
    from mvp_studio.errors import UnknownToolError

    with pytest.raises(UnknownToolError):
        wizard.select_tool("nope")
    assert wizard.selected_tool is None


def test_setup_actions_blocked_after_setup(wizard, web_attrs):
    from mvp_studio.errors import InvalidTransitionError

    wizard.finalize_setup()

    with pytest.raises(InvalidTransitionError):
        wizard.update_attributes(web_attrs)
    with pytest.raises(InvalidTransitionError):
        wizard.select_tool("bolt")


def test_next_before_generation_raises(wizard):
    from mvp_studio.errors import InvalidTransitionError

    with pytest.raises(InvalidTransitionError):
        wizard.next()

    wizard.finalize_setup()
    with pytest.raises(InvalidTransitionError):
        wizard.next()


def test_generate_framework_parses_screens(wizard, gateway):
    from mvp_studio.types import PromptKind

    wizard.finalize_setup()
    screens = run_async(wizard.generate_framework())

    assert [s.name for s in screens] == ["Home", "Task Detail", "Settings"]
    assert not wizard.state.completed.framework
    assert wizard.state.completed.per_screen == [False, False, False]
    assert wizard.state.used_fallback_screens is False
    assert gateway.call_count == 1
    assert "TaskMaster" in gateway.prompts[0]

    shown = wizard.displayed_prompt()
    assert shown.kind == PromptKind.FRAMEWORK
    assert shown.body == gateway.prompts[0]
    assert wizard.state.framework_response == framework_response()


def test_generate_framework_passes_configured_options(gateway, valid_attrs):
    from mvp_studio.config import WizardConfig
    from mvp_studio.wizard import WizardRun

    wizard = WizardRun(gateway, attributes=valid_attrs, config=WizardConfig(max_tokens=900, temperature=0.1))
    _to_framework(wizard)

    assert gateway.options[0].max_tokens == 900
    assert gateway.options[0].temperature == 0.1


def test_generate_framework_twice_raises(wizard):
    from mvp_studio.errors import InvalidTransitionError

    _to_framework(wizard)

    with pytest.raises(InvalidTransitionError):
        run_async(wizard.generate_framework())


def test_unparseable_framework_uses_default_screens(valid_attrs):
    from mvp_studio.prompts.parser import DEFAULT_SCREENS
    from mvp_studio.wizard import WizardRun

    wizard = WizardRun(FakeGateway(["Just prose, no JSON."]), attributes=valid_attrs)
    _to_framework(wizard)

    assert wizard.state.screens == list(DEFAULT_SCREENS)
    assert wizard.state.used_fallback_screens is True
    assert len(wizard.state.completed.per_screen) == 5


def test_gateway_failure_leaves_run_unchanged(valid_attrs):
    from mvp_studio.errors import GatewayError
    from mvp_studio.wizard import WizardRun, WizardStage

    gateway = FakeGateway([RuntimeError("provider down")])
    wizard = WizardRun(gateway, attributes=valid_attrs)
    wizard.finalize_setup()

    with pytest.raises(GatewayError) as exc:
        run_async(wizard.generate_framework())

    assert exc.value.retryable
    assert wizard.state.stage == WizardStage.FRAMEWORK
    assert wizard.state.prompt_history == []
    assert wizard.state.screens == []
    assert not wizard.state.completed.framework
    assert not wizard.busy

    # Retry succeeds
    run_async(wizard.generate_framework())
    assert wizard.displayed_prompt().kind.value == "framework"


def test_gateway_timeout_raises_gateway_error(wizard, gateway):
    from mvp_studio.errors import GatewayError

    wizard.finalize_setup()

    async def scenario():
        gateway.hold = asyncio.Event()
        await wizard.generate_framework(timeout=0.01)

    with pytest.raises(GatewayError, match="timed out"):
        run_async(scenario())

    assert not wizard.busy
    assert wizard.state.prompt_history == []


def test_busy_guard_blocks_transitions(wizard, gateway):
    from mvp_studio.errors import WizardBusyError

    wizard.finalize_setup()

    async def scenario():
        gateway.hold = asyncio.Event()
        task = asyncio.create_task(wizard.generate_framework())
        await asyncio.sleep(0)

        assert wizard.busy
        with pytest.raises(WizardBusyError):
            wizard.next()
        with pytest.raises(WizardBusyError):
            wizard.previous()
        with pytest.raises(WizardBusyError):
            await wizard.generate_framework()

        gateway.hold.set()
        return await task

    screens = run_async(scenario())

    assert len(screens) == 3
    assert not wizard.busy
    assert gateway.call_count == 1


def test_cancelled_generation_result_is_discarded(wizard, gateway):
    from mvp_studio.errors import StaleResultError

    wizard.finalize_setup()

    async def scenario():
        gateway.hold = asyncio.Event()
        task = asyncio.create_task(wizard.generate_framework())
        await asyncio.sleep(0)

        assert wizard.cancel_pending() is True
        assert not wizard.busy

        gateway.hold.set()
        with pytest.raises(StaleResultError):
            await task

    run_async(scenario())

    assert wizard.state.prompt_history == []
    assert not wizard.state.completed.framework
    assert wizard.cancel_pending() is False


def test_task_cancellation_releases_busy(wizard, gateway):
    wizard.finalize_setup()

    async def scenario():
        gateway.hold = asyncio.Event()
        task = asyncio.create_task(wizard.generate_framework())
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    run_async(scenario())

    assert not wizard.busy


def test_full_walk_produces_bundle(wizard):
    from mvp_studio.types import PromptKind
    from mvp_studio.wizard import WizardStage

    _to_framework(wizard)

    first = wizard.next()
    assert first.kind == PromptKind.SCREEN
    assert first.screen_index == 0
    assert first.title == "Home UI"

    wizard.next()
    wizard.next()
    linking = wizard.next()
    assert linking.kind == PromptKind.LINKING
    assert wizard.state.completed.per_screen == [True, True, True]

    assert wizard.next() is None
    assert wizard.state.stage == WizardStage.COMPLETE
    assert wizard.state.completed.linking

    bundle = wizard.bundle()
    assert [p.screen_index for p in bundle.screen_prompts] == [0, 1, 2]
    assert bundle.linking_prompt is linking
    assert bundle.recommended_tools
    assert len(bundle.prompts) == 5


def test_next_from_complete_raises(wizard):
    from mvp_studio.errors import InvalidTransitionError

    _walk_to_complete(_to_framework(wizard))

    with pytest.raises(InvalidTransitionError):
        wizard.next()


def test_bundle_only_when_complete(wizard):
    from mvp_studio.errors import InvalidTransitionError

    _to_framework(wizard)

    with pytest.raises(InvalidTransitionError):
        wizard.bundle()


def test_zero_screens_go_straight_to_linking(valid_attrs):
    from mvp_studio.wizard import WizardRun, WizardStage

    wizard = WizardRun(FakeGateway([framework_response([])]), attributes=valid_attrs)
    _to_framework(wizard)

    assert wizard.state.screens == []
    assert wizard.next() is None
    assert wizard.state.stage == WizardStage.LINKING
    assert wizard.displayed_prompt() is None

    wizard.previous()
    assert wizard.state.stage == WizardStage.FRAMEWORK

    wizard.next()
    wizard.next()
    bundle = wizard.bundle()
    assert bundle.linking_prompt is None
    assert bundle.screen_prompts == []


def test_next_then_previous_restores_same_body(wizard):
    _to_framework(wizard)

    positions = []
    before = wizard.displayed_prompt().body
    for _ in range(4):
        wizard.next()
        after_next = wizard.displayed_prompt().body
        wizard.previous()
        assert wizard.displayed_prompt().body == before
        wizard.next()
        assert wizard.displayed_prompt().body == after_next
        positions.append(after_next)
        before = after_next

    assert len(set(positions)) == 4


def test_previous_moves_cursor_only(wizard):
    from mvp_studio.wizard import WizardStage

    _to_framework(wizard)
    wizard.next()
    wizard.next()
    history = list(wizard.state.prompt_history)
    flags = list(wizard.state.completed.per_screen)

    wizard.previous()
    assert wizard.state.stage == WizardStage.SCREEN
    assert wizard.state.current_screen_index == 0
    wizard.previous()
    assert wizard.state.stage == WizardStage.FRAMEWORK

    assert wizard.state.prompt_history == history
    assert wizard.state.completed.per_screen == flags


def test_previous_from_linking_goes_to_last_screen(wizard):
    from mvp_studio.wizard import WizardStage

    _to_framework(wizard)
    for _ in range(4):
        wizard.next()
    assert wizard.state.stage == WizardStage.LINKING

    shown = wizard.previous()

    assert wizard.state.stage == WizardStage.SCREEN
    assert shown.screen_index == 2


def test_previous_not_allowed_from_framework_or_complete(wizard):
    from mvp_studio.errors import InvalidTransitionError

    _to_framework(wizard)
    with pytest.raises(InvalidTransitionError):
        wizard.previous()

    _walk_to_complete(wizard)
    with pytest.raises(InvalidTransitionError):
        wizard.previous()


def test_history_length_never_decreases(wizard):
    _to_framework(wizard)

    lengths = [len(wizard.state.prompt_history)]
    for action in ["next", "next", "previous", "previous", "next", "next", "next", "previous", "next", "next"]:
        getattr(wizard, action)()
        lengths.append(len(wizard.state.prompt_history))

    assert lengths == sorted(lengths)
    assert lengths[-1] == 5


def test_regenerate_screen_replaces_in_place(wizard, gateway):
    from mvp_studio.types import PromptKind

    _to_framework(wizard)
    wizard.next()
    original = wizard.displayed_prompt()
    position = wizard.state.prompt_history.index(original)
    gateway.responses.append("Refined home screen prompt")

    refined = run_async(wizard.regenerate_screen(0))

    assert refined.body == "Refined home screen prompt"
    assert refined.created_at == original.created_at
    assert refined.kind == PromptKind.SCREEN
    assert wizard.state.prompt_history[position] is refined
    assert len(wizard.state.prompt_history) == 2
    assert original.body in gateway.prompts[-1]
    assert wizard.displayed_prompt() is refined


def test_regenerate_undelivered_screen_raises(wizard):
    from mvp_studio.errors import InvalidTransitionError

    _to_framework(wizard)

    with pytest.raises(InvalidTransitionError):
        run_async(wizard.regenerate_screen(1))


def test_regenerate_failure_keeps_artifact(wizard, gateway):
    from mvp_studio.errors import GatewayError

    _to_framework(wizard)
    wizard.next()
    original = wizard.displayed_prompt()
    gateway.responses.append(TimeoutError("slow"))

    with pytest.raises(GatewayError):
        run_async(wizard.regenerate_screen(0))

    assert wizard.displayed_prompt() is original


def test_reset_returns_to_setup(wizard):
    from mvp_studio.wizard import WizardStage

    _to_framework(wizard)
    old_run_id = wizard.run_id

    wizard.reset()

    assert wizard.state.stage == WizardStage.SETUP
    assert wizard.state.prompt_history == []
    assert wizard.run_id != old_run_id
    assert wizard.attributes.app_name == "TaskMaster"


def test_selected_tool_reaches_prompts(wizard, gateway):
    wizard.select_tool("flutterflow")
    _to_framework(wizard)

    screen = wizard.next()

    assert "FlutterFlow" in gateway.prompts[0]
    assert "FlutterFlow" in screen.body


def test_progress_counts_completed_prompts(wizard):
    _to_framework(wizard)
    wizard.next()
    wizard.next()

    progress = wizard.progress()

    assert progress["stage"] == "screen"
    assert progress["completed"] == 2
    assert progress["total"] == 5


def test_recommendations_follow_in_place_attribute_edits(wizard):
    from mvp_studio.types import AppType, Platform

    before = [r.tool.id for r in wizard.recommendations()]

    wizard.attributes.app_type = AppType.WEB_APP
    wizard.attributes.platforms = (Platform.WEB,)
    wizard.attributes.description = "An AI chatbot with live payments"
    after = wizard.recommendations()

    assert before == ["adalo", "flutterflow", "uizard"]
    assert "adalo" not in [r.tool.id for r in after]
    assert all(AppType.WEB_APP in r.tool.app_types for r in after)


def test_framework_marked_complete_only_after_moving_on(wizard):
    _to_framework(wizard)

    assert not wizard.state.completed.framework
    assert wizard.progress()["completed"] == 0

    wizard.next()

    assert wizard.state.completed.framework
    assert wizard.progress()["completed"] == 1


def test_select_tool_uses_run_catalog(gateway, valid_attrs):
    from mvp_studio.catalog import get_tool
    from mvp_studio.errors import UnknownToolError
    from mvp_studio.wizard import WizardRun

    wizard = WizardRun(gateway, attributes=valid_attrs, catalog=[get_tool("adalo")])

    with pytest.raises(UnknownToolError):
        wizard.select_tool("flutterflow")

    wizard.select_tool("adalo")
    assert wizard.selected_tool.id == "adalo"
