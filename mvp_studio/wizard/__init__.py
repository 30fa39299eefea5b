"""Wizard state machine."""

from mvp_studio.wizard.machine import CompletedFlags, RunState, WizardRun
from mvp_studio.wizard.states import WizardStage, can_transition, is_terminal_stage

__all__ = [
    "CompletedFlags",
    "RunState",
    "WizardRun",
    "WizardStage",
    "can_transition",
    "is_terminal_stage",
]
