"""Wizard stage definitions and transitions."""

from enum import Enum


class WizardStage(Enum):
    """Stages a wizard run moves through."""

    SETUP = "setup"
    FRAMEWORK = "framework"
    SCREEN = "screen"
    LINKING = "linking"
    COMPLETE = "complete"


# Valid forward transitions ("next")
TRANSITIONS = {
    WizardStage.SETUP: {WizardStage.FRAMEWORK},
    WizardStage.FRAMEWORK: {WizardStage.SCREEN, WizardStage.LINKING},  # Linking when no screens
    WizardStage.SCREEN: {WizardStage.SCREEN, WizardStage.LINKING},
    WizardStage.LINKING: {WizardStage.COMPLETE},
    WizardStage.COMPLETE: set(),  # Terminal
}

# Valid backward moves ("previous"); cursor only
BACKWARD_TRANSITIONS = {
    WizardStage.SCREEN: {WizardStage.SCREEN, WizardStage.FRAMEWORK},
    WizardStage.LINKING: {WizardStage.SCREEN, WizardStage.FRAMEWORK},  # Framework when no screens
}

TERMINAL_STAGES = {WizardStage.COMPLETE}


def can_transition(from_stage: WizardStage, to_stage: WizardStage) -> bool:
    """Check if a forward transition is valid."""
    return to_stage in TRANSITIONS.get(from_stage, set())


def can_go_back(from_stage: WizardStage, to_stage: WizardStage) -> bool:
    """Check if a backward move is valid."""
    return to_stage in BACKWARD_TRANSITIONS.get(from_stage, set())


def is_terminal_stage(stage: WizardStage) -> bool:
    """Check if a stage is terminal (no further transitions possible)."""
    return stage in TERMINAL_STAGES
