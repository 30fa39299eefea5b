# mvp_studio/logging.py
"""Structured logging for wizard runs."""

import json
import logging
from datetime import datetime, timezone


class WizardLogger:
    """Structured JSON logger for wizard events."""

    def __init__(self, name: str = "mvp_studio.wizard"):
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("%(message)s"))
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def _log(self, level: int, event: str, **kwargs):
        """Log a structured event."""
        data = {
            "event": event,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **kwargs
        }
        self.logger.log(level, json.dumps(data))

    def stage_transition(self, run_id: str, from_stage: str, to_stage: str, screen_index: int = None):
        """Log a stage transition."""
        self._log(
            logging.INFO,
            "stage_transition",
            run_id=run_id,
            from_stage=from_stage,
            to_stage=to_stage,
            screen_index=screen_index
        )

    def generation_started(self, run_id: str, kind: str, token: int, provider: str):
        """Log a gateway call starting."""
        self._log(
            logging.INFO,
            "generation_started",
            run_id=run_id,
            kind=kind,
            token=token,
            provider=provider
        )

    def generation_complete(self, run_id: str, kind: str, token: int, duration_seconds: float):
        """Log a gateway call finishing."""
        self._log(
            logging.INFO,
            "generation_complete",
            run_id=run_id,
            kind=kind,
            token=token,
            duration_seconds=round(duration_seconds, 2)
        )

    def generation_failed(self, run_id: str, kind: str, error_type: str, message: str):
        """Log a gateway failure."""
        self._log(
            logging.ERROR,
            "generation_failed",
            run_id=run_id,
            kind=kind,
            error_type=error_type,
            message=message
        )

    def parse_fallback(self, run_id: str, reason: str, screen_count: int):
        """Log degrading to the default screen set."""
        self._log(
            logging.WARNING,
            "parse_fallback",
            run_id=run_id,
            reason=reason,
            screen_count=screen_count
        )

    def stale_result_discarded(self, run_id: str, token: int, current_token: int):
        """Log a generation result ignored because the run moved on."""
        self._log(
            logging.WARNING,
            "stale_result_discarded",
            run_id=run_id,
            token=token,
            current_token=current_token
        )

    def run_complete(self, run_id: str, screen_count: int, history_length: int):
        """Log run completion."""
        self._log(
            logging.INFO,
            "run_complete",
            run_id=run_id,
            screen_count=screen_count,
            history_length=history_length
        )
