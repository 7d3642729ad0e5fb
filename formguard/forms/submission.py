"""
Simulated submission that runs after a form has been accepted.

There is no backend: the submit button is disabled for a fixed delay,
then a confirmation is handed to the page and the button is restored.
The scheduled callback cannot be cancelled and has no effect on the
verdict that allowed it.
"""

import threading
from dataclasses import dataclass
from typing import Callable, Optional

from config.security_config import SECURITY_CONFIG, SubmissionConfig
from formguard.errors import InternalFault
from formguard.forms.messages import FormMessages
from formguard.logging.security_logger import SecurityLogger, SecurityEventType


@dataclass
class SubmitButtonState:
    """The bits of the submit button the simulated submission touches."""
    label: str
    disabled: bool = False


class SimulatedSubmitter:
    """
    Schedules the fake network round trip for accepted submissions.
    """

    def __init__(
        self,
        config: Optional[SubmissionConfig] = None,
        logger: Optional[SecurityLogger] = None,
        timer_factory: Callable[..., threading.Timer] = threading.Timer
    ):
        self.config = config or SECURITY_CONFIG.submission
        self.logger = logger or SecurityLogger()
        self.timer_factory = timer_factory

    def submit(
        self,
        form_id: str,
        verdict,
        button: SubmitButtonState,
        on_complete: Callable[[str], None]
    ) -> Optional[threading.Timer]:
        """
        Start the simulated submission for an accepted verdict.

        Args:
            form_id: Form identifier, selects the busy label and confirmation
            verdict: SubmissionVerdict from the gate
            button: Submit button state, disabled until the callback has run
            on_complete: Receives the confirmation text when the delay elapses

        Returns:
            The started timer, or None if the verdict refused the submission
        """
        if not verdict.allowed:
            return None

        original_label = button.label
        button.disabled = True
        button.label = FormMessages.busy_label(form_id)

        def finish():
            try:
                on_complete(FormMessages.confirmation(form_id))
            except Exception as e:
                self.logger.log_internal_fault(form_id, InternalFault("simulated_submission", e))
            finally:
                button.disabled = False
                button.label = original_label
                self.logger.log_event(
                    event_type=SecurityEventType.SUBMISSION_COMPLETED,
                    form_id=form_id,
                    details={"fields": sorted(verdict.data)}
                )

        timer = self.timer_factory(self.config.submission_delay_ms / 1000.0, finish)
        timer.daemon = True
        timer.start()
        return timer
