from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Union

from photofusion.app.state import SessionState
from photofusion.core.errors import MissingInputError, PhotoFusionError
from photofusion.core.models import (
    EditRequest,
    EncodedPayload,
    Failed,
    ImageCandidate,
    Loading,
    SelectedImage,
    Slot,
    Succeeded,
    WorkflowState,
)
from photofusion.intake.encoder import encode

logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = "Please provide a base image, a logo image, and a prompt."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred while generating the image."

Listener = Callable[[WorkflowState], None]
Outcome = Union[Succeeded, Failed]


class EditClient(Protocol):
    def submit(self, request: EditRequest) -> str: ...


@dataclass(frozen=True)
class PendingSubmission:
    """Inputs captured when a submission starts; later edits to the session do not affect it."""
    base: ImageCandidate
    logo: ImageCandidate
    instruction: str


class SessionController:
    """
    Owns the edit workflow: Idle -> Loading -> Succeeded | Failed.

    A submission is split in three so the slow part can run off the UI thread:
    begin_submission() and complete() mutate state and belong to the UI thread,
    execute() only reads files and talks to the service.
    """

    def __init__(
        self,
        client: EditClient,
        state: Optional[SessionState] = None,
        encoder: Callable[[ImageCandidate], EncodedPayload] = encode,
    ):
        self.client = client
        self.state = state if state is not None else SessionState()
        self._encode = encoder
        self._listeners: List[Listener] = []

    # ---------- State ----------

    @property
    def workflow(self) -> WorkflowState:
        return self.state.workflow

    @property
    def is_loading(self) -> bool:
        return isinstance(self.state.workflow, Loading)

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _transition(self, new_state: WorkflowState) -> None:
        logger.debug("Workflow %s -> %s", type(self.state.workflow).__name__, type(new_state).__name__)
        self.state.workflow = new_state
        for listener in list(self._listeners):
            listener(new_state)

    # ---------- Inputs ----------
    # Changing inputs leaves the workflow state alone; the next submission replaces it.

    def select_image(self, slot: Slot, image: SelectedImage) -> None:
        self.state.images[slot] = image

    def remove_image(self, slot: Slot) -> None:
        self.state.images[slot] = None

    def set_instruction(self, text: str) -> None:
        self.state.instruction = text

    def can_submit(self) -> bool:
        return not self.is_loading and self.state.has_all_inputs()

    # ---------- Submission ----------

    def begin_submission(self) -> Optional[PendingSubmission]:
        """
        Start a submission if possible.

        Returns None (and calls nothing remote) while already loading or when an
        input is missing; the latter moves the workflow to Failed.
        """
        if self.is_loading:
            logger.debug("Submission ignored: a request is already in flight")
            return None

        try:
            pending = self._snapshot()
        except MissingInputError as e:
            self._transition(Failed(str(e)))
            return None

        self._transition(Loading())
        return pending

    def _snapshot(self) -> PendingSubmission:
        if not self.state.has_all_inputs():
            raise MissingInputError(MISSING_INPUT_MESSAGE)
        return PendingSubmission(
            base=self.state.images[Slot.BASE].raw_file,
            logo=self.state.images[Slot.LOGO].raw_file,
            instruction=self.state.instruction,
        )

    def execute(self, pending: PendingSubmission) -> Outcome:
        """Encode both images, send the request, and report the result. Does not touch state."""
        try:
            with ThreadPoolExecutor(max_workers=2) as pool:
                base_future = pool.submit(self._encode, pending.base)
                logo_future = pool.submit(self._encode, pending.logo)
                base, logo = base_future.result(), logo_future.result()

            request = EditRequest(base=base, logo=logo, instruction=pending.instruction)
            return Succeeded(self.client.submit(request))
        except PhotoFusionError as e:
            return Failed(str(e))
        except Exception:
            logger.exception("Unexpected error while generating image")
            return Failed(UNKNOWN_ERROR_MESSAGE)

    def complete(self, outcome: Outcome) -> None:
        if not self.is_loading:
            logger.warning("Ignoring %s outcome: no submission in flight", type(outcome).__name__)
            return
        self._transition(outcome)

    def submit(self) -> WorkflowState:
        """Run a whole submission on the calling thread."""
        pending = self.begin_submission()
        if pending is not None:
            self.complete(self.execute(pending))
        return self.state.workflow
