from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from photofusion.core.models import DEFAULT_INSTRUCTION, Idle, SelectedImage, Slot, WorkflowState


@dataclass
class SessionState:
    """
    Mutable state for a single edit session.

    The UI reads this state; only SessionController writes it, so the workflow
    state can never be half-updated.
    """
    # Input
    images: Dict[Slot, Optional[SelectedImage]] = field(
        default_factory=lambda: {Slot.BASE: None, Slot.LOGO: None}
    )
    instruction: str = DEFAULT_INSTRUCTION

    # Output
    workflow: WorkflowState = field(default_factory=Idle)

    def has_all_inputs(self) -> bool:
        return all(self.images.get(slot) is not None for slot in Slot) and bool(self.instruction.strip())

