"""Two-step confirmation for the destructive `deleteAll` command.

IDLE --"yes"--> AWAITING_PHRASE --"delete mrs db"--> CONFIRMED
Any other answer in either state moves to CANCELLED. CONFIRMED and CANCELLED
are terminal; answers fed after that are ignored.
"""

from __future__ import annotations

import enum

FIRST_PROMPT = (
    "Are you sure you want to delete all data in the movie rental system database? (yes/no): "
)
CONFIRM_PHRASE = "delete mrs db"
SECOND_PROMPT = f"Type '{CONFIRM_PHRASE}' to confirm: "


class ConfirmState(enum.Enum):
    IDLE = "idle"
    AWAITING_PHRASE = "awaiting_phrase"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class DeleteConfirmation:
    """Feed it answers one at a time; read `state` to see where it landed."""

    def __init__(self):
        self.state = ConfirmState.IDLE

    @property
    def done(self) -> bool:
        return self.state in (ConfirmState.CONFIRMED, ConfirmState.CANCELLED)

    @property
    def confirmed(self) -> bool:
        return self.state is ConfirmState.CONFIRMED

    @property
    def prompt(self) -> str:
        """Question to ask for the current state ('' once finished)."""
        if self.state is ConfirmState.IDLE:
            return FIRST_PROMPT
        if self.state is ConfirmState.AWAITING_PHRASE:
            return SECOND_PROMPT
        return ""

    def answer(self, reply: str) -> ConfirmState:
        if self.state is ConfirmState.IDLE:
            ok = (reply or "").lower() == "yes"
            self.state = ConfirmState.AWAITING_PHRASE if ok else ConfirmState.CANCELLED
        elif self.state is ConfirmState.AWAITING_PHRASE:
            ok = reply == CONFIRM_PHRASE
            self.state = ConfirmState.CONFIRMED if ok else ConfirmState.CANCELLED
        return self.state
