"""
Command Writer - Renders a decision as the turn's command text.

    BREW <id> | CAST <id> <times> | LEARN <id> | REST | WAIT

Any id the repository does not know (including the no-action sentinel)
renders as WAIT.
"""

from __future__ import annotations

from ..engine_core.action import ActionKind
from ..engine_core.repository import ActionRepository


WAIT = "WAIT"


def render_command(
    repo: ActionRepository,
    action_id: int,
    message: str | None = None,
    times: int = 1,
) -> str:
    """Render the command for an action id."""
    action = repo.get(action_id)

    if action is None:
        command = WAIT
    elif action.kind is ActionKind.BREW:
        command = f"BREW {action_id}"
    elif action.kind is ActionKind.CAST:
        command = f"CAST {action_id} {times}"
    elif action.kind is ActionKind.LEARN:
        command = f"LEARN {action_id}"
    else:
        command = "REST"

    if message:
        command = f"{command} {message}"
    return command
