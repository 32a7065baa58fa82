"""
Game Loop - The per-turn read-decide-write driver.

The loop:
1. Read one turn snapshot from the input stream
2. Build the turn's repository and initial state
3. Ask the policy for a decision
4. Write exactly one command line and flush
5. Repeat until end of input

A malformed turn never stops the loop: it is consumed whole, logged and
answered with a single WAIT.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TextIO
import logging

from ..bots.policy import BotPolicy, SearchPolicy
from ..config import SearchConfig, DEFAULT_CONFIG
from ..engine_core.repository import RepositoryStats
from ..errors import CauldronError
from ..protocol.commands import render_command, WAIT
from ..protocol.parser import TurnReader, TurnSnapshot

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    WAITING_INPUT = "waiting_input"
    DECIDING = "deciding"
    FINISHED = "finished"


@dataclass
class TurnResult:
    """
    Result of processing a turn.
    """
    command: str
    action_id: int | None = None
    explanation: str = ""
    evaluated_nodes: int = 0
    timed_out: bool = False
    errors: list[str] = field(default_factory=list)


class GameLoop:
    """
    The main turn loop driver.

    Usage:
        loop = GameLoop(SearchPolicy(config), config)
        loop.run(sys.stdin, sys.stdout)
    """

    def __init__(
        self,
        policy: BotPolicy | None = None,
        config: SearchConfig = DEFAULT_CONFIG,
    ):
        self.config = config
        self.policy = policy or SearchPolicy(config=config)
        self.state = LoopState.WAITING_INPUT
        self.turns_played = 0
        self._reader: TurnReader | None = None

    def play_turn(self, snapshot: TurnSnapshot) -> TurnResult:
        """Decide one turn from an already-parsed snapshot."""
        self.state = LoopState.DECIDING
        repo, root = snapshot.build(self.config)
        logger.debug("Turn %d actions: %s", self.turns_played + 1, RepositoryStats.of(repo))

        decision = self.policy.select_action(repo, root)
        command = render_command(repo, decision.action_id, times=decision.times)

        self.turns_played += 1
        self.state = LoopState.WAITING_INPUT
        logger.info("Turn %d: %s (%s)", self.turns_played, command, decision.explanation)

        return TurnResult(
            command=command,
            action_id=decision.action_id,
            explanation=decision.explanation,
            evaluated_nodes=decision.evaluated_nodes,
            timed_out=decision.timed_out,
        )

    def step(self, stream: TextIO) -> TurnResult | None:
        """
        Read and decide one turn.

        Returns None at end of input. Consecutive calls on the same stream
        share one reader, so error line numbers count from its start.
        """
        self.state = LoopState.WAITING_INPUT
        if self._reader is None or self._reader.stream is not stream:
            self._reader = TurnReader(stream)
        try:
            snapshot = self._reader.read()
            if snapshot is None:
                self.state = LoopState.FINISHED
                return None
            return self.play_turn(snapshot)
        except CauldronError as e:
            logger.error("Malformed turn input: %s", e)
            self.turns_played += 1
            self.state = LoopState.WAITING_INPUT
            return TurnResult(command=WAIT, errors=[str(e)])

    def run(self, input_stream: TextIO, output_stream: TextIO) -> int:
        """Play turns until end of input. Returns the number of turns played."""
        while True:
            result = self.step(input_stream)
            if result is None:
                break
            output_stream.write(result.command + "\n")
            output_stream.flush()

        logger.info("Input closed after %d turns", self.turns_played)
        return self.turns_played
