"""
Turn Parser - Reads the per-turn text protocol into typed values.

Turn format:
    <action count>
    <id> <kind> <d0> <d1> <d2> <d3> <price> <tome_index> <tax_count> <castable> <repeatable>
    ... (one line per action)
    <i0> <i1> <i2> <i3> <rupees>    (our inventory)
    <i0> <i1> <i2> <i3> <rupees>    (opponent inventory, ignored by the search)

Trailing fields of an action line may be omitted by early leagues; they
default to 0. Lines with an unrecognized kind are logged and skipped.

Once the count header is read, all of the turn's lines are consumed
before any of them is parsed, so a malformed turn never leaves its tail
behind to be read as the next turn.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, TextIO
import logging

from ..config import SearchConfig, DEFAULT_CONFIG
from ..engine_core.action import ActionDescriptor, Ingredients
from ..engine_core.repository import ActionRepository
from ..engine_core.state import State
from ..errors import ProtocolError

logger = logging.getLogger(__name__)


KNOWN_KINDS = {"CAST", "OPPONENT_CAST", "LEARN", "BREW"}

ACTION_FIELDS = 11
MIN_ACTION_FIELDS = 7
INVENTORY_FIELDS = 5


@dataclass(frozen=True)
class Inventory:
    """One side's ingredients and rupees."""
    ingredients: Ingredients
    rupees: int


@dataclass(frozen=True)
class TurnSnapshot:
    """
    Everything the protocol tells us about one turn.
    """
    actions: tuple[ActionDescriptor, ...]
    player: Inventory
    opponent: Inventory | None = None

    def build(self, config: SearchConfig = DEFAULT_CONFIG) -> tuple[ActionRepository, State]:
        """Build the turn's repository and initial search state."""
        repo, disabled = ActionRepository.from_descriptors(self.actions, config)
        state = State.initial(
            self.player.ingredients,
            rupees=self.player.rupees,
            disabled=disabled,
        )
        return repo, state


def parse_action_line(line: str, line_number: int | None = None) -> ActionDescriptor | None:
    """
    Parse one action line.

    Returns None for a kind the engine does not know.
    """
    fields = line.split()
    if len(fields) < MIN_ACTION_FIELDS:
        raise ProtocolError(
            f"expected at least {MIN_ACTION_FIELDS} fields, got {len(fields)}",
            line_number,
        )

    kind = fields[1].upper()
    if kind not in KNOWN_KINDS:
        logger.warning("Skipping unrecognized action kind %r (id %s)", fields[1], fields[0])
        return None

    values = fields[:1] + fields[2:]
    numbers = _parse_ints(values, line_number)
    numbers += [0] * (ACTION_FIELDS - 1 - len(numbers))

    action_id, d0, d1, d2, d3, price, tome_index, tax_count, castable, repeatable = numbers[:10]
    return ActionDescriptor(
        action_id=action_id,
        kind=kind,
        delta=(d0, d1, d2, d3),
        price=price,
        tome_index=tome_index,
        tax_gain=tax_count,
        # A line without the castable field is treated as castable
        castable=castable == 1 or len(fields) < ACTION_FIELDS - 1,
        repeatable=repeatable == 1,
    )


def parse_inventory_line(line: str, line_number: int | None = None) -> Inventory:
    """Parse one inventory line."""
    fields = line.split()
    if len(fields) < INVENTORY_FIELDS:
        raise ProtocolError(
            f"expected {INVENTORY_FIELDS} inventory fields, got {len(fields)}",
            line_number,
        )

    i0, i1, i2, i3, rupees = _parse_ints(fields[:INVENTORY_FIELDS], line_number)
    if min(i0, i1, i2, i3) < 0:
        raise ProtocolError("inventory counts must be non-negative", line_number)
    return Inventory(ingredients=(i0, i1, i2, i3), rupees=rupees)


def parse_turn(lines: Iterable[str]) -> TurnSnapshot:
    """
    Parse one turn from an iterable of lines.

    Raises ProtocolError on malformed or truncated input.
    """
    snapshot = _read_turn(_LineReader(iter(lines)))
    if snapshot is None:
        raise ProtocolError("empty turn input")
    return snapshot


class TurnReader:
    """
    Reads consecutive turns from one stream.

    Line numbers in errors count from the start of the stream.

    Usage:
        reader = TurnReader(sys.stdin)
        while (snapshot := reader.read()) is not None:
            ...
    """

    def __init__(self, stream: TextIO):
        self.stream = stream
        self._lines = _LineReader(iter(stream.readline, ""))

    @property
    def line_number(self) -> int:
        return self._lines.line_number

    def read(self) -> TurnSnapshot | None:
        """Read the next turn, or None at end of input."""
        return _read_turn(self._lines)


def read_turn(stream: TextIO) -> TurnSnapshot | None:
    """
    Read exactly one turn from a stream.

    Returns None at end of input before a new turn starts. Line numbers
    in errors are relative to this turn; use TurnReader for a stream of
    turns.
    """
    return TurnReader(stream).read()


def _read_turn(reader: _LineReader) -> TurnSnapshot | None:
    header = reader.next_line()
    if header is None:
        return None
    header_number = reader.line_number

    try:
        count = int(header.strip())
    except ValueError:
        raise ProtocolError(f"expected action count, got {header.strip()!r}", header_number)
    if count < 0:
        raise ProtocolError(f"negative action count {count}", header_number)

    action_lines = []
    for _ in range(count):
        line = reader.require_line("action line")
        action_lines.append((line, reader.line_number))
    player_line = reader.require_line("player inventory")
    player_number = reader.line_number
    opponent_line = reader.require_line("opponent inventory")
    opponent_number = reader.line_number

    actions = []
    for line, line_number in action_lines:
        descriptor = parse_action_line(line, line_number)
        if descriptor is not None:
            actions.append(descriptor)

    return TurnSnapshot(
        actions=tuple(actions),
        player=parse_inventory_line(player_line, player_number),
        opponent=parse_inventory_line(opponent_line, opponent_number),
    )


class _LineReader:
    """Line source that skips blank lines and tracks line numbers."""

    def __init__(self, lines: Iterator[str]):
        self._lines = lines
        self.line_number = 0

    def next_line(self) -> str | None:
        for line in self._lines:
            self.line_number += 1
            if line.strip():
                return line
        return None

    def require_line(self, what: str) -> str:
        line = self.next_line()
        if line is None:
            raise ProtocolError(f"unexpected end of input, expected {what}", self.line_number)
        return line


def _parse_ints(values: list[str], line_number: int | None) -> list[int]:
    try:
        return [int(value) for value in values]
    except ValueError as e:
        raise ProtocolError(f"expected integer fields: {e}", line_number)
