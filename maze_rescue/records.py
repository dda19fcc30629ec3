"""
Mission log: turns the CommandRecord stream into the line formats the
downstream logger and replay tools read, plus human-readable summaries.

Official line (one per command, no header):

    COMMAND,LEFT,RIGHT,FRONT,cargo
    INITIALIZE,WALL,WALL,FREE,no load

Debug line (with DEBUG_HEADER on top):

    001,ADVANCE,(1, 4),SOUTH,WALL,WALL,FREE,no load

Nothing here touches the file system; a writer emits `csv_lines()` and
`debug_lines()`.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from maze_rescue.environment import CargoState, Command, CommandRecord
from maze_rescue.geometry import Position

DEBUG_HEADER = "Seq,Command,Position,Heading,Left,Right,Front,Cargo"

COMMAND_ICONS = {
    Command.INITIALIZE: "on",
    Command.ADVANCE: "fw",
    Command.TURN_RIGHT: "rt",
    Command.PICK_UP: "up",
    Command.EJECT: "ej",
}


def to_csv_line(record: CommandRecord) -> str:
    return ",".join([
        record.command.value,
        record.left.value,
        record.right.value,
        record.front.value,
        record.cargo.value,
    ])


def to_debug_line(record: CommandRecord) -> str:
    return ",".join([
        f"{record.sequence:03d}",
        record.command.value,
        str(record.position),
        record.heading.name,
        record.left.value,
        record.right.value,
        record.front.value,
        record.cargo.value,
    ])


@dataclass
class MissionLog:
    """Ordered collection of the records produced by one mission."""
    records: List[CommandRecord] = field(default_factory=list)

    def append(self, record: CommandRecord) -> None:
        self.records.append(record)

    def extend(self, records: Iterable[CommandRecord]) -> None:
        for record in records:
            self.append(record)

    def __len__(self) -> int:
        return len(self.records)

    def counts(self) -> Dict[Command, int]:
        """Number of executed commands of each kind."""
        counter = Counter(r.command for r in self.records)
        return {command: counter.get(command, 0) for command in Command}

    def unique_positions(self) -> List[Position]:
        """Distinct positions in the order they were first occupied."""
        seen: Dict[Position, None] = {}
        for r in self.records:
            seen.setdefault(r.position, None)
        return list(seen)

    def csv_lines(self) -> List[str]:
        return [to_csv_line(r) for r in self.records]

    def debug_lines(self) -> List[str]:
        return [DEBUG_HEADER] + [to_debug_line(r) for r in self.records]

    def path_listing(self) -> str:
        """One line per command: what was done, where, and what was sensed."""
        lines = []
        for r in self.records:
            lines.append(
                f"{r.sequence:3d}. [{COMMAND_ICONS[r.command]}] "
                f"{r.command.value:<10s} | pos {str(r.position):<8s} {r.heading.arrow} | "
                f"L={r.left.value:<6s} R={r.right.value:<6s} F={r.front.value:<6s} | "
                f"{r.cargo.value}"
            )
        return "\n".join(lines)

    def summary(self) -> str:
        counts = self.counts()
        carrying = sum(1 for r in self.records if r.cargo is CargoState.CARRYING)
        ejected = counts[Command.EJECT] > 0
        lines = [
            "═" * 45,
            "  Mission Log — Summary",
            "═" * 45,
            f"  Total commands:      {len(self.records)}",
            f"  Advances:            {counts[Command.ADVANCE]}",
            f"  Right turns:         {counts[Command.TURN_RIGHT]}",
            f"  Pickups:             {counts[Command.PICK_UP]}",
            f"  Ejections:           {counts[Command.EJECT]}",
            f"  Commands carrying:   {carrying}",
            f"  Unique positions:    {len(self.unique_positions())}",
            f"  Target delivered:    {'Yes' if ejected else 'No'}",
            "═" * 45,
        ]
        return "\n".join(lines)
