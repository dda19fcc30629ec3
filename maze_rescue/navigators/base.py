"""
Shared plumbing for navigators: issuing commands, collecting records,
notifying observers and enforcing the caller's mission deadline.

The deadline is checked between commands only. Commands are synchronous
and never block, so a mission can overrun its budget by at most one
command.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from maze_rescue.environment import Command, CommandRecord, Environment
from maze_rescue.errors import MissionTimeoutError
from maze_rescue.geometry import Heading


class Deadline:
    """An absolute wall-clock cutoff, measured on a monotonic clock."""

    def __init__(self, seconds: float,
                 clock: Callable[[], float] = time.monotonic):
        if seconds <= 0:
            raise ValueError("Deadline must be positive")
        self.seconds = seconds
        self._clock = clock
        self.expires_at = clock() + seconds

    def remaining(self) -> float:
        return max(0.0, self.expires_at - self._clock())

    def expired(self) -> bool:
        return self._clock() >= self.expires_at

    def check(self) -> None:
        if self.expired():
            raise MissionTimeoutError(
                f"Mission exceeded its {self.seconds:g}s time budget"
            )


@dataclass
class MissionResult:
    """Outcome of a navigator run."""
    strategy: str
    completed: bool
    records: List[CommandRecord]
    elapsed: float                  # seconds

    @property
    def commands(self) -> int:
        return len(self.records)

    @property
    def advances(self) -> int:
        return sum(1 for r in self.records if r.command is Command.ADVANCE)

    @property
    def turns(self) -> int:
        return sum(1 for r in self.records if r.command is Command.TURN_RIGHT)

    def summary(self) -> str:
        lines = [
            "═" * 45,
            f"  Rescue Mission — {self.strategy}",
            "═" * 45,
            f"  Completed:     {'Yes' if self.completed else 'No'}",
            f"  Commands:      {self.commands}",
            f"  Advances:      {self.advances}",
            f"  Right turns:   {self.turns}",
            f"  Elapsed:       {self.elapsed * 1000:.1f} ms",
            "═" * 45,
        ]
        return "\n".join(lines)


class Navigator:
    """
    Base class for mission strategies.

    Subclasses implement `_run_mission()` in terms of `_execute()` and
    `_face()`, which keep the record list, the observer and the deadline
    consistent.

    Parameters
    ----------
    env : Environment
        The maze to drive through.
    deadline : Optional[Deadline]
        Abort with MissionTimeoutError once this passes.
    on_record : Optional[Callable[[CommandRecord], None]]
        Called with every record as soon as it is produced.
    """

    name = "navigator"

    def __init__(self, env: Environment,
                 deadline: Optional[Deadline] = None,
                 on_record: Optional[Callable[[CommandRecord], None]] = None):
        self.env = env
        self.deadline = deadline
        self.on_record = on_record
        self.records: List[CommandRecord] = []

    def run(self) -> MissionResult:
        """Carry out the whole mission and return what happened."""
        t0 = time.monotonic()
        self._run_mission()
        elapsed = time.monotonic() - t0
        completed = bool(self.records) and self.records[-1].command is Command.EJECT
        return MissionResult(
            strategy=self.name,
            completed=completed,
            records=list(self.records),
            elapsed=elapsed,
        )

    def _run_mission(self) -> None:
        raise NotImplementedError

    def _execute(self, command: Command) -> CommandRecord:
        if self.deadline is not None:
            self.deadline.check()
        record = self.env.execute(command)
        self.records.append(record)
        if self.on_record is not None:
            self.on_record(record)
        return record

    def _face(self, record: CommandRecord, desired: Heading) -> CommandRecord:
        """Turn right until the agent faces `desired`; returns the latest record."""
        while record.heading != desired:
            record = self._execute(Command.TURN_RIGHT)
        return record
