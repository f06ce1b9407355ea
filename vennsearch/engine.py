"""A backtracking engine driving a sequence of non-deterministic predicates.

Each phase of the search is a :class:`Predicate`. Its ``attempt`` is called
with a round number and may fail, succeed (moving on to the next predicate,
or to the next round of the same one), offer a number of choices, or suspend
the engine. Choices are explored one by one with ``retry``. State changed
through the :class:`Trail` is restored automatically on backtracking.
"""

from __future__ import annotations

import enum
import operator
import sys
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

MAX_STACK_SIZE = 1000


class Trail:
    """An undo log: changes made through it are reverted by :meth:`rewind_to`."""

    def __init__(self) -> None:
        self._entries: list[tuple[Callable[[Any, Any, Any], None], Any, Any, Any]] = []
        self._frozen = 0
        self.max_size = 0

    def __len__(self) -> int:
        return len(self._entries)

    def set_attr(self, obj: Any, name: str, value: Any) -> None:
        """Set ``obj.name`` to ``value``, remembering the old value."""
        self._entries.append((setattr, obj, name, getattr(obj, name)))
        setattr(obj, name, value)

    def set_item(self, container: Any, key: Any, value: Any) -> None:
        """Set ``container[key]`` to ``value``, remembering the old value."""
        self._entries.append((operator.setitem, container, key, container[key]))
        container[key] = value

    def maybe_set_attr(self, obj: Any, name: str, value: Any) -> None:
        """Like :meth:`set_attr`, but records nothing if the value is unchanged."""
        if getattr(obj, name) != value:
            self.set_attr(obj, name, value)

    def mark(self) -> int:
        """Return a backtrack point for the current state."""
        return len(self._entries)

    def freeze(self) -> None:
        """Forbid rewinding past the current point."""
        self._frozen = len(self._entries)

    def rewind_to(self, point: int) -> bool:
        """Undo changes made after ``point``; return whether anything was undone."""
        self.max_size = max(self.max_size, len(self._entries))
        point = max(point, self._frozen)
        restored = False
        while len(self._entries) > point:
            setter, target, key, old = self._entries.pop()
            setter(target, key, old)
            restored = True
        return restored


class ResultCode(enum.Enum):
    FAIL = enum.auto()
    SUCCESS_NEXT_PREDICATE = enum.auto()
    SUCCESS_SAME_PREDICATE = enum.auto()
    CHOICES = enum.auto()
    SUSPEND = enum.auto()


@dataclass(frozen=True)
class PredicateResult:
    code: ResultCode
    number_of_choices: int = 0


PREDICATE_FAIL = PredicateResult(ResultCode.FAIL)
PREDICATE_SUCCESS_NEXT_PREDICATE = PredicateResult(ResultCode.SUCCESS_NEXT_PREDICATE)
PREDICATE_SUCCESS_SAME_PREDICATE = PredicateResult(ResultCode.SUCCESS_SAME_PREDICATE)
PREDICATE_SUSPEND = PredicateResult(ResultCode.SUSPEND)


def predicate_choices(number_of_choices: int) -> PredicateResult:
    """Return a result offering ``number_of_choices`` alternatives."""
    if number_of_choices < 0:
        raise ValueError("number of choices cannot be negative")
    return PredicateResult(ResultCode.CHOICES, number_of_choices)


@dataclass(frozen=True, eq=False)
class Predicate:
    """A named search phase.

    ``attempt(round)`` may return any result; ``retry(round, choice)`` is
    called for each choice and may only fail or succeed.
    """

    name: str
    attempt: Callable[[int], PredicateResult]
    retry: Optional[Callable[[int, int], PredicateResult]] = None


FAIL_PREDICATE = Predicate("FAIL", lambda round_: PREDICATE_FAIL)
SUSPEND_PREDICATE = Predicate("SUSPEND", lambda round_: PREDICATE_SUSPEND)


def forward_backward_predicate(
    name: str,
    gate: Optional[Callable[[], bool]],
    forward: Optional[Callable[[], bool]],
    backward: Optional[Callable[[], None]],
) -> Predicate:
    """Build a predicate that runs ``forward`` on the way in and ``backward``
    when backtracking out of it.

    A false ``gate`` fails the predicate outright, without ``backward``. A
    false ``forward`` skips the following predicates but still runs
    ``backward``.
    """

    def attempt(round_: int) -> PredicateResult:
        if gate is not None and not gate():
            return PREDICATE_FAIL
        return predicate_choices(2)

    def retry(round_: int, choice: int) -> PredicateResult:
        if choice == 0:
            if forward is not None and not forward():
                return PREDICATE_FAIL
            return PREDICATE_SUCCESS_NEXT_PREDICATE
        if choice == 1:
            if backward is not None:
                backward()
            return PREDICATE_FAIL
        raise ValueError(f"unexpected choice {choice} for {name}")

    return Predicate(name, attempt, retry)


@dataclass
class _StackEntry:
    predicates: Sequence[Predicate]
    index: int
    round: int
    trail: int
    counter: int
    in_choice_mode: bool = False
    current_choice: int = -1
    number_of_choices: int = 0

    @property
    def predicate(self) -> Predicate:
        return self.predicates[self.index]


class Engine:
    """Runs a sequence of predicates, exploring every choice by backtracking."""

    def __init__(self, trail: Optional[Trail] = None, tracing: bool = False) -> None:
        self.trail = trail if trail is not None else Trail()
        self.tracing = tracing
        self._stack: list[_StackEntry] = []
        self._counter = 0
        self._suspended = False

    def _new_entry(
        self, predicates: Sequence[Predicate], index: int, round_: int
    ) -> _StackEntry:
        entry = _StackEntry(predicates, index, round_, self.trail.mark(), self._counter)
        self._counter += 1
        return entry

    def _push(self, code: ResultCode) -> None:
        top = self._stack[-1]
        if code is ResultCode.SUCCESS_NEXT_PREDICATE:
            if top.index + 1 >= len(top.predicates):
                raise RuntimeError(
                    f"predicate {top.predicate.name} succeeded at the end of the sequence"
                )
            entry = self._new_entry(top.predicates, top.index + 1, 0)
        else:
            entry = self._new_entry(top.predicates, top.index, top.round + 1)
        if len(self._stack) >= MAX_STACK_SIZE:
            raise RuntimeError("engine stack overflow")
        self._stack.append(entry)

    def _trace(self, message: str) -> None:
        if not self.tracing:
            return
        top = self._stack[-1]
        prefix = f"{top.counter}:{len(self._stack) - 1}:"
        if top.current_choice >= 0:
            text = f"{message}({top.round},{top.current_choice}) {top.predicate.name}"
        else:
            text = f"{message}({top.round}) {top.predicate.name}"
        print(prefix + text, file=sys.stderr)

    def _call_port(self) -> bool:
        top = self._stack[-1]
        result = top.predicate.attempt(top.round)
        code = result.code
        if code in (ResultCode.SUCCESS_NEXT_PREDICATE, ResultCode.SUCCESS_SAME_PREDICATE):
            self._push(code)
        elif code in (ResultCode.FAIL, ResultCode.CHOICES):
            top.in_choice_mode = True
            top.current_choice = 0
            top.number_of_choices = result.number_of_choices
            top.trail = self.trail.mark()
        else:
            return False
        return True

    def _retry_port(self) -> None:
        top = self._stack[-1]
        if top.predicate.retry is None:
            raise RuntimeError(f"predicate {top.predicate.name} offers choices but cannot retry")
        choice = top.current_choice
        top.current_choice += 1
        result = top.predicate.retry(top.round, choice)
        code = result.code
        if code is ResultCode.FAIL:
            self.trail.rewind_to(top.trail)
        elif code in (ResultCode.SUCCESS_NEXT_PREDICATE, ResultCode.SUCCESS_SAME_PREDICATE):
            self._push(code)
        else:
            raise RuntimeError(
                f"retry of {top.predicate.name} returned {code.name}, which is not allowed"
            )

    def _loop(self) -> bool:
        while True:
            top = self._stack[-1]
            self.trail.rewind_to(top.trail)
            if not top.in_choice_mode:
                self._trace("call")
                if not self._call_port():
                    return False
                continue
            if top.current_choice >= top.number_of_choices:
                while True:
                    self._trace("fail")
                    if len(self._stack) == 1:
                        return True
                    self._stack.pop()
                    if self._stack[-1].in_choice_mode:
                        break
                continue
            self._trace("retry")
            self._retry_port()

    def run(self, predicates: Sequence[Predicate]) -> bool:
        """Run the predicates; return True when the search is exhausted and
        False when a predicate suspended it."""
        predicates = tuple(predicates)
        if not predicates:
            raise ValueError("no predicates to run")
        self._stack = [self._new_entry(predicates, 0, 0)]
        completed = self._loop()
        self._suspended = not completed
        if self._suspended and self.tracing:
            print("Engine suspended", file=sys.stderr)
        return completed

    def resume(self, predicates: Sequence[Predicate]) -> None:
        """Continue a suspended run with new predicates; when they are
        exhausted, backtrack through the suspension point to finish the run."""
        if not self._suspended:
            raise RuntimeError("the engine is not suspended")
        predicates = tuple(predicates)
        if not predicates:
            raise ValueError("no predicates to run")
        if len(self._stack) >= MAX_STACK_SIZE:
            raise RuntimeError("engine stack overflow")
        self._stack.append(self._new_entry(predicates, 0, 0))
        self._suspended = False
        if not self._loop():
            raise RuntimeError("suspending a resumed run is not supported")