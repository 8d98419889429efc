"""
Scope chain for the Lox evaluator.

Scopes live in an arena: a list of `Frame` records addressed by integer handle,
each frame holding its bindings and the handle of its parent. Frame 0 is the
root scope, created once and kept for the life of the interpreter. Block scopes
are pushed on block entry and popped on exit in strict stack order, so a
parent handle always refers to a live frame.

Interface:
    define(name, value): Bind in the current frame only.
    get(name_token): Look the name up outward through the parents.
    assign(name_token, value): Overwrite the nearest existing binding.
    scope(): Context manager that pushes a child frame and always pops it.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from lox.lox_ast import Value
from lox.lox_errors import LoxRuntimeError
from lox.lox_tokens import Token

logger = logging.getLogger(__name__)

ROOT = 0


@dataclass
class Frame:
    """One scope: its bindings and the handle of the enclosing frame (None for the root)."""

    parent: int | None
    values: dict[str, Value] = field(default_factory=dict)


class Environment:
    """Index-addressed scope chain.

    Attributes:
        frames (list[Frame]): The arena. Only the last frame is ever popped.
        current (int): Handle of the active frame.
    """

    def __init__(self) -> None:
        self.frames: list[Frame] = [Frame(parent=None)]
        self.current: int = ROOT

    @property
    def depth(self) -> int:
        """Number of live frames, the root included."""
        return len(self.frames)

    def push(self) -> int:
        """Opens a child of the active frame and makes it active.

        Returns:
            int: Handle of the new frame, to be passed back to `pop`.
        """
        self.frames.append(Frame(parent=self.current))
        self.current = len(self.frames) - 1
        logger.debug("pushed scope %d (parent %s)", self.current, self.frames[self.current].parent)
        return self.current

    def pop(self, handle: int) -> None:
        """Closes the frame `handle` and restores its parent as the active frame.

        Raises:
            ValueError: If `handle` is the root or not the innermost frame.
        """
        # The root frame is the only one without a parent.
        parent = self.frames[handle].parent if 0 <= handle == len(self.frames) - 1 else None
        if parent is None:
            raise ValueError(f"Scope {handle} is not the innermost block scope")
        self.frames.pop()
        self.current = parent
        logger.debug("popped scope %d", handle)

    @contextmanager
    def scope(self) -> Iterator[int]:
        """Runs the body in a fresh child scope, restoring the previous scope on any exit."""
        handle = self.push()
        try:
            yield handle
        finally:
            self.pop(handle)

    def _owner(self, name: str) -> Frame | None:
        index: int | None = self.current
        while index is not None:
            frame = self.frames[index]
            if name in frame.values:
                return frame
            index = frame.parent
        return None

    def define(self, name: str, value: Value) -> None:
        """Binds `name` in the active frame, replacing any existing binding there."""
        self.frames[self.current].values[name] = value

    def get(self, name: Token) -> Value:
        """Returns the value of the nearest binding of `name`.

        Raises:
            LoxRuntimeError: If no frame in the chain binds the name.
        """
        frame = self._owner(name.lexeme)
        if frame is None:
            raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")
        return frame.values[name.lexeme]

    def assign(self, name: Token, value: Value) -> Value:
        """Overwrites the nearest binding of `name` and returns `value`.

        Raises:
            LoxRuntimeError: If no frame in the chain binds the name. Assignment
                never creates a binding.
        """
        frame = self._owner(name.lexeme)
        if frame is None:
            raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")
        frame.values[name.lexeme] = value
        return value


__all__ = ["Environment", "Frame", "ROOT"]
