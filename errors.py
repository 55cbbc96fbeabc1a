from __future__ import annotations


class LevelBuildError(Exception):
    """Base class for recoverable generation faults.

    None of these abort a level load. They are logged, recorded on the
    placement plan and the affected step is skipped or patched.
    """


class MissingPrototype(LevelBuildError):
    """No scene object exists to clone for the requested tag."""

    def __init__(self, tag: str) -> None:
        super().__init__(f"no prototype for tag {tag}")
        self.tag = tag


class InsufficientBaseTiles(LevelBuildError):
    """The authored walkway is too short for the requested generation step."""

    def __init__(self, found: int, required: int) -> None:
        super().__init__(f"walkway has {found} tile(s), {required} required")
        self.found = found
        self.required = required


class DegenerateGeometry(LevelBuildError):
    """A direction vector was too short to normalise."""
