"""Frame counter driving the checkerboard interleave."""


class SequenceController:
    """Counts completed frames and derives each row's interleave phase."""

    def __init__(self):
        self._counter = 0

    @property
    def counter(self) -> int:
        return self._counter

    def phase_for(self, row: int) -> int:
        """Column offset (0 or 1) refreshed in ``row`` for the current frame."""
        return (self._counter + row) % 2

    def advance(self) -> None:
        """Mark one more frame as complete."""
        self._counter += 1
