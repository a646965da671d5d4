"""
Cell module for the cooperative Minesweeper engine.

Represents individual cells on a player's board with their visibility
(hidden/revealed/flagged), content (empty/mine/number/question/surprise)
and the one-shot "used" flag of special cells.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


class CellContent(Enum):
    """What a cell holds once the board has been generated."""

    EMPTY = auto()
    MINE = auto()
    NUMBER = auto()
    QUESTION = auto()
    SURPRISE = auto()


SPECIAL_CONTENTS = (CellContent.QUESTION, CellContent.SURPRISE)

# Contents whose reveal spreads to the neighbours
CASCADING_CONTENTS = (
    CellContent.EMPTY,
    CellContent.QUESTION,
    CellContent.SURPRISE,
)

OBS_HIDDEN = -1
OBS_FLAGGED = -2
OBS_MINE = 9
OBS_QUESTION = 10
OBS_SURPRISE = 11
OBS_USED_SPECIAL = 12


# ============================================================================
# Cell View
# ============================================================================

@dataclass(frozen=True)
class CellView:
    """
    Read-only projection of a cell for rendering.

    Content and adjacent count are only exposed once the cell is revealed.
    """

    row: int
    col: int
    state: CellState
    content: Optional[CellContent]
    adjacent_mines: int
    used: bool

    @property
    def can_activate(self) -> bool:
        """True for a revealed question/surprise cell not activated yet."""
        return (
            self.state == CellState.REVEALED
            and self.content in SPECIAL_CONTENTS
            and not self.used
        )


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in a player's grid.

    Attributes:
        row: Row index (fixed at construction).
        col: Column index (fixed at construction).
        content: What the cell holds.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        state: Current visual state (hidden, revealed, or flagged).
        used: Whether a special cell has already been activated.
        question_id: Optional reference to an external question.
    """

    row: int = 0
    col: int = 0
    content: CellContent = CellContent.EMPTY
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN
    used: bool = False
    question_id: Optional[int] = None

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed or flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def force_reveal(self) -> bool:
        """
        Reveal this cell regardless of a flag on it.

        Used only by end-of-game processing.

        Returns:
            True if the state changed.
        """
        if self.state == CellState.REVEALED:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    def mark_used(self) -> bool:
        """
        Mark a special cell as activated.

        Returns:
            False if the cell was already used.
        """
        if self.used:
            return False
        self.used = True
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_mine(self) -> bool:
        """Check if cell holds a mine."""
        return self.content == CellContent.MINE

    @property
    def is_special(self) -> bool:
        """Check if cell is a question or surprise cell."""
        return self.content in SPECIAL_CONTENTS

    @property
    def cascades(self) -> bool:
        """Check if revealing this cell spreads to its neighbours."""
        return self.content in CASCADING_CONTENTS

    def view(self) -> CellView:
        """Build the read-only projection of this cell."""
        if self.is_revealed:
            return CellView(
                self.row, self.col, self.state,
                self.content, self.adjacent_mines, self.used,
            )
        return CellView(self.row, self.col, self.state, None, 0, self.used)

    def to_observation(self) -> int:
        """
        Convert cell to observation value for agents.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
            10: Revealed question cell
            11: Revealed surprise cell
            12: Revealed special cell that was already used
        """
        if self.state == CellState.HIDDEN:
            return OBS_HIDDEN
        if self.state == CellState.FLAGGED:
            return OBS_FLAGGED
        if self.is_mine:
            return OBS_MINE
        if self.is_special:
            if self.used:
                return OBS_USED_SPECIAL
            if self.content == CellContent.QUESTION:
                return OBS_QUESTION
            return OBS_SURPRISE
        return self.adjacent_mines
