"""
Maps special cell contents onto their activators.
"""
from typing import TYPE_CHECKING, Dict, Optional, Type

from ..cell import CellContent
from .base_activator import SpecialCellActivator
from .question_activator import QuestionActivator
from .surprise_activator import SurpriseActivator

if TYPE_CHECKING:
    from ..board import Board
    from ..game import Game


ACTIVATORS: Dict[CellContent, Type[SpecialCellActivator]] = {
    CellContent.QUESTION: QuestionActivator,
    CellContent.SURPRISE: SurpriseActivator,
}


def create_activator(
    content: CellContent, game: "Game", board: "Board"
) -> Optional[SpecialCellActivator]:
    """
    Build the activator for a cell content.

    Returns:
        The activator, or None if the content is not special.
    """
    activator_cls = ACTIVATORS.get(content)
    if activator_cls is None:
        return None
    return activator_cls(game, board)
