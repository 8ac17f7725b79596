"""Split tree node types

A tree is either a leaf (any object with an ``id`` that is not a Split) or a
Split dividing its space among two or more children along one axis.
"""

from dataclasses import dataclass
from enum import Enum

from .. import config


class Direction(Enum):
    """Axis a split divides its space along."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class CycleDirection(Enum):
    """Direction for tab/group/pane focus cycling."""

    NEXT = "next"
    PREV = "prev"

    def step(self, index: int, length: int) -> int:
        """Index after one step from ``index``, wrapping around.

        An index of -1 (nothing selected) steps to the first element going
        forward and to the last element going back.
        """
        if self is CycleDirection.NEXT:
            return (index + 1) % length
        return length - 1 if index <= 0 else index - 1


@dataclass(frozen=True)
class Split[L]:
    """Internal node.

    Attributes:
        id: split identifier
        direction: axis the children are laid out along
        children: two or more subtrees
        sizes: percentage per child, same length and order as children
    """

    id: str
    direction: Direction
    children: tuple["Split[L] | L", ...]
    sizes: tuple[float, ...]

    @property
    def type(self) -> str:
        return "split"


type Node[L] = Split[L] | L


def is_split(node: object) -> bool:
    """True for internal nodes, False for leaves."""
    return isinstance(node, Split)


def even_sizes(count: int) -> tuple[float, ...]:
    """Equal share for each of ``count`` children."""
    if count <= 0:
        return ()
    return tuple(config.SIZE_TOTAL / count for _ in range(count))
