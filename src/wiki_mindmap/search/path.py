import logging
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


def _identity(title: str) -> str:
    return title


def reconstruct_path(
    meet_node: str,
    parent_from_start: Dict[str, Optional[str]],
    parent_from_end: Dict[str, Optional[str]],
    key: Callable[[str], str] = _identity,
) -> List[str]:
    """
    Reconstruct the path when bidirectional searches meet.

    Args:
        meet_node: Title found by one side that the other side had already visited
        parent_from_start: Start-side key -> parent title (the start maps to None or is absent)
        parent_from_end: End-side key -> parent title (the target maps to None or is absent)
        key: Maps a title to the key used in the parent maps

    Returns:
        Titles from start to target, meet_node appearing once
    """
    # start ... meet_node
    forward_path = []
    current: Optional[str] = meet_node
    while current is not None:
        forward_path.append(current)
        current = parent_from_start.get(key(current))
    forward_path.reverse()

    # meet_node's end-side ancestors ... target
    backward_path = []
    current = parent_from_end.get(key(meet_node))
    while current is not None:
        backward_path.append(current)
        current = parent_from_end.get(key(current))

    complete_path = forward_path + backward_path
    logger.info(f"Reconstructed path: {' → '.join(complete_path)}")
    return complete_path
