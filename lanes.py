# lanes.py - Lane Model
"""
Maps a lane index to a horizontal screen coordinate.
Pure functions, safe to call from per-frame code.
"""

from config import LANE_COUNT, LANE_WIDTH


def is_valid_lane(lane: int) -> bool:
    """True if lane is one of the fixed tracks."""
    return 0 <= lane < LANE_COUNT


def lane_position(lane: int, entity_size: float = 0.0) -> float:
    """
    Left edge x of an entity centered in a lane.

    Args:
        lane (int): Lane index, 0..LANE_COUNT-1
        entity_size (float): Width of the entity being placed (player or obstacle)
    Returns:
        float: x coordinate of the entity's left edge
    """
    if not is_valid_lane(lane):
        raise ValueError(f"lane out of range: {lane}")
    return lane * LANE_WIDTH + LANE_WIDTH / 2 - entity_size / 2
