"""Partition key for animals and barns."""

from enum import Enum


class Color(str, Enum):
    """Favorite color of an animal and color of a barn. Each color is an independent rebalancing domain."""

    BLACK = "black"
    BLUE = "blue"
    BROWN = "brown"
    GREEN = "green"
    ORANGE = "orange"
    PURPLE = "purple"
    RED = "red"
    WHITE = "white"
    YELLOW = "yellow"
