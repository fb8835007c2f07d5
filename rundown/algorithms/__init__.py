from rundown.algorithms._base import RundownGenerator
from rundown.algorithms._registry import get_algorithms, get_generator, register

__all__ = ["RundownGenerator", "get_algorithms", "get_generator", "register"]
