import importlib
import pkgutil
from typing import Dict, Type

from rundown import algorithms
from rundown.algorithms._base import RundownGenerator

_registry: Dict[str, Type[RundownGenerator]] = {}


def register(cls: Type[RundownGenerator]) -> Type[RundownGenerator]:
    """Register a RundownGenerator under the name of its module."""
    _registry[cls.__module__.rsplit(".", 1)[-1]] = cls
    return cls


def get_algorithms() -> Dict[str, Type[RundownGenerator]]:
    """Imports every public algorithm module and returns the registry."""
    for module in pkgutil.iter_modules(algorithms.__path__):
        if not module.name.startswith("_"):
            importlib.import_module(f"{algorithms.__name__}.{module.name}")
    return dict(_registry)


def get_generator(name: str) -> Type[RundownGenerator]:
    """
    Returns the generator class registered as `name`.

    Raises:
        ValueError: If no algorithm module of that name registers a generator.
    """
    module_name = f"{algorithms.__name__}.{name}"
    if name not in _registry and name.isidentifier() and not name.startswith("_"):
        try:
            importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            if e.name != module_name:
                raise
    try:
        return _registry[name]
    except KeyError:
        raise ValueError(f"No algorithm named {name!r}") from None
