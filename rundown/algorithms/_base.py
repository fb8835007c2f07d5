from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rundown.namelist import Namelist


class RundownGenerator(ABC):
    """
    Interface for all rundown generation algorithms.
    """

    @abstractmethod
    def generate(self, namelist: "Namelist", event_code: str | None = None) -> None:
        """
        Mutate `namelist` by assigning heat, station and time to participants.

        When `event_code` is given, only that event is rescheduled.
        """
        raise NotImplementedError
