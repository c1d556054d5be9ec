import abc
from typing import Iterator

from crashguard.scoring.types import Sample


class SampleSource(abc.ABC):
    @abc.abstractmethod
    def start(self) -> None:
        ...

    @abc.abstractmethod
    def stop(self) -> None:
        ...

    @abc.abstractmethod
    def samples(self) -> Iterator[Sample]:
        ...
