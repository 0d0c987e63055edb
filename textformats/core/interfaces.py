from abc import ABC, abstractmethod
from typing import Iterator, List, TextIO, Tuple
from .data_structures import Sentence


class DocumentFormat(ABC):
    @abstractmethod
    def read_records(self, stream: TextIO) -> Iterator[str]:
        """
        Разбивает поток на сырые записи (одна запись - одно предложение).
        """
        pass

    @abstractmethod
    def decode(self, key: str, record: str) -> List[Sentence]:
        """
        Принимает ключ и полностью прочитанную запись.
        Возвращает 0 или 1 предложение.
        """
        pass

    @abstractmethod
    def encode(self, sentence: Sentence) -> Tuple[str, str]:
        """Возвращает пару (key, value)."""
        pass
