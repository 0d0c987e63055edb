# textformats/registry.py
import logging
from typing import Callable, Dict, List, Optional

from textformats.config import (
    CONLL_FORMAT,
    ENGLISH_FORMAT,
    TOKENIZED_FORMAT,
    UNTOKENIZED_FORMAT,
    FormatSettings,
)
from textformats.core.errors import UnknownFormatError
from textformats.core.interfaces import DocumentFormat
from textformats.formats.conll import CoNLLSyntaxFormat
from textformats.formats.english import EnglishTextFormat
from textformats.formats.text import TokenizedTextFormat, UntokenizedTextFormat

logger = logging.getLogger(__name__)

FormatFactory = Callable[[FormatSettings], DocumentFormat]


class FormatRegistry:
    """
    Реестр форматов: имя из конфига -> фабрика кодека.
    Заполняется один раз при старте (build_default_registry) и замораживается.
    """

    def __init__(self):
        self._factories: Dict[str, FormatFactory] = {}
        self._frozen = False

    def register(self, name: str, factory: FormatFactory) -> None:
        if self._frozen:
            raise RuntimeError(f"Format registry is frozen, cannot register '{name}'")
        if name in self._factories:
            raise ValueError(f"Format '{name}' already registered")
        self._factories[name] = factory

    def freeze(self) -> None:
        self._frozen = True

    def names(self) -> List[str]:
        """Список зарегистрированных форматов."""
        return list(self._factories.keys())

    def __contains__(self, name: str) -> bool:
        return name in self._factories

    def create(self, name: str, settings: Optional[FormatSettings] = None) -> DocumentFormat:
        """Создает кодек по имени формата."""
        if name not in self._factories:
            raise UnknownFormatError(
                f"Unknown document format: {name}. "
                f"Available: {self.names()}"
            )
        return self._factories[name](settings or FormatSettings())


def build_default_registry() -> FormatRegistry:
    """Реестр со всеми встроенными форматами, закрытый для изменений."""
    registry = FormatRegistry()
    registry.register(CONLL_FORMAT, CoNLLSyntaxFormat)
    registry.register(TOKENIZED_FORMAT, lambda settings: TokenizedTextFormat())
    registry.register(UNTOKENIZED_FORMAT, lambda settings: UntokenizedTextFormat())
    registry.register(ENGLISH_FORMAT, lambda settings: EnglishTextFormat())
    registry.freeze()

    logger.debug(f"Registered formats: {registry.names()}")
    return registry
