from pydantic import BaseModel, Field, model_validator
from typing import Optional, List


class Attribute(BaseModel):
    """Морфологический признак: пара имя/значение ("on" для булевых признаков)."""
    name: str
    value: str


class Token(BaseModel):
    """
    Универсальная единица предложения.
    Координаты start/end - включительные байтовые оффсеты (UTF-8) в Sentence.text.
    """
    word: str  # Surface form

    # Система координат
    start: int
    end: int

    head: Optional[int] = None  # 0-based, None для ROOT
    tag: Optional[str] = None  # Fine-grained POS
    category: Optional[str] = None  # Coarse-grained POS (UPOS)
    label: Optional[str] = None  # Dependency relation

    # Имена признаков могут повторяться
    morphology: List[Attribute] = Field(default_factory=list)

    @model_validator(mode='after')
    def check_coordinates(self):
        if self.end < self.start:
            raise ValueError(f"Invalid span for token '{self.word}': {self.start}-{self.end}")
        return self

    @property
    def span(self):
        return self.start, self.end


class Sentence(BaseModel):
    docid: str
    text: str
    tokens: List[Token] = Field(default_factory=list)

    # Диагностическая заметка (заглушка для пропущенных предложений)
    note: Optional[str] = None

    @property
    def words(self) -> List[str]:
        return [t.word for t in self.tokens]
