import logging
from typing import Iterator, List, TextIO, Tuple

from textformats.core.data_structures import Sentence, Token
from textformats.core.interfaces import DocumentFormat
from textformats.guard import finalize_sentence, make_dummy_token
from textformats.segmentation import read_line_records

logger = logging.getLogger(__name__)


class TokenizedTextFormat(DocumentFormat):
    """
    Токенизированный текст: одно предложение на строку,
    токены разделены одиночными пробелами.
    """

    def read_records(self, stream: TextIO) -> Iterator[str]:
        return read_line_records(stream)

    def decode(self, key: str, record: str) -> List[Sentence]:
        tokens = []
        words = []
        offset = 0

        for word in record.split(" "):
            if not word:
                continue
            # Оффсеты считаются по склеенному через пробел тексту
            if words:
                offset += 1
            start = offset
            offset += len(word.encode("utf-8"))

            words.append(word)
            tokens.append(Token(word=word, start=start, end=offset - 1))

        return finalize_sentence(key, tokens, " ".join(words), make_dummy_token)

    def encode(self, sentence: Sentence) -> Tuple[str, str]:
        items = []
        for token in sentence.tokens:
            item = token.word
            if token.tag is not None:
                item += f"_{token.tag}"
            if token.head is not None:
                item += f"_{token.head}"
            items.append(item)

        return sentence.docid, " ".join(items) + "\n"


class UntokenizedTextFormat(DocumentFormat):
    """
    Нетокенизированный текст: одна строка - одно предложение,
    каждый символ Unicode становится отдельным токеном.
    Чтение записей и сериализация делегируются TokenizedTextFormat.
    """

    def __init__(self, tokenized: TokenizedTextFormat = None):
        self.tokenized = tokenized or TokenizedTextFormat()

    def read_records(self, stream: TextIO) -> Iterator[str]:
        return self.tokenized.read_records(stream)

    def decode(self, key: str, record: str) -> List[Sentence]:
        tokens = []
        start = 0
        for char in record:
            size = len(char.encode("utf-8"))
            tokens.append(Token(word=char, start=start, end=start + size - 1))
            start += size

        # Текст - исходная строка, без склейки через пробел
        return finalize_sentence(key, tokens, record, make_dummy_token)

    def encode(self, sentence: Sentence) -> Tuple[str, str]:
        return self.tokenized.encode(sentence)
