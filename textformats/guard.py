import logging
from typing import Callable, List, Optional

from textformats.config import DUMMY_WORD, MAX_SENTENCE_TOKENS, OVERSIZE_MARKER
from textformats.core.data_structures import Sentence, Token

logger = logging.getLogger(__name__)


def make_dummy_token(**fields) -> Token:
    """Токен-заглушка "#DUMMY#" с координатами 0-6."""
    return Token(word=DUMMY_WORD, start=0, end=len(DUMMY_WORD.encode("utf-8")) - 1, **fields)


def finalize_sentence(
        docid: str,
        tokens: List[Token],
        text: str,
        make_dummy: Callable[[], Token],
        comments: str = "",
) -> List[Sentence]:
    """
    Общая политика для всех декодеров после построения токенов.

    - больше MAX_SENTENCE_TOKENS токенов: предложение заменяется заглушкой,
      исходный текст уходит в note;
    - токены есть: обычное предложение;
    - токенов нет, но есть комментарии: заглушка с комментариями в note;
    - иначе ничего (пустые строки в начале/конце файла).
    """
    if len(tokens) > MAX_SENTENCE_TOKENS:
        logger.warning(
            f"Sentence {docid} has {len(tokens)} tokens (> {MAX_SENTENCE_TOKENS}). Replaced with dummy."
        )
        return [_dummy_sentence(docid, make_dummy(), f"{OVERSIZE_MARKER}{text}\n")]

    if tokens:
        return [Sentence(docid=docid, text=text, tokens=tokens)]

    if comments:
        return [_dummy_sentence(docid, make_dummy(), comments)]

    return []


def _dummy_sentence(docid: str, token: Token, note: Optional[str]) -> Sentence:
    return Sentence(docid=docid, text=DUMMY_WORD, tokens=[token], note=note)
