import logging
import re
from typing import Iterator, List, TextIO, Tuple

from pydantic import ValidationError

from textformats.config import (
    BOOLEAN_ATTRIBUTE_VALUE,
    CATEGORY_JOIN_MARKER,
    DUMMY_CATEGORY,
    DUMMY_TAG,
    EMPTY_FIELD,
    MIN_CONLL_FIELDS,
    POS_ATTRIBUTE_NAME,
    FormatSettings,
)
from textformats.core.data_structures import Attribute, Sentence, Token
from textformats.core.errors import CorpusFormatError
from textformats.core.interfaces import DocumentFormat
from textformats.guard import finalize_sentence, make_dummy_token
from textformats.segmentation import read_blank_line_records

logger = logging.getLogger(__name__)

# Диапазоны мульти-словных токенов CoNLL-U, например "2-4"
MULTIWORD_ID = re.compile(r"[0-9]+-[0-9]+")


def parse_morphology(attributes: str, token_desc: str = "") -> List[Attribute]:
    """
    Разбирает строку признаков вида a1=v1|a2=v2 или v1|v2 (значение "on").
    Признак с пустым значением пропускается с предупреждением,
    признак с пустым именем пропускается молча.
    """
    morphology = []
    for piece in attributes.split("|"):
        name, sep, value = piece.partition("=")
        if not sep:
            value = BOOLEAN_ATTRIBUTE_VALUE

        if not value:
            logger.warning(f"Invalid attributes string: {attributes} for token: {token_desc}")
            continue
        if name:
            morphology.append(Attribute(name=name, value=value))

    return morphology


def format_morphology(morphology: List[Attribute]) -> str:
    if not morphology:
        return EMPTY_FIELD

    parts = []
    for attribute in morphology:
        if attribute.value == BOOLEAN_ATTRIBUTE_VALUE:
            parts.append(attribute.name)
        else:
            parts.append(f"{attribute.name}={attribute.value}")
    return "|".join(parts)


# Обратимые преобразования тегов. Все функции возвращают новый токен.

def join_category_to_pos(token: Token) -> Token:
    tag = f"{token.category or ''}{CATEGORY_JOIN_MARKER}{token.tag or ''}"
    return token.model_copy(update={"tag": tag, "category": None})


def split_category_from_pos(token: Token) -> Token:
    category, sep, tag = (token.tag or "").partition(CATEGORY_JOIN_MARKER)
    if not sep:
        return token
    return token.model_copy(update={"category": category, "tag": tag})


def add_pos_as_attribute(token: Token) -> Token:
    if not token.tag:
        return token
    morphology = token.morphology + [Attribute(name=POS_ATTRIBUTE_NAME, value=token.tag)]
    return token.model_copy(update={"morphology": morphology})


def remove_pos_from_attributes(token: Token) -> Token:
    # Предполагается, что fPOS, если есть, стоит последним
    if token.morphology and token.morphology[-1].name == POS_ATTRIBUTE_NAME:
        return token.model_copy(update={"morphology": token.morphology[:-1]})
    return token


def _parse_int(key: str, value: str) -> int:
    if not value:
        return 0
    try:
        return int(value)
    except ValueError:
        raise CorpusFormatError(key, f"Failed to convert to integer: {value!r}") from None


def _or_underscore(value) -> str:
    return value if value else EMPTY_FIELD


class CoNLLSyntaxFormat(DocumentFormat):
    """
    Чтение/запись корпусов с зависимостями в формате CoNLL (совместим с CoNLL-U).

    Поля: ID FORM LEMMA CPOSTAG POSTAG FEATS HEAD DEPREL PHEAD PDEPREL.
    Строки мульти-словных токенов (2-4) пропускаются, последние две колонки
    (DEPS и MISC в CoNLL-U) игнорируются при чтении и пишутся как "_".
    Комментарии собираются и попадают в note, если токенов в записи нет.
    """

    def __init__(self, settings: FormatSettings = None):
        self.settings = settings or FormatSettings()

    def read_records(self, stream: TextIO) -> Iterator[str]:
        return read_blank_line_records(stream)

    def _apply_transforms(self, token: Token) -> Token:
        if self.settings.join_category_to_pos:
            token = join_category_to_pos(token)
        if self.settings.add_pos_as_attribute:
            token = add_pos_as_attribute(token)
        return token

    def _reverse_transforms(self, token: Token) -> Token:
        if self.settings.join_category_to_pos:
            token = split_category_from_pos(token)
        if self.settings.add_pos_as_attribute:
            token = remove_pos_from_attributes(token)
        return token

    def _make_dummy(self) -> Token:
        return self._apply_transforms(make_dummy_token(tag=DUMMY_TAG, category=DUMMY_CATEGORY))

    def decode(self, key: str, record: str) -> List[Sentence]:
        tokens = []
        text = ""
        text_bytes = 0
        comments = []
        expected_id = 1

        for line in record.split("\n"):
            if not line:
                continue
            fields = line.split("\t")

            if fields[0].startswith("#"):
                comments.append(fields[0] + "\n")
                continue

            if MULTIWORD_ID.fullmatch(fields[0]):
                continue

            # Опциональные поля "_" считаются пустыми
            fields = fields[:2] + ["" if f == EMPTY_FIELD else f for f in fields[2:]]

            if len(fields) < MIN_CONLL_FIELDS:
                raise CorpusFormatError(
                    key, f"Every line has to have at least {MIN_CONLL_FIELDS} tab separated fields: {line!r}"
                )

            token_id = _parse_int(key, fields[0])
            if token_id != expected_id:
                raise CorpusFormatError(
                    key,
                    f"Token ids start at 1 for each new sentence and increase by 1 on each new token "
                    f"(expected {expected_id}, got {token_id}). Sentences are separated by an empty line."
                )
            expected_id += 1

            word = fields[1]
            category = fields[3]
            tag = fields[4]
            attributes = fields[5]
            head = _parse_int(key, fields[6])
            label = fields[7]

            if text:
                text += " "
                text_bytes += 1
            start = text_bytes
            text += word
            text_bytes += len(word.encode("utf-8"))
            end = text_bytes - 1

            try:
                token = Token(
                    word=word,
                    start=start,
                    end=end,
                    head=head - 1 if head > 0 else None,
                    tag=tag or None,
                    category=category or None,
                    label=label or None,
                )
            except ValidationError as e:
                raise CorpusFormatError(key, f"Invalid token in line {line!r}: {e}") from e

            if attributes:
                token.morphology = parse_morphology(attributes, token_desc=f"{word} ({key}:{token_id})")

            tokens.append(self._apply_transforms(token))

        return finalize_sentence(key, tokens, text, self._make_dummy, comments="".join(comments))

    def encode(self, sentence: Sentence) -> Tuple[str, str]:
        # Заглушка выводится как есть, вместо строк токенов
        if sentence.note is not None:
            return sentence.docid, f"{sentence.note}\n"

        lines = []
        for i, original in enumerate(sentence.tokens):
            token = self._reverse_transforms(original)
            fields = [
                str(i + 1),
                _or_underscore(token.word),
                EMPTY_FIELD,
                _or_underscore(token.category),
                _or_underscore(token.tag),
                format_morphology(token.morphology),
                str(token.head + 1 if token.head is not None else 0),
                _or_underscore(token.label),
                EMPTY_FIELD,
                EMPTY_FIELD,
            ]
            lines.append("\t".join(fields))

        return sentence.docid, "\n".join(lines) + "\n\n"
