"""
Токенизация сырого английского текста в стиле Penn Treebank.
Основано на tokenizer.sed (Robert MacIntyre, University of Pennsylvania, 1995).
Ожидается одно предложение на строку.
"""
import logging
import re
from typing import Iterator, List, TextIO, Tuple

from textformats.core.data_structures import Sentence
from textformats.core.interfaces import DocumentFormat
from textformats.formats.text import TokenizedTextFormat

logger = logging.getLogger(__name__)

# Литеральные замены: типографские варианты -> ASCII
NORMALIZATION_RULES = [
    # Punctuation
    ("’", "'"),
    ("…", "..."),
    ("---", "--"),
    ("—", "--"),
    ("–", "--"),
    ("，", ","),
    ("。", "."),
    ("！", "!"),
    ("？", "?"),
    ("：", ":"),
    ("；", ";"),
    ("＆", "&"),

    # Brackets
    ("[", "("),
    ("]", ")"),
    ("{", "("),
    ("}", ")"),
    ("【", "("),
    ("】", ")"),
    ("（", "("),
    ("）", ")"),

    # Quotation marks
    ("″", '"'),
    ("“", '"'),
    ("„", '"'),
    ("‵‵", '"'),
    ("”", '"'),
    ("’", '"'),  # не срабатывает: ’ уже заменен на '
    ("‘", '"'),
    ("′′", '"'),
    ("‹", '"'),
    ("›", '"'),
    ("«", '"'),
    ("»", '"'),

    # Отбрасываемые символы, разрывающие предложения
    # "|" не отбрасывается и остается отдельным токеном
    ("·", ""),
    ("•", ""),
    ("●", ""),
    ("▪", ""),
    ("■", ""),
    ("□", ""),
    ("❑", ""),
    ("◆", ""),
    ("★", ""),
    ("＊", ""),
    ("♦", ""),
]

# Порядок правил важен: последующие опираются на результат предыдущих
BOUNDARY_RULES = [
    # Направленные открывающие кавычки (закрывающие - ниже)
    (r'^"', "`` "),
    (r'([ (\[{<])"', r"\1 `` "),

    (r"\.\.\.", " ... "),
    (r"[,;:@#$%&]", r" \g<0> "),

    # Предложения уже сегментированы, поэтому отделяем только ФИНАЛЬНУЮ точку
    (r"([^.])(\.)([\])}>\"']*)[ ]*$", r"\1 \2\3 "),
    # ? и ! не бывают частью сокращений
    (r"[?!]", r" \g<0> "),

    (r"[\]\[(){}<>]", r" \g<0> "),

    # Названия скобок как в MXPOST
    (r"\(", "-LRB-"),
    (r"\)", "-RRB-"),
    (r"\]", "-LSB-"),
    (r"\]", "-RSB-"),  # не срабатывает: ] уже заменен правилом выше
    (r"\{", "-LCB-"),
    (r"\}", "-RCB-"),

    (r"--", " -- "),

    # Пробел в начале и в конце строки упрощает правила ниже
    (r"$", " "),
    (r"^", " "),

    (r'"', " '' "),
    # possessive or close-single-quote
    (r"([^'])' ", r"\1 ' "),
    # it's, I'm, we'd
    (r"'([sSmMdD]) ", r" '\1 "),
    (r"'ll ", " 'll "),
    (r"'re ", " 're "),
    (r"'ve ", " 've "),
    (r"n't ", " n't "),
    (r"'LL ", " 'LL "),
    (r"'RE ", " 'RE "),
    (r"'VE ", " 'VE "),
    (r"N'T ", " N'T "),

    (r" ([Cc])annot ", r" \1an not "),
    (r" ([Dd])'ye ", r" \1' ye "),
    (r" ([Gg])imme ", r" \1im me "),
    (r" ([Gg])onna ", r" \1on na "),
    (r" ([Gg])otta ", r" \1ot ta "),
    (r" ([Ll])emme ", r" \1em me "),
    (r" ([Mm])ore'n ", r" \1ore 'n "),
    (r" '([Tt])is ", r" '\1 is "),
    (r" '([Tt])was ", r" '\1 was "),
    (r" ([Ww])anna ", r" \1an na "),
    (r" ([Ww])haddya ", r" \1ha dd ya "),
    (r" ([Ww])hatcha ", r" \1ha t cha "),

    # Лишние пробелы
    (r"  *", " "),
    (r"^ *", ""),
    (r" *$", ""),
]

_COMPILED_NORMALIZATION = [(re.compile(re.escape(src)), dst) for src, dst in NORMALIZATION_RULES]
_COMPILED_BOUNDARIES = [(re.compile(pattern), repl) for pattern, repl in BOUNDARY_RULES]


def tokenize_english(text: str) -> str:
    """Возвращает текст с токенами, разделенными одиночными пробелами."""
    rewritten = text
    for pattern, repl in _COMPILED_NORMALIZATION:
        rewritten = pattern.sub(repl, rewritten)
    for pattern, repl in _COMPILED_BOUNDARIES:
        rewritten = pattern.sub(repl, rewritten)
    return rewritten


class EnglishTextFormat(DocumentFormat):
    def __init__(self, tokenized: TokenizedTextFormat = None):
        self.tokenized = tokenized or TokenizedTextFormat()

    def read_records(self, stream: TextIO) -> Iterator[str]:
        return self.tokenized.read_records(stream)

    def decode(self, key: str, record: str) -> List[Sentence]:
        rewritten = tokenize_english(record)
        logger.debug(f"{key}: {record!r} -> {rewritten!r}")
        return self.tokenized.decode(key, rewritten)

    def encode(self, sentence: Sentence) -> Tuple[str, str]:
        return self.tokenized.encode(sentence)
