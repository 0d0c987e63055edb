import logging
from typing import Iterator, TextIO

logger = logging.getLogger(__name__)


def _strip_newline(line: str) -> str:
    return line.rstrip("\r\n")


def read_blank_line_records(stream: TextIO) -> Iterator[str]:
    """
    Записи, разделенные пустой строкой (CoNLL).
    Каждая непустая строка попадает в запись с "\\n" на конце.
    Повторные пустые строки дают пустые записи - декодер их отбрасывает.
    """
    record = []
    for raw_line in stream:
        line = _strip_newline(raw_line)
        if line:
            record.append(line + "\n")
            continue

        yield "".join(record)
        record = []

    # Конец потока: отдаем только накопленное
    if record:
        yield "".join(record)


def read_line_records(stream: TextIO) -> Iterator[str]:
    """Одна физическая строка - одна запись."""
    for raw_line in stream:
        yield _strip_newline(raw_line)
