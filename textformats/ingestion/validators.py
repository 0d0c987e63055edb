from conllu import parse
from conllu.exceptions import ParseException
from typing import List
import logging

logger = logging.getLogger(__name__)


class ValidationResult:
    """DTO для результатов валидации."""

    def __init__(self, is_valid: bool, errors: List[str]):
        self.is_valid = is_valid
        self.errors = errors


class DataValidator:
    """
    Проверка сериализованных записей CoNLL через библиотеку conllu.
    Независимый парсер: ловит ошибки нашего кодировщика.
    """

    @staticmethod
    def is_note_record(record: str) -> bool:
        """Запись-заглушка состоит только из строк комментариев."""
        lines = [line for line in record.split("\n") if line]
        return bool(lines) and all(line.startswith("#") for line in lines)

    @staticmethod
    def validate_record(record: str) -> ValidationResult:
        errors = []

        if DataValidator.is_note_record(record):
            return ValidationResult(True, errors)

        try:
            sentences = parse(record)
        except ParseException as e:
            return ValidationResult(False, [f"ERROR: conllu не смог разобрать запись: {e}"])

        if len(sentences) != 1:
            errors.append(f"ERROR: Ожидалось 1 предложение, найдено {len(sentences)}")
            return ValidationResult(False, errors)

        token_list = sentences[0]
        ids = {token['id'] for token in token_list if isinstance(token['id'], int)}

        for token in token_list:
            token_id = token['id']

            # Пропуск мульти-словных токенов (диапазонов)
            if not isinstance(token_id, int):
                continue

            if not token['form']:
                errors.append(f"Token {token_id}: Пустое поле FORM")

            # Проверяем, что HEAD ссылается на существующий токен
            head = token['head']
            if isinstance(head, int) and head != 0 and head not in ids:
                errors.append(f"Token {token_id}: HEAD {head} ссылается на несуществующий ID")

        return ValidationResult(len(errors) == 0, errors)
