import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Generator

from tqdm import tqdm

from textformats.config import CONLL_FORMAT, ConverterConfig
from textformats.core.data_structures import Sentence
from textformats.core.errors import CorpusFormatError
from textformats.ingestion.validators import DataValidator
from textformats.registry import FormatRegistry

logger = logging.getLogger(__name__)


@dataclass
class ConversionStats:
    records: int = 0
    sentences: int = 0
    dummies: int = 0
    invalid: int = 0


class CorpusConverter:
    """
    Конвертация корпуса между форматами: чтение записей входным форматом,
    декодирование, сериализация выходным форматом.
    """

    def __init__(self, registry: FormatRegistry, cfg: ConverterConfig):
        self.config = cfg
        self.reader = registry.create(cfg.input_format, cfg.settings)
        self.writer = registry.create(cfg.output_format, cfg.settings)
        self.validate = cfg.validate_output and cfg.output_format == CONLL_FORMAT
        self.stats = ConversionStats()

    def iter_sentences(self, path: Path) -> Generator[Sentence, None, None]:
        """
        Потоковый генератор предложений одного файла.
        Ключ записи: "<имя файла>:<номер записи>".
        """
        path = Path(path)
        logger.info(f"Парсинг файла: {path.name} ({self.config.input_format})")

        with open(path, "r", encoding="utf-8") as f:
            records = self.reader.read_records(f)
            i = 0
            while True:
                i += 1
                key = f"{path.name}:{i}"
                try:
                    record = next(records)
                except StopIteration:
                    break
                except UnicodeDecodeError as e:
                    # Запись с неверной кодировкой: прерываем с указанием ключа
                    logger.error(f"Критическая ошибка в записи {key}: {e}")
                    raise CorpusFormatError(key, f"Invalid UTF-8 input: {e}") from e

                self.stats.records += 1
                try:
                    sentences = self.reader.decode(key, record)
                except CorpusFormatError as e:
                    logger.error(f"Критическая ошибка в записи {key}: {e}")
                    raise

                for sentence in sentences:
                    self.stats.sentences += 1
                    if sentence.note is not None:
                        self.stats.dummies += 1
                    yield sentence

    def convert(self, input_path: Path, output_path: Path) -> ConversionStats:
        self.stats = ConversionStats()
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as out:
            for sentence in tqdm(self.iter_sentences(input_path), desc=Path(input_path).name, unit=" sent"):
                key, value = self.writer.encode(sentence)

                if self.validate:
                    val_res = DataValidator.validate_record(value)
                    if not val_res.is_valid:
                        # Логируем, но не падаем
                        self.stats.invalid += 1
                        logger.warning(f"Invalid output for {key}: {val_res.errors}")

                out.write(value)

        logger.info(
            f"Сохранено {self.stats.sentences} предложений в {output_path.name} "
            f"(записей: {self.stats.records}, заглушек: {self.stats.dummies})"
        )
        return self.stats
