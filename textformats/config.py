# textformats/config.py
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

# Определение базовых путей относительно корня проекта
BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = BASE_DIR / "config" / "formats.yaml"

# Имена форматов (ключи реестра)
CONLL_FORMAT = "conll-sentence"
TOKENIZED_FORMAT = "tokenized-text"
UNTOKENIZED_FORMAT = "untokenized-text"
ENGLISH_FORMAT = "english-text"

# Ограничение размера предложения
MAX_SENTENCE_TOKENS = 100
DUMMY_WORD = "#DUMMY#"
DUMMY_TAG = "NN"
DUMMY_CATEGORY = "NOUN"
OVERSIZE_MARKER = f"#skip because token_size() > {MAX_SENTENCE_TOKENS}\n#"

# Соглашения CoNLL
EMPTY_FIELD = "_"
MIN_CONLL_FIELDS = 8
CATEGORY_JOIN_MARKER = "++"
POS_ATTRIBUTE_NAME = "fPOS"
BOOLEAN_ATTRIBUTE_VALUE = "on"


class FormatSettings(BaseModel):
    """
    Параметры форматов. Задаются один раз до начала обработки корпуса
    и не меняются по ходу работы.
    """
    model_config = ConfigDict(frozen=True)

    join_category_to_pos: bool = False
    add_pos_as_attribute: bool = False


class ConverterConfig(BaseModel):
    input_format: str = CONLL_FORMAT
    output_format: str = CONLL_FORMAT
    settings: FormatSettings = Field(default_factory=FormatSettings)
    validate_output: bool = False
    log_level: str = "INFO"


def load_config(path: Optional[Path] = None) -> ConverterConfig:
    """
    Читает YAML-конфиг конвертера. Без пути используется config/formats.yaml.
    """
    path = Path(path) if path else DEFAULT_CONFIG_PATH
    logger.info(f"Loading config from {path}")

    with open(path, 'r', encoding='utf-8') as f:
        raw = yaml.safe_load(f) or {}

    return ConverterConfig.model_validate(raw)
