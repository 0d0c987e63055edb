import argparse
import logging
import sys

from rich.console import Console
from rich.table import Table

from textformats.config import FormatSettings, load_config
from textformats.core.errors import CorpusFormatError, UnknownFormatError
from textformats.ingestion.loader import CorpusConverter
from textformats.registry import build_default_registry

logger = logging.getLogger(__name__)
console = Console()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Конвертация корпусов между текстовыми форматами предложений")
    parser.add_argument("--config", default=None, help="YAML конфиг (по умолчанию config/formats.yaml)")
    parser.add_argument("--input", required=True, help="Входной файл")
    parser.add_argument("--output", required=True, help="Выходной файл")
    parser.add_argument("--input-format", default=None, help="conll-sentence, tokenized-text, untokenized-text, english-text")
    parser.add_argument("--output-format", default=None, help="Формат вывода")
    parser.add_argument("--join-category-to-pos", action="store_true", default=None)
    parser.add_argument("--add-pos-as-attribute", action="store_true", default=None)
    parser.add_argument("--validate", action="store_true", default=None, help="Проверять CoNLL вывод через conllu")
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


def build_config(args):
    cfg = load_config(args.config)

    settings = cfg.settings.model_dump()
    if args.join_category_to_pos is not None:
        settings["join_category_to_pos"] = args.join_category_to_pos
    if args.add_pos_as_attribute is not None:
        settings["add_pos_as_attribute"] = args.add_pos_as_attribute

    overrides = {"settings": FormatSettings(**settings)}
    if args.input_format:
        overrides["input_format"] = args.input_format
    if args.output_format:
        overrides["output_format"] = args.output_format
    if args.validate is not None:
        overrides["validate_output"] = args.validate
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()

    return cfg.model_copy(update=overrides)


def main(argv=None) -> int:
    args = parse_args(argv)
    cfg = build_config(args)

    # Настройка логирования
    logging.basicConfig(level=cfg.log_level, format='%(asctime)s - %(levelname)s - %(message)s')

    registry = build_default_registry()

    try:
        converter = CorpusConverter(registry, cfg)
        stats = converter.convert(args.input, args.output)
    except UnknownFormatError as e:
        console.print(f"[bold red]❌ Ошибка конфигурации: {e}[/]")
        return 1
    except CorpusFormatError as e:
        console.print(f"[bold red]❌ Повреждённая запись {e.key}: {e}[/]")
        return 1
    except OSError as e:
        console.print(f"[bold red]❌ Ошибка ввода-вывода: {e}[/]")
        return 1

    table = Table(title=f"{cfg.input_format} → {cfg.output_format}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("records", str(stats.records))
    table.add_row("sentences", str(stats.sentences))
    table.add_row("dummies", str(stats.dummies))
    if converter.validate:
        table.add_row("invalid", str(stats.invalid))
    console.print(table)

    return 0


if __name__ == "__main__":
    sys.exit(main())
