import tempfile
import unittest
import logging
from pathlib import Path

from textformats.config import ConverterConfig, FormatSettings
from textformats.core.errors import CorpusFormatError
from textformats.ingestion.loader import CorpusConverter
from textformats.registry import build_default_registry

import main as cli

logging.basicConfig(level=logging.INFO)

CONLL_CORPUS = (
    "# sent_id = 1\n"
    "1\tJohn\t_\tPROPN\tNNP\t_\t2\tnsubj\t_\t_\n"
    "2\tsleeps\t_\tVERB\tVBZ\t_\t0\troot\t_\t_\n"
    "\n"
    "1\tYes\t_\tINTJ\tUH\t_\t0\troot\t_\t_\n"
    "\n"
    "# newdoc\n"
    "\n"
)

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "formats.yaml"


class TestCorpusConverter(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.registry = build_default_registry()

    def tearDown(self):
        self.tmp.cleanup()

    def write(self, name, text):
        path = self.dir / name
        path.write_text(text, encoding="utf-8")
        return path

    def test_conll_to_tokenized(self):
        src = self.write("in.conll", CONLL_CORPUS)
        cfg = ConverterConfig(input_format="conll-sentence", output_format="tokenized-text")

        stats = CorpusConverter(self.registry, cfg).convert(src, self.dir / "out.txt")

        output = (self.dir / "out.txt").read_text(encoding="utf-8")
        self.assertEqual(output, "John_NNP_1 sleeps_VBZ\nYes_UH\n#DUMMY#_NN\n")
        self.assertEqual(stats.records, 3)
        self.assertEqual(stats.sentences, 3)
        self.assertEqual(stats.dummies, 1)

    def test_conll_round_trip_keeps_notes(self):
        src = self.write("in.conll", CONLL_CORPUS)
        cfg = ConverterConfig(validate_output=True)

        stats = CorpusConverter(self.registry, cfg).convert(src, self.dir / "out.conll")

        output = (self.dir / "out.conll").read_text(encoding="utf-8")
        self.assertTrue(output.endswith("# newdoc\n\n"))
        self.assertIn("1\tJohn\t_\tPROPN\tNNP\t_\t2\tnsubj\t_\t_\n", output)
        self.assertEqual(stats.invalid, 0)

    def test_english_to_conll(self):
        src = self.write("raw.txt", "Hello, world!\n\nI can't stop.\n")
        cfg = ConverterConfig(input_format="english-text", output_format="conll-sentence", validate_output=True)

        converter = CorpusConverter(self.registry, cfg)
        sentences = list(converter.iter_sentences(src))

        self.assertEqual(len(sentences), 2)
        self.assertEqual(sentences[0].docid, "raw.txt:1")
        self.assertEqual(sentences[1].docid, "raw.txt:3")
        self.assertEqual(sentences[1].words, ["I", "ca", "n't", "stop", "."])

    def test_settings_shared_by_reader_and_writer(self):
        src = self.write("in.conll", "1\tdog\t_\tNOUN\tNN\t_\t0\troot\t_\t_\n\n")
        cfg = ConverterConfig(settings=FormatSettings(join_category_to_pos=True))

        converter = CorpusConverter(self.registry, cfg)
        sentence = next(converter.iter_sentences(src))
        self.assertEqual(sentence.tokens[0].tag, "NOUN++NN")

        converter.convert(src, self.dir / "out.conll")
        output = (self.dir / "out.conll").read_text(encoding="utf-8")
        self.assertEqual(output, "1\tdog\t_\tNOUN\tNN\t_\t0\troot\t_\t_\n\n")

    def test_corrupt_record_is_fatal(self):
        src = self.write("bad.conll", "1\tA\t_\t_\t_\t_\t0\troot\t_\t_\n3\tB\t_\t_\t_\t_\t1\tdep\t_\t_\n")
        converter = CorpusConverter(self.registry, ConverterConfig())

        with self.assertRaises(CorpusFormatError) as ctx:
            converter.convert(src, self.dir / "out.conll")
        self.assertEqual(ctx.exception.key, "bad.conll:1")

    def test_invalid_utf8_is_fatal(self):
        # Байт 0xe9 (latin-1) не является корректным UTF-8
        src = self.dir / "latin1.txt"
        src.write_bytes(b"caf\xe9 ok\n")
        cfg = ConverterConfig(input_format="untokenized-text", output_format="tokenized-text")
        converter = CorpusConverter(self.registry, cfg)

        with self.assertRaises(CorpusFormatError) as ctx:
            converter.convert(src, self.dir / "out.txt")
        self.assertEqual(ctx.exception.key, "latin1.txt:1")
        self.assertIn("UTF-8", str(ctx.exception))


class TestCli(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_main_converts_file(self):
        src = self.dir / "in.txt"
        src.write_text("This is fine.\n", encoding="utf-8")
        out = self.dir / "out.conll"

        code = cli.main([
            "--config", str(CONFIG_PATH),
            "--input", str(src),
            "--output", str(out),
            "--input-format", "english-text",
            "--validate",
        ])

        self.assertEqual(code, 0)
        lines = out.read_text(encoding="utf-8").splitlines()
        self.assertEqual(lines[0], "1\tThis\t_\t_\t_\t_\t0\t_\t_\t_")
        self.assertEqual(len([line for line in lines if line]), 4)

    def test_main_unknown_format(self):
        src = self.dir / "in.txt"
        src.write_text("x\n", encoding="utf-8")

        code = cli.main([
            "--config", str(CONFIG_PATH),
            "--input", str(src),
            "--output", str(self.dir / "out"),
            "--output-format", "xml",
        ])
        self.assertEqual(code, 1)

    def test_main_corrupt_input(self):
        src = self.dir / "in.conll"
        src.write_text("1\tA\t_\n", encoding="utf-8")

        code = cli.main([
            "--config", str(CONFIG_PATH),
            "--input", str(src),
            "--output", str(self.dir / "out.conll"),
        ])
        self.assertEqual(code, 1)

    def test_main_invalid_utf8_input(self):
        src = self.dir / "in.txt"
        src.write_bytes(b"caf\xe9 ok\n")

        code = cli.main([
            "--config", str(CONFIG_PATH),
            "--input", str(src),
            "--output", str(self.dir / "out.txt"),
            "--input-format", "untokenized-text",
            "--output-format", "tokenized-text",
        ])
        self.assertEqual(code, 1)

    def test_main_missing_input(self):
        code = cli.main([
            "--config", str(CONFIG_PATH),
            "--input", str(self.dir / "missing.conll"),
            "--output", str(self.dir / "out.conll"),
        ])
        self.assertEqual(code, 1)


if __name__ == '__main__':
    unittest.main()
