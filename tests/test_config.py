import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError

from textformats.config import FormatSettings, load_config

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "formats.yaml"


class TestConfig(unittest.TestCase):
    def test_default_config_file(self):
        cfg = load_config(CONFIG_PATH)
        self.assertEqual(cfg.input_format, "conll-sentence")
        self.assertEqual(cfg.output_format, "conll-sentence")
        self.assertFalse(cfg.settings.join_category_to_pos)
        self.assertFalse(cfg.validate_output)

    def test_custom_config(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "cfg.yaml"
            path.write_text(
                "input_format: english-text\n"
                "output_format: conll-sentence\n"
                "settings:\n"
                "  add_pos_as_attribute: true\n",
                encoding="utf-8",
            )
            cfg = load_config(path)

        self.assertEqual(cfg.input_format, "english-text")
        self.assertTrue(cfg.settings.add_pos_as_attribute)
        self.assertFalse(cfg.settings.join_category_to_pos)

    def test_empty_config_uses_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "empty.yaml"
            path.write_text("", encoding="utf-8")
            cfg = load_config(path)
        self.assertEqual(cfg.log_level, "INFO")

    def test_settings_are_read_only(self):
        settings = FormatSettings()
        with self.assertRaises(ValidationError):
            settings.join_category_to_pos = True


if __name__ == '__main__':
    unittest.main()
