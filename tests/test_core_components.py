"""
Unit tests for core YMDiary components.

Tests non-parsing components like configuration management, data models,
identifier generation and tag utilities.
"""

import os
import tempfile
import threading
import unittest
from datetime import datetime
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from ymdiary.config import ConfigManager
from ymdiary.models import (
    Block,
    EventBlock,
    LongMemoBlock,
    NoteBlock,
    ParseResult,
    ParserOptions,
    TodoBlock,
)
from ymdiary.parser import CounterIdGenerator, uuid_id_generator
from ymdiary.tags import format_tags, normalize_tag, normalize_tags, parse_tags

NOW = datetime(2024, 5, 22, 9, 30)


class TestConfigManager(unittest.TestCase):
    """Test configuration management functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = Path(self.temp_dir) / "test_config.yaml"

    def tearDown(self):
        """Clean up test fixtures."""
        if self.config_path.exists():
            self.config_path.unlink()
        os.rmdir(self.temp_dir)

    def test_config_creation_with_defaults(self):
        """Test config manager falls back to defaults when file missing."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.output_format, "summary")
        self.assertIsNone(config.log_filename)
        self.assertEqual(config.parser_options, ParserOptions())

    def test_config_loading_from_file(self):
        """Test loading configuration from YAML file."""
        test_config = """
parser:
  enable_long_memo: false
  enable_tag_extraction: false

output:
  format: json

paths:
  log_file: "diary.log"
"""
        with open(self.config_path, 'w') as f:
            f.write(test_config)

        config = ConfigManager(str(self.config_path))

        options = config.parser_options
        self.assertFalse(options.enable_long_memo)
        self.assertFalse(options.enable_tag_extraction)
        self.assertTrue(options.enable_event_parsing)
        self.assertEqual(config.output_format, "json")
        self.assertEqual(config.log_filename, "diary.log")

    def test_broken_yaml_falls_back_to_defaults(self):
        """Test that an unparsable file does not stop the application."""
        with open(self.config_path, 'w') as f:
            f.write("parser: [unclosed")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.get("logging.level"), "INFO")

    def test_non_mapping_yaml_falls_back_to_defaults(self):
        """Test that a list or scalar at the top level is replaced by defaults."""
        for content in ("- a\n- b\n", "just a string\n"):
            with open(self.config_path, 'w') as f:
                f.write(content)

            config = ConfigManager(str(self.config_path))

            self.assertEqual(config.parser_options, ParserOptions())
            self.assertEqual(config.output_format, "summary")

    def test_dot_notation_access(self):
        """Test accessing config values with dot notation."""
        config = ConfigManager(str(self.config_path))  # Uses defaults

        self.assertTrue(config.get("parser.enable_event_parsing"))
        self.assertEqual(config.get("output.format"), "summary")
        self.assertEqual(config.get("nonexistent.key", "default"), "default")

    def test_config_reload(self):
        """Test configuration reloading."""
        with open(self.config_path, 'w') as f:
            f.write("output:\n  format: 'summary'")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.output_format, "summary")

        with open(self.config_path, 'w') as f:
            f.write("output:\n  format: 'json'")

        config.reload()
        self.assertEqual(config.output_format, "json")


class TestDataModels(unittest.TestCase):
    """Test data model validation and functionality."""

    def test_todo_block_creation(self):
        block = TodoBlock(id="b1", text="buy milk", tags=["errand"], created_at=NOW, updated_at=NOW)

        self.assertEqual(block.type, "todo")
        self.assertFalse(block.completed)
        self.assertEqual(block.tags, ["errand"])

    def test_blocks_are_frozen(self):
        block = NoteBlock(id="b1", text="hello", created_at=NOW, updated_at=NOW)

        with self.assertRaises(ValidationError):
            block.text = "changed"

    def test_empty_id_rejected(self):
        with self.assertRaises(ValidationError):
            NoteBlock(id="", text="hello", created_at=NOW, updated_at=NOW)

    def test_event_start_time_must_be_padded(self):
        with self.assertRaises(ValidationError):
            EventBlock(id="e1", start_time="9:00", created_at=NOW, updated_at=NOW)

    def test_long_memo_defaults(self):
        block = LongMemoBlock(id="m1", created_at=NOW, updated_at=NOW)

        self.assertTrue(block.collapsed)
        self.assertEqual(block.body, "")
        self.assertIsNone(block.title)

    def test_block_union_round_trip(self):
        """Test that a dumped block validates back into its own variant."""
        adapter = TypeAdapter(Block)
        event = EventBlock(
            id="e1", text="15:00 회의", start_time="15:00", title="회의",
            created_at=NOW, updated_at=NOW
        )

        restored = adapter.validate_python(event.model_dump())

        self.assertIsInstance(restored, EventBlock)
        self.assertEqual(restored, event)

    def test_parse_result_json_dump(self):
        result = ParseResult(
            blocks=[TodoBlock(id="t1", text="x", completed=True, created_at=NOW, updated_at=NOW)],
            errors=["Line 2: Invalid event format"]
        )

        dumped = result.model_dump(mode="json")

        self.assertEqual(dumped["blocks"][0]["type"], "todo")
        self.assertTrue(dumped["blocks"][0]["completed"])
        self.assertEqual(dumped["errors"], ["Line 2: Invalid event format"])


class TestIdGenerators(unittest.TestCase):
    """Test block identifier strategies."""

    def test_counter_is_sequential(self):
        generator = CounterIdGenerator()

        self.assertEqual(generator(), "block_1")
        self.assertEqual(generator(), "block_2")

    def test_counter_prefix_and_start(self):
        generator = CounterIdGenerator(prefix="memo-", start=10)
        self.assertEqual(generator(), "memo-10")

    def test_counter_unique_across_threads(self):
        generator = CounterIdGenerator()
        ids = []
        lock = threading.Lock()

        def worker():
            for _ in range(200):
                value = generator()
                with lock:
                    ids.append(value)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(ids), 800)
        self.assertEqual(len(set(ids)), 800)

    def test_uuid_ids_are_unique(self):
        ids = {uuid_id_generator() for _ in range(500)}

        self.assertEqual(len(ids), 500)
        self.assertTrue(all(i.startswith("block_") for i in ids))


class TestTagUtilities(unittest.TestCase):
    """Test tag normalization helpers."""

    def test_normalize_tag(self):
        self.assertEqual(normalize_tag("  #Work "), "work")
        self.assertEqual(normalize_tag("Side Project"), "sideproject")
        self.assertEqual(normalize_tag("#"), "")

    def test_normalize_tags_deduplicates_in_order(self):
        self.assertEqual(
            normalize_tags(["Home", "#errand", "home", "", "ERRAND"]),
            ["home", "errand"]
        )

    def test_parse_tags(self):
        self.assertEqual(parse_tags("#Work, home  #errand,work"), ["work", "home", "errand"])
        self.assertEqual(parse_tags("   "), [])

    def test_format_tags(self):
        self.assertEqual(format_tags(["a", "b"]), "#a #b")
        self.assertEqual(format_tags([]), "")


if __name__ == '__main__':
    # Run all tests
    unittest.main(verbosity=2)
