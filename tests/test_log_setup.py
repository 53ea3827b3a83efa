"""Tests for the extra-field log formatter."""

from __future__ import annotations

import logging
import sys
import unittest

from chroma_collections.log_setup import ExtraFormatter


class ExtraFormatterTests(unittest.TestCase):
    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord("chroma_collections.test", logging.DEBUG, __file__, 1, "embedding token usage", None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_known_extras_are_appended(self) -> None:
        formatter = ExtraFormatter("%(message)s")
        record = self._record(model="ada", prompt_tokens=8, total_tokens=8, unrelated="x")

        self.assertEqual(
            formatter.format(record),
            "embedding token usage [model=ada, prompt_tokens=8, total_tokens=8]",
        )

    def test_none_extras_are_skipped(self) -> None:
        formatter = ExtraFormatter("%(message)s")
        self.assertEqual(formatter.format(self._record(model=None)), "embedding token usage")

    def test_extras_come_before_traceback(self) -> None:
        formatter = ExtraFormatter("%(message)s")
        record = self._record(model="ada")
        try:
            raise ValueError("boom")
        except ValueError:
            record.exc_info = sys.exc_info()

        lines = formatter.format(record).splitlines()

        self.assertEqual(lines[0], "embedding token usage [model=ada]")
        self.assertTrue(lines[1].startswith("Traceback"))
        self.assertEqual(lines[-1], "ValueError: boom")
        self.assertEqual(record.msg, "embedding token usage")


if __name__ == "__main__":
    unittest.main()
