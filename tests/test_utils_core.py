"""Tests for utils_core: configuration helpers and logging setup."""

import configparser
import logging
import os
import shutil
import sys
import tempfile
import unittest

_root = os.path.join(os.path.dirname(__file__), "..")
if _root not in sys.path:
    sys.path.insert(0, _root)

from graph3d import utils_core as Utils  # noqa: E402


class ConfigTestCase(unittest.TestCase):
    """Swap in an empty config for each test."""

    def setUp(self):
        self._saved = Utils.config
        Utils.config = configparser.ConfigParser(interpolation=None)

    def tearDown(self):
        Utils.config = self._saved


class TestGetters(ConfigTestCase):

    def test_missing_returns_default(self):
        self.assertEqual(Utils.getStr("View", "nothing", "x"), "x")
        self.assertEqual(Utils.getInt("View", "nothing", 3), 3)
        self.assertEqual(Utils.getFloat("View", "nothing", 0.5), 0.5)
        self.assertIs(Utils.getBool("View", "nothing", True), True)

    def test_malformed_returns_default(self):
        Utils.setStr("View", "margin", "wide")
        self.assertEqual(Utils.getFloat("View", "margin", 0.1), 0.1)
        self.assertEqual(Utils.getInt("View", "margin", 7), 7)

    def test_set_adds_section(self):
        Utils.setFloat("View", "margin", 0.25)
        self.assertTrue(Utils.config.has_section("View"))
        self.assertEqual(Utils.getFloat("View", "margin"), 0.25)

    def test_bool(self):
        Utils.setBool("View", "axes", True)
        self.assertEqual(Utils.getStr("View", "axes"), "1")
        self.assertTrue(Utils.getBool("View", "axes"))
        Utils.setBool("View", "axes", False)
        self.assertFalse(Utils.getBool("View", "axes", True))


class TestSystemConfig(ConfigTestCase):

    def test_system_defaults(self):
        Utils.loadConfiguration(systemOnly=True)
        self.assertEqual(Utils.getFloat("View", "margin"), 0.1)
        self.assertEqual(Utils.getFloat("View", "margin.load"), 0.05)
        self.assertEqual(Utils.getFloat("View", "zoom.factor"), 1.1)
        self.assertEqual(Utils.getStr("Projection", "type"), "iso")

    def test_clean_drops_defaults(self):
        Utils.loadConfiguration(systemOnly=True)
        Utils.setStr("View", "margin", "0.2")
        Utils.cleanConfiguration()
        self.assertEqual(Utils.getStr("View", "margin"), "0.2")
        self.assertFalse(Utils.config.has_option("View", "margin.load"))


class TestRecent(ConfigTestCase):

    def test_add_recent_order(self):
        Utils.addRecent("a.xyz")
        Utils.addRecent("b.xyz")
        self.assertEqual(Utils.getRecent(0), os.path.abspath("b.xyz"))
        self.assertEqual(Utils.getRecent(1), os.path.abspath("a.xyz"))
        self.assertIsNone(Utils.getRecent(2))

    def test_add_recent_moves_to_front(self):
        for name in ("a.xyz", "b.xyz", "c.xyz"):
            Utils.addRecent(name)
        Utils.addRecent("a.xyz")
        self.assertEqual(Utils.getRecent(0), os.path.abspath("a.xyz"))
        self.assertEqual(Utils.getRecent(1), os.path.abspath("c.xyz"))
        self.assertEqual(Utils.getRecent(2), os.path.abspath("b.xyz"))

    def test_recent_is_bounded(self):
        for i in range(Utils._maxRecent + 3):
            Utils.addRecent(f"f{i}.txt")
        self.assertIsNotNone(Utils.getRecent(Utils._maxRecent - 1))
        self.assertIsNone(Utils.getRecent(Utils._maxRecent))


class TestLogging(ConfigTestCase):

    def setUp(self):
        super().setUp()
        self.tmpdir = tempfile.mkdtemp()
        self.logger = logging.getLogger(Utils.__prg__)
        self._handlers = list(self.logger.handlers)
        self._level = self.logger.level

    def tearDown(self):
        for h in self.logger.handlers:
            h.close()
        self.logger.handlers[:] = self._handlers
        self.logger.setLevel(self._level)
        shutil.rmtree(self.tmpdir, ignore_errors=True)
        super().tearDown()

    def test_level_from_name(self):
        logger = Utils.setupLogging("debug")
        self.assertIs(logger, self.logger)
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(len(logger.handlers), 1)

    def test_level_from_config(self):
        Utils.setStr("Log", "level", "WARNING")
        self.assertEqual(Utils.setupLogging().level, logging.WARNING)

    def test_bad_level_name(self):
        self.assertEqual(Utils.setupLogging("chatty").level, logging.INFO)

    def test_repeat_does_not_duplicate(self):
        Utils.setupLogging("INFO")
        logger = Utils.setupLogging("INFO")
        self.assertEqual(len(logger.handlers), 1)

    def test_file_handler(self):
        path = os.path.join(self.tmpdir, "graph3d.log")
        logger = Utils.setupLogging("INFO", path)
        self.assertEqual(len(logger.handlers), 2)
        logging.getLogger("graph3d.test").info("hello file")
        for h in logger.handlers:
            h.flush()
        with open(path, encoding="utf-8") as f:
            text = f.read()
        self.assertIn("graph3d.test - INFO - hello file", text)


if __name__ == "__main__":
    unittest.main()
