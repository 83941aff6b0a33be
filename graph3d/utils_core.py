# Toolkit-independent utilities
#
# Configuration helpers, metadata, paths, translation and logging
# setup.  Nothing here depends on Qt, so the math modules and the
# tests can import it without a display.

__all__ = [
    # Metadata
    "__author__", "__version__", "__prg__", "__title__",
    # Paths
    "prgpath", "iniSystem", "iniUser",
    # Translation
    "_", "N_",
    # Globals
    "config", "_maxRecent",
    # Functions
    "loadConfiguration", "saveConfiguration", "cleanConfiguration",
    "addSection", "getStr", "getInt", "getFloat", "getBool",
    "setBool", "setStr", "setInt", "setFloat",
    "addRecent", "getRecent", "setupLogging",
]

import configparser
import gettext
import logging
import os
import sys

__author__ = "Graph3D developers"
__version__ = "0.3.0"
__prg__ = "graph3d"

__title__ = "Graph3D {} (py{}.{})".format(
    __version__, sys.version_info.major, sys.version_info.minor)

# Directory holding the system ini and the locales
prgpath = os.path.dirname(os.path.abspath(__file__))
iniSystem = os.path.join(prgpath, f"{__prg__}.ini")
iniUser = os.path.expanduser(f"~/.{__prg__}")


_ = gettext.translation(
    __prg__, os.path.join(prgpath, "locales"), fallback=True
).gettext


def N_(message):
    return message


config = configparser.ConfigParser(interpolation=None)
_maxRecent = 10

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# -----------------------------------------------------------------------------
# Load configuration
# -----------------------------------------------------------------------------
def loadConfiguration(systemOnly=False):
    global config
    if systemOnly:
        config.read(iniSystem)
    else:
        config.read([iniSystem, iniUser])


# -----------------------------------------------------------------------------
# Save configuration file
# -----------------------------------------------------------------------------
def saveConfiguration():
    cleanConfiguration()
    with open(iniUser, "w") as f:
        config.write(f)


# ----------------------------------------------------------------------
# Remove items that are the same as in the default ini
# ----------------------------------------------------------------------
def cleanConfiguration():
    global config
    newconfig = config  # Remember config
    config = configparser.ConfigParser(interpolation=None)

    loadConfiguration(True)

    # Compare items
    for section in config.sections():
        for item, value in config.items(section):
            try:
                new = newconfig.get(section, item)
                if value == new:
                    newconfig.remove_option(section, item)
            except (configparser.NoOptionError, configparser.NoSectionError):
                pass
    config = newconfig


# -----------------------------------------------------------------------------
# add section if it doesn't exist
# -----------------------------------------------------------------------------
def addSection(section):
    if not config.has_section(section):
        config.add_section(section)


# -----------------------------------------------------------------------------
# Typed getters.  A missing or malformed value gives the default.
# -----------------------------------------------------------------------------
def _typed(section, name, default, convert):
    try:
        return convert(config.get(section, name))
    except (configparser.Error, ValueError):
        return default


def getStr(section, name, default=""):
    return _typed(section, name, default, str)


def getInt(section, name, default=0):
    return _typed(section, name, default, int)


def getFloat(section, name, default=0.0):
    return _typed(section, name, default, float)


def getBool(section, name, default=False):
    return _typed(section, name, default, lambda v: bool(int(v)))


# -----------------------------------------------------------------------------
def setBool(section, name, value):
    addSection(section)
    config.set(section, name, str(int(value)))


# -----------------------------------------------------------------------------
def setStr(section, name, value):
    addSection(section)
    config.set(section, name, str(value))


setInt = setStr
setFloat = setStr


# -----------------------------------------------------------------------------
# Add Recent
# -----------------------------------------------------------------------------
def addRecent(filename):
    addSection("File")
    sfn = str(os.path.abspath(filename))

    # oldest entry drops off when the list is full
    last = _maxRecent - 2
    for i in range(_maxRecent):
        rfn = getRecent(i)
        if rfn is None:
            last = i - 1
            break
        if rfn == sfn:
            if i == 0:
                return
            last = i - 1
            break

    # Shift everything by one
    for i in range(last, -1, -1):
        config.set("File", f"recent.{i + 1}", getRecent(i))
    config.set("File", "recent.0", sfn)


# -----------------------------------------------------------------------------
def getRecent(recent):
    try:
        return config.get("File", f"recent.{int(recent)}")
    except (configparser.NoOptionError, configparser.NoSectionError):
        return None


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
def setupLogging(level=None, log_file=None):
    """Configure the package logger.

    Args:
        level: Logging level name or number.  Defaults to [Log] level.
        log_file: Optional path for a file handler.  Defaults to
                  [Log] file when set.

    Returns:
        The configured "graph3d" logger.
    """
    if level is None:
        level = getStr("Log", "level", "INFO")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    if log_file is None:
        log_file = getStr("Log", "file", "") or None

    logger = logging.getLogger(__prg__)
    logger.setLevel(level)

    # Avoid duplicate handlers when called again
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(_LOG_FORMAT, datefmt="%H:%M:%S")

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized at %s", logging.getLevelName(level))
    return logger
