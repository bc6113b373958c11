"""Entry point for stickmap

Reads a VKB report, builds the physical -> virtual buttons mapping, overlays the
user provided descriptions and reports the free virtual buttons. Call it once per
stick: a left and a right stick are two independent mappings.
"""
import logging
from typing import Iterable, Optional

from core.settings import ReportProfile
from mapper import JoystickButtonsMapping
from vkb.builder import build_mapping
from vkb.fp3_reader import Fp3ReportReader
from vkb.user_desc import load_user_descriptions

LOG = logging.getLogger("stickmap")

MODULE_LOGGERS = {
    "classifier": "stickmap.classifier",
    "builder": "stickmap.builder",
    "mapper": "stickmap.mapper",
    "report": "stickmap.report",
    "user_desc": "stickmap.user_desc",
    "settings": "stickmap.settings",
}


def configure_logging(level: str = "INFO", fmt: str = "%(levelname)s:%(name)s:%(message)s",
                      debug_modules: Iterable[str] = ()):
    logging.basicConfig(level=getattr(logging, level), format=fmt)
    # Set DEBUG level for specific modules if requested
    for module in debug_modules:
        logger_name = MODULE_LOGGERS.get(module, f"stickmap.{module}")
        logging.getLogger(logger_name).setLevel(logging.DEBUG)


def load_joystick_mapping(report_path: str, user_desc_path: Optional[str] = None,
                          profile_path: Optional[str] = None) -> JoystickButtonsMapping:
    """Parse and check one stick report.

    Errors are raised unchanged; duplicated buttons etc are only logged.
    """
    profile = ReportProfile.load_profile(profile_path) if profile_path else ReportProfile()
    report = Fp3ReportReader(report_path, profile).read()

    logical_buttons = report.header.logical_buttons or profile.logical_buttons
    mapping = build_mapping(report.entries, logical_buttons=logical_buttons)

    if user_desc_path:
        mapping.inject_user_descriptions(load_user_descriptions(user_desc_path))

    mapping.log_free_virtual_buttons()
    LOG.debug("mapping %s:\n%s", report_path, mapping.describe())
    return mapping
