"""Report profile: which bands and fields of an exported report carry the buttons"""
import dataclasses
import logging
from dataclasses import dataclass

import yaml

LOG = logging.getLogger("stickmap.settings")


@dataclass
class ReportProfile:
    physical_band: str = "b2"
    virtual_band: str = "b3"
    physical_line: str = "m5"
    physical_description: str = "m7"
    virtual_number: str = "m8"
    virtual_description: str = "m9"
    intro_band: str = "b1"
    intro_text: str = "m2"
    description_attribute: str = "u"
    # upper bound of the free-id report when the report header does not say
    logical_buttons: int = 128

    @classmethod
    def from_dict(cls, data: dict) -> "ReportProfile":
        known = {f.name for f in dataclasses.fields(cls)}
        values = {}
        for section in ("report", "buttons"):
            for key, value in (data.get(section) or {}).items():
                if key not in known:
                    LOG.warning("ignoring unknown profile key %s.%s", section, key)
                    continue
                values[key] = value
        if "logical_buttons" in values:
            values["logical_buttons"] = int(values["logical_buttons"])
        return cls(**values)

    @classmethod
    def load_profile(cls, path: str) -> "ReportProfile":
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        LOG.debug("loaded report profile %s: %s", path, data)
        return cls.from_dict(data)
