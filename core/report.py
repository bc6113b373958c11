"""Report models: the raw per-band content of a configurator report, not interpreted yet"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

LOG = logging.getLogger("stickmap.report")


class EntryKind(Enum):
    PHYSICAL = "physical"  # "b2" band, one per physical line
    VIRTUAL = "virtual"  # "b3" band, follows its physical line


@dataclass(frozen=True)
class ReportEntry:
    kind: EntryKind
    description: str  # html fragment, eg "<b>#95 </b> Joystick button : #95"
    number: Optional[str] = None  # physical line ("m5") or virtual button number ("m8")


@dataclass
class ReportHeader:
    controller: str = ""
    generator: str = ""
    logical_buttons: Optional[int] = None

    @classmethod
    def from_text(cls, text: str) -> "ReportHeader":
        """Parse the intro band, eg

        Report generated by VKB Device Configurator v0.92.51  01/05/2023   11:25:59
        Controller : VKB NJoy32 XT PRO  v2.122
        Number of logical buttons : 128
        """
        header = cls()
        for line in text.splitlines():
            line = line.strip()
            if line.startswith("Report generated by"):
                header.generator = line.split("by", 1)[1].strip()
                continue
            if " : " not in line:
                continue
            key, value = (part.strip() for part in line.split(" : ", 1))
            if key == "Controller":
                header.controller = value
            elif key == "Number of logical buttons":
                try:
                    header.logical_buttons = int(value)
                except ValueError:
                    LOG.warning("ignoring logical button count %r", value)
        return header


@dataclass
class Report:
    header: ReportHeader = field(default_factory=ReportHeader)
    entries: List[ReportEntry] = field(default_factory=list)

    def physical_entries(self) -> List[ReportEntry]:
        return [e for e in self.entries if e.kind is EntryKind.PHYSICAL]

    def virtual_entries(self) -> List[ReportEntry]:
        return [e for e in self.entries if e.kind is EntryKind.VIRTUAL]
