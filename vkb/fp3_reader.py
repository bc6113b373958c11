"""VKB report reader for the FastReport export (.fp3) of VKB Device Configurator

The report is xml, one <page0> per printed page:

  <preparedreport>
    <previewpages>
      <page0>
        <b1 ...><m2 u="Report generated by ...&#13;&#10;Controller : VKB NJoy32 XT PRO  v2.122 ..." /></b1>
        <b2 ...><m5 u="1" /><m7 u="&#60;b&#62;#1 (E1) &#60;/b&#62; / ..." /></b2>
        <b3 ...><m8 u="61" /><m9 u="&#60;b&#62;#61 &#60;/b&#62; Joystick button : #61" /></b3>
        ...
      </page0>
      ...
    </previewpages>
  </preparedreport>

Only the relative order of the b2/b3 bands matters; everything else is layout.
"""
import logging
from typing import Optional

from lxml import etree

from core.errors import MalformedReport
from core.reader import ReportReader
from core.report import EntryKind, Report, ReportEntry, ReportHeader
from core.settings import ReportProfile

LOG = logging.getLogger("stickmap.report")


class Fp3ReportReader(ReportReader):
    """Reads a .fp3 report file, or its content given as text."""

    def __init__(self, path: Optional[str] = None, profile: Optional[ReportProfile] = None, text: Optional[str] = None):
        if path is None and text is None:
            raise ValueError("Fp3ReportReader needs a path or a text")
        self.path = path
        self.text = text
        self.profile = profile or ReportProfile()

    @classmethod
    def from_string(cls, text: str, profile: Optional[ReportProfile] = None) -> "Fp3ReportReader":
        return cls(profile=profile, text=text)

    def _parse_root(self):
        try:
            if self.text is not None:
                return etree.fromstring(self.text.encode("utf-8"))
            return etree.parse(str(self.path)).getroot()
        except etree.XMLSyntaxError as e:
            raise MalformedReport(f"report is not valid xml: {e}") from e
        except OSError as e:
            raise MalformedReport(f"could not read report {self.path}: {e}") from e

    def _field(self, band, tag: str, required: bool = True) -> Optional[str]:
        element = band.find(tag)
        value = None if element is None else element.get(self.profile.description_attribute)
        if value is None and required:
            raise MalformedReport(
                f"<{band.tag}> band at line {band.sourceline} has no {tag}@{self.profile.description_attribute}"
            )
        return value

    def read(self) -> Report:
        root = self._parse_root()
        profile = self.profile
        report = Report()

        pages = root.findall("previewpages/page0")
        if not pages:
            raise MalformedReport("report has no previewpages/page0")

        for page in pages:
            for band in page:
                if not isinstance(band.tag, str):
                    continue  # comments
                if band.tag == profile.intro_band:
                    intro = self._field(band, profile.intro_text, required=False)
                    if intro:
                        report.header = ReportHeader.from_text(intro)
                elif band.tag == profile.physical_band:
                    report.entries.append(ReportEntry(
                        EntryKind.PHYSICAL,
                        self._field(band, profile.physical_description),
                        self._field(band, profile.physical_line, required=False),
                    ))
                elif band.tag == profile.virtual_band:
                    report.entries.append(ReportEntry(
                        EntryKind.VIRTUAL,
                        self._field(band, profile.virtual_description),
                        self._field(band, profile.virtual_number, required=False),
                    ))

        LOG.info(
            "read report (%s): %d physical, %d virtual entries",
            report.header.controller or "unknown controller",
            len(report.physical_entries()), len(report.virtual_entries()),
        )
        return report
