r"""Description classifier: turn one report description into a typed button

A physical ("b2") description is a small html fragment, eg

  <b>#3 (E2) </b><b>- Button with momentary action</b>
  <b>#5 (F3) </b><b>TEMPO </b>\r\nVirtual button Short #5\r\nVirtual button Long #94
  <b>#10 (Fire 1-st stage) </b><b>- Button with momentary action</b>\r\nVirtual button with SHIFT1 = 64\r\nVirtual button with SHIFT2 = 91
  <b>#11 (D1) </b><b> SHIFT1 </b>
  <b>#18 (A1 down) </b> <b>Point of view Switch</b> POV1  Down

The first bold node always holds "#<id> <info>". The second one holds a keyword
selecting the kind, and the free text after the bold nodes holds the virtual ids
of the shifted/tempo variants.

A virtual ("b3") description only links back to its physical line:

  <b>#95 </b> Joystick button : #95
"""
import html
import logging
from collections import namedtuple
from typing import Dict, List, Sequence, Tuple

from lxml import etree
from lxml import html as lxml_html

from core.buttons import (
    Encoder,
    MicrostickModeSwitch,
    Momentary,
    PhysicalButton,
    PhysicalButtonKind,
    Pov,
    Shift1,
    Shift2,
    ShiftKind,
    Tempo,
    TempoKind,
    Undefined,
)
from core.errors import MalformedIdentifier, UnrecognizedDescription

LOG = logging.getLogger("stickmap.classifier")

SHIFT1_MARKER = "Virtual button with SHIFT1 ="
SHIFT2_MARKER = "Virtual button with SHIFT2 ="
TEMPO_SHORT_MARKER = "Virtual button Short #"
TEMPO_LONG_MARKER = "Virtual button Long #"
TEMPO_DOUBLE_MARKER = "Virtual button Double Short #"
ENCODER_MARKER = "Virtual buttons :"
JOYSTICK_BUTTON_MARKER = "Joystick button : #"

MAX_BUTTON_ID = 255


def _parse_fragment(description: str):
    if "<" not in description and "&lt;" in description:
        # still escaped once more than the tokenizer handles
        description = html.unescape(description)
    if not description.strip():
        raise UnrecognizedDescription(description, "empty description")
    try:
        return lxml_html.fragment_fromstring(description, create_parent="div")
    except (etree.ParserError, ValueError) as e:
        raise UnrecognizedDescription(description, str(e)) from e


def _parse_id(text: str) -> int:
    try:
        value = int(text.strip())
    except ValueError:
        raise MalformedIdentifier(text) from None
    if not 0 <= value <= MAX_BUTTON_ID:
        raise MalformedIdentifier(text)
    return value


def parse_button_id(bold_text: str) -> Tuple[int, str]:
    """Parse eg "#1 (E1) ", "#2  - Encoder 2/4" into (id, info).

    SHOULD be called with the text of the FIRST bold node.
    """
    text = bold_text.lstrip()
    if not text.startswith("#"):
        raise MalformedIdentifier(bold_text)
    id_text, _, info = text[1:].partition(" ")
    return _parse_id(id_text), info.strip()


def _text_siblings(element) -> List[str]:
    """Text runs following `element` at its level, cleaned up.

    Whitespace-only runs are kept (as "") so positions stay meaningful.
    """
    texts = []
    node = element
    while node is not None:
        if node.tail is not None:
            texts.append(node.tail.strip())
        node = node.getnext()
    return texts


def _extract_marked_ids(text: str, markers: Sequence[str]) -> Dict[str, int]:
    """Return {marker: id} for each marker present in `text`.

    A value runs from the end of its marker to the next marker found, or the end of text.
    """
    positions = sorted((text.find(m), m) for m in markers if m in text)
    found = {}
    for i, (start, marker) in enumerate(positions):
        end = positions[i + 1][0] if i + 1 < len(positions) else len(text)
        found[marker] = _parse_id(text[start + len(marker):end])
    return found


def _single_text(texts: List[str], description: str, what: str):
    useful = [t for t in texts if t]
    if len(useful) > 1:
        raise UnrecognizedDescription(description, f"{what}: more than one text line")
    return useful[0] if useful else None


def _tempo_kind(texts: List[str], description: str) -> PhysicalButtonKind:
    text = _single_text(texts, description, "TEMPO")
    if text is None:
        raise UnrecognizedDescription(description, "TEMPO without virtual buttons")
    ids = _extract_marked_ids(text, (TEMPO_SHORT_MARKER, TEMPO_LONG_MARKER, TEMPO_DOUBLE_MARKER))
    if set(ids) == {TEMPO_SHORT_MARKER, TEMPO_LONG_MARKER}:
        return Tempo(TempoKind(ids[TEMPO_SHORT_MARKER], ids[TEMPO_LONG_MARKER]))
    if len(ids) == 3:
        return Tempo(TempoKind(ids[TEMPO_SHORT_MARKER], ids[TEMPO_LONG_MARKER], ids[TEMPO_DOUBLE_MARKER]))
    raise UnrecognizedDescription(description, "TEMPO needs Short+Long or Short+Long+Double")


def _encoder_kind(texts: List[str], description: str) -> PhysicalButtonKind:
    # eg "Virtual buttons : #61 / #62"; these are rotation buttons, not shifted ids
    for text in texts:
        if ENCODER_MARKER in text:
            listed = text.split(ENCODER_MARKER, 1)[1]
            ids = tuple(_parse_id(part.strip().lstrip("#")) for part in listed.split("/") if part.strip())
            return Encoder(virtual_ids=ids)
    return Encoder()


def _momentary_kind(texts: List[str], description: str) -> PhysicalButtonKind:
    text = _single_text(texts, description, "momentary")
    if text is None:
        return Momentary()
    ids = _extract_marked_ids(text, (SHIFT1_MARKER, SHIFT2_MARKER))
    if not ids:
        raise UnrecognizedDescription(description, "momentary: unrecognized text")
    return Momentary(shift=ShiftKind(ids.get(SHIFT1_MARKER), ids.get(SHIFT2_MARKER)))


def _pov_kind(texts: List[str], description: str) -> PhysicalButtonKind:
    # eg ["", "POV1  Down"]: the direction line comes after the keyword
    useful = [t for t in texts if t]
    if not useful:
        raise UnrecognizedDescription(description, "Point of view Switch without direction")
    return Pov(direction=useful[-1].split()[-1])


KindRule = namedtuple("KindRule", ["name", "keyword", "build"])

# Evaluated in order, first match wins.
PHYSICAL_KIND_RULES = [
    KindRule("tempo", "TEMPO", _tempo_kind),
    KindRule("encoder", "Encoder", _encoder_kind),
    KindRule("momentary", "Button with momentary action", _momentary_kind),
    KindRule("shift1", " SHIFT1 ", lambda texts, description: Shift1()),
    KindRule("shift2", " SHIFT2 alternate action", lambda texts, description: Shift2()),
    KindRule("pov", "Point of view Switch", _pov_kind),
    KindRule("undefined", "No defined function", lambda texts, description: Undefined()),
    KindRule("microstick_mode_switch", "Microstick Mode Switch", lambda texts, description: MicrostickModeSwitch()),
]


def classify_kind(keyword: str, texts: List[str], description: str = "") -> PhysicalButtonKind:
    """Select the physical kind from the second bold node text and the trailing texts."""
    for rule in PHYSICAL_KIND_RULES:
        if rule.keyword in keyword:
            LOG.debug("keyword %r matched rule %s", keyword, rule.name)
            return rule.build(texts, description)
    raise UnrecognizedDescription(description or keyword, f"unknown keyword {keyword.strip()!r}")


def classify_physical(description: str) -> PhysicalButton:
    root = _parse_fragment(description)
    bold_nodes = list(root.iter("b"))
    if not bold_nodes:
        raise UnrecognizedDescription(description, "no bold node")
    button_id, info = parse_button_id(bold_nodes[0].text_content())
    if len(bold_nodes) == 1:
        raise UnrecognizedDescription(description, "no kind keyword")
    if len(bold_nodes) > 2:
        raise UnrecognizedDescription(description, "more bold nodes than expected")

    keyword = bold_nodes[1].text_content()
    kind = classify_kind(keyword, _text_siblings(bold_nodes[0]), description)
    button = PhysicalButton(id=button_id, kind=kind, info=info, extended_desc=keyword.strip())
    LOG.debug("classified %s", button.describe())
    return button


def parse_virtual_description(description: str) -> Tuple[int, int]:
    """Return (physical_id_hint, virtual_id) from eg "<b>#6 </b> Joystick button : #52"."""
    root = _parse_fragment(description)
    bold_nodes = list(root.iter("b"))
    if not bold_nodes:
        raise UnrecognizedDescription(description, "no bold node")
    physical_id_hint, _ = parse_button_id(bold_nodes[0].text_content())
    text = root.text_content()
    if JOYSTICK_BUTTON_MARKER not in text:
        raise UnrecognizedDescription(description, "no joystick button number")
    virtual_id = _parse_id(text.split(JOYSTICK_BUTTON_MARKER, 1)[1])
    return physical_id_hint, virtual_id
