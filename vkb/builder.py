"""Button graph builder: fold the ordered report entries into a JoystickButtonsMapping

Virtual entries carry no explicit reference to their physical button: they belong
to the last physical entry seen before them. The fold carries that parent along
with the mapping being built.
"""
import functools
import logging
from typing import Iterable, NamedTuple, Optional

from core.buttons import (
    Encoder,
    Momentary,
    PhysicalButton,
    Shift1,
    Shift2,
    SpecialButtonKind,
    Tempo,
    VirtualButton,
    VirtualButtonKind,
    VirtualMomentary,
    VirtualShiftKind,
    VirtualTempo,
    VirtualTempoKind,
)
from core.errors import InconsistentParentLink, MissingParent
from core.report import EntryKind, ReportEntry
from mapper import DEFAULT_LOGICAL_BUTTONS, JoystickButtonsMapping, PhysicalNode
from vkb.classifier import classify_physical, parse_virtual_description

LOG = logging.getLogger("stickmap.builder")


class BuildState(NamedTuple):
    mapping: JoystickButtonsMapping
    parent: Optional[PhysicalNode] = None


def virtual_kind_for(parent: PhysicalButton, candidate: int) -> Optional[VirtualButtonKind]:
    """How `candidate` is reached from `parent`, or None if the parent does not declare it."""
    kind = parent.kind
    if isinstance(kind, Tempo):
        tempo = kind.tempo
        if candidate == tempo.button_id_short:
            return VirtualTempo(VirtualTempoKind.SHORT)
        if candidate == tempo.button_id_long:
            return VirtualTempo(VirtualTempoKind.LONG)
        if tempo.button_id_double is not None and candidate == tempo.button_id_double:
            return VirtualTempo(VirtualTempoKind.DOUBLE)
    if isinstance(kind, Momentary) and kind.shift is not None:
        if candidate == kind.shift.button_id_shift1:
            return VirtualMomentary(VirtualShiftKind.SHIFT1)
        if candidate == kind.shift.button_id_shift2:
            return VirtualMomentary(VirtualShiftKind.SHIFT2)
    if isinstance(kind, Encoder) and candidate in kind.virtual_ids:
        return VirtualMomentary()
    if candidate == parent.id:
        return VirtualMomentary()
    return None


def classify_virtual(parent: PhysicalButton, virtual_id: int, physical_id_hint: int) -> VirtualButtonKind:
    for candidate in (virtual_id, physical_id_hint):
        kind = virtual_kind_for(parent, candidate)
        if kind is not None:
            return kind
    raise InconsistentParentLink(parent.id, virtual_id, physical_id_hint)


def _on_physical(state: BuildState, entry: ReportEntry) -> BuildState:
    button = classify_physical(entry.description)
    mapping = state.mapping

    if any(node.button.id == button.id for node in mapping.nodes):
        LOG.warning("physical line #%d appears more than once in the report", button.id)

    if isinstance(button.kind, (Shift1, Shift2)):
        special = SpecialButtonKind.SHIFT1 if isinstance(button.kind, Shift1) else SpecialButtonKind.SHIFT2
        if button.info:
            mapping.add_special(button.info, special)
            LOG.debug("special button %r -> %s", button.info, special.name)
        else:
            LOG.warning("%s button #%d has no label, it can not be looked up", special.name, button.id)

    node = mapping.add_physical(button)
    return state._replace(parent=node)


def _report_number(number: str) -> Optional[int]:
    try:
        return int(number.strip())
    except ValueError:
        return None


def _on_virtual(state: BuildState, entry: ReportEntry) -> BuildState:
    if state.parent is None:
        raise MissingParent(entry.description)

    physical_id_hint, virtual_id = parse_virtual_description(entry.description)
    if entry.number is not None and _report_number(entry.number) != virtual_id:
        LOG.warning("virtual button #%d is numbered %r in the report", virtual_id, entry.number)

    node = state.parent
    parent = node.button
    kind = classify_virtual(parent, virtual_id, physical_id_hint)
    mapping = state.mapping

    owners = mapping.parents_of(virtual_id)
    if owners:
        LOG.warning(
            "duplicated virtual button #%d: already produced by %s, now also by %s",
            virtual_id, ", ".join(p.describe() for p in owners), parent.describe(),
        )
    if node.children:
        LOG.debug("physical button #%d already drives %s", parent.id, [c.id for c in node.children])
    if virtual_id == parent.id:
        LOG.debug("virtual button #%d has the id of its physical line", virtual_id)

    mapping.link(node, VirtualButton(virtual_id, kind))
    return state


def fold_entry(state: BuildState, entry: ReportEntry) -> BuildState:
    if entry.kind is EntryKind.PHYSICAL:
        return _on_physical(state, entry)
    return _on_virtual(state, entry)


def build_mapping(entries: Iterable[ReportEntry], logical_buttons: int = DEFAULT_LOGICAL_BUTTONS) -> JoystickButtonsMapping:
    """Build the whole graph from one report; raises on the first entry that can not be placed."""
    state = functools.reduce(fold_entry, entries, BuildState(JoystickButtonsMapping(logical_buttons)))
    mapping = state.mapping
    LOG.info(
        "built mapping: %d physical buttons, %d virtual buttons, %d special buttons",
        len(mapping.nodes), len(mapping.virtual_to_parents), len(mapping.special_buttons),
    )
    duplicated = mapping.duplicated_virtual_buttons()
    if duplicated:
        LOG.warning("%d virtual buttons are produced by more than one physical button: %s", len(duplicated), sorted(duplicated))
    return mapping
