"""Mapping graph: physical buttons owning their virtual buttons, and the queries run against it"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union

from core.buttons import PhysicalButton, SpecialButtonKind, VirtualButton
from core.errors import ButtonNotFound, MissingChildren
from vkb.user_desc import inject_user_descriptions

LOG = logging.getLogger("stickmap.mapper")

DEFAULT_LOGICAL_BUTTONS = 128

VirtualButtonOrSpecial = Union[VirtualButton, SpecialButtonKind]


@dataclass
class PhysicalNode:
    button: PhysicalButton
    children: List[VirtualButton] = field(default_factory=list)


class JoystickButtonsMapping:
    """Built once from a report, optionally given user descriptions, then only queried.

    The node list is authoritative; `virtual_to_parents` is an index derived from it
    and rebuilt on demand.
    """

    def __init__(self, logical_buttons: int = DEFAULT_LOGICAL_BUTTONS):
        self.logical_buttons = logical_buttons
        self.nodes: List[PhysicalNode] = []
        self.special_buttons: Dict[str, SpecialButtonKind] = {}
        self._virtual_index: Optional[Dict[int, List[PhysicalButton]]] = None

    def add_physical(self, button: PhysicalButton) -> PhysicalNode:
        node = PhysicalNode(button)
        self.nodes.append(node)
        return node

    def link(self, node: PhysicalNode, virtual: VirtualButton):
        node.children.append(virtual)
        self._virtual_index = None

    def add_special(self, label: str, kind: SpecialButtonKind):
        self.special_buttons[label] = kind

    def reindex(self) -> Dict[int, List[PhysicalButton]]:
        index: Dict[int, List[PhysicalButton]] = {}
        for node in self.nodes:
            for child in node.children:
                index.setdefault(child.id, []).append(node.button)
        self._virtual_index = index
        return index

    @property
    def virtual_to_parents(self) -> Dict[int, List[PhysicalButton]]:
        if self._virtual_index is None:
            return self.reindex()
        return self._virtual_index

    @property
    def physical_to_children(self) -> Dict[int, List[VirtualButton]]:
        view: Dict[int, List[VirtualButton]] = {}
        for node in self.nodes:
            if node.children:
                view.setdefault(node.button.id, []).extend(node.children)
        return view

    def parents_of(self, virtual_id: int) -> List[PhysicalButton]:
        return self.virtual_to_parents.get(virtual_id, [])

    def physical_buttons(self) -> List[PhysicalButton]:
        return [node.button for node in self.nodes]

    def parent_buttons(self) -> List[PhysicalButton]:
        """Physical buttons recorded as a parent in `virtual_to_parents`, lowest id first."""
        unique = {}
        for parents in self.virtual_to_parents.values():
            for parent in parents:
                unique.setdefault(id(parent), parent)
        return sorted(unique.values(), key=lambda b: b.id)

    def get_virtual_buttons(self, info_or_user_desc: str) -> List[VirtualButtonOrSpecial]:
        """Lookup by label: the label printed on the device ("info") or one given by the user.

        SHIFT1/SHIFT2 buttons usually have no virtual button at all, so they are
        answered from `special_buttons` directly.
        """
        special = self.special_buttons.get(info_or_user_desc)
        if special is not None:
            return [special]

        if info_or_user_desc:
            # lowest physical id wins when several buttons share a label
            for parent in self.parent_buttons():
                if info_or_user_desc in (parent.info, parent.user_desc):
                    children = self.physical_to_children.get(parent.id)
                    if not children:
                        raise MissingChildren(parent.id)
                    return list(children)

        raise ButtonNotFound(info_or_user_desc)

    def free_virtual_button_ids(self) -> List[int]:
        """Ids nobody produces; physical lines occupy an id too, even when remapped."""
        taken = set(self.virtual_to_parents) | set(self.physical_to_children)
        return [i for i in range(1, self.logical_buttons + 1) if i not in taken]

    def log_free_virtual_buttons(self) -> List[int]:
        free = self.free_virtual_button_ids()
        LOG.info("free virtual buttons [%d/%d] : %s", len(free), self.logical_buttons, free)
        return free

    def duplicated_virtual_buttons(self) -> Dict[int, List[PhysicalButton]]:
        """Virtual ids produced by more than one physical path: wasted, but valid."""
        return {vid: parents for vid, parents in sorted(self.virtual_to_parents.items()) if len(parents) > 1}

    def inject_user_descriptions(self, rows: Sequence[Sequence[str]]):
        inject_user_descriptions(self, rows)

    def describe(self) -> str:
        lines = []
        for node in self.nodes:
            children = ", ".join(c.describe() for c in node.children) or "-"
            lines.append(f"{node.button.describe()} -> {children}")
        for label, kind in self.special_buttons.items():
            lines.append(f"special {label!r} -> {kind.name}")
        return "\n".join(lines)
