"""Button models: physical controls, the virtual buttons they produce, and their kinds

These are built from a joystick configuration report, NOT from an exported game mapping.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class ShiftKind:
    """Virtual ids produced when the button is pressed with SHIFT1 and/or SHIFT2 held."""
    button_id_shift1: Optional[int] = None
    button_id_shift2: Optional[int] = None

    def __post_init__(self):
        if self.button_id_shift1 is None and self.button_id_shift2 is None:
            raise ValueError("ShiftKind needs at least one shifted virtual id")

    @property
    def name(self) -> str:
        if self.button_id_shift1 is not None and self.button_id_shift2 is not None:
            return "Shift12"
        if self.button_id_shift1 is not None:
            return "Shift1"
        return "Shift2"

    def describe(self) -> str:
        ids = [i for i in (self.button_id_shift1, self.button_id_shift2) if i is not None]
        return f"{self.name}[{'/'.join(str(i) for i in ids)}]"


@dataclass(frozen=True)
class TempoKind:
    """Virtual ids for a short press, a long press and (Tempo3 only) a double press."""
    button_id_short: int
    button_id_long: int
    button_id_double: Optional[int] = None

    @property
    def name(self) -> str:
        return "Tempo2" if self.button_id_double is None else "Tempo3"

    def describe(self) -> str:
        ids = [self.button_id_short, self.button_id_long]
        if self.button_id_double is not None:
            ids.append(self.button_id_double)
        return f"{self.name}[{'/'.join(str(i) for i in ids)}]"


# Physical button kinds; a physical button has exactly one of these.

@dataclass(frozen=True)
class Momentary:
    """The standard button ("Button with momentary action"), optionally shifted."""
    shift: Optional[ShiftKind] = None

    def describe(self) -> str:
        return "Momentary" if self.shift is None else f"Momentary {self.shift.describe()}"


@dataclass(frozen=True)
class Encoder:
    """Rotary encoder; virtual_ids are the rotation buttons listed next to it."""
    virtual_ids: Tuple[int, ...] = ()

    def describe(self) -> str:
        return f"Encoder[{'/'.join(str(i) for i in self.virtual_ids)}]"


@dataclass(frozen=True)
class Tempo:
    tempo: TempoKind

    def describe(self) -> str:
        return self.tempo.describe()


@dataclass(frozen=True)
class Shift1:
    """The SHIFT1 modifier button itself."""

    def describe(self) -> str:
        return "SHIFT1"


@dataclass(frozen=True)
class Shift2:
    """The SHIFT2 modifier button itself."""

    def describe(self) -> str:
        return "SHIFT2"


@dataclass(frozen=True)
class Pov:
    """One direction of a "Point of view Switch", eg "Up", "Left"."""
    direction: str

    def describe(self) -> str:
        return f"POV {self.direction}"


@dataclass(frozen=True)
class Undefined:
    """Button reported with "No defined function"."""

    def describe(self) -> str:
        return "Undefined"


@dataclass(frozen=True)
class MicrostickModeSwitch:
    def describe(self) -> str:
        return "MicrostickModeSwitch"


PhysicalButtonKind = Union[Momentary, Encoder, Tempo, Shift1, Shift2, Pov, Undefined, MicrostickModeSwitch]


@dataclass
class PhysicalButton:
    id: int
    kind: PhysicalButtonKind
    info: str = ""
    extended_desc: str = ""
    user_desc: str = ""  # set by the user description injector only

    def describe(self) -> str:
        label = self.info or self.user_desc or "-"
        return f"PhysicalButton[#{self.id} {label} ({self.kind.describe()})]"


class VirtualShiftKind(Enum):
    SHIFT1 = "shift1"
    SHIFT2 = "shift2"


class VirtualTempoKind(Enum):
    SHORT = "short"
    LONG = "long"
    DOUBLE = "double"


@dataclass(frozen=True)
class VirtualMomentary:
    shift: Optional[VirtualShiftKind] = None

    def describe(self) -> str:
        return "Momentary" if self.shift is None else f"Momentary+{self.shift.name}"


@dataclass(frozen=True)
class VirtualTempo:
    tempo: VirtualTempoKind

    def describe(self) -> str:
        return f"Tempo {self.tempo.name}"


VirtualButtonKind = Union[VirtualMomentary, VirtualTempo]


@dataclass(frozen=True)
class VirtualButton:
    """The button id delivered to the game, and how it is reached from its physical parent."""
    id: int
    kind: VirtualButtonKind = field(default_factory=VirtualMomentary)

    def describe(self) -> str:
        return f"VirtualButton[#{self.id} ({self.kind.describe()})]"


class SpecialButtonKind(Enum):
    """A physical button acting only as a held modifier; looked up by label."""
    SHIFT1 = "shift1"
    SHIFT2 = "shift2"
