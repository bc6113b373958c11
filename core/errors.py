"""Errors raised while decoding a report and querying the resulting mapping"""


class MappingError(Exception):
    """Base class for every failure surfaced by stickmap."""


class MalformedReport(MappingError):
    """The report itself could not be read or lacks a required field."""


class UnrecognizedDescription(MappingError):
    def __init__(self, description: str, reason: str = ""):
        self.description = description
        self.reason = reason
        msg = f"the description `{description}` is not handled"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class MalformedIdentifier(MappingError, ValueError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"could not parse a button id from `{text}`")


class MissingParent(MappingError):
    def __init__(self, description: str):
        self.description = description
        super().__init__(f"virtual button `{description}` has no preceding physical button")


class InconsistentParentLink(MappingError):
    def __init__(self, parent_id: int, virtual_id: int, physical_id_hint: int):
        self.parent_id = parent_id
        self.virtual_id = virtual_id
        self.physical_id_hint = physical_id_hint
        super().__init__(
            f"virtual button #{virtual_id} (hint #{physical_id_hint}) "
            f"does not trace back to physical button #{parent_id}"
        )


class ButtonNotFound(MappingError):
    def __init__(self, info_or_user_desc: str):
        self.info_or_user_desc = info_or_user_desc
        super().__init__(f"could not find info_or_user_desc : `{info_or_user_desc}`")


class MissingChildren(MappingError):
    def __init__(self, physical_id: int):
        self.physical_id = physical_id
        super().__init__(f"physical button #{physical_id} has no virtual buttons")


class MissingRecord(MappingError):
    def __init__(self, physical_id: int, available: int):
        self.physical_id = physical_id
        self.available = available
        super().__init__(
            f"no user description for physical button #{physical_id} ({available} records given)"
        )


class MissingColumn(MappingError):
    def __init__(self, physical_id: int, row):
        self.physical_id = physical_id
        self.row = row
        super().__init__(f"user description record for physical button #{physical_id} has no label column: {row!r}")
