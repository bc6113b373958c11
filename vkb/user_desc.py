"""User provided descriptions: overlay a human label on each physical button, by line

The source is a two column table (line, label), one record per physical line in
report order, eg a csv like

  line,desc
  1,Encoder push
  2,
  3,Thumb red button
"""
import csv
import logging
from typing import List, Sequence

from core.errors import MissingColumn, MissingRecord

LOG = logging.getLogger("stickmap.user_desc")


def load_user_descriptions(path: str) -> List[List[str]]:
    """Read the records of a csv file; the first row is a header."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        rows = list(csv.reader(f))
    return rows[1:]


def inject_user_descriptions(mapping, rows: Sequence[Sequence[str]]):
    """Set `user_desc` of every physical parent from record number `id - 1`.

    Every parent is checked against its record first, so a missing record or
    column leaves the mapping untouched. The label is stored as given.
    MUST be done before the mapping is queried.
    """
    labels = []
    for button in mapping.parent_buttons():
        index = button.id - 1
        if index < 0 or index >= len(rows):
            raise MissingRecord(button.id, len(rows))
        row = rows[index]
        if len(row) < 2:
            raise MissingColumn(button.id, row)
        labels.append((button, row[1]))

    for button, label in labels:
        if label != button.user_desc:
            LOG.debug("physical button #%d user_desc %r -> %r", button.id, button.user_desc, label)
        button.user_desc = label
