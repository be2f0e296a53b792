"""Marker for fields left out of a partial update.

None is a real value in an update (it clears a nullable field), so fields that
were not sent default to UNSET instead.
"""

from dataclasses import fields
from enum import Enum
from typing import Any


class Unset(Enum):
    UNSET = "UNSET"


UNSET = Unset.UNSET


def set_fields(obj: Any) -> dict[str, object]:
    """Return the dataclass fields of obj that are not UNSET."""
    values = {f.name: getattr(obj, f.name) for f in fields(obj)}
    return {k: v for k, v in values.items() if v is not UNSET}
