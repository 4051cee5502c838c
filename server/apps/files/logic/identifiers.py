"""Parsing of record ids and parent references received from clients."""

from dataclasses import dataclass
from typing import Final, final

from server.apps.files.models import ROOT_PARENT_ID

# Largest id a BigAutoField can hold
_MAX_RECORD_ID: Final = 2**63 - 1


def parse_record_id(raw_id: object) -> int:
    """Parse a record id received as a path or body value.

    Args:
        raw_id: Value from the client (usually a string).

    Returns:
        Positive integer id.

    Raises:
        ValueError: If the value is not a well-formed record id.
    """
    if isinstance(raw_id, bool):
        raise ValueError(f'Malformed record id: {raw_id!r}')
    if isinstance(raw_id, int):
        record_id = raw_id
    elif isinstance(raw_id, str) and raw_id.isascii() and raw_id.isdigit():
        record_id = int(raw_id)
    else:
        raise ValueError(f'Malformed record id: {raw_id!r}')

    if not 0 < record_id <= _MAX_RECORD_ID:
        raise ValueError(f'Record id out of range: {raw_id!r}')
    return record_id


@final
@dataclass(frozen=True, slots=True)
class ParentRef:
    """Reference to the container of a record: root or a folder.

    On the wire and in the database both cases share one scalar, where
    ``0`` means root. Inside the app this type keeps "no parent" apart
    from a real folder id.
    """

    folder_id: int | None = None

    @property
    def is_root(self) -> bool:
        """Whether this refers to the top of the hierarchy."""
        return self.folder_id is None

    def to_wire(self) -> int:
        """Scalar used in the database column and JSON payloads."""
        if self.folder_id is None:
            return ROOT_PARENT_ID
        return self.folder_id

    @classmethod
    def root(cls) -> 'ParentRef':
        """Reference to the root."""
        return cls()

    @classmethod
    def folder(cls, folder_id: int) -> 'ParentRef':
        """Reference to the folder with the given id."""
        return cls(folder_id=folder_id)

    @classmethod
    def from_wire(cls, raw_parent_id: object) -> 'ParentRef':
        """Build a reference from a client-supplied value.

        Missing values, ``0`` and ``'0'`` all mean root.

        Args:
            raw_parent_id: Value from a JSON body or query string.

        Returns:
            Parsed reference.

        Raises:
            ValueError: If the value is neither root nor a record id.
        """
        if raw_parent_id in (None, '', ROOT_PARENT_ID, str(ROOT_PARENT_ID)):
            return cls.root()
        return cls.folder(parse_record_id(raw_parent_id))
