# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
NOTE TO THE READER:

These containers are the minimal header model the signer needs to read a
request. Callers are free to keep their own header structures and convert at the
boundary with :py:meth:`Fields.from_pairs`.
"""

from __future__ import annotations

from collections import Counter, OrderedDict
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime


class Field:
    """A name-value pair representing a single header in an HTTP request.

    All field names are case insensitive and case-variance must be treated as
    equivalent. Names are preserved as given for transmission.
    """

    def __init__(self, *, name: str, values: Iterable[str] | None = None):
        self.name = name
        self.values: list[str] = list(values) if values is not None else []

    def add(self, value: str) -> None:
        """Append a value to a field."""
        self.values.append(value)

    def as_string(self, delimiter: str = ",") -> str:
        """Get delimited string of all values.

        If the ``Field`` has zero values, the empty string is returned. If the
        ``Field`` has exactly one value, the value is returned unmodified. Values of
        multi-valued fields that contain commas or double quotes are quoted.
        """
        value_count = len(self.values)
        if value_count == 0:
            return ""
        if value_count == 1:
            return self.values[0]
        return delimiter.join(quote_and_escape_field_value(val) for val in self.values)

    def as_header_line(self) -> str:
        """Render the field as a ``Name: value`` header line."""
        return f"{self.name}: {self.as_string()}"

    def __eq__(self, other: object) -> bool:
        """Name and values must match.

        Values order must match.
        """
        if not isinstance(other, Field):
            return False
        return self.name == other.name and self.values == other.values

    def __repr__(self) -> str:
        return f"Field(name={self.name!r}, value={self.values!r})"


class Fields:
    def __init__(self, initial: Iterable[Field] | None = None):
        """Collection of header entries mapped by case-insensitive name.

        :param initial: Initial list of ``Field`` objects. Names must be unique once
        normalized.
        """
        init_fields = list(initial) if initial is not None else []
        init_field_names = [self._normalize_field_name(fld.name) for fld in init_fields]
        fname_counter = Counter(init_field_names)
        repeated_names_exist = (
            len(init_fields) > 0 and fname_counter.most_common(1)[0][1] > 1
        )
        if repeated_names_exist:
            non_unique_names = [name for name, num in fname_counter.items() if num > 1]
            raise ValueError(
                "Field names of the initial list of fields must be unique. The "
                "following normalized field names appear more than once: "
                f"{', '.join(non_unique_names)}."
            )
        self.entries: OrderedDict[str, Field] = OrderedDict(
            zip(init_field_names, init_fields)
        )

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> Fields:
        """Build a collection from ``(name, value)`` pairs, merging repeated names."""
        fields = cls()
        fields.extend(Field(name=name, values=[value]) for name, value in pairs)
        return fields

    def set_field(self, field: Field) -> None:
        """Set or override the entry for ``field.name``."""
        self.entries[self._normalize_field_name(field.name)] = field

    def get(self, key: str, default: Field | None = None) -> Field | None:
        return self[key] if key in self else default

    def __getitem__(self, name: str) -> Field:
        """Retrieve Field entry."""
        return self.entries[self._normalize_field_name(name)]

    def extend(self, other: Iterable[Field] | Iterable[Fields]) -> None:
        """Merges fields into the current ``entries``.

        If the normalized name already exists, the new values are appended to the
        existing ``Field``. Otherwise the ``Field`` is added at the end.
        """
        for item in other:
            for other_field in item if isinstance(item, Fields) else (item,):
                cur_field = self.get(other_field.name)
                if cur_field is None:
                    self.set_field(
                        Field(name=other_field.name, values=other_field.values)
                    )
                    continue
                for other_value in other_field.values:
                    cur_field.add(other_value)

    def _normalize_field_name(self, name: str) -> str:
        return name.lower()

    def __eq__(self, other: object) -> bool:
        """Entries must match in values and order."""
        if not isinstance(other, Fields):
            return False
        return self.entries == other.entries

    def __iter__(self) -> Iterator[Field]:
        yield from self.entries.values()

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"Fields({self.entries})"

    def __contains__(self, key: str) -> bool:
        return self._normalize_field_name(key) in self.entries


@dataclass(kw_only=True, frozen=True)
class SigningRequest:
    """An outbound request that has been fully assembled but not yet sent."""

    destination: str
    """Authority, path and query of the target, for example
    ``service.region.example.com/path?query``. No scheme."""

    provider: str
    """Either a bare provider name or a ``PREFIX:FULLNAME`` pair."""

    method: str | None = None
    """HTTP method. ``None`` signs as ``POST``."""

    fields: Fields = field(default_factory=Fields)
    """Headers already present on the request. The signer only reads them."""

    body: bytes = b""
    """Request payload."""

    timestamp: datetime | None = None
    """Signing instant. The current UTC time is captured when unset."""

    @classmethod
    def from_url(cls, url: str, **kwargs) -> SigningRequest:
        """Build a request from a full URL, dropping any ``scheme://`` prefix."""
        _, sep, rest = url.partition("://")
        return cls(destination=rest if sep else url, **kwargs)


def quote_and_escape_field_value(value: str) -> str:
    """Escapes and quotes a single :class:`Field` value if necessary.

    See :func:`Field.as_string` for quoting and escaping logic.
    """
    chars_to_quote = (",", '"')
    if any(char in chars_to_quote for char in value):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    else:
        return value
