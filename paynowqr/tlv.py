"""Helpers to build EMV-style TLV fields."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

MAX_VALUE_LENGTH = 99


def encode_field(tag: str, value: str) -> str:
    """Serialize a single ``tag + 2-digit length + value`` field."""

    if len(tag) != 2:
        raise ValueError(f"TLV tag must be 2 characters, got {tag!r}")
    if len(value) > MAX_VALUE_LENGTH:
        raise ValueError(f"TLV value for tag {tag} exceeds {MAX_VALUE_LENGTH} characters")
    return f"{tag}{len(value):02d}{value}"


@dataclass(frozen=True)
class TLVItem:
    tag: str
    value: str

    def serialize(self) -> str:
        return encode_field(self.tag, self.value)


def build_tlv(items: Iterable[TLVItem]) -> str:
    """Serialize iterable of TLV items into EMV string, preserving order."""

    return "".join(item.serialize() for item in items)
