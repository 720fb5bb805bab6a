"""Options-to-wire encoding.

:func:`encode` walks the descriptor table of an options value and returns an
ordered ``wire key -> value`` mapping.  Values are either text (decimal
numbers, ``"true"``/``"false"``, JSON for structured fields) or a
:class:`~tgwire.files.FilePart` still waiting for its bytes.  The encoder is
pure: it reads no files and keeps no state between calls.
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Union

from pydantic_core import to_json

from tgwire.exceptions import ConfigurationError
from tgwire.files import FilePart, InputFile, check_file, resolve_file
from tgwire.markup import ReplyMarkupBase, encode_markup
from tgwire.schema import ExclusiveGroup, FieldKind, OptionSet, is_unset

logger = logging.getLogger("tgwire.encoder")

WireValue = Union[str, FilePart]
WireMapping = Dict[str, WireValue]


# ── Value formatting ─────────────────────────────────────────────────────────


def _format_float(value: float, field: str) -> str:
    if not math.isfinite(value):
        raise ConfigurationError(f"non-finite number {value!r}", field=field)
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_scalar(value: Any, field: str) -> str:
    """Render a scalar the way the Bot API expects it in a form field."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value, field)
    return str(value)


def to_json_text(value: Any) -> str:
    """Compact JSON for lists, dicts and records; unset (``None``) members are dropped."""
    return to_json(value, by_alias=True, exclude_none=True).decode("utf-8")


def encode_value(wire_key: str, value: Any) -> WireValue:
    """Encode one standalone parameter, such as a required argument of a call.

    Raises:
        ConfigurationError: If *value* is ``None``, an options bundle, or an
            empty file attachment.
    """
    if value is None:
        raise ConfigurationError("a value is required", field=wire_key)
    if isinstance(value, InputFile):
        check_file(value, wire_key)
        return resolve_file(value, wire_key)
    if isinstance(value, ReplyMarkupBase):
        return encode_markup(value)
    if isinstance(value, OptionSet):
        raise ConfigurationError("options bundles are encoded with encode(), not as a single value", field=wire_key)
    if isinstance(value, (bool, int, float, str, Enum)):
        return format_scalar(value, wire_key)
    return to_json_text(value)


# ── Validation ───────────────────────────────────────────────────────────────


def _check_exclusive(option_set: OptionSet, group: ExclusiveGroup) -> None:
    holder: Any = option_set
    for name in group.path:
        holder = getattr(holder, name)
    label = ".".join(group.path) or group.owner
    described = " or ".join("(" + ", ".join(side) + ")" for side in group.sides)

    filled = [side for side in group.sides if any(not is_unset(getattr(holder, attr)) for attr in side)]
    if len(filled) != 1:
        state = "none" if not filled else "more than one"
        raise ConfigurationError(f"exactly one of {described} must be set, got {state}", field=label)

    missing = [attr for attr in filled[0] if is_unset(getattr(holder, attr))]
    if missing:
        raise ConfigurationError(f"{', '.join(missing)} must be set together with {', '.join(filled[0])}", field=label)


def validate(option_set: OptionSet) -> None:
    """Check union invariants of *option_set* without encoding anything.

    Raises:
        ConfigurationError: If *option_set* is not an options bundle, an
            exclusive group has zero or several sides filled (or a filled side
            is incomplete), or a file attachment is empty.
    """
    if not isinstance(option_set, OptionSet):
        raise ConfigurationError(f"expected an OptionSet, got {type(option_set).__name__}")
    table = type(option_set).descriptor_table
    for group in table.exclusive_groups:
        _check_exclusive(option_set, group)
    for descriptor in table.descriptors:
        if descriptor.kind is FieldKind.FILE:
            attachment = descriptor.read(option_set)
            if attachment is not None:
                check_file(attachment, descriptor.wire_key)


# ── Encoding ─────────────────────────────────────────────────────────────────


def encode(option_set: OptionSet) -> WireMapping:
    """Encode *option_set* into an ordered wire mapping.

    Fields come out in declaration order, with embedded groups spliced in
    where they are declared.  Unset fields are left out.

    Raises:
        ConfigurationError: See :func:`validate`.
    """
    validate(option_set)

    mapping: WireMapping = {}
    for descriptor in type(option_set).descriptor_table.descriptors:
        value = descriptor.read(option_set)
        if descriptor.kind is FieldKind.MARKUP:
            if value is not None:
                mapping[descriptor.wire_key] = encode_markup(value)
        elif descriptor.kind is FieldKind.FILE:
            if value is not None:
                mapping[descriptor.wire_key] = resolve_file(value, descriptor.wire_key)
        elif not is_unset(value, descriptor.omit_zero):
            if descriptor.kind is FieldKind.SCALAR:
                mapping[descriptor.wire_key] = format_scalar(value, descriptor.wire_key)
            else:
                mapping[descriptor.wire_key] = to_json_text(value)

    logger.debug(
        "Options encoded",
        extra={"options_type": type(option_set).__name__, "wire_keys": list(mapping)},
    )
    return mapping


def merge_mappings(*mappings: WireMapping) -> WireMapping:
    """Concatenate wire mappings, refusing duplicate keys.

    Raises:
        ConfigurationError: If a key appears in more than one mapping.
    """
    merged: WireMapping = {}
    for mapping in mappings:
        for key, value in mapping.items():
            if key in merged:
                raise ConfigurationError("parameter given twice", field=key)
            merged[key] = value
    return merged
