"""Field descriptor tables for option types.

Every :class:`OptionSet` subclass gets a :class:`DescriptorTable` when the
class is created.  The table lists each wire field in declaration order with
its kind and the attribute path used to read it.  Fields of embedded option
groups are spliced in at the position of the embedding field, so the encoder
never has to recurse and a wire key used twice is caught at class creation.
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Tuple, Union, get_args, get_origin

from pydantic import BaseModel

from tgwire.exceptions import ConfigurationError
from tgwire.files import InputFile
from tgwire.markup import ReplyMarkupBase


class FieldKind(str, Enum):
    SCALAR = "scalar"
    COMPOSITE = "composite"
    RECURSIVE = "recursive"
    MARKUP = "markup"
    FILE = "file"


@dataclass(frozen=True)
class FieldDescriptor:
    """One wire field of an option type.

    Attributes:
        wire_key: Parameter name expected by the Bot API.
        kind: How the value is encoded.
        path: Attribute names leading from the outer options value to the field.
        omit_zero: When true any falsy value counts as unset; otherwise only ``None`` does.
    """

    wire_key: str
    kind: FieldKind
    path: Tuple[str, ...]
    omit_zero: bool = True

    def read(self, option_set: BaseModel) -> Any:
        value: Any = option_set
        for name in self.path:
            value = getattr(value, name)
        return value


@dataclass(frozen=True)
class ExclusiveGroup:
    """A group whose attribute *sides* are mutually exclusive; exactly one must be filled."""

    owner: str
    path: Tuple[str, ...]
    sides: Tuple[Tuple[str, ...], ...]


@dataclass(frozen=True)
class DescriptorTable:
    descriptors: Tuple[FieldDescriptor, ...] = ()
    exclusive_groups: Tuple[ExclusiveGroup, ...] = ()

    @property
    def wire_keys(self) -> Tuple[str, ...]:
        return tuple(descriptor.wire_key for descriptor in self.descriptors)


_SCALAR_TYPES = (bool, int, float, str)
_CONTAINER_TYPES = (list, tuple, dict)


def is_unset(value: Any, omit_zero: bool = True) -> bool:
    """Return True when *value* means "not specified"."""
    if value is None:
        return True
    if not omit_zero or isinstance(value, BaseModel):
        return False
    return not value


def _members(annotation: Any) -> Tuple[Any, ...]:
    if get_origin(annotation) in (Union, types.UnionType):
        return tuple(arg for arg in get_args(annotation) if arg is not type(None))
    return (annotation,)


def _is_subclass(member: Any, base: type) -> bool:
    return isinstance(member, type) and issubclass(member, base)


def _is_scalar(member: Any) -> bool:
    return member in _SCALAR_TYPES or _is_subclass(member, Enum)


def _is_composite(member: Any) -> bool:
    if member in _CONTAINER_TYPES or get_origin(member) in _CONTAINER_TYPES:
        return True
    return _is_subclass(member, BaseModel)


def classify(annotation: Any, field: str) -> FieldKind:
    """Map a field annotation to its :class:`FieldKind`.

    Raises:
        ConfigurationError: For annotations the encoder can't put on the wire.
    """
    members = _members(annotation)
    if get_origin(annotation) in (Union, types.UnionType) and any(_is_subclass(member, OptionSet) for member in members):
        raise ConfigurationError("embedded option groups can't be optional", field=field)
    if all(_is_subclass(member, ReplyMarkupBase) for member in members):
        return FieldKind.MARKUP
    if all(_is_subclass(member, InputFile) for member in members):
        return FieldKind.FILE
    if len(members) == 1 and _is_subclass(members[0], OptionSet):
        return FieldKind.RECURSIVE
    if all(_is_scalar(member) for member in members):
        return FieldKind.SCALAR
    if all(_is_scalar(member) or _is_composite(member) for member in members):
        if any(_is_subclass(member, (OptionSet, ReplyMarkupBase, InputFile)) for member in members):
            raise ConfigurationError(f"cannot mix option groups, markups or files with other types in {annotation!r}", field=field)
        return FieldKind.COMPOSITE
    raise ConfigurationError(f"unsupported field type {annotation!r}", field=field)


def build_descriptor_table(cls: type) -> DescriptorTable:
    """Build the descriptor table of option type *cls*.

    Embedded groups contribute their own (already built) tables with the
    embedding attribute prefixed to every path.

    Raises:
        ConfigurationError: On an unsupported field type or a wire key that
            appears more than once after splicing.
    """
    descriptors = []
    exclusive_groups = []
    for side in cls.exclusive_sides:
        for attr in side:
            if attr not in cls.model_fields:
                raise ConfigurationError(f"exclusive side names an unknown attribute of {cls.__name__}", field=attr)
    if cls.exclusive_sides:
        exclusive_groups.append(ExclusiveGroup(owner=cls.__name__, path=(), sides=cls.exclusive_sides))

    for name, info in cls.model_fields.items():
        kind = classify(info.annotation, name)
        if kind is FieldKind.RECURSIVE:
            group_table: DescriptorTable = _members(info.annotation)[0].descriptor_table
            descriptors.extend(
                FieldDescriptor(d.wire_key, d.kind, (name,) + d.path, d.omit_zero) for d in group_table.descriptors
            )
            exclusive_groups.extend(
                ExclusiveGroup(owner=g.owner, path=(name,) + g.path, sides=g.sides) for g in group_table.exclusive_groups
            )
            continue
        descriptors.append(
            FieldDescriptor(
                wire_key=info.alias or name,
                kind=kind,
                path=(name,),
                omit_zero=info.default is not None,
            )
        )

    owners: Dict[str, Tuple[str, ...]] = {}
    for descriptor in descriptors:
        if descriptor.wire_key in owners:
            first = ".".join(owners[descriptor.wire_key])
            raise ConfigurationError(
                f"wire key declared by both {first} and {'.'.join(descriptor.path)} in {cls.__name__}",
                field=descriptor.wire_key,
            )
        owners[descriptor.wire_key] = descriptor.path

    return DescriptorTable(tuple(descriptors), tuple(exclusive_groups))


class OptionSet(BaseModel):
    """Base class of every options bundle.

    Subclasses declare optional fields with zero defaults.  A field typed as
    another :class:`OptionSet` is an embedded group whose fields are flattened
    into the parent on the wire.  Set ``exclusive_sides`` to a tuple of
    attribute-name tuples when exactly one side must be filled.
    """

    descriptor_table: ClassVar[DescriptorTable] = DescriptorTable()
    exclusive_sides: ClassVar[Tuple[Tuple[str, ...], ...]] = ()

    model_config = {"populate_by_name": True, "frozen": True}

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        cls.descriptor_table = build_descriptor_table(cls)
