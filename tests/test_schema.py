"""Tests for descriptor tables built from option types."""

import dataclasses
import sys
import os
from typing import List, Optional, Union

import pytest
from pydantic import Field

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tgwire.exceptions import ConfigurationError
from tgwire.files import InputFile
from tgwire.markup import InlineKeyboardMarkup, ReplyMarkup
from tgwire.models import MessageEntity, ParseMode
from tgwire.options import (
    AudioOptions,
    BaseOptions,
    CallbackQueryOptions,
    LocationOptions,
    MessageOptions,
    MessageTarget,
    PhotoOptions,
)
from tgwire.schema import FieldKind, OptionSet, classify, is_unset


# ── classify ─────────────────────────────────────────────────────────────────


class TestClassify:
    """Annotation → field kind mapping."""

    def test_scalars(self) -> None:
        assert classify(bool, "f") is FieldKind.SCALAR
        assert classify(int, "f") is FieldKind.SCALAR
        assert classify(str, "f") is FieldKind.SCALAR
        assert classify(Optional[float], "f") is FieldKind.SCALAR
        assert classify(Optional[ParseMode], "f") is FieldKind.SCALAR
        assert classify(Union[int, str], "f") is FieldKind.SCALAR

    def test_composites(self) -> None:
        assert classify(List[MessageEntity], "f") is FieldKind.COMPOSITE
        assert classify(Optional[MessageEntity], "f") is FieldKind.COMPOSITE
        assert classify(list, "f") is FieldKind.COMPOSITE

    def test_markup(self) -> None:
        assert classify(Optional[ReplyMarkup], "f") is FieldKind.MARKUP
        assert classify(Optional[InlineKeyboardMarkup], "f") is FieldKind.MARKUP

    def test_file(self) -> None:
        assert classify(Optional[InputFile], "f") is FieldKind.FILE

    def test_group(self) -> None:
        assert classify(BaseOptions, "f") is FieldKind.RECURSIVE

    def test_unsupported(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            classify(bytes, "blob")
        assert exc_info.value.field == "blob"

    def test_file_mixed_with_text_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            classify(Union[InputFile, str], "thumb")


# ── Built tables ─────────────────────────────────────────────────────────────


class TestDescriptorTable:
    """Tables of the shipped option types."""

    def test_group_fields_spliced_in_declaration_order(self) -> None:
        assert MessageOptions.descriptor_table.wire_keys == (
            "disable_notification",
            "reply_to_message_id",
            "allow_sending_without_reply",
            "reply_markup",
            "parse_mode",
            "entities",
            "disable_web_page_preview",
        )

    def test_spliced_paths(self) -> None:
        first = MessageOptions.descriptor_table.descriptors[0]
        assert first.path == ("base", "disable_notification")
        assert first.kind is FieldKind.SCALAR

    def test_kinds(self) -> None:
        kinds = {d.wire_key: d.kind for d in AudioOptions.descriptor_table.descriptors}
        assert kinds["reply_markup"] is FieldKind.MARKUP
        assert kinds["thumb"] is FieldKind.FILE
        assert kinds["caption_entities"] is FieldKind.COMPOSITE
        assert kinds["duration"] is FieldKind.SCALAR
        assert kinds["parse_mode"] is FieldKind.SCALAR

    def test_no_recursive_descriptors_remain(self) -> None:
        for cls in (MessageOptions, PhotoOptions, AudioOptions, LocationOptions):
            assert all(d.kind is not FieldKind.RECURSIVE for d in cls.descriptor_table.descriptors)

    def test_omit_zero_follows_declared_default(self) -> None:
        flags = {d.wire_key: d.omit_zero for d in LocationOptions.descriptor_table.descriptors}
        assert flags["horizontal_accuracy"] is False
        assert flags["live_period"] is True
        cache_time = CallbackQueryOptions.descriptor_table.descriptors[-1]
        assert cache_time.wire_key == "cache_time"
        assert cache_time.omit_zero is False

    def test_exclusive_sides_recorded(self) -> None:
        groups = MessageTarget.descriptor_table.exclusive_groups
        assert len(groups) == 1
        assert groups[0].path == ()
        assert groups[0].sides == (("chat_id", "message_id"), ("inline_message_id",))

    def test_tables_are_read_only(self) -> None:
        descriptor = PhotoOptions.descriptor_table.descriptors[0]
        with pytest.raises(dataclasses.FrozenInstanceError):
            descriptor.wire_key = "other"  # type: ignore[misc]

    def test_table_untouched_by_instances(self) -> None:
        table = PhotoOptions.descriptor_table
        PhotoOptions(caption="x")
        assert PhotoOptions.descriptor_table is table

    def test_alias_used_as_wire_key(self) -> None:
        class Aliased(OptionSet):
            from_chat: int = Field(0, alias="from_chat_id")

        assert Aliased.descriptor_table.wire_keys == ("from_chat_id",)

    def test_nested_exclusive_group_gets_prefixed(self) -> None:
        class Scored(OptionSet):
            score: int = 0
            target: MessageTarget = Field(default_factory=MessageTarget)

        group = Scored.descriptor_table.exclusive_groups[0]
        assert group.path == ("target",)
        assert Scored.descriptor_table.wire_keys == ("score", "chat_id", "message_id", "inline_message_id")


# ── Errors at class creation ─────────────────────────────────────────────────


class TestSchemaErrors:
    """Malformed option types fail when they are defined."""

    def test_wire_key_collision(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:

            class Clashing(OptionSet):
                base: BaseOptions = Field(default_factory=BaseOptions)
                disable_notification: bool = False

        assert exc_info.value.field == "disable_notification"

    def test_unsupported_field_type(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:

            class WithBlob(OptionSet):
                blob: bytes = b""

        assert exc_info.value.field == "blob"

    def test_optional_group_rejected(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:

            class MaybeTargeted(OptionSet):
                target: Optional[MessageTarget] = None
                text: str = ""

        assert exc_info.value.field == "target"
        assert "optional" in str(exc_info.value)

    def test_unknown_exclusive_side(self) -> None:
        from typing import ClassVar, Tuple

        with pytest.raises(ConfigurationError):

            class BadSides(OptionSet):
                exclusive_sides: ClassVar[Tuple[Tuple[str, ...], ...]] = (("a",), ("missing",))
                a: str = ""


# ── is_unset ─────────────────────────────────────────────────────────────────


class TestIsUnset:
    """Zero-value rule."""

    def test_zero_values(self) -> None:
        for value in (None, "", 0, 0.0, False, [], ()):
            assert is_unset(value) is True

    def test_set_values(self) -> None:
        for value in ("a", 1, -1, 0.5, True, [0], ParseMode.HTML, MessageEntity(type="bold", offset=0, length=1)):
            assert is_unset(value) is False

    def test_keep_zero(self) -> None:
        assert is_unset(0, omit_zero=False) is False
        assert is_unset(None, omit_zero=False) is True
