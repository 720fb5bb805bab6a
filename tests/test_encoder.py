"""Tests for options-to-wire encoding."""

import json
import logging
import sys
import os
from typing import List, Optional
from unittest.mock import patch

import pytest
from pydantic import Field, ValidationError

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tgwire.encoder import encode, encode_value, format_scalar, merge_mappings, validate
from tgwire.exceptions import ConfigurationError
from tgwire.files import FilePart, InputFile
from tgwire.markup import InlineKeyboardButton, InlineKeyboardMarkup, ReplyMarkup
from tgwire.models import BotCommand, BotCommandScope, MessageEntity, ParseMode, UpdateType
from tgwire.options import (
    BaseOptions,
    CallbackQueryOptions,
    CommandOptions,
    DocumentOptions,
    LocationOptions,
    MessageOptions,
    MessageTarget,
    PhotoOptions,
    UpdateOptions,
)
from tgwire.schema import OptionSet


class FlatMessageOptions(OptionSet):
    """MessageOptions with the BaseOptions fields declared inline."""

    disable_notification: bool = False
    reply_to_message_id: int = 0
    allow_sending_without_reply: bool = False
    reply_markup: Optional[ReplyMarkup] = None
    parse_mode: Optional[ParseMode] = None
    entities: List[MessageEntity] = Field(default_factory=list)
    disable_web_page_preview: bool = False


def _keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[[InlineKeyboardButton(text="Go", callback_data="go")]])


# ── Zero-value omission ──────────────────────────────────────────────────────


class TestZeroValues:
    """Unset fields never reach the wire."""

    def test_only_disable_notification(self) -> None:
        opts = MessageOptions(base=BaseOptions(disable_notification=True))
        assert encode(opts) == {"disable_notification": "true"}

    def test_zero_value_bundle_is_empty(self) -> None:
        assert encode(PhotoOptions()) == {}
        assert encode(UpdateOptions()) == {}

    def test_false_zero_and_empty_are_omitted(self) -> None:
        opts = LocationOptions(live_period=0, heading=0, base=BaseOptions(disable_notification=False))
        assert encode(opts) == {}

    def test_explicit_zero_kept_for_optional_fields(self) -> None:
        assert encode(LocationOptions(horizontal_accuracy=0.0)) == {"horizontal_accuracy": "0"}
        assert encode(CallbackQueryOptions(cache_time=0)) == {"cache_time": "0"}
        assert encode(CallbackQueryOptions()) == {}


# ── Scalar and structured values ─────────────────────────────────────────────


class TestValueEncoding:
    """Formatting of individual values."""

    def test_numbers_and_booleans(self) -> None:
        opts = LocationOptions(horizontal_accuracy=12.5, live_period=60, heading=-1)
        assert encode(opts) == {"horizontal_accuracy": "12.5", "live_period": "60", "heading": "-1"}

    def test_float_formatting(self) -> None:
        assert format_scalar(1.0, "f") == "1"
        assert format_scalar(0.00001, "f") == "0.00001"
        assert format_scalar(45.123456, "f") == "45.123456"

    def test_non_finite_float_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            format_scalar(float("nan"), "latitude")

    def test_enum_value(self) -> None:
        assert encode(MessageOptions(parse_mode=ParseMode.MARKDOWN_V2)) == {"parse_mode": "MarkdownV2"}

    def test_entities_as_json(self) -> None:
        opts = MessageOptions(entities=[MessageEntity(type="bold", offset=0, length=4)])
        mapping = encode(opts)
        assert json.loads(mapping["entities"]) == [{"type": "bold", "offset": 0, "length": 4}]

    def test_enum_list_as_json(self) -> None:
        opts = UpdateOptions(limit=10, allowed_updates=[UpdateType.MESSAGE, UpdateType.CALLBACK_QUERY])
        mapping = encode(opts)
        assert mapping["limit"] == "10"
        assert json.loads(mapping["allowed_updates"]) == ["message", "callback_query"]

    def test_record_as_json(self) -> None:
        mapping = encode(CommandOptions(scope=BotCommandScope(type="chat", chat_id=42), language_code="en"))
        assert json.loads(mapping["scope"]) == {"type": "chat", "chat_id": 42}
        assert mapping["language_code"] == "en"

    def test_non_ascii_text_kept(self) -> None:
        assert encode(PhotoOptions(caption="héllo ✓")) == {"caption": "héllo ✓"}


# ── Ordering, purity and flattening ──────────────────────────────────────────


class TestEncodeShape:
    """Properties of the produced mapping."""

    def _full(self) -> MessageOptions:
        return MessageOptions(
            base=BaseOptions(disable_notification=True, reply_to_message_id=5, reply_markup=_keyboard()),
            parse_mode=ParseMode.HTML,
            entities=[MessageEntity(type="code", offset=1, length=2)],
            disable_web_page_preview=True,
        )

    def test_declaration_order(self) -> None:
        assert list(encode(self._full())) == [
            "disable_notification",
            "reply_to_message_id",
            "reply_markup",
            "parse_mode",
            "entities",
            "disable_web_page_preview",
        ]

    def test_deterministic(self) -> None:
        opts = self._full()
        first = encode(opts)
        second = encode(opts)
        assert first == second
        assert list(first) == list(second)

    def test_flattening_is_transparent(self) -> None:
        flat = FlatMessageOptions(
            disable_notification=True,
            reply_to_message_id=5,
            reply_markup=_keyboard(),
            parse_mode=ParseMode.HTML,
            entities=[MessageEntity(type="code", offset=1, length=2)],
            disable_web_page_preview=True,
        )
        nested = encode(self._full())
        assert encode(flat) == nested
        assert list(encode(flat)) == list(nested)

    def test_options_are_immutable(self) -> None:
        opts = PhotoOptions(caption="a")
        with pytest.raises(ValidationError):
            opts.caption = "b"  # type: ignore[misc]

    def test_logs_encoded_keys(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="tgwire.encoder")
        encode(PhotoOptions(caption="a"))
        records = [r for r in caplog.records if r.name == "tgwire.encoder"]
        assert records
        assert records[-1].options_type == "PhotoOptions"
        assert records[-1].wire_keys == ["caption"]


# ── File attachments ─────────────────────────────────────────────────────────


class TestFileFields:
    """File attachment fields inside bundles."""

    def test_remote_id_is_plain_text(self) -> None:
        mapping = encode(DocumentOptions(thumb=InputFile.from_id("AgADBAAD")))
        assert mapping == {"thumb": "AgADBAAD"}

    def test_local_path_is_pending_part(self) -> None:
        mapping = encode(DocumentOptions(thumb=InputFile.from_path("/nowhere/cover.jpg")))
        part = mapping["thumb"]
        assert isinstance(part, FilePart)
        assert part.name == "thumb"
        assert part.filename == "cover.jpg"
        assert part.path == "/nowhere/cover.jpg"
        assert part.content is None

    def test_inline_bytes_is_pending_part(self) -> None:
        mapping = encode(DocumentOptions(thumb=InputFile.from_bytes("thumb.jpg", b"0123456789")))
        part = mapping["thumb"]
        assert isinstance(part, FilePart)
        assert part.filename == "thumb.jpg"
        assert part.content == b"0123456789"

    def test_empty_remote_id_rejected(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            encode(DocumentOptions(thumb=InputFile.from_id("")))
        assert exc_info.value.field == "thumb"


# ── Exclusive unions ─────────────────────────────────────────────────────────


class TestMessageTarget:
    """Chat/message id xor inline message id."""

    def test_chat_side(self) -> None:
        assert encode(MessageTarget.for_message(-100123, 7)) == {"chat_id": "-100123", "message_id": "7"}

    def test_inline_side(self) -> None:
        assert encode(MessageTarget.for_inline("AbC")) == {"inline_message_id": "AbC"}

    def test_both_sides_rejected_before_encoding(self) -> None:
        target = MessageTarget(chat_id=1, message_id=2, inline_message_id="AbC")
        with patch("tgwire.encoder.format_scalar") as fmt:
            with pytest.raises(ConfigurationError):
                encode(target)
        fmt.assert_not_called()

    def test_neither_side_rejected(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            validate(MessageTarget())
        assert "none" in str(exc_info.value)

    def test_incomplete_side_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            encode(MessageTarget(chat_id=42))

    def test_embedded_target_validated(self) -> None:
        class Scored(OptionSet):
            score: int = 0
            target: MessageTarget = Field(default_factory=MessageTarget)

        assert encode(Scored(score=3, target=MessageTarget.for_inline("x"))) == {"score": "3", "inline_message_id": "x"}
        with pytest.raises(ConfigurationError) as exc_info:
            encode(Scored(score=3))
        assert exc_info.value.field == "target"

    def test_not_an_option_set(self) -> None:
        with pytest.raises(ConfigurationError):
            encode({"chat_id": 1})  # type: ignore[arg-type]


# ── encode_value / merge_mappings ────────────────────────────────────────────


class TestStandaloneValues:
    """Encoding of required call parameters."""

    def test_scalars(self) -> None:
        assert encode_value("chat_id", 42) == "42"
        assert encode_value("chat_id", "@channel") == "@channel"
        assert encode_value("ok", False) == "false"

    def test_file(self) -> None:
        assert encode_value("photo", InputFile.from_id("abc")) == "abc"
        part = encode_value("photo", InputFile.from_bytes("a.png", b"\x89PNG"))
        assert isinstance(part, FilePart)
        assert part.name == "photo"

    def test_markup(self) -> None:
        assert json.loads(encode_value("reply_markup", _keyboard())) == {
            "inline_keyboard": [[{"text": "Go", "callback_data": "go"}]]
        }

    def test_records(self) -> None:
        text = encode_value("commands", [BotCommand(command="start", description="Start")])
        assert json.loads(text) == [{"command": "start", "description": "Start"}]

    def test_none_rejected(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            encode_value("text", None)
        assert exc_info.value.field == "text"

    def test_option_set_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            encode_value("opts", PhotoOptions())

    def test_merge_keeps_order(self) -> None:
        merged = merge_mappings({"chat_id": "1", "text": "t"}, {"parse_mode": "HTML"})
        assert list(merged) == ["chat_id", "text", "parse_mode"]

    def test_merge_rejects_duplicates(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            merge_mappings({"caption": "a"}, {"caption": "b"})
        assert exc_info.value.field == "caption"
