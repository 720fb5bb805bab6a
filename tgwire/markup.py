"""Reply markup shapes and their JSON codec.

The Bot API accepts exactly four markup objects under ``reply_markup``.  Each
shape carries a :class:`MarkupVariant` tag and :func:`encode_markup` switches
on that tag; the set is closed and never extended at runtime.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, ClassVar, Dict, List, Optional, Union

from pydantic import BaseModel
from pydantic_core import to_json

from tgwire.exceptions import ConfigurationError
from tgwire.models import PollType


class MarkupVariant(str, Enum):
    REPLY_KEYBOARD = "reply_keyboard"
    REMOVE_KEYBOARD = "remove_keyboard"
    INLINE_KEYBOARD = "inline_keyboard"
    FORCE_REPLY = "force_reply"


# ── Buttons ──────────────────────────────────────────────────────────────────


class KeyboardButtonPollType(BaseModel):
    """This object represents type of a poll, which is allowed to be created and sent when the corresponding button is pressed."""

    type: Optional[PollType] = None

    model_config = {"populate_by_name": True}


class KeyboardButton(BaseModel):
    """This object represents one button of the reply keyboard."""

    text: str
    request_contact: Optional[bool] = None
    request_location: Optional[bool] = None
    request_poll: Optional[KeyboardButtonPollType] = None

    model_config = {"populate_by_name": True}


class LoginUrl(BaseModel):
    """This object represents a parameter of the inline keyboard button used to automatically authorize a user."""

    url: str
    forward_text: Optional[str] = None
    bot_username: Optional[str] = None
    request_write_access: Optional[bool] = None

    model_config = {"populate_by_name": True}


class CallbackGame(BaseModel):
    """A placeholder, currently holds no information."""

    model_config = {"populate_by_name": True}


class InlineKeyboardButton(BaseModel):
    """This object represents one button of an inline keyboard. You **must** use exactly one of the optional fields."""

    text: str
    url: Optional[str] = None
    login_url: Optional[LoginUrl] = None
    callback_data: Optional[str] = None
    switch_inline_query: Optional[str] = None
    switch_inline_query_current_chat: Optional[str] = None
    callback_game: Optional[CallbackGame] = None
    pay: Optional[bool] = None

    model_config = {"populate_by_name": True}


# ── Markup shapes ────────────────────────────────────────────────────────────


class ReplyMarkupBase(BaseModel):
    """Common base of the four ``reply_markup`` shapes."""

    variant: ClassVar[MarkupVariant]

    model_config = {"populate_by_name": True, "frozen": True}


class ReplyKeyboardMarkup(ReplyMarkupBase):
    """A custom keyboard with reply options."""

    variant: ClassVar[MarkupVariant] = MarkupVariant.REPLY_KEYBOARD

    keyboard: List[List[KeyboardButton]]
    resize_keyboard: bool = False
    one_time_keyboard: bool = False
    input_field_placeholder: str = ""
    selective: bool = False


class ReplyKeyboardRemove(ReplyMarkupBase):
    """Asks clients to remove the current custom keyboard. ``remove_keyboard`` must stay true."""

    variant: ClassVar[MarkupVariant] = MarkupVariant.REMOVE_KEYBOARD

    remove_keyboard: bool = True
    selective: bool = False


class InlineKeyboardMarkup(ReplyMarkupBase):
    """An inline keyboard that appears right next to the message it belongs to."""

    variant: ClassVar[MarkupVariant] = MarkupVariant.INLINE_KEYBOARD

    inline_keyboard: List[List[InlineKeyboardButton]]


class ForceReply(ReplyMarkupBase):
    """Asks clients to display a reply interface to the user."""

    variant: ClassVar[MarkupVariant] = MarkupVariant.FORCE_REPLY

    force_reply: bool = True
    input_field_placeholder: str = ""
    selective: bool = False


ReplyMarkup = Union[ReplyKeyboardMarkup, ReplyKeyboardRemove, InlineKeyboardMarkup, ForceReply]

MARKUP_TYPES = (ReplyKeyboardMarkup, ReplyKeyboardRemove, InlineKeyboardMarkup, ForceReply)


# ── Codec ────────────────────────────────────────────────────────────────────


def _rows(rows: List[List[BaseModel]]) -> List[List[Dict[str, Any]]]:
    return [[button.model_dump(mode="json", by_alias=True, exclude_none=True) for button in row] for row in rows]


def _reply_keyboard(markup: ReplyKeyboardMarkup) -> Dict[str, Any]:
    layout: Dict[str, Any] = {"keyboard": _rows(markup.keyboard)}
    if markup.resize_keyboard:
        layout["resize_keyboard"] = True
    if markup.one_time_keyboard:
        layout["one_time_keyboard"] = True
    if markup.input_field_placeholder:
        layout["input_field_placeholder"] = markup.input_field_placeholder
    if markup.selective:
        layout["selective"] = True
    return layout


def _remove_keyboard(markup: ReplyKeyboardRemove) -> Dict[str, Any]:
    return {"remove_keyboard": markup.remove_keyboard, "selective": markup.selective}


def _inline_keyboard(markup: InlineKeyboardMarkup) -> Dict[str, Any]:
    return {"inline_keyboard": _rows(markup.inline_keyboard)}


def _force_reply(markup: ForceReply) -> Dict[str, Any]:
    layout: Dict[str, Any] = {"force_reply": markup.force_reply}
    if markup.input_field_placeholder:
        layout["input_field_placeholder"] = markup.input_field_placeholder
    layout["selective"] = markup.selective
    return layout


_LAYOUTS: Dict[MarkupVariant, Callable[[Any], Dict[str, Any]]] = {
    MarkupVariant.REPLY_KEYBOARD: _reply_keyboard,
    MarkupVariant.REMOVE_KEYBOARD: _remove_keyboard,
    MarkupVariant.INLINE_KEYBOARD: _inline_keyboard,
    MarkupVariant.FORCE_REPLY: _force_reply,
}


def markup_layout(markup: ReplyMarkupBase) -> Dict[str, Any]:
    """Return the JSON-ready dict for *markup* according to its variant."""
    if not isinstance(markup, MARKUP_TYPES):
        raise ConfigurationError(f"unsupported reply markup {type(markup).__name__}", field="reply_markup")
    return _LAYOUTS[markup.variant](markup)


def encode_markup(markup: ReplyMarkupBase) -> str:
    """Encode *markup* as compact JSON text.

    Raises:
        ConfigurationError: If *markup* is not one of the four known shapes.
    """
    return to_json(markup_layout(markup)).decode("utf-8")
