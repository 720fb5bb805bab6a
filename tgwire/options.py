"""Option bundles for the Bot API methods.

Each class holds the optional parameters of one method (or a group shared by
several).  Every field defaults to its zero value; unset fields never reach
the wire.  ``base`` fields embed :class:`BaseOptions`, whose parameters are
flattened into the enclosing bundle.

Usage::

    from tgwire.options import BaseOptions, MessageOptions
    from tgwire.models import ParseMode

    opts = MessageOptions(
        base=BaseOptions(disable_notification=True),
        parse_mode=ParseMode.HTML,
    )
"""

from __future__ import annotations

from typing import ClassVar, List, Optional, Tuple

from pydantic import Field

from tgwire.files import InputFile
from tgwire.markup import InlineKeyboardMarkup, ReplyMarkup
from tgwire.models import BotCommandScope, InputMedia, MessageEntity, ParseMode, UpdateType
from tgwire.schema import OptionSet


# ── Shared groups ────────────────────────────────────────────────────────────


class BaseOptions(OptionSet):
    """Parameters accepted by nearly every ``send*`` method."""

    disable_notification: bool = False
    reply_to_message_id: int = 0
    allow_sending_without_reply: bool = False
    reply_markup: Optional[ReplyMarkup] = None


class MessageTarget(OptionSet):
    """Addresses an existing message: either by chat and message id, or by inline message id.

    Build it with :meth:`for_message` or :meth:`for_inline`; filling both
    sides, or neither, is rejected by the encoder.
    """

    exclusive_sides: ClassVar[Tuple[Tuple[str, ...], ...]] = (
        ("chat_id", "message_id"),
        ("inline_message_id",),
    )

    chat_id: int = 0
    message_id: int = 0
    inline_message_id: str = ""

    @classmethod
    def for_message(cls, chat_id: int, message_id: int) -> "MessageTarget":
        return cls(chat_id=chat_id, message_id=message_id)

    @classmethod
    def for_inline(cls, inline_message_id: str) -> "MessageTarget":
        return cls(inline_message_id=inline_message_id)


# ── Updates ──────────────────────────────────────────────────────────────────


class UpdateOptions(OptionSet):
    """Optional parameters of ``getUpdates``."""

    offset: int = 0
    limit: int = 0
    timeout: int = 0
    allowed_updates: List[UpdateType] = Field(default_factory=list)


class WebhookOptions(OptionSet):
    """Optional parameters of ``setWebhook``."""

    certificate: Optional[InputFile] = None
    ip_address: str = ""
    max_connections: int = 0
    allowed_updates: List[UpdateType] = Field(default_factory=list)
    drop_pending_updates: bool = False


# ── Sending ──────────────────────────────────────────────────────────────────


class MessageOptions(OptionSet):
    """Optional parameters of ``sendMessage``."""

    base: BaseOptions = Field(default_factory=BaseOptions)
    parse_mode: Optional[ParseMode] = None
    entities: List[MessageEntity] = Field(default_factory=list)
    disable_web_page_preview: bool = False


class ForwardOptions(OptionSet):
    """Optional parameters of ``forwardMessage``."""

    disable_notification: bool = False


class CopyOptions(OptionSet):
    """Optional parameters of ``copyMessage``."""

    base: BaseOptions = Field(default_factory=BaseOptions)
    parse_mode: Optional[ParseMode] = None
    caption: str = ""
    caption_entities: List[MessageEntity] = Field(default_factory=list)


class PhotoOptions(OptionSet):
    """Optional parameters of ``sendPhoto``."""

    base: BaseOptions = Field(default_factory=BaseOptions)
    parse_mode: Optional[ParseMode] = None
    caption: str = ""
    caption_entities: List[MessageEntity] = Field(default_factory=list)


class AudioOptions(OptionSet):
    """Optional parameters of ``sendAudio``."""

    base: BaseOptions = Field(default_factory=BaseOptions)
    parse_mode: Optional[ParseMode] = None
    caption: str = ""
    caption_entities: List[MessageEntity] = Field(default_factory=list)
    duration: int = 0
    performer: str = ""
    title: str = ""
    thumb: Optional[InputFile] = None


class DocumentOptions(OptionSet):
    """Optional parameters of ``sendDocument``."""

    base: BaseOptions = Field(default_factory=BaseOptions)
    parse_mode: Optional[ParseMode] = None
    caption: str = ""
    caption_entities: List[MessageEntity] = Field(default_factory=list)
    disable_content_type_detection: bool = False
    thumb: Optional[InputFile] = None


class VideoOptions(OptionSet):
    """Optional parameters of ``sendVideo``."""

    base: BaseOptions = Field(default_factory=BaseOptions)
    parse_mode: Optional[ParseMode] = None
    caption: str = ""
    caption_entities: List[MessageEntity] = Field(default_factory=list)
    duration: int = 0
    width: int = 0
    height: int = 0
    thumb: Optional[InputFile] = None
    supports_streaming: bool = False


class AnimationOptions(OptionSet):
    """Optional parameters of ``sendAnimation``."""

    base: BaseOptions = Field(default_factory=BaseOptions)
    parse_mode: Optional[ParseMode] = None
    caption: str = ""
    caption_entities: List[MessageEntity] = Field(default_factory=list)
    duration: int = 0
    width: int = 0
    height: int = 0
    thumb: Optional[InputFile] = None


class VoiceOptions(OptionSet):
    """Optional parameters of ``sendVoice``."""

    base: BaseOptions = Field(default_factory=BaseOptions)
    parse_mode: Optional[ParseMode] = None
    caption: str = ""
    caption_entities: List[MessageEntity] = Field(default_factory=list)
    duration: int = 0


class VideoNoteOptions(OptionSet):
    """Optional parameters of ``sendVideoNote``."""

    base: BaseOptions = Field(default_factory=BaseOptions)
    duration: int = 0
    length: int = 0
    thumb: Optional[InputFile] = None


class MediaGroupOptions(OptionSet):
    """Optional parameters of ``sendMediaGroup``.  Media groups take no reply markup."""

    disable_notification: bool = False
    reply_to_message_id: int = 0
    allow_sending_without_reply: bool = False


class LocationOptions(OptionSet):
    """Optional parameters of ``sendLocation``.

    ``horizontal_accuracy`` is sent whenever it is not ``None``, so an
    explicit ``0`` reaches the API.
    """

    base: BaseOptions = Field(default_factory=BaseOptions)
    horizontal_accuracy: Optional[float] = None
    live_period: int = 0
    heading: int = 0
    proximity_alert_radius: int = 0


class VenueOptions(OptionSet):
    """Optional parameters of ``sendVenue``."""

    base: BaseOptions = Field(default_factory=BaseOptions)
    foursquare_id: str = ""
    foursquare_type: str = ""
    google_place_id: str = ""
    google_place_type: str = ""


class ContactOptions(OptionSet):
    """Optional parameters of ``sendContact``."""

    base: BaseOptions = Field(default_factory=BaseOptions)
    last_name: str = ""
    vcard: str = ""


class CallbackQueryOptions(OptionSet):
    """Optional parameters of ``answerCallbackQuery``.

    ``cache_time=0`` is kept on the wire; leave it ``None`` to use the
    server default.
    """

    text: str = ""
    show_alert: bool = False
    url: str = ""
    cache_time: Optional[int] = None


# ── Editing ──────────────────────────────────────────────────────────────────


class MessageTextOptions(OptionSet):
    """Optional parameters of ``editMessageText``."""

    parse_mode: Optional[ParseMode] = None
    entities: List[MessageEntity] = Field(default_factory=list)
    disable_web_page_preview: bool = False
    reply_markup: Optional[InlineKeyboardMarkup] = None


class MessageCaptionOptions(OptionSet):
    """Optional parameters of ``editMessageCaption``."""

    caption: str = ""
    parse_mode: Optional[ParseMode] = None
    caption_entities: List[MessageEntity] = Field(default_factory=list)
    reply_markup: Optional[InlineKeyboardMarkup] = None


class MessageMediaOptions(OptionSet):
    """Optional parameters of ``editMessageMedia``."""

    media: Optional[InputMedia] = None
    reply_markup: Optional[InlineKeyboardMarkup] = None


class MessageReplyMarkup(OptionSet):
    """Optional parameters of ``editMessageReplyMarkup``."""

    reply_markup: Optional[InlineKeyboardMarkup] = None


# ── Commands ─────────────────────────────────────────────────────────────────


class CommandOptions(OptionSet):
    """Optional parameters of ``setMyCommands``, ``deleteMyCommands`` and ``getMyCommands``."""

    scope: Optional[BotCommandScope] = None
    language_code: str = ""
