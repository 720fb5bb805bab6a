"""Enumerations and plain Telegram records referenced by option fields.

The records are opaque to the encoder: whenever one shows up as an option
value it is serialized to JSON as-is.  Only the records that an option type
actually carries live here.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel


class ParseMode(str, Enum):
    """Text formatting modes accepted by ``parse_mode``."""

    MARKDOWN = "Markdown"
    MARKDOWN_V2 = "MarkdownV2"
    HTML = "HTML"


class PollType(str, Enum):
    QUIZ = "quiz"
    REGULAR = "regular"


class ChatAction(str, Enum):
    """Actions broadcast through ``sendChatAction``."""

    TYPING = "typing"
    UPLOAD_PHOTO = "upload_photo"
    RECORD_VIDEO = "record_video"
    UPLOAD_VIDEO = "upload_video"
    RECORD_AUDIO = "record_audio"
    UPLOAD_AUDIO = "upload_audio"
    UPLOAD_DOCUMENT = "upload_document"
    FIND_LOCATION = "find_location"
    RECORD_VIDEO_NOTE = "record_video_note"
    UPLOAD_VIDEO_NOTE = "upload_video_note"


class UpdateType(str, Enum):
    """Update kinds a bot can subscribe to via ``allowed_updates``."""

    MESSAGE = "message"
    EDITED_MESSAGE = "edited_message"
    CHANNEL_POST = "channel_post"
    EDITED_CHANNEL_POST = "edited_channel_post"
    INLINE_QUERY = "inline_query"
    CHOSEN_INLINE_RESULT = "chosen_inline_result"
    CALLBACK_QUERY = "callback_query"
    SHIPPING_QUERY = "shipping_query"
    PRE_CHECKOUT_QUERY = "pre_checkout_query"
    POLL = "poll"
    POLL_ANSWER = "poll_answer"
    MY_CHAT_MEMBER = "my_chat_member"
    CHAT_MEMBER = "chat_member"


class User(BaseModel):
    """This object represents a Telegram user or bot."""

    id: int
    is_bot: bool
    first_name: str
    last_name: Optional[str] = None
    username: Optional[str] = None
    language_code: Optional[str] = None

    model_config = {"populate_by_name": True}


class MessageEntity(BaseModel):
    """This object represents one special entity in a text message. For example, hashtags, usernames, URLs, etc."""

    type: str
    offset: int
    length: int
    url: Optional[str] = None
    user: Optional[User] = None
    language: Optional[str] = None

    model_config = {"populate_by_name": True}


class BotCommand(BaseModel):
    """This object represents a bot command."""

    command: str
    description: str

    model_config = {"populate_by_name": True}


class BotCommandScope(BaseModel):
    """The scope to which bot commands are applied (``default``, ``chat``, ``chat_member``...)."""

    type: str = "default"
    chat_id: Optional[Union[int, str]] = None
    user_id: Optional[int] = None

    model_config = {"populate_by_name": True}


class InputMediaPhoto(BaseModel):
    """Represents a photo to be sent."""

    type: str = "photo"
    media: str
    caption: Optional[str] = None
    parse_mode: Optional[ParseMode] = None
    caption_entities: Optional[List[MessageEntity]] = None

    model_config = {"populate_by_name": True}


class InputMediaVideo(BaseModel):
    """Represents a video to be sent."""

    type: str = "video"
    media: str
    thumb: Optional[str] = None
    caption: Optional[str] = None
    parse_mode: Optional[ParseMode] = None
    caption_entities: Optional[List[MessageEntity]] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None
    supports_streaming: Optional[bool] = None

    model_config = {"populate_by_name": True}


class InputMediaAnimation(BaseModel):
    """Represents an animation file (GIF or H.264/MPEG-4 AVC video without sound) to be sent."""

    type: str = "animation"
    media: str
    thumb: Optional[str] = None
    caption: Optional[str] = None
    parse_mode: Optional[ParseMode] = None
    caption_entities: Optional[List[MessageEntity]] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None

    model_config = {"populate_by_name": True}


class InputMediaAudio(BaseModel):
    """Represents an audio file to be treated as music to be sent."""

    type: str = "audio"
    media: str
    thumb: Optional[str] = None
    caption: Optional[str] = None
    parse_mode: Optional[ParseMode] = None
    caption_entities: Optional[List[MessageEntity]] = None
    duration: Optional[int] = None
    performer: Optional[str] = None
    title: Optional[str] = None

    model_config = {"populate_by_name": True}


class InputMediaDocument(BaseModel):
    """Represents a general file to be sent."""

    type: str = "document"
    media: str
    thumb: Optional[str] = None
    caption: Optional[str] = None
    parse_mode: Optional[ParseMode] = None
    caption_entities: Optional[List[MessageEntity]] = None
    disable_content_type_detection: Optional[bool] = None

    model_config = {"populate_by_name": True}


InputMedia = Union[
    InputMediaPhoto,
    InputMediaVideo,
    InputMediaAnimation,
    InputMediaAudio,
    InputMediaDocument,
]
