"""TelegramClient -- sends encoded option bundles to the Telegram Bot API.

Every call follows the same pipeline: required parameters and option bundles
are encoded (:mod:`tgwire.encoder`), turned into a form or multipart body
(:mod:`tgwire.request`) and posted with ``requests``.  Encoding errors are
raised before anything goes over the network.

Only a representative set of endpoints has a wrapper; anything else is
reachable through :meth:`TelegramClient.call`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Union

import requests

from tgwire.encoder import WireMapping, encode, encode_value, merge_mappings
from tgwire.exceptions import APIException
from tgwire.files import InputFile
from tgwire.models import BotCommand, ChatAction, InputMedia
from tgwire.options import (
    AnimationOptions,
    AudioOptions,
    CallbackQueryOptions,
    CommandOptions,
    ContactOptions,
    CopyOptions,
    DocumentOptions,
    ForwardOptions,
    LocationOptions,
    MediaGroupOptions,
    MessageCaptionOptions,
    MessageMediaOptions,
    MessageOptions,
    MessageReplyMarkup,
    MessageTarget,
    MessageTextOptions,
    PhotoOptions,
    UpdateOptions,
    VenueOptions,
    VideoNoteOptions,
    VideoOptions,
    VoiceOptions,
    WebhookOptions,
)
from tgwire.request import RequestPayload, build_request
from tgwire.schema import OptionSet

logger = logging.getLogger("tgwire.client")

ChatID = Union[int, str]


class TelegramClient:
    """Client-side transport for the Telegram Bot API.

    Each public method corresponds to a Bot API endpoint and returns the
    decoded JSON response.  Non-2xx responses raise :class:`APIException`.
    """

    _DEFAULT_TIMEOUT: int = 10

    def __init__(self, base_url: str, timeout: int = _DEFAULT_TIMEOUT) -> None:
        """Create a new client bound to *base_url*.

        Args:
            base_url: Full Bot API base URL (e.g. ``https://api.telegram.org/bot<token>``).
            timeout: Default request timeout in seconds.
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    # ------------------------------------------------------------------
    #  Internal helpers
    # ------------------------------------------------------------------

    def _post(self, endpoint: str, payload: RequestPayload) -> Dict[str, Any]:
        """Send a prepared body and return the parsed JSON response.

        Raises:
            APIException: If the response status code is not 2xx.
            requests.RequestException: On transport-level failures.
        """
        url = f"{self._base_url}/{endpoint.lstrip('/')}"
        response = requests.post(url, data=payload.body, headers=payload.headers, timeout=self._timeout)
        try:
            body = response.json()
        except ValueError:
            body = {}
            logger.warning(
                "Bot API response is not JSON",
                extra={"api_endpoint": endpoint, "status_code": response.status_code},
            )
        if not response.ok:
            logger.warning(
                "Bot API returned an error",
                extra={"api_endpoint": endpoint, "status_code": response.status_code, "api_response": body},
            )
            raise APIException(response.status_code, body)
        return body

    def prepare(
        self,
        params: Optional[Dict[str, Any]] = None,
        options: Optional[OptionSet] = None,
        target: Optional[MessageTarget] = None,
    ) -> RequestPayload:
        """Encode a call's parameters into a request body without sending it.

        Required *params* keep their order and come first, then the message
        *target*, then *options*.  ``None`` params are skipped.

        Raises:
            ConfigurationError: On malformed options or a parameter given twice.
            TransportPrepError: If a local file attachment can't be read.
        """
        required: WireMapping = {
            key: encode_value(key, value) for key, value in (params or {}).items() if value is not None
        }
        addressed = encode(target) if target is not None else {}
        optional = encode(options) if options is not None else {}
        return build_request(merge_mappings(required, addressed, optional))

    def call(
        self,
        method: str,
        params: Optional[Dict[str, Any]] = None,
        options: Optional[OptionSet] = None,
        target: Optional[MessageTarget] = None,
    ) -> Dict[str, Any]:
        """Encode and send one Bot API call."""
        payload = self.prepare(params, options, target)
        logger.debug(
            "Calling Bot API",
            extra={"api_endpoint": method, "multipart": payload.multipart, "body_bytes": len(payload.body)},
        )
        return self._post(method, payload)

    async def call_async(
        self,
        method: str,
        params: Optional[Dict[str, Any]] = None,
        options: Optional[OptionSet] = None,
        target: Optional[MessageTarget] = None,
    ) -> Dict[str, Any]:
        """Run :meth:`call` inside a thread to keep the event loop free."""
        return await asyncio.to_thread(self.call, method, params, options, target)

    # ------------------------------------------------------------------
    #  Updates
    # ------------------------------------------------------------------

    def get_updates(self, opts: Optional[UpdateOptions] = None) -> Dict[str, Any]:
        """Receive incoming updates using long polling."""
        return self.call("getUpdates", options=opts)

    def set_webhook(self, url: str, opts: Optional[WebhookOptions] = None) -> Dict[str, Any]:
        """Specify a url and receive incoming updates via an outgoing webhook."""
        return self.call("setWebhook", {"url": url}, opts)

    def delete_webhook(self, drop_pending_updates: bool = False) -> Dict[str, Any]:
        """Remove webhook integration."""
        params: Dict[str, Any] = {}
        if drop_pending_updates:
            params["drop_pending_updates"] = True
        return self.call("deleteWebhook", params)

    def get_me(self) -> Dict[str, Any]:
        """Return basic information about the bot."""
        return self.call("getMe")

    # ------------------------------------------------------------------
    #  Sending
    # ------------------------------------------------------------------

    def send_message(self, text: str, chat_id: ChatID, opts: Optional[MessageOptions] = None) -> Dict[str, Any]:
        return self.call("sendMessage", {"chat_id": chat_id, "text": text}, opts)

    def forward_message(self, chat_id: ChatID, from_chat_id: ChatID, message_id: int, opts: Optional[ForwardOptions] = None) -> Dict[str, Any]:
        return self.call("forwardMessage", {"chat_id": chat_id, "from_chat_id": from_chat_id, "message_id": message_id}, opts)

    def copy_message(self, chat_id: ChatID, from_chat_id: ChatID, message_id: int, opts: Optional[CopyOptions] = None) -> Dict[str, Any]:
        return self.call("copyMessage", {"chat_id": chat_id, "from_chat_id": from_chat_id, "message_id": message_id}, opts)

    def send_photo(self, file: InputFile, chat_id: ChatID, opts: Optional[PhotoOptions] = None) -> Dict[str, Any]:
        return self.call("sendPhoto", {"chat_id": chat_id, "photo": file}, opts)

    def send_audio(self, file: InputFile, chat_id: ChatID, opts: Optional[AudioOptions] = None) -> Dict[str, Any]:
        return self.call("sendAudio", {"chat_id": chat_id, "audio": file}, opts)

    def send_document(self, file: InputFile, chat_id: ChatID, opts: Optional[DocumentOptions] = None) -> Dict[str, Any]:
        return self.call("sendDocument", {"chat_id": chat_id, "document": file}, opts)

    def send_video(self, file: InputFile, chat_id: ChatID, opts: Optional[VideoOptions] = None) -> Dict[str, Any]:
        return self.call("sendVideo", {"chat_id": chat_id, "video": file}, opts)

    def send_animation(self, file: InputFile, chat_id: ChatID, opts: Optional[AnimationOptions] = None) -> Dict[str, Any]:
        return self.call("sendAnimation", {"chat_id": chat_id, "animation": file}, opts)

    def send_voice(self, file: InputFile, chat_id: ChatID, opts: Optional[VoiceOptions] = None) -> Dict[str, Any]:
        return self.call("sendVoice", {"chat_id": chat_id, "voice": file}, opts)

    def send_video_note(self, file: InputFile, chat_id: ChatID, opts: Optional[VideoNoteOptions] = None) -> Dict[str, Any]:
        return self.call("sendVideoNote", {"chat_id": chat_id, "video_note": file}, opts)

    def send_media_group(self, chat_id: ChatID, media: List[InputMedia], opts: Optional[MediaGroupOptions] = None) -> Dict[str, Any]:
        return self.call("sendMediaGroup", {"chat_id": chat_id, "media": media}, opts)

    def send_location(self, chat_id: ChatID, latitude: float, longitude: float, opts: Optional[LocationOptions] = None) -> Dict[str, Any]:
        return self.call("sendLocation", {"chat_id": chat_id, "latitude": latitude, "longitude": longitude}, opts)

    def send_venue(self, chat_id: ChatID, latitude: float, longitude: float, title: str, address: str, opts: Optional[VenueOptions] = None) -> Dict[str, Any]:
        params = {"chat_id": chat_id, "latitude": latitude, "longitude": longitude, "title": title, "address": address}
        return self.call("sendVenue", params, opts)

    def send_contact(self, chat_id: ChatID, phone_number: str, first_name: str, opts: Optional[ContactOptions] = None) -> Dict[str, Any]:
        return self.call("sendContact", {"chat_id": chat_id, "phone_number": phone_number, "first_name": first_name}, opts)

    def send_chat_action(self, chat_id: ChatID, action: ChatAction) -> Dict[str, Any]:
        return self.call("sendChatAction", {"chat_id": chat_id, "action": action})

    def answer_callback_query(self, callback_query_id: str, opts: Optional[CallbackQueryOptions] = None) -> Dict[str, Any]:
        return self.call("answerCallbackQuery", {"callback_query_id": callback_query_id}, opts)

    # ------------------------------------------------------------------
    #  Editing
    # ------------------------------------------------------------------

    def edit_message_text(self, text: str, target: MessageTarget, opts: Optional[MessageTextOptions] = None) -> Dict[str, Any]:
        return self.call("editMessageText", {"text": text}, opts, target)

    def edit_message_caption(self, target: MessageTarget, opts: Optional[MessageCaptionOptions] = None) -> Dict[str, Any]:
        return self.call("editMessageCaption", options=opts, target=target)

    def edit_message_media(self, target: MessageTarget, opts: Optional[MessageMediaOptions] = None) -> Dict[str, Any]:
        return self.call("editMessageMedia", options=opts, target=target)

    def edit_message_reply_markup(self, target: MessageTarget, opts: Optional[MessageReplyMarkup] = None) -> Dict[str, Any]:
        return self.call("editMessageReplyMarkup", options=opts, target=target)

    def delete_message(self, chat_id: ChatID, message_id: int) -> Dict[str, Any]:
        return self.call("deleteMessage", {"chat_id": chat_id, "message_id": message_id})

    # ------------------------------------------------------------------
    #  Commands
    # ------------------------------------------------------------------

    def set_my_commands(self, commands: List[BotCommand], opts: Optional[CommandOptions] = None) -> Dict[str, Any]:
        return self.call("setMyCommands", {"commands": commands}, opts)

    def get_my_commands(self, opts: Optional[CommandOptions] = None) -> Dict[str, Any]:
        return self.call("getMyCommands", options=opts)

    def delete_my_commands(self, opts: Optional[CommandOptions] = None) -> Dict[str, Any]:
        return self.call("deleteMyCommands", options=opts)


# ── Default client ───────────────────────────────────────────────────────────
#
# A lazily-initialised module-level client carries the ``BASE_URL`` and
# ``REQUEST_TIMEOUT`` values from :mod:`config`.
# ─────────────────────────────────────────────────────────────────────────────

_default_client: TelegramClient | None = None


def default_client() -> TelegramClient:
    """Return (and lazily create) the module-level client singleton."""
    global _default_client
    if _default_client is None:
        from config import BASE_URL, REQUEST_TIMEOUT  # deferred so importing tgwire never reads the env
        _default_client = TelegramClient(BASE_URL, timeout=REQUEST_TIMEOUT)
    return _default_client
