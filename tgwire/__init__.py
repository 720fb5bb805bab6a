"""tgwire -- typed option bundles encoded into Telegram Bot API requests.

Option bundles (:mod:`tgwire.options`) are flattened by the encoder into an
ordered wire mapping, which the request builder turns into a form or
multipart body.  :class:`TelegramClient` sends the result.

Usage::

    from tgwire import InputFile, TelegramClient, encode, build_request
    from tgwire.options import BaseOptions, PhotoOptions

    opts = PhotoOptions(caption="hello", base=BaseOptions(disable_notification=True))
    payload = build_request(encode(opts))
"""

from tgwire.client import TelegramClient
from tgwire.encoder import encode, encode_value, validate
from tgwire.exceptions import APIException, ConfigurationError, TransportPrepError
from tgwire.files import InputFile
from tgwire.markup import encode_markup
from tgwire.request import RequestPayload, build_request
from tgwire.schema import OptionSet

__all__ = [
    "TelegramClient",
    "encode",
    "encode_value",
    "validate",
    "build_request",
    "encode_markup",
    "RequestPayload",
    "InputFile",
    "OptionSet",
    "APIException",
    "ConfigurationError",
    "TransportPrepError",
]
