"""Turn a wire mapping into an HTTP request body.

Bodies are prepared with :class:`requests.PreparedRequest`, the same code
path :func:`requests.post` uses, so the transport can send
:attr:`RequestPayload.body` untouched.  Mappings without file parts become
``application/x-www-form-urlencoded``; anything with a
:class:`~tgwire.files.FilePart` becomes ``multipart/form-data``.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

import requests
from pydantic import BaseModel

from tgwire.encoder import WireMapping
from tgwire.exceptions import TransportPrepError
from tgwire.files import FilePart

logger = logging.getLogger("tgwire.request")

FORM_URLENCODED = "application/x-www-form-urlencoded"


class RequestPayload(BaseModel):
    """A finished request body and the content type that goes with it."""

    body: bytes
    content_type: str
    multipart: bool = False

    model_config = {"frozen": True}

    @property
    def headers(self) -> Dict[str, str]:
        return {"Content-Type": self.content_type, "Content-Length": str(len(self.body))}


def _read_part(part: FilePart) -> bytes:
    if part.content is not None:
        return part.content
    try:
        with open(part.path, "rb") as handle:
            return handle.read()
    except OSError as exc:
        raise TransportPrepError(part.name, part.path, exc.strerror or str(exc)) from exc


def build_request(mapping: WireMapping) -> RequestPayload:
    """Build the body for *mapping*.

    Text entries keep their mapping order.  In multipart bodies all text
    parts come first, followed by the binary parts in mapping order.  Local
    files are read here and nowhere else.

    Raises:
        TransportPrepError: If a local file can't be read.  No payload is
            returned in that case.
    """
    fields: List[Tuple[str, str]] = []
    parts: List[FilePart] = []
    for key, value in mapping.items():
        if isinstance(value, FilePart):
            parts.append(value)
        else:
            fields.append((key, value))

    if not fields and not parts:
        return RequestPayload(body=b"", content_type=FORM_URLENCODED)

    files = [(part.name, (part.filename, _read_part(part))) for part in parts]

    prepared = requests.PreparedRequest()
    prepared.prepare_method("POST")
    prepared.prepare_headers(None)
    prepared.prepare_body(fields, files or None)

    body = prepared.body
    if isinstance(body, str):
        body = body.encode("utf-8")
    payload = RequestPayload(body=body, content_type=prepared.headers["Content-Type"], multipart=bool(files))

    logger.debug(
        "Request body built",
        extra={"multipart": payload.multipart, "fields": len(fields), "files": len(files), "body_bytes": len(payload.body)},
    )
    return payload
