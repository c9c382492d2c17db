"""Attachment resolution.

Hides how a picked file becomes something a message bubble can display.
"""

import base64
from abc import ABC, abstractmethod

from ..errors import AttachmentResolutionFailed
from .models import AttachmentHandle, MessageKind, ResolvedMedia


def kind_for_mime(mime_type: str) -> MessageKind:
    """Map a MIME type to the message kind that displays it.

    Examples:
        >>> kind_for_mime("image/png")
        <MessageKind.IMAGE: 'image'>
        >>> kind_for_mime("application/pdf")
        <MessageKind.TEXT: 'text'>
    """
    mime = mime_type.lower()
    if mime.startswith("image/"):
        return MessageKind.IMAGE
    if mime.startswith("video/"):
        return MessageKind.VIDEO
    return MessageKind.TEXT


class AttachmentResolver(ABC):
    """Turns attachment handles into displayable media."""

    @abstractmethod
    def resolve(self, handle: AttachmentHandle) -> ResolvedMedia:
        """Read and encode an attachment.

        Raises:
            AttachmentResolutionFailed: If the payload cannot be read or encoded
        """


class InlineAttachmentResolver(AttachmentResolver):
    """Encodes the attachment bytes into a ``data:`` URL."""

    def resolve(self, handle: AttachmentHandle) -> ResolvedMedia:
        if handle.data is None:
            raise AttachmentResolutionFailed("no readable data", attachment_name=handle.name)
        try:
            encoded = base64.b64encode(handle.data).decode("ascii")
        except (TypeError, ValueError) as e:
            raise AttachmentResolutionFailed(str(e), attachment_name=handle.name) from e
        return ResolvedMedia(
            kind=kind_for_mime(handle.mime_type),
            url=f"data:{handle.mime_type};base64,{encoded}",
        )
