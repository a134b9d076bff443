"""
MIME type sniffing for multipart file uploads

Sniffing is advisory only: a sniffer that fails or has nothing to say
results in application/octet-stream, never in a failed request.
"""

import mimetypes
from abc import ABC, abstractmethod

from .logging_config import get_module_logger

logger = get_module_logger("mime")

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class MimeSniffer(ABC):
    """Guesses the content type of a file about to be uploaded"""

    @abstractmethod
    def sniff(self, filename: str) -> str | None:
        """
        Guess the MIME type of a file

        Args:
            filename: Path of the file on the local filesystem

        Returns:
            MIME type string, or None if unknown
        """
        pass


class OctetStreamSniffer(MimeSniffer):
    """Sniffer used when no real sniffing facility is configured"""

    def sniff(self, filename: str) -> str | None:
        return DEFAULT_CONTENT_TYPE


class MimetypesSniffer(MimeSniffer):
    """Guesses from the file extension using the mimetypes registry"""

    def sniff(self, filename: str) -> str | None:
        content_type, _ = mimetypes.guess_type(filename)
        return content_type


def sniff_or_default(sniffer: MimeSniffer | None, filename: str) -> str:
    """
    Ask a sniffer for a content type, falling back to the default

    Args:
        sniffer: Sniffer to use (None means no sniffing facility)
        filename: Path of the file to sniff

    Returns:
        MIME type string, never empty
    """
    if sniffer is None:
        return DEFAULT_CONTENT_TYPE

    try:
        content_type = sniffer.sniff(filename)
    except Exception as e:
        logger.warning(f"MIME sniffing failed for {filename}: {e}")
        return DEFAULT_CONTENT_TYPE

    return content_type or DEFAULT_CONTENT_TYPE
