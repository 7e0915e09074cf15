"""
PEM framing for DER structures (RFC 7468)
"""
import base64

from pkcs10gen.core.errors import MalformedStructure


class PEMFormatter:
    """Utility class for framing DER bytes as PEM text"""

    CERTIFICATE_REQUEST = "CERTIFICATE REQUEST"
    PRIVATE_KEY = "PRIVATE KEY"

    LINE_LENGTH = 64

    @staticmethod
    def format(der: bytes, label: str) -> str:
        """
        Convert DER bytes to PEM text

        Args:
            der: Raw DER bytes
            label: PEM label, e.g. "CERTIFICATE REQUEST"

        Returns:
            Header, body wrapped at 64 characters, footer; lines joined by
            "\\n" with no trailing newline and no blank line before the footer
        """
        if not der:
            raise MalformedStructure(f"Nothing to encode for {label}")

        body = base64.b64encode(der).decode("ascii")
        lines = [f"-----BEGIN {label}-----"]
        lines.extend(PEMFormatter.wrap(body))
        lines.append(f"-----END {label}-----")
        return "\n".join(lines)

    @staticmethod
    def wrap(text: str, width: int = LINE_LENGTH) -> list:
        """Split text into lines of `width` characters; the last may be shorter"""
        return [text[i:i + width] for i in range(0, len(text), width)]

    @staticmethod
    def certificate_request(der: bytes) -> str:
        return PEMFormatter.format(der, PEMFormatter.CERTIFICATE_REQUEST)

    @staticmethod
    def private_key(der: bytes) -> str:
        return PEMFormatter.format(der, PEMFormatter.PRIVATE_KEY)

