"""
Minimal ASN.1 DER encoder for PKCS#10 (RFC 2986) certification requests.

    CertificationRequestInfo ::= SEQUENCE {
        version       INTEGER { v1(0) },
        subject       Name,
        subjectPKInfo SubjectPublicKeyInfo,
        attributes    [0] Attributes }

    CertificationRequest ::= SEQUENCE {
        certificationRequestInfo CertificationRequestInfo,
        signatureAlgorithm       AlgorithmIdentifier,
        signature                BIT STRING }

Primitive values are produced with asn1crypto's universal types; constructed
values are framed with asn1crypto.parser.emit so every length is definite.
"""
from typing import List, Optional

from asn1crypto import core, parser

from pkcs10gen.core.errors import MalformedStructure
from pkcs10gen.core.logging import get_logger
from pkcs10gen.models.algorithm import SignatureAlgorithm
from pkcs10gen.models.subject import AttributeTypeAndValue, StringType, is_printable_string

logger = get_logger(__name__)

CLASS_UNIVERSAL = 0
CLASS_CONTEXT = 2
METHOD_CONSTRUCTED = 1
TAG_SEQUENCE = 16
TAG_SET = 17

# Long form length: one count byte followed by at most 126 length bytes
MAX_LENGTH_OCTETS = 126

CSR_VERSION_V1 = 0


class DEREncoder:
    """Encodes the CertificationRequestInfo and CertificationRequest structures"""

    _STRING_TYPES = {
        StringType.PRINTABLE: core.PrintableString,
        StringType.UTF8: core.UTF8String,
    }

    # -- primitives --------------------------------------------------------

    @staticmethod
    def integer(value: int) -> bytes:
        return core.Integer(value).dump()

    @staticmethod
    def oid(dotted: str) -> bytes:
        try:
            return core.ObjectIdentifier(dotted).dump()
        except (ValueError, TypeError) as e:
            raise MalformedStructure(f"Invalid object identifier {dotted!r}: {e}") from e

    @classmethod
    def string(cls, value: str, string_type: StringType) -> bytes:
        if value is None:
            raise MalformedStructure(f"Missing {string_type.value} value")
        if string_type is StringType.PRINTABLE and not is_printable_string(value):
            raise MalformedStructure(
                f"Value {value!r} contains characters outside the PrintableString alphabet"
            )
        try:
            return cls._STRING_TYPES[string_type](value).dump()
        except (ValueError, TypeError) as e:
            raise MalformedStructure(
                f"Value {value!r} cannot be encoded as {string_type.value}: {e}"
            ) from e

    @staticmethod
    def bit_string(data: bytes) -> bytes:
        """BIT STRING with a leading zero unused-bits octet"""
        if not data:
            raise MalformedStructure("Missing BIT STRING contents")
        DEREncoder._check_length(len(data) + 1)
        return core.OctetBitString(data).dump()

    @staticmethod
    def null() -> bytes:
        return core.Null().dump()

    # -- constructed -------------------------------------------------------

    @staticmethod
    def sequence(*children: bytes) -> bytes:
        return DEREncoder._constructed(CLASS_UNIVERSAL, TAG_SEQUENCE, children)

    @staticmethod
    def set_of(*children: bytes) -> bytes:
        # DER orders SET OF elements by their encodings
        return DEREncoder._constructed(CLASS_UNIVERSAL, TAG_SET, sorted(children))

    @staticmethod
    def context_tag(tag: int, *children: bytes) -> bytes:
        """Constructed implicit context tag; with no children this is A0 00 for [0]"""
        return DEREncoder._constructed(CLASS_CONTEXT, tag, children)

    @staticmethod
    def _constructed(class_: int, tag: int, children) -> bytes:
        for child in children:
            if child is None:
                raise MalformedStructure(f"Missing child element in constructed tag {tag}")
        contents = b"".join(children)
        DEREncoder._check_length(len(contents))
        return parser.emit(class_, METHOD_CONSTRUCTED, tag, contents)

    @staticmethod
    def _check_length(length: int) -> None:
        if length.bit_length() > MAX_LENGTH_OCTETS * 8:
            raise MalformedStructure(f"Length {length} exceeds the DER length prefix")

    # -- PKCS#10 structures ------------------------------------------------

    def name(self, attributes: List[AttributeTypeAndValue]) -> bytes:
        """Name ::= SEQUENCE OF RelativeDistinguishedName, one attribute per RDN"""
        if not attributes:
            raise MalformedStructure("Subject has no attributes")
        rdns = [
            self.set_of(self.sequence(self.oid(a.oid), self.string(a.value, a.string_type)))
            for a in attributes
        ]
        return self.sequence(*rdns)

    def algorithm_identifier(self, algorithm: SignatureAlgorithm) -> bytes:
        if algorithm.has_null_parameters:
            return self.sequence(self.oid(algorithm.oid), self.null())
        return self.sequence(self.oid(algorithm.oid))

    def certification_request_info(
        self,
        subject: List[AttributeTypeAndValue],
        subject_public_key_info: Optional[bytes],
    ) -> bytes:
        """
        Encode the to-be-signed CertificationRequestInfo

        Args:
            subject: Ordered subject attributes
            subject_public_key_info: DER SubjectPublicKeyInfo from the provider

        Returns:
            The exact bytes the signature is computed over
        """
        self._require_sequence(subject_public_key_info, "subjectPublicKeyInfo")
        tbs = self.sequence(
            self.integer(CSR_VERSION_V1),
            self.name(subject),
            subject_public_key_info,
            self.context_tag(0),
        )
        logger.debug(f"Encoded CertificationRequestInfo: {len(tbs)} bytes")
        return tbs

    def certification_request(
        self,
        tbs: bytes,
        algorithm: SignatureAlgorithm,
        signature: bytes,
    ) -> bytes:
        """Wrap already-encoded TBS bytes, the algorithm identifier and the signature"""
        self._require_sequence(tbs, "certificationRequestInfo")
        return self.sequence(
            tbs,
            self.algorithm_identifier(algorithm),
            self.bit_string(signature),
        )

    @staticmethod
    def _require_sequence(encoded: Optional[bytes], field: str) -> None:
        if not encoded:
            raise MalformedStructure(f"Missing required field {field}")
        try:
            class_, method, tag, _, _, _ = parser.parse(encoded, strict=True)
        except ValueError as e:
            raise MalformedStructure(f"{field} is not a single DER value: {e}") from e
        if (class_, method, tag) != (CLASS_UNIVERSAL, METHOD_CONSTRUCTED, TAG_SEQUENCE):
            raise MalformedStructure(f"{field} must be a DER SEQUENCE")
