import re
from dataclasses import dataclass
from enum import Enum

# X.680 PrintableString alphabet; use with fullmatch
PRINTABLE_PATTERN = re.compile(r"[A-Za-z0-9 '()+,\-./:=?]*")


def is_printable_string(value: str) -> bool:
    return PRINTABLE_PATTERN.fullmatch(value) is not None


class StringType(str, Enum):
    """ASN.1 string types allowed for subject attribute values"""
    PRINTABLE = "PrintableString"
    UTF8 = "UTF8String"


class SubjectField(str, Enum):
    """Enrollment fields in the order their RDNs appear in the subject"""
    COUNTRY = "country"
    STATE = "state"
    ORGANIZATION = "organization"
    ORGANIZATION_UNIT = "organization_unit"
    ENROLLMENT_ID = "enrollment_id"

    @property
    def oid(self) -> str:
        return _FIELD_ATTRIBUTES[self][0]

    @property
    def string_type(self) -> StringType:
        return _FIELD_ATTRIBUTES[self][1]

    @property
    def short_name(self) -> str:
        return _FIELD_ATTRIBUTES[self][2]


# oid, value type, RFC 4514 short name
_FIELD_ATTRIBUTES = {
    SubjectField.COUNTRY: ("2.5.4.6", StringType.PRINTABLE, "C"),
    SubjectField.STATE: ("2.5.4.8", StringType.UTF8, "ST"),
    SubjectField.ORGANIZATION: ("2.5.4.10", StringType.UTF8, "O"),
    SubjectField.ORGANIZATION_UNIT: ("2.5.4.11", StringType.UTF8, "OU"),
    SubjectField.ENROLLMENT_ID: ("2.5.4.3", StringType.UTF8, "CN"),
}


@dataclass(frozen=True)
class AttributeTypeAndValue:
    oid: str
    value: str
    string_type: StringType
