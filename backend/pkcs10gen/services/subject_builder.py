from typing import List, Optional

from pkcs10gen.core.config import settings
from pkcs10gen.core.errors import InvalidSubjectField
from pkcs10gen.core.logging import get_logger
from pkcs10gen.models.subject import AttributeTypeAndValue, SubjectField, is_printable_string
from pkcs10gen.schemas.enrollment import EnrollmentRequest

logger = get_logger(__name__)


class SubjectBuilder:
    """Turns an EnrollmentRequest into the ordered subject attributes"""

    def __init__(self, strict: Optional[bool] = None):
        self.strict = settings.STRICT_SUBJECT_VALIDATION if strict is None else strict

    def build(self, request: EnrollmentRequest) -> List[AttributeTypeAndValue]:
        """
        Build the subject in fixed order: C, ST, O, OU, CN

        Args:
            request: Enrollment fields

        Returns:
            One AttributeTypeAndValue per field, in RDN order

        Raises:
            InvalidSubjectField: a field is absent, or rejected in strict mode
        """
        attributes = []
        for field in SubjectField:
            value = getattr(request, field.value, None)
            if value is None:
                raise InvalidSubjectField(field.value)
            if self.strict:
                self._validate_strict(field, value)
            attributes.append(
                AttributeTypeAndValue(oid=field.oid, value=value, string_type=field.string_type)
            )

        logger.debug(f"Built subject with {len(attributes)} RDNs")
        return attributes

    def _validate_strict(self, field: SubjectField, value: str) -> None:
        if not value.strip():
            raise InvalidSubjectField(field.value, f"Subject field {field.value} must not be empty")

        if field is SubjectField.COUNTRY:
            if len(value) != 2:
                raise InvalidSubjectField(
                    field.value, "Country must be a two-character ISO 3166 code"
                )
            if not is_printable_string(value):
                raise InvalidSubjectField(
                    field.value, "Country contains characters outside PrintableString"
                )

    @staticmethod
    def to_string(attributes: List[AttributeTypeAndValue]) -> str:
        """Human-readable subject in RDN order, e.g. 'C=V, ST=M, ..., CN=user1'"""
        names = {field.oid: field.short_name for field in SubjectField}
        return ", ".join(f"{names.get(a.oid, a.oid)}={a.value}" for a in attributes)
