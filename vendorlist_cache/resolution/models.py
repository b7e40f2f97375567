"""
Vendor List Payload Model

Shape check for documents returned by the origin. Only the mandatory GVL
fields are described; everything else is passed through untouched.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from vendorlist_cache.core.exceptions import InvalidPayloadError
from vendorlist_cache.core.interfaces.cache import Payload


class VendorListDocument(BaseModel):
    """
    Mandatory fields of a Global Vendor List document.

    Attributes:
        vendorListVersion: Positive list version
        purposes: Purpose definitions keyed by purpose id
        vendors: Vendor records keyed by vendor id
    """

    model_config = ConfigDict(extra="allow")

    vendorListVersion: int = Field(..., ge=1, strict=True)
    purposes: dict[str, Any]
    vendors: dict[str, Any]


def validate_payload(document: Any, variant: str | None = None) -> Payload:
    """
    Check that document is a usable vendor list.

    Returns the document itself (not a re-serialized model) so fields the
    model does not describe are preserved exactly.

    Raises:
        InvalidPayloadError: If document is not an object or misses a mandatory field
    """
    if not isinstance(document, dict):
        raise InvalidPayloadError(
            "Vendor list payload must be a JSON object",
            details={"variant": variant, "type": type(document).__name__},
        )

    try:
        VendorListDocument.model_validate(document)
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise InvalidPayloadError(
            "Vendor list payload is missing or has invalid mandatory fields",
            details={"variant": variant, "fields": fields},
        ) from e

    return document
