"""
Unit tests for the contact inquiry request model.
"""

import pytest
from pydantic import ValidationError

from src.api.schemas.contact_schemas import ContactCreate

VALID_INQUIRY = {
    "firstName": "Anita",
    "lastName": "Rao",
    "mobileNo": "+91 98765 43210",
    "email": "Anita.Rao@Example.com",
    "service": "GST Registration",
    "query": "Need help registering for GST.",
}


def test_email_is_lowercased() -> None:
    assert ContactCreate.model_validate(VALID_INQUIRY).email == "anita.rao@example.com"


@pytest.mark.parametrize("email", ["someone@example", "some one@example.com", "no-at-sign.example.com"])
def test_malformed_email_is_rejected(email: str) -> None:
    with pytest.raises(ValidationError, match="valid email address"):
        ContactCreate.model_validate({**VALID_INQUIRY, "email": email})


def test_short_mobile_number_is_rejected() -> None:
    with pytest.raises(ValidationError, match="valid mobile number"):
        ContactCreate.model_validate({**VALID_INQUIRY, "mobileNo": "12345"})
