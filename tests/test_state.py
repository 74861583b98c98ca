import pytest
from pydantic import ValidationError

from registration.state import RegistrationRecord, RegistrationState, UnknownFieldError


def test_update_field_returns_new_record():
    record = RegistrationRecord()
    updated = record.update_field("first_name", "Jo")

    assert updated.first_name == "Jo"
    assert record.first_name == ""


def test_update_checkbox_field():
    record = RegistrationRecord().update_field("terms_consent", True)

    assert record.terms_consent is True


def test_update_unknown_field_raises():
    with pytest.raises(UnknownFieldError):
        RegistrationRecord().update_field("nickname", "jo")


def test_update_rejects_wrong_type():
    with pytest.raises(ValidationError):
        RegistrationRecord().update_field("terms_consent", "maybe")


def test_state_update_cannot_touch_validation_errors():
    state = RegistrationState(validation_errors={"email": "bad"})

    with pytest.raises(UnknownFieldError):
        state.update_field("validation_errors", {})

    updated = state.update_field("email", "jo@doe.com")
    assert isinstance(updated, RegistrationState)
    assert updated.validation_errors == {"email": "bad"}


def test_redacted_masks_secrets():
    state = RegistrationState(first_name="Jo", password="ab12!@#1", confirm_password="ab12!@#1")
    data = state.redacted()

    assert data["password"] == "***"
    assert data["confirm_password"] == "***"
    assert data["first_name"] == "Jo"
    assert "validation_errors" not in data


def test_to_record_drops_flow_fields():
    state = RegistrationState(first_name="Jo", submitted=True)
    record = state.to_record()

    assert type(record) is RegistrationRecord
    assert record.first_name == "Jo"
