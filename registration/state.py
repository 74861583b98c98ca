from typing import Any, Dict
from pydantic import BaseModel, Field

SECRET_FIELDS = frozenset({"password", "confirm_password"})


class UnknownFieldError(KeyError):
    """Raised when a field update names a field the form does not have."""


class RegistrationRecord(BaseModel):
    first_name: str = Field(default="", description="First name, letters only")
    last_name: str = Field(default="", description="Last name, letters only")
    email: str = Field(default="", description="User email")
    password: str = Field(default="", description="At least 8 chars, 2 digits, 3 symbols")
    confirm_password: str = Field(default="", description="Must equal password")
    age: str = Field(default="", description="Integer between 18 and 99, as typed")
    birth_date: str = Field(default="", description="YYYY-MM-DD or DD-MM-YYYY")
    country: str = Field(default="", description="Country name from the directory")
    gender: str = Field(default="", description="Optional: male, female, other")
    marketing_consent: bool = Field(default=False, description="Optional")
    terms_consent: bool = Field(default=False, description="Required")

    @classmethod
    def field_names(cls) -> frozenset:
        return frozenset(RegistrationRecord.model_fields)

    def update_field(self, name: str, value: Any) -> "RegistrationRecord":
        """
        Return a copy with one field replaced. The copy is re-validated so a
        checkbox only takes a bool and text fields only take strings.
        """
        if name not in self.field_names():
            raise UnknownFieldError(name)
        return type(self).model_validate({**self.model_dump(), name: value})

    def to_record(self) -> "RegistrationRecord":
        return RegistrationRecord.model_validate(
            self.model_dump(include=set(self.field_names()))
        )

    def redacted(self) -> Dict[str, Any]:
        data = self.to_record().model_dump()
        for name in SECRET_FIELDS:
            if data.get(name):
                data[name] = "***"
        return data


class RegistrationState(RegistrationRecord):
    validation_errors: Dict[str, str] = Field(default_factory=dict)
    submitted: bool = Field(default=False)


class ValidationResult(BaseModel):
    errors: Dict[str, str] = Field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return len(self.errors) == 0
