import logging
from datetime import date
from typing import Callable, Dict, Iterable, Literal, Optional

from registration import rules
from registration.state import RegistrationRecord, RegistrationState, ValidationResult

logger = logging.getLogger(__name__)


class RegistrationValidator:
    def __init__(
        self,
        today: Optional[Callable[[], date]] = None,
        countries: Optional[Iterable[str]] = None,
    ):
        self.today = today or date.today
        self.countries = frozenset(countries) if countries is not None else None

    def validate(self, record: RegistrationRecord) -> ValidationResult:
        """
        Check every field rule and collect one message per failing field.
        All rules run; an empty result means the record can be submitted.
        """
        errors: Dict[str, str] = {}
        msg = rules.ERROR_MESSAGES

        if not rules.is_valid_name(record.first_name):
            errors["first_name"] = msg["first_name"]

        if not rules.is_valid_name(record.last_name):
            errors["last_name"] = msg["last_name"]

        if not rules.is_valid_email(record.email):
            errors["email"] = msg["email"]

        if not rules.is_strong_password(record.password):
            errors["password"] = msg["password"]

        if record.password != record.confirm_password:
            errors["confirm_password"] = msg["confirm_password"]

        age = rules.parse_age(record.age)
        if not rules.is_age_in_range(age):
            errors["age"] = msg["age"]

        # an unparseable age also fails the birth date check
        birth = rules.parse_birth_date(record.birth_date)
        if not rules.is_age_consistent(birth, age, self.today()):
            errors["birth_date"] = msg["birth_date"]

        if not rules.is_country_selected(record.country):
            errors["country"] = msg["country"]
        elif self.countries is not None and record.country not in self.countries:
            errors["country"] = msg["country_unknown"]

        if record.terms_consent is not True:
            errors["terms_consent"] = msg["terms_consent"]

        if errors:
            logger.debug("Registration rejected, invalid fields: %s", sorted(errors))

        return ValidationResult(errors=errors)

    def validate_state(self, state: RegistrationState) -> RegistrationState:
        result = self.validate(state)
        return state.model_copy(update={"validation_errors": result.errors})

    @staticmethod
    def should_complete(state: RegistrationState) -> Literal["end", "complete"]:
        return "complete" if len(state.validation_errors) == 0 else "end"
