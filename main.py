import logging
from datetime import date

from langgraph.checkpoint.memory import InMemorySaver

from config.settings import FormConfig
from countries.directory import CountryDirectory
from persistence.crypto import FieldCipher
from persistence.encrypted_memory_saver import EncryptedInMemorySaver
from registration.validator import RegistrationValidator
from registration.graph import RegistrationGraphFactory

logger = logging.getLogger(__name__)


def main():
    cfg = FormConfig.from_env()
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # fill the country choice; an empty list only leaves the choice blank
    countries = CountryDirectory.from_config(cfg).fetch()
    print(f"Countries available: {len(countries)}")

    birth_year = date.today().year - 25
    patches = [
        {"first_name": "J", "email": "jo@doe", "password": "short1!"},
        {"first_name": "Jo", "last_name": "Doe", "email": "jo@doe.com", "age": "25"},
        {"password": "ab12!@#1", "confirm_password": "ab12!@#1", "birth_date": f"{birth_year}-05-17"},
        {"country": "Poland", "gender": "female", "terms_consent": True},
    ]

    config = {
        "configurable": {
            "thread_id": "reg_demo_1",
            "encrypt_keys": ["password", "confirm_password"],
        }
    }

    # build validator + graph
    validator = RegistrationValidator()
    factory = RegistrationGraphFactory(validator)

    # drafts stay encrypted when a key is configured
    if cfg.encryption_key:
        checkpointer = EncryptedInMemorySaver(FieldCipher.from_env(cfg))
    else:
        logger.warning("ENCRYPTION_KEY not set, form drafts are kept unencrypted")
        checkpointer = InMemorySaver()

    graph = factory.compile(checkpointer=checkpointer)

    # run patches
    state = None
    for i, patch in enumerate(patches, 1):
        state = graph.invoke(patch, config)
        print(f"\nINVOKE #{i}")
        print("validation_errors:", state.get("validation_errors", {}))
        print("submitted:", state.get("submitted", False))

    # checkpoint info
    hist = list(graph.get_state_history(config))
    print(f"\nCheckpoint count for thread_id=reg_demo_1: {len(hist)}")

    latest = graph.get_state(config)
    print("Latest snapshot keys:", list(latest.values.keys()))


if __name__ == "__main__":
    main()
