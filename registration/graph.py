import logging
from typing import Any, Callable, Optional
from langgraph.graph import StateGraph, START, END

from registration.state import RegistrationRecord, RegistrationState
from registration.validator import RegistrationValidator

logger = logging.getLogger(__name__)

SubmissionSink = Callable[[RegistrationRecord], None]


def log_submission(record: RegistrationRecord) -> None:
    logger.info("Registration form valid: %s", record.redacted())


class RegistrationGraphFactory:
    def __init__(
        self,
        validator: RegistrationValidator,
        on_complete: Optional[SubmissionSink] = None,
    ):
        self.validator = validator
        self.on_complete = on_complete or log_submission

    @staticmethod
    def collect_node(state: RegistrationState) -> RegistrationState:
        """
        graph.invoke(patch, config) already merges the field patch into state;
        an edit always reopens the form.
        """
        return state.model_copy(update={"submitted": False})

    def registration_complete(self, state: RegistrationState) -> RegistrationState:
        """
        Final point. Only reached when validation_errors is empty, so the
        record handed to the sink is always valid.
        """
        self.on_complete(state.to_record())
        return state.model_copy(update={"submitted": True})

    def build(self) -> StateGraph:
        g = StateGraph(RegistrationState)

        g.add_node("collect", self.collect_node)
        g.add_node("validate", self.validator.validate_state)
        g.add_node("complete", self.registration_complete)

        g.add_edge(START, "collect")
        g.add_edge("collect", "validate")

        g.add_conditional_edges(
            "validate",
            self.validator.should_complete,
            {"end": END, "complete": "complete"},
        )
        g.add_edge("complete", END)

        return g

    def compile(self, checkpointer: Any = None):
        return self.build().compile(checkpointer=checkpointer)
