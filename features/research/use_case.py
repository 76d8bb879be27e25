"""
Use-case generation — objective, actors, flow and acceptance criteria for a
feature, written by the LLM and repaired field by field.
"""

from __future__ import annotations

import logging
from typing import Any

from models.schemas import UseCaseSections
from utils.llm import chat_json, is_configured

log = logging.getLogger(__name__)

USE_CASE_SYSTEM = (
    "You are a business analyst writing a use case for an HR software feature. "
    "Be specific to the feature and its description, not generic.\n"
    "Reply in JSON only with this exact structure:\n"
    "{\n"
    '  "objective": "1-2 sentences describing the business goal",\n'
    '  "actors": "Comma-separated list of who performs this use case",\n'
    '  "preconditions": "What must be true before the use case can start",\n'
    '  "basic_flow": ["Step 1 in imperative mood", "Step 2", "..."],\n'
    '  "postconditions": "What is true after a successful run",\n'
    '  "acceptance_criteria": ["Criterion 1", "Criterion 2", "..."]\n'
    "}\n"
    "Write 4-8 steps for basic_flow and 3-5 acceptance criteria."
)


def stub_use_case(feature_name: str) -> UseCaseSections:
    return UseCaseSections(
        objective=f"Enable the organization to use the capability: {feature_name}.",
        actors="HR Administrator, relevant employees (role depends on feature).",
        preconditions=("Feature is enabled and configured in the system; "
                       "user has appropriate permissions."),
        basic_flow=[
            "User navigates to the relevant module or screen.",
            "User performs the actions required for this feature according to the product design.",
            "System validates input and applies business rules.",
            "Outcome is saved and reflected in the system.",
        ],
        postconditions=("The intended outcome is achieved and data is consistent; "
                        "any dependent processes are updated as needed."),
        acceptance_criteria=[
            "Feature behaves as described in the feature description.",
            "User can complete the flow without errors under valid input.",
            "Results are visible and auditable where applicable.",
        ],
    )


def _text_or(value: Any, default: str) -> str:
    text = str(value).strip() if value is not None else ""
    return text or default


def _list_or(value: Any, default: list[str]) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return list(default)
    items = [str(v).strip() for v in value if v is not None and str(v).strip()]
    return items or list(default)


def repair_use_case(data: dict, feature_name: str) -> UseCaseSections:
    if "error" in data and "raw" in data:
        return stub_use_case(feature_name)
    return UseCaseSections(
        objective=_text_or(data.get("objective"), f"Enable the organization to use: {feature_name}."),
        actors=_text_or(data.get("actors"), "HR Administrator, relevant users."),
        preconditions=_text_or(data.get("preconditions"), "Feature is enabled and user has permissions."),
        basic_flow=_list_or(data.get("basic_flow"), [
            "User performs the feature actions.",
            "System processes and persists the outcome.",
        ]),
        postconditions=_text_or(data.get("postconditions"), "Outcome is achieved and reflected in the system."),
        acceptance_criteria=_list_or(data.get("acceptance_criteria"), [
            "Feature works as described.",
            "User can complete the flow successfully.",
        ]),
    )


def generate_use_case_sections(feature_name: str, feature_description: str = "") -> UseCaseSections:
    if not is_configured():
        return stub_use_case(feature_name)

    log.info("Generating use case for %r", feature_name)
    result = chat_json(
        system=USE_CASE_SYSTEM,
        user=f"Feature: {feature_name}\nDescription: {feature_description}",
        max_tokens=1500,
    )
    return repair_use_case(result, feature_name)
