import pytest

from model_router.models.domain import Criteria
from model_router.services.analyzer import analyze


def test_empty_prompt_yields_defaults():
    assert analyze("") == Criteria(task_type="general", complexity="medium")


def test_debug_prompt_is_coding():
    criteria = analyze("Help me debug this Python function")

    assert criteria.requires_code is True
    assert criteria.task_type == "coding"
    assert criteria.complexity == "medium"
    assert not criteria.requires_creative
    assert not criteria.requires_speed


def test_quick_summary_is_fast_and_simple():
    criteria = analyze("quick summary please")

    assert criteria.requires_speed is True
    assert criteria.complexity == "low"
    assert criteria.task_type == "general"


def test_matching_is_case_insensitive():
    assert analyze("WRITE A POEM").requires_creative is True


@pytest.mark.parametrize(
    "prompt, task_type",
    [
        ("write a python script", "coding"),
        ("write a story", "creative"),
        ("explain the strategy", "reasoning"),
        ("describe this image", "multimodal"),
        ("hello there", "general"),
    ],
)
def test_task_type_priority(prompt, task_type):
    assert analyze(prompt).task_type == task_type


def test_flags_are_independent():
    criteria = analyze(
        "Write a quick, accurate and cheap python analysis of this chart, explain the logic"
    )

    assert criteria.requires_code
    assert criteria.requires_creative
    assert criteria.requires_reasoning
    assert criteria.requires_speed
    assert criteria.requires_accuracy
    assert criteria.budget_sensitive
    assert criteria.requires_multimodal
    assert criteria.task_type == "coding"


def test_high_complexity_wins_over_low():
    assert analyze("a simple but comprehensive overview").complexity == "high"


def test_keywords_match_inside_words():
    # "now" inside "know", "api" inside "rapid"
    criteria = analyze("I know it is rapid")

    assert criteria.requires_speed
    assert criteria.requires_code


def test_accuracy_terms_raise_complexity():
    criteria = analyze("give me a detailed answer")

    assert criteria.requires_accuracy
    assert criteria.complexity == "high"


@pytest.mark.parametrize("prompt", ["x" * 100_000, "日本語のテキスト", "\x00\n\t", "🙂" * 50])
def test_analyze_is_total(prompt):
    assert isinstance(analyze(prompt), Criteria)


def test_analyze_is_deterministic():
    prompt = "Compare two budget options for a detailed image pipeline"
    assert analyze(prompt) == analyze(prompt)
