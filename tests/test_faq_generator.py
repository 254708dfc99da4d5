"""Tests for the rule-based FAQ generation pipeline."""
import pytest

from faqgen.services.faq_generator import (
    FAQ,
    STOP_WORDS,
    clean_answer,
    extract_keywords,
    extract_sentences,
    generate_benefit_faqs,
    generate_definition_faqs,
    generate_faqs,
    generate_feature_faqs,
    generate_general_faqs,
    generate_process_faqs,
    identify_topics,
    question_key,
    remove_duplicates,
)
from tests.conftest import SAMPLE_TEXT

WIDGETS_TEXT = (
    "Widgets are great. Widgets help you save time and improve efficiency. "
    "You can customize Widgets easily. The process requires no special steps."
)


# ---------------------------------------------------------------------------
# Sentences
# ---------------------------------------------------------------------------

def test_extract_sentences_splits_and_filters_short_pieces():
    text = "Hello world. This sentence is definitely long enough!\nAnd this one too, it is long enough?"
    assert extract_sentences(text) == [
        "This sentence is definitely long enough",
        "And this one too, it is long enough",
    ]


def test_extract_sentences_length_boundary():
    text = "a" * 20 + ". " + "b" * 21 + "."
    assert extract_sentences(text) == ["b" * 21]


def test_extract_sentences_collapses_punctuation_runs():
    text = "Wait what is happening here?!... Another long sentence right here"
    assert extract_sentences(text) == [
        "Wait what is happening here",
        "Another long sentence right here",
    ]


def test_extract_sentences_empty():
    assert extract_sentences("") == []


# ---------------------------------------------------------------------------
# Keywords
# ---------------------------------------------------------------------------

def test_extract_keywords_ranks_by_frequency():
    text = "The quick brown fox. The quick dog! Quick, quick brown."
    assert extract_keywords(text) == ["quick", "brown"]


def test_extract_keywords_ties_keep_first_seen_order():
    assert extract_keywords("zeta alpha zeta alpha beta") == ["zeta", "alpha", "beta"]


def test_extract_keywords_excludes_stop_words_and_short_tokens():
    keywords = extract_keywords("There these those would should could. Cat dog owl sun.")
    assert keywords == []


def test_extract_keywords_replaces_punctuation_with_spaces():
    assert extract_keywords("e-mail's self-service") == ["mail", "self", "service"]


def test_extract_keywords_limit():
    words = [f"term{chr(97 + i)}" for i in range(20)]
    assert extract_keywords(" ".join(words)) == words[:15]


def test_extract_keywords_never_returns_stop_words():
    keywords = extract_keywords(SAMPLE_TEXT + " " + " ".join(sorted(STOP_WORDS)))
    assert keywords
    for word in keywords:
        assert word not in STOP_WORDS
        assert len(word) > 3


# ---------------------------------------------------------------------------
# Topics
# ---------------------------------------------------------------------------

def test_identify_topics_capitalized_phrases_come_first():
    assert identify_topics("Meet Alice today", ["meeting", "today"]) == [
        "Meet Alice",
        "meeting",
        "today",
    ]


def test_identify_topics_deduplicates_case_insensitively():
    text = "We love Acme Widgets. Acme Widgets rock. Paris is lovely."
    assert identify_topics(text, ["paris", "acme widgets", "lovely"]) == [
        "Acme Widgets",
        "Paris",
        "lovely",
    ]


def test_identify_topics_drops_short_phrases():
    assert identify_topics("Bob met Anna at noon", []) == ["Anna"]


def test_identify_topics_uses_only_top_five_keywords():
    keywords = ["alpha", "bravo", "charlie", "delta", "echo", "foxtrot", "golf"]
    assert identify_topics("all lowercase here", keywords) == keywords[:5]


def test_identify_topics_capped_at_eight():
    text = (
        "Alpha and Bravo and Charlie and Delta and Echo and "
        "Foxtrot and Golf and Hotel and India and Juliet"
    )
    topics = identify_topics(text, ["zulu"])
    assert topics == [
        "Alpha", "Bravo", "Charlie", "Delta", "Echo", "Foxtrot", "Golf", "Hotel",
    ]


def test_identify_topics_normalizes_phrases_spanning_newlines():
    assert identify_topics("Acme\nCloud rocks", []) == ["Acme Cloud"]


def test_identify_topics_keeps_inner_spacing_of_phrases():
    assert identify_topics("Acme  Widget\tPro rocks", []) == ["Acme  Widget\tPro"]


def test_identify_topics_empty():
    assert identify_topics("all lowercase words", []) == []


# ---------------------------------------------------------------------------
# Answer cleaning
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "raw, cleaned",
    [
        ("  hello   world  ", "Hello world."),
        ("Already done!", "Already done!"),
        ("what?", "What?"),
        ("", ""),
        ("   ", ""),
    ],
)
def test_clean_answer(raw, cleaned):
    assert clean_answer(raw) == cleaned


def test_clean_answer_on_joined_sentences_adds_single_period():
    joined = ". ".join(["first sentence here", "second sentence here"])
    assert clean_answer(joined) == "First sentence here. second sentence here."


# ---------------------------------------------------------------------------
# Category generators
# ---------------------------------------------------------------------------

def test_definition_faqs():
    sentences = ["Widgets are small tools for builders", "The Gizmo is a widget"]
    faqs = generate_definition_faqs(sentences, ["Widgets", "Gizmo", "Sprocket"])
    assert faqs == [
        FAQ("What is Widgets?", "Widgets are small tools for builders."),
        FAQ("What is Gizmo?", "The Gizmo is a widget."),
    ]


def test_definition_faqs_only_first_three_topics():
    sentences = ["Aaaa Bbbb Cccc Dddd all appear in this sentence"]
    faqs = generate_definition_faqs(sentences, ["Aaaa", "Bbbb", "Cccc", "Dddd"])
    assert [f.question for f in faqs] == ["What is Aaaa?", "What is Bbbb?", "What is Cccc?"]


def test_process_faqs_capped_at_two():
    sentences = [
        "The Builder process takes a few minutes",
        "Step 1 is to open the Builder",
        "Next you save the project",
        "Nothing relevant appears in this one",
    ]
    faqs = generate_process_faqs(sentences, ["Builder", "project"])
    assert faqs == [
        FAQ("How does Builder work?", "The Builder process takes a few minutes."),
        FAQ("How does Builder work?", "Step 1 is to open the Builder."),
    ]


def test_process_faqs_getting_started_joins_first_three_steps():
    sentences = [
        "First open the dashboard in a browser",
        "Then click the large green button",
        "Finally wait for the sync to complete",
        "Next the report appears on screen",
    ]
    faqs = generate_process_faqs(sentences, ["Dashboard"])
    assert faqs == [
        FAQ(
            "How do I get started with Dashboard?",
            "First open the dashboard in a browser. "
            "Then click the large green button. "
            "Finally wait for the sync to complete.",
        )
    ]


def test_process_faqs_need_topics():
    assert generate_process_faqs(["First do the process step by step"], []) == []


def test_feature_faqs_join_first_two_matches():
    sentences = [
        "The app includes offline mode",
        "Nothing to see here at all",
        "It also offers dark themes",
        "Support is available too",
    ]
    assert generate_feature_faqs(sentences, ["App"]) == [
        FAQ(
            "What features does App offer?",
            "The app includes offline mode. It also offers dark themes.",
        )
    ]
    assert generate_feature_faqs(sentences, []) == []


def test_benefit_faqs():
    sentences = ["Widgets help you save time", "Widgets are great", "Teams become more efficient"]
    assert generate_benefit_faqs(sentences, ["Widgets"]) == [
        FAQ("Why should I use Widgets?", "Widgets help you save time. Teams become more efficient.")
    ]
    assert generate_benefit_faqs(["Nothing matches in here"], ["Widgets"]) == []


def test_general_faqs():
    sentences = [
        "You can customize the theme",
        "A license is required for teams",
        "Guides are available online",
    ]
    assert generate_general_faqs(sentences, ["Acme", "theme"]) == [
        FAQ("Can I customize theme?", "You can customize the theme."),
        FAQ("What are the requirements for Acme?", "A license is required for teams."),
        FAQ("Where can I find more information about Acme?", "Guides are available online."),
    ]


def test_general_faqs_customize_needs_two_topics():
    sentences = ["You can customize the theme", "A license is required for teams"]
    questions = [f.question for f in generate_general_faqs(sentences, ["Acme"])]
    assert questions == ["What are the requirements for Acme?"]


def test_general_faqs_requirements_suppressed_without_topics():
    assert generate_general_faqs(["A license is required for every team"], []) == []


# ---------------------------------------------------------------------------
# Deduplication
# ---------------------------------------------------------------------------

def test_question_key():
    assert question_key("What is Acme-Cloud 2?") == "whatisacmecloud2"


def test_remove_duplicates_keeps_first():
    faqs = [
        FAQ("What is X?", "First."),
        FAQ("what is x", "Second."),
        FAQ("What is Y?", "Third."),
    ]
    assert remove_duplicates(faqs) == [FAQ("What is X?", "First."), FAQ("What is Y?", "Third.")]


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("text", [None, "", "   ", " \n\t "])
def test_generate_faqs_blank_input(text):
    assert generate_faqs(text) == []


def test_generate_faqs_non_string_returns_empty():
    assert generate_faqs(42) == []
    assert generate_faqs(["Acme Cloud is a hosted platform for teams."]) == []


def test_generate_faqs_without_long_sentences():
    assert generate_faqs("Hi there. Short one. Tiny! Acme Cloud rocks.") == []


def test_generate_faqs_widgets_example():
    faqs = generate_faqs(WIDGETS_TEXT)
    assert faqs == [
        FAQ("What is Widgets?", "Widgets help you save time and improve efficiency."),
        FAQ("What is help?", "Widgets help you save time and improve efficiency."),
        FAQ("Why should I use Widgets?", "Widgets help you save time and improve efficiency."),
        FAQ("Can I customize great?", "You can customize Widgets easily."),
        FAQ("What are the requirements for Widgets?", "The process requires no special steps."),
    ]


def test_generate_faqs_without_topics_produces_nothing():
    # Every word is a stop word or too short, so no topic can be derived.
    assert generate_faqs("you must do so and we can go to it by ten.") == []


def test_generate_faqs_invariants():
    faqs = generate_faqs(SAMPLE_TEXT)
    assert 0 < len(faqs) <= 10
    keys = [question_key(f.question) for f in faqs]
    assert len(keys) == len(set(keys))
    for faq in faqs:
        assert faq.answer[-1] in ".!?"
        assert faq.answer[0].isupper()
    assert faqs[0] == FAQ(
        "What is Acme Cloud?",
        "Acme Cloud is a hosted platform for storing and sharing project files.",
    )


def test_generate_faqs_limit():
    assert len(generate_faqs(SAMPLE_TEXT, limit=2)) == 2


def test_generate_faqs_ignores_newline_layout():
    multiline = SAMPLE_TEXT.replace(". ", ".\n\n").replace(" Cloud", "\nCloud")
    assert generate_faqs(multiline) == generate_faqs(multiline.replace("\n", " "))


def test_generate_faqs_defines_double_spaced_phrase():
    text = "Acme  Widget is a great tool for every team out there. It works well."
    faqs = generate_faqs(text)
    assert faqs[0] == FAQ(
        "What is Acme  Widget?",
        "Acme Widget is a great tool for every team out there.",
    )


def test_faq_to_dict():
    assert FAQ("Q?", "A.").to_dict() == {"question": "Q?", "answer": "A."}
