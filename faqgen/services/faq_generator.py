"""
Rule-based FAQ generation.

Pipeline (generate_faqs)
------------------------
1. Split the text into sentences (> 20 chars, terminal punctuation removed).
2. Rank non-stop-word keywords by frequency.
3. Derive topics: capitalized phrases first, then the top keywords.
4. Run the five category generators in a fixed order:
   definition → process → feature → benefit → general.
5. Drop questions whose normalised key was already seen, then truncate.

Every function here is pure.  The rule tables below are built once at import
and never mutated, so the module is safe to call from any number of threads
or tasks at the same time.
"""
from __future__ import annotations

import dataclasses
import logging
import re
from collections import Counter
from typing import Any, Dict, FrozenSet, List, Optional, Sequence

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------

MIN_SENTENCE_LENGTH = 20        # sentences must be strictly longer than this
MIN_KEYWORD_LENGTH = 3          # keywords must be strictly longer than this
MAX_KEYWORDS = 15
KEYWORD_TOPICS = 5              # top keywords appended to the topic list
MAX_TOPICS = 8
DEFINITION_TOPICS = 3
MAX_STEP_SENTENCES = 3
MAX_PROCESS_FAQS = 2
MAX_JOINED_SENTENCES = 2        # feature / benefit answers
MAX_GENERAL_FAQS = 3
MAX_FAQS = 10

ANSWER_JOINER = ". "


# ---------------------------------------------------------------------------
# Rule tables
# ---------------------------------------------------------------------------

STOP_WORDS: FrozenSet[str] = frozenset({
    "a", "an", "the", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "must", "shall", "can", "need", "dare",
    "ought", "used", "to", "of", "in", "for", "on", "with", "at", "by",
    "from", "as", "into", "through", "during", "before", "after", "above",
    "below", "between", "under", "again", "further", "then", "once", "here",
    "there", "when", "where", "why", "how", "all", "each", "few", "more",
    "most", "other", "some", "such", "no", "nor", "not", "only", "own",
    "same", "so", "than", "too", "very", "just", "and", "but", "if", "or",
    "because", "until", "while", "this", "that", "these", "those", "i", "me",
    "my", "myself", "we", "our", "you", "your", "he", "him", "his", "she",
    "her", "it", "its", "they", "them", "their", "what", "which", "who",
})

PROCESS_INDICATORS = (
    "step", "process", "method", "way", "approach",
    "procedure", "guide", "tutorial", "instruction",
)
FEATURE_INDICATORS = (
    "feature", "capability", "function", "option", "include",
    "provide", "offer", "support", "enable", "allow",
)
BENEFIT_INDICATORS = (
    "benefit", "advantage", "improve", "help", "save",
    "increase", "reduce", "better", "efficient", "effective",
)
CAPABILITY_INDICATORS = ("can", "able", "possible", "support", "allow")
REQUIREMENT_INDICATORS = ("require", "need", "must", "necessary", "prerequisite")

# Question templates, keyed by the category that emits them.
QUESTION_TEMPLATES: Dict[str, str] = {
    "definition": "What is {topic}?",
    "process": "How does {topic} work?",
    "getting_started": "How do I get started with {topic}?",
    "feature": "What features does {topic} offer?",
    "benefit": "Why should I use {topic}?",
    "customize": "Can I customize {topic}?",
    "requirements": "What are the requirements for {topic}?",
    "location": "Where can I find more information about {topic}?",
}

_NEWLINES_RE = re.compile(r"\n+")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_NON_ALNUM_SPACE_RE = re.compile(r"[^a-zA-Z0-9\s]")
_CAPITALIZED_PHRASE_RE = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*\b")
_STEP_RE = re.compile(r"\b(first|second|third|then|next|finally|step \d+)\b", re.IGNORECASE)
_LOCATION_RE = re.compile(r"\b(find|locate|access|available|download)\b", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")
_TERMINAL_PUNCT_RE = re.compile(r"[.!?]$")
_QUESTION_KEY_RE = re.compile(r"[^a-z0-9]")


# ---------------------------------------------------------------------------
# Result type
# ---------------------------------------------------------------------------

@dataclasses.dataclass(frozen=True)
class FAQ:
    """A generated question–answer pair."""

    question: str
    answer: str

    def to_dict(self) -> Dict[str, str]:
        return {"question": self.question, "answer": self.answer}


# ---------------------------------------------------------------------------
# Text analysis stages
# ---------------------------------------------------------------------------

def extract_sentences(text: str) -> List[str]:
    """Split *text* into trimmed sentences longer than MIN_SENTENCE_LENGTH."""
    flattened = _NEWLINES_RE.sub(" ", text)
    pieces = (p.strip() for p in _SENTENCE_SPLIT_RE.split(flattened))
    return [p for p in pieces if len(p) > MIN_SENTENCE_LENGTH]


def extract_keywords(text: str, limit: int = MAX_KEYWORDS) -> List[str]:
    """
    Return the *limit* most frequent meaningful words of *text*.

    Words are lower-cased with punctuation replaced by spaces.  Stop words and
    words of MIN_KEYWORD_LENGTH characters or fewer are discarded.  Ties keep
    the order in which the words were first seen.
    """
    words = _NON_ALNUM_SPACE_RE.sub(" ", text.lower()).split()
    counts = Counter(
        w for w in words if len(w) > MIN_KEYWORD_LENGTH and w not in STOP_WORDS
    )
    # Counter keeps insertion order and sorted() is stable.
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [word for word, _ in ranked[:limit]]


def identify_topics(text: str, keywords: Sequence[str]) -> List[str]:
    """
    Pick up to MAX_TOPICS subjects for generated questions.

    Capitalized phrases from the original text come first, then the leading
    keywords that are not already covered.  Comparisons are case-insensitive.
    """
    topics: List[str] = []
    seen = set()

    for match in _CAPITALIZED_PHRASE_RE.findall(text):
        phrase = _NEWLINES_RE.sub(" ", match)
        key = phrase.lower()
        if len(phrase) > 3 and key not in seen:
            seen.add(key)
            topics.append(phrase)

    for keyword in keywords[:KEYWORD_TOPICS]:
        if keyword.lower() not in seen:
            seen.add(keyword.lower())
            topics.append(keyword)

    return topics[:MAX_TOPICS]


def clean_answer(text: str) -> str:
    """Collapse whitespace, capitalise the first letter, end with punctuation."""
    if not text:
        return ""
    cleaned = _WHITESPACE_RE.sub(" ", text).strip()
    if not cleaned:
        return ""
    cleaned = cleaned[0].upper() + cleaned[1:]
    if not _TERMINAL_PUNCT_RE.search(cleaned):
        cleaned += "."
    return cleaned


def _contains_any(sentence: str, indicators: Sequence[str]) -> bool:
    lowered = sentence.lower()
    return any(ind in lowered for ind in indicators)


def _matching(sentences: Sequence[str], indicators: Sequence[str]) -> List[str]:
    return [s for s in sentences if _contains_any(s, indicators)]


def _first_topic_in(sentence: str, topics: Sequence[str]) -> Optional[str]:
    lowered = sentence.lower()
    for topic in topics:
        if topic.lower() in lowered:
            return topic
    return None


def _faq(category: str, topic: str, answer: str) -> FAQ:
    return FAQ(
        question=QUESTION_TEMPLATES[category].format(topic=topic),
        answer=clean_answer(answer),
    )


# ---------------------------------------------------------------------------
# Category generators
# ---------------------------------------------------------------------------

def generate_definition_faqs(sentences: Sequence[str], topics: Sequence[str]) -> List[FAQ]:
    """``What is X?`` for each of the first DEFINITION_TOPICS topics."""
    faqs: List[FAQ] = []
    for topic in topics[:DEFINITION_TOPICS]:
        needle = topic.lower()
        sentence = next((s for s in sentences if needle in s.lower()), None)
        if sentence is not None:
            faqs.append(_faq("definition", topic, sentence))
    return faqs


def generate_process_faqs(sentences: Sequence[str], topics: Sequence[str]) -> List[FAQ]:
    """
    ``How does X work?`` for sentences describing a process, plus one
    ``How do I get started with X?`` built from step-like sentences.
    """
    faqs: List[FAQ] = []

    for sentence in _matching(sentences, PROCESS_INDICATORS):
        topic = _first_topic_in(sentence, topics)
        if topic is not None:
            faqs.append(_faq("process", topic, sentence))

    step_sentences = [s for s in sentences if _STEP_RE.search(s)]
    if step_sentences and topics:
        answer = ANSWER_JOINER.join(step_sentences[:MAX_STEP_SENTENCES])
        faqs.append(_faq("getting_started", topics[0], answer))

    return faqs[:MAX_PROCESS_FAQS]


def generate_feature_faqs(sentences: Sequence[str], topics: Sequence[str]) -> List[FAQ]:
    feature_sentences = _matching(sentences, FEATURE_INDICATORS)
    if not feature_sentences or not topics:
        return []
    answer = ANSWER_JOINER.join(feature_sentences[:MAX_JOINED_SENTENCES])
    return [_faq("feature", topics[0], answer)]


def generate_benefit_faqs(sentences: Sequence[str], topics: Sequence[str]) -> List[FAQ]:
    benefit_sentences = _matching(sentences, BENEFIT_INDICATORS)
    if not benefit_sentences or not topics:
        return []
    answer = ANSWER_JOINER.join(benefit_sentences[:MAX_JOINED_SENTENCES])
    return [_faq("benefit", topics[0], answer)]


def generate_general_faqs(sentences: Sequence[str], topics: Sequence[str]) -> List[FAQ]:
    """
    Customisation, requirement and where-to-look questions.

    Each needs a topic to talk about; the customisation question needs two
    and uses the second one.
    """
    faqs: List[FAQ] = []
    if not topics:
        return faqs

    capability = _matching(sentences, CAPABILITY_INDICATORS)
    if capability and len(topics) > 1:
        faqs.append(_faq("customize", topics[1], capability[0]))

    requirement = _matching(sentences, REQUIREMENT_INDICATORS)
    if requirement:
        faqs.append(_faq("requirements", topics[0], requirement[0]))

    location = [s for s in sentences if _LOCATION_RE.search(s)]
    if location:
        faqs.append(_faq("location", topics[0], location[0]))

    return faqs[:MAX_GENERAL_FAQS]


# ---------------------------------------------------------------------------
# Deduplication + orchestration
# ---------------------------------------------------------------------------

def question_key(question: str) -> str:
    """Lower-case *question* and strip everything but ASCII letters and digits."""
    return _QUESTION_KEY_RE.sub("", question.lower())


def remove_duplicates(faqs: Sequence[FAQ]) -> List[FAQ]:
    """Keep the first FAQ for every normalised question key."""
    seen = set()
    unique: List[FAQ] = []
    for faq in faqs:
        key = question_key(faq.question)
        if key in seen:
            continue
        seen.add(key)
        unique.append(faq)
    return unique


GENERATORS = (
    generate_definition_faqs,
    generate_process_faqs,
    generate_feature_faqs,
    generate_benefit_faqs,
    generate_general_faqs,
)


def generate_faqs(text: Any, limit: int = MAX_FAQS) -> List[FAQ]:
    """
    Generate up to *limit* FAQs from *text*.

    Args:
        text:  Free text.  ``None``, blank text or a non-string value
               yields an empty list.
        limit: Maximum number of FAQs to return.

    Returns:
        FAQs in generation order (definition, process, feature, benefit,
        general) with duplicate questions removed.
    """
    if text is None:
        return []
    if not isinstance(text, str):
        logger.debug("generate_faqs: ignoring non-string input (%s)", type(text).__name__)
        return []
    if not text.strip():
        return []

    sentences = extract_sentences(text)
    keywords = extract_keywords(text)
    topics = identify_topics(text, keywords)

    candidates: List[FAQ] = []
    for generator in GENERATORS:
        candidates.extend(generator(sentences, topics))

    faqs = remove_duplicates(candidates)[:limit]
    logger.debug(
        "generate_faqs: %d sentences, %d keywords, %d topics → %d candidates, %d kept",
        len(sentences),
        len(keywords),
        len(topics),
        len(candidates),
        len(faqs),
    )
    return faqs
