"""Suggestion service: rank dictionary words against a query word.

Every dictionary word is scored with align_distance(); the scores are
optionally filtered by a distance threshold, ordered ascending (ties keep
dictionary order) and truncated to the requested number of suggestions.
"""

import heapq
import math
import re
from collections.abc import Sequence
from concurrent.futures import ProcessPoolExecutor
from typing import NamedTuple

from loguru import logger

from spell_aligner.aligner import WEIGHTED, CostModel, align_distance

DEFAULT_MAX_SUGGESTIONS = 5
DEFAULT_MAX_WORD_LENGTH = 100

TOKEN_PATTERN = re.compile(r"\b[a-z'-]+\b")


class Suggestion(NamedTuple):
    """A dictionary word and its alignment distance from the query."""

    word: str
    distance: int


def _score_chunk(
    query: str,
    words: Sequence[str],
    offset: int,
    cost_model: CostModel,
    limit: int,
    distance_threshold: int | None,
) -> list[tuple[int, int, str]]:
    """Score a slice of the dictionary and keep its best `limit` entries.

    Entries are (distance, dictionary index, word) so that partial results
    from several chunks merge back into the same stable order.
    """
    scored = []
    for index, word in enumerate(words, start=offset):
        distance = align_distance(query, word, cost_model)
        if distance_threshold is not None and distance > distance_threshold:
            continue
        scored.append((distance, index, word))
    return heapq.nsmallest(limit, scored)


def bound_word_length(word: str, max_word_length: int = DEFAULT_MAX_WORD_LENGTH) -> str:
    """Truncate a word to max_word_length characters, logging when it is cut."""
    if len(word) > max_word_length:
        logger.warning(
            f"Word of {len(word)} characters truncated to {max_word_length} characters"
        )
        return word[:max_word_length]
    return word


def _validate_policy(max_suggestions: int, distance_threshold: int | None) -> None:
    if max_suggestions < 1:
        msg = f"max_suggestions must be at least 1, got {max_suggestions}"
        raise ValueError(msg)
    if distance_threshold is not None and distance_threshold < 0:
        msg = f"distance_threshold cannot be negative, got {distance_threshold}"
        raise ValueError(msg)


def suggest(
    query: str,
    dictionary: Sequence[str],
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
    distance_threshold: int | None = None,
    cost_model: CostModel = WEIGHTED,
    max_word_length: int = DEFAULT_MAX_WORD_LENGTH,
    workers: int = 1,
) -> list[Suggestion]:
    """Return the dictionary words closest to a query word.

    Args:
        query: The word to find suggestions for
        dictionary: Normalized dictionary words, in their original order
        max_suggestions: Maximum number of suggestions to return
        distance_threshold: If set, drop words scoring above this distance
        cost_model: Costs used by the aligner
        max_word_length: Queries longer than this are truncated before scoring
        workers: Number of processes to split the dictionary across

    Returns:
        Suggestions ordered by ascending distance; ties keep dictionary order.
        Empty if the query or the dictionary is empty.

    Raises:
        ValueError: If max_suggestions < 1 or distance_threshold < 0

    Example:
        >>> suggest("speling", ["spelling", "spewing", "sapling"], max_suggestions=2)
        [Suggestion(word='spewing', distance=1), Suggestion(word='spelling', distance=2)]
    """
    _validate_policy(max_suggestions, distance_threshold)

    query = query.strip().lower()
    if not query:
        logger.debug("Empty query, no suggestions")
        return []
    if not dictionary:
        logger.debug("Dictionary is empty, no suggestions")
        return []

    query = bound_word_length(query, max_word_length)

    workers = max(1, min(workers, len(dictionary)))
    if workers == 1:
        best = _score_chunk(
            query, dictionary, 0, cost_model, max_suggestions, distance_threshold
        )
    else:
        best = _score_in_parallel(
            query, dictionary, cost_model, max_suggestions, distance_threshold, workers
        )

    suggestions = [Suggestion(word, distance) for distance, _, word in best]
    logger.debug(
        f"Scored {len(dictionary)} words for '{query}', returning {len(suggestions)} suggestion(s)"
    )
    return suggestions


def _score_in_parallel(
    query: str,
    dictionary: Sequence[str],
    cost_model: CostModel,
    max_suggestions: int,
    distance_threshold: int | None,
    workers: int,
) -> list[tuple[int, int, str]]:
    """Split the dictionary into contiguous chunks, score each in a process and merge."""
    chunk_size = math.ceil(len(dictionary) / workers)
    logger.debug(f"Scoring {len(dictionary)} words across {workers} workers")

    with ProcessPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(
                _score_chunk,
                query,
                list(dictionary[start : start + chunk_size]),
                start,
                cost_model,
                max_suggestions,
                distance_threshold,
            )
            for start in range(0, len(dictionary), chunk_size)
        ]
        partials = [future.result() for future in futures]

    return heapq.nsmallest(max_suggestions, heapq.merge(*partials))


def tokenize(text: str) -> list[str]:
    """Extract lowercase words (letters, apostrophes, hyphens) from free text.

    Example:
        >>> tokenize("Don't over-think THIS!")
        ["don't", 'over-think', 'this']
    """
    return TOKEN_PATTERN.findall(text.lower())


def check_text(
    raw_text: str,
    dictionary: Sequence[str],
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
    distance_threshold: int | None = None,
    cost_model: CostModel = WEIGHTED,
    max_word_length: int = DEFAULT_MAX_WORD_LENGTH,
    workers: int = 1,
) -> dict[str, list[Suggestion]]:
    """Find misspelled words in free text and suggest corrections for each.

    A word is misspelled when it does not appear verbatim in the dictionary.
    Each distinct misspelled word is checked once, in order of first
    appearance. Words for which no suggestion survives the threshold are
    left out of the result.

    Args:
        raw_text: Text to check
        dictionary: Normalized dictionary words
        max_suggestions: Maximum suggestions per misspelled word
        distance_threshold: If set, drop suggestions scoring above this distance
        cost_model: Costs used by the aligner
        max_word_length: Longer words are truncated before scoring
        workers: Number of processes used per word

    Returns:
        Mapping of misspelled word to its suggestions
    """
    _validate_policy(max_suggestions, distance_threshold)

    known = set(dictionary)
    results: dict[str, list[Suggestion]] = {}
    checked: set[str] = set()

    for word in tokenize(raw_text):
        if word in known or word in checked:
            continue
        checked.add(word)

        suggestions = suggest(
            word,
            dictionary,
            max_suggestions=max_suggestions,
            distance_threshold=distance_threshold,
            cost_model=cost_model,
            max_word_length=max_word_length,
            workers=workers,
        )
        if suggestions:
            results[word] = suggestions

    logger.info(f"Found {len(checked)} unknown word(s), {len(results)} with suggestions")
    return results
