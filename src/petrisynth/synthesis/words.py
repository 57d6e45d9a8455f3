"""Search for words that are (not) solvable by some class of Petri nets.

A word is *solvable* if a net of the class has the word as its language, up
to prefixes. Words are only generated up to renaming of letters: two words
are equivalent if one turns into the other by a bijective renaming. Each
class is represented by its *normalized* word, in which the last letter is
the first letter of the alphabet, the next new letter from the end the
second one, and so on.

Words are generated level by level, each level by prepending a letter to
the solvable words of the previous level. For classes without a bound,
solvability is prefix closed, so a word whose prefix is unsolvable is
skipped; unsolvable words found this way are *minimal* unsolvable words.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from petrisynth.ts.lts import word_to_lts

from .options import SynthesisOptions
from .properties import PNProperties
from .synthesize import SynthesizePN

logger = logging.getLogger(__name__)

Word = tuple[str, ...]


class Operation(Enum):
    """Which words a search reports."""

    UNSOLVABLE = "unsolvable"
    SOLVABLE = "solvable"
    QUIET = "quiet"

    @property
    def reports_solvable(self) -> bool:
        return self is Operation.SOLVABLE

    @property
    def reports_unsolvable(self) -> bool:
        return self is Operation.UNSOLVABLE


@dataclass
class LevelSummary:
    """Counts for all words of one length.

    Attributes:
        length: Word length
        solvable: Number of solvable words
        unsolvable: Number of unsolvable words
    """

    length: int
    solvable: int
    unsolvable: int


@dataclass
class WordSearchResult:
    """Outcome of a word search.

    Attributes:
        properties: The class of nets searched
        alphabet: Letters used
        solvable: Solvable normalized words, if reported
        unsolvable: Unsolvable normalized words, if reported
        levels: Per-length summary
    """

    properties: PNProperties
    alphabet: tuple[str, ...]
    solvable: list[str] = field(default_factory=list)
    unsolvable: list[str] = field(default_factory=list)
    levels: list[LevelSummary] = field(default_factory=list)


def normalize_word(word: Sequence[str], alphabet: Iterable[str]) -> Word:
    """Rename the letters of ``word`` to its class representative.

    Letters are replaced from the end of the word: the first letter seen
    becomes the first letter of the alphabet, the next new letter the
    second, and so on.

    Raises:
        ValueError: If the word uses more letters than the alphabet has
    """
    letters = iter(sorted(alphabet))
    morphism: dict[str, str] = {}
    result: list[str] = []
    for letter in reversed(word):
        replacement = morphism.get(letter)
        if replacement is None:
            replacement = next(letters, None)
            if replacement is None:
                raise ValueError(f"Word {''.join(word)!r} has more letters than the alphabet")
            morphism[letter] = replacement
        result.append(replacement)
    return tuple(reversed(result))


def is_word_solvable(
    word: Sequence[str],
    properties: PNProperties,
    options: SynthesisOptions | None = None,
) -> bool:
    """Check whether a net of the class has the word's language."""
    options = options or SynthesisOptions(quick_fail=True, verify=False)
    synthesis = SynthesizePN.for_language_equivalence(
        word_to_lts(word), properties=properties, options=options
    )
    return synthesis.was_successfully_separated()


def generate_list(
    properties: PNProperties,
    alphabet: Iterable[str],
    operation: Operation = Operation.QUIET,
    max_length: int | None = None,
    callback: Callable[[str, bool], None] | None = None,
) -> WordSearchResult:
    """Classify all normalized words over an alphabet.

    The search ends when a level has no solvable words or ``max_length``
    is reached. For classes without a bound, solvable words may exist at
    every length, so pass ``max_length`` there.

    Args:
        properties: The class of nets
        alphabet: Letters to build words from
        operation: Which words to collect in the result
        max_length: Longest word to examine, None for no limit
        callback: Called with every examined word and whether it is solvable

    Returns:
        The collected words and per-length counts
    """
    letters = tuple(sorted(set(alphabet)))
    result = WordSearchResult(properties=properties, alphabet=letters)
    options = SynthesisOptions(quick_fail=True, verify=False)
    logger.info(
        f"Looking for {operation.value} words from class {properties} over the alphabet "
        f"{list(letters)}"
    )

    current_level: dict[Word, None] = {(): None}
    length = 0
    while current_level:
        length += 1
        if max_length is not None and length > max_length:
            break
        next_level: dict[Word, None] = {}
        num_unsolvable = 0

        for current_word in current_level:
            for letter in letters:
                new_letter = letter not in current_word
                word = (letter, *current_word)

                prefix_solvable = normalize_word(word[:-1], letters) in current_level
                if properties.is_k_bounded or prefix_solvable:
                    solvable = is_word_solvable(word, properties, options)
                    text = "".join(word)
                    if solvable:
                        next_level[word] = None
                        if operation.reports_solvable:
                            result.solvable.append(text)
                    else:
                        num_unsolvable += 1
                        if operation.reports_unsolvable:
                            result.unsolvable.append(text)
                    if callback is not None:
                        callback(text, solvable)

                # Any other new letter gives an equivalent word
                if new_letter:
                    break

        current_level = next_level
        result.levels.append(
            LevelSummary(length=length, solvable=len(current_level), unsolvable=num_unsolvable)
        )
        logger.info(
            f"Done with length {length}. There were {num_unsolvable} unsolvable words "
            f"and {len(current_level)} solvable words."
        )

    return result


def find_words(
    options: str,
    operation: str,
    alphabet: str,
    max_length: int | None = None,
) -> WordSearchResult:
    """Search words given textual arguments.

    Args:
        options: Net class, as accepted by :meth:`PNProperties.parse`
        operation: ``"solvable"`` or ``"unsolvable"``
        alphabet: Letters, one character each
        max_length: Longest word to examine

    Raises:
        ValueError: If the options or the operation are unknown
    """
    try:
        op = Operation(operation)
    except ValueError:
        raise ValueError(
            f"Unknown operation '{operation}', valid options are 'unsolvable' and 'solvable'"
        ) from None
    if op is Operation.QUIET:
        raise ValueError("Operation 'quiet' reports no words")
    return generate_list(PNProperties.parse(options), alphabet, op, max_length=max_length)


__all__ = [
    "Word",
    "Operation",
    "LevelSummary",
    "WordSearchResult",
    "normalize_word",
    "is_word_solvable",
    "generate_list",
    "find_words",
]
