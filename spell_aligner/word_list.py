"""Word List Manager for loading dictionaries.

This module turns raw newline-delimited word lists into the normalized,
in-memory dictionary that the suggestion service scores against.
"""

import re
from collections.abc import Iterable
from pathlib import Path

from loguru import logger

# Dictionary words: lowercase letters, with hyphens and apostrophes allowed
WORD_PATTERN = re.compile(r"^[a-z'-]+$")


def normalize(raw_lines: Iterable[str]) -> list[str]:
    """Normalize raw lines into dictionary words.

    Strips surrounding whitespace, lowercases, and drops empty lines.
    Duplicates and order are preserved.

    Example:
        >>> normalize(["  Apple ", "", "BANANA\\n"])
        ['apple', 'banana']
    """
    return [word for word in (line.strip().lower() for line in raw_lines) if word]


class WordListManager:
    """Manages loading and processing of dictionary word lists."""

    def load_from_file(self, file_path: str) -> list[str]:
        """Load a dictionary from a text file.

        Reads a UTF-8 text file containing one word per line and normalizes
        it with normalize(). Every word must consist of letters a-z, hyphens
        and apostrophes.

        Args:
            file_path: Path to the word list file

        Returns:
            List of normalized words in file order

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If a word contains invalid characters or the file is not UTF-8

        Example:
            >>> manager = WordListManager()
            >>> words = manager.load_from_file("dictionary.txt")
            >>> print(words[:3])
            ['apple', 'banana', 'cherry']
        """
        path = Path(file_path)

        if not path.exists():
            error_msg = f"Word list file not found: {file_path}"
            logger.error(error_msg)
            raise FileNotFoundError(error_msg)

        logger.info(f"Loading word list from: {file_path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except UnicodeDecodeError as e:
            logger.error(f"Failed to decode file with UTF-8 encoding: {file_path}")
            encoding_error_msg = f"File encoding error: {e}"
            raise ValueError(encoding_error_msg) from e

        words = []
        for line_num, line in enumerate(lines, start=1):
            normalized = normalize([line])
            if not normalized:
                continue

            word = normalized[0]
            if not WORD_PATTERN.match(word):
                error_msg = (
                    f"Invalid word format at line {line_num}: '{word}'. "
                    f"Words must contain only letters a-z, hyphens, and apostrophes."
                )
                logger.error(error_msg)
                raise ValueError(error_msg)

            words.append(word)

        logger.info(f"Loaded {len(words)} words from {file_path}")
        return words

    def remove_duplicates(self, words: list[str]) -> list[str]:
        """Remove duplicate words while preserving order.

        Args:
            words: List of words (may contain duplicates)

        Returns:
            List of unique words in order of first occurrence
        """
        original_count = len(words)
        unique_words = list(dict.fromkeys(words))
        duplicates_removed = original_count - len(unique_words)

        if duplicates_removed > 0:
            logger.info(
                f"Removed {duplicates_removed} duplicate word(s). Unique words: {len(unique_words)}"
            )
        else:
            logger.debug("No duplicates found in word list")

        return unique_words
