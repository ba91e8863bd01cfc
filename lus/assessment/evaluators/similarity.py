"""
Text similarity between a submitted answer and a reference answer.

All lengths are counted in Unicode characters, never bytes, so answers in
non-ASCII alphabets compare the same way ASCII ones do.
"""

import re

_WHITESPACE = re.compile(r'\s+')


def normalize_text(text, strip_punctuation=False):
    """
    Lower-case `text`, trim it and collapse runs of whitespace.

    Args:
        text (str): The text to normalize.
        strip_punctuation (bool): Also drop every character that is not a
            letter, a number or whitespace.

    Returns:
        str
    """
    text = _WHITESPACE.sub(' ', (text or '').lower().strip())
    if strip_punctuation:
        text = ''.join(char for char in text if char.isalnum() or char.isspace())
    return text


def levenshtein_distance(first, second):
    """
    Character-level edit distance (insertions, deletions and substitutions
    all cost one).
    """
    if first == second:
        return 0
    if len(first) < len(second):
        first, second = second, first
    if not second:
        return len(first)

    previous_row = list(range(len(second) + 1))
    for i, first_char in enumerate(first, 1):
        current_row = [i]
        for j, second_char in enumerate(second, 1):
            current_row.append(min(
                previous_row[j] + 1,
                current_row[j - 1] + 1,
                previous_row[j - 1] + (first_char != second_char),
            ))
        previous_row = current_row
    return previous_row[-1]


def similarity_of_normalized(first, second):
    """
    Similarity (0-100) of two strings that are already normalized.

    Two empty strings are identical; one empty string against a non-empty
    one has a distance equal to the other's length.
    """
    if first == second:
        return 100.0
    max_length = max(len(first), len(second))
    distance = levenshtein_distance(first, second)
    return 100 * (1 - distance / max_length)


def similarity(first, second, strip_punctuation=False):
    """
    Similarity between two answers as a percentage.

    Both answers are normalized with `normalize_text` before their
    Levenshtein distance is scaled by the longer one's length.

    Returns:
        float between 0 and 100
    """
    return similarity_of_normalized(
        normalize_text(first, strip_punctuation),
        normalize_text(second, strip_punctuation),
    )
