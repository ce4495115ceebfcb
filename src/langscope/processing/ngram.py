"""
Character n-gram extraction with word-boundary awareness.

The extractor walks a normalized, space-padded text with a rolling buffer
of the last three characters and emits the 1-, 2- and 3-grams ending at
each position. A space resets the buffer, so spaces only ever appear at
the edge of an n-gram and no n-gram spans two words. Duplicates are
emitted as often as they occur; they are evidence, not noise.

Also here are the script counters behind the Latin-minority filter: when
a text is mostly non-Latin, the few ASCII letters in it (brand names,
units, stray words) are removed before extraction.

Example:
    >>> list(extract_ngrams(" ab "))
    ['a', ' a', 'b', 'ab', ' ab', 'b ', 'ab ']
"""

from typing import Iterable, Iterator, Optional, Tuple

N_GRAM = 3
SPACE = " "

LATIN_EXTENDED_ADDITIONAL = (0x1E00, 0x1EFF)


class NGramBuffer:
    """
    Rolling window over the last N_GRAM normalized characters.

    While the window sits inside an all-capitals run (two consecutive
    uppercase characters) nothing is emitted; acronyms carry no language
    signal.
    """

    def __init__(self):
        self._grams = SPACE
        self._capital_word = False

    def add_char(self, ch: str) -> None:
        last = self._grams[-1]
        if last == SPACE:
            self._grams = SPACE
            self._capital_word = False
            if ch == SPACE:
                return
        elif len(self._grams) >= N_GRAM:
            self._grams = self._grams[1:]
        self._grams += ch

        if ch.isupper():
            if last.isupper():
                self._capital_word = True
        else:
            self._capital_word = False

    def get(self, n: int) -> Optional[str]:
        """Return the n-gram ending at the current position, if any"""
        if self._capital_word or n < 1 or n > N_GRAM or len(self._grams) < n:
            return None
        if n == 1:
            ch = self._grams[-1]
            return None if ch == SPACE else ch
        return self._grams[-n:]


def extract_ngrams(text: str) -> Iterator[str]:
    """
    Yield every n-gram of a normalized text in order of occurrence.

    Args:
        text (str): Output of TextNormalizer (single-spaced, padded)

    Yields:
        str: N-grams of length 1 to 3
    """
    buffer = NGramBuffer()
    for ch in text:
        buffer.add_char(ch)
        for n in range(1, N_GRAM + 1):
            gram = buffer.get(n)
            if gram is not None:
                yield gram


def is_latin(ch: str) -> bool:
    return ("A" <= ch <= "Z") or ("a" <= ch <= "z")


def count_scripts(text: str) -> Tuple[int, int]:
    """Count (latin, non_latin) characters of a normalized text"""
    latin = non_latin = 0
    start, end = LATIN_EXTENDED_ADDITIONAL
    for ch in text:
        if is_latin(ch):
            latin += 1
        elif ord(ch) >= 0x0300 and not (start <= ord(ch) <= end):
            non_latin += 1
    return latin, non_latin


def latin_is_minority(latin: int, non_latin: int) -> bool:
    return latin * 2 < non_latin


def strip_latin(text: str) -> str:
    return "".join(ch for ch in text if not is_latin(ch))


def extract_from_chunks(chunks: Iterable[str]) -> Iterator[str]:
    """Extract n-grams from several independently normalized chunks"""
    for chunk in chunks:
        yield from extract_ngrams(chunk)
