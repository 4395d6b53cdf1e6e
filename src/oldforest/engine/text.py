"""Answer normalization shared by riddles and guesses."""

import re

_NOT_ALNUM = re.compile(r"[^a-z0-9\s]")
_ARTICLES = re.compile(r"\b(a|an|the)\b")
_WHITESPACE = re.compile(r"\s+")


def normalize_answer(value: object) -> str:
    """Reduce an answer to lowercase alphanumeric words without articles.

    ``None`` becomes the empty string; anything else is stringified first.
    """
    if value is None:
        return ""
    text = str(value).lower()
    text = _NOT_ALNUM.sub("", text)
    text = _ARTICLES.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()
