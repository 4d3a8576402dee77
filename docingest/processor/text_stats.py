def count_words(text: str) -> int:
    """Number of maximal non-whitespace runs."""
    return len(text.split())


def count_characters(text: str) -> int:
    return len(text)
