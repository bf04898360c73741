PROFANE_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
REPLACEMENT = "****"


def filter_text(body: str, words=PROFANE_WORDS) -> str:
    """
    Replace banned words with ****.
    Matching is case-insensitive on space-separated words; a word with
    punctuation attached ("sharbert!") is left alone.
    """
    return " ".join(REPLACEMENT if word.lower() in words else word for word in body.split(" "))
