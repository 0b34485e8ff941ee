from rapidfuzz.distance import Levenshtein


def calculate_similarity(first: str, second: str) -> float:
    """
    Edit-distance similarity in [0, 1]: ``1 - distance / max(len(a), len(b))``.

    Two empty strings are considered identical.
    """
    if not first and not second:
        return 1.0
    return Levenshtein.normalized_similarity(first, second)
