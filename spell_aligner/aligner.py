"""Weighted edit distance between words.

This module scores how far apart two words are using sequence alignment with a
configurable cost model. The default model charges less for fumbling a vowel
into another vowel (or a consonant into another consonant) than for crossing
between the two classes, and a flat cost for every inserted or deleted
character.
"""

from dataclasses import dataclass

VOWELS = frozenset("aeiou")


@dataclass(frozen=True)
class CostModel:
    """Costs used when aligning two words.

    Attributes:
        name: Preset name the model is registered under
        match: Cost of aligning two identical characters
        same_class_mismatch: Substitution cost for vowel/vowel or consonant/consonant
        cross_class_mismatch: Substitution cost for vowel/consonant
        gap: Cost of each inserted or deleted character
        vowels: Characters treated as vowels; everything else is a consonant
    """

    name: str
    match: int = 0
    same_class_mismatch: int = 1
    cross_class_mismatch: int = 3
    gap: int = 2
    vowels: frozenset[str] = VOWELS

    def substitution_cost(self, x: str, y: str) -> int:
        """Return the cost of aligning character x against character y."""
        if x == y:
            return self.match
        if (x in self.vowels) == (y in self.vowels):
            return self.same_class_mismatch
        return self.cross_class_mismatch


WEIGHTED = CostModel(name="weighted")

# Plain Levenshtein distance
UNIT = CostModel(name="unit", same_class_mismatch=1, cross_class_mismatch=1, gap=1)

COST_MODELS = {model.name: model for model in (WEIGHTED, UNIT)}


def get_cost_model(name: str) -> CostModel:
    """Look up a cost model preset by name.

    Args:
        name: Preset name ("weighted" or "unit"), case-insensitive

    Returns:
        The matching CostModel

    Raises:
        ValueError: If no preset has that name
    """
    key = name.strip().lower()
    if key not in COST_MODELS:
        msg = f"Unknown cost model: '{name}'. Choose from: {', '.join(sorted(COST_MODELS))}"
        raise ValueError(msg)
    return COST_MODELS[key]


def align_distance(a: str, b: str, cost_model: CostModel = WEIGHTED) -> int:
    """Compute the minimum alignment cost to turn word a into word b.

    Fills the classic (m+1) x (n+1) alignment table row by row, keeping only
    the previous row. The shorter word runs along the row so memory stays
    O(min(m, n)). The cost model is symmetric, so swapping the words does not
    change the result.

    Args:
        a: First word
        b: Second word
        cost_model: Costs to align with. Defaults to WEIGHTED.

    Returns:
        The minimal total cost (always >= 0)

    Example:
        >>> align_distance("cat", "cot")
        1
        >>> align_distance("cat", "cats")
        2
    """
    if len(b) > len(a):
        a, b = b, a

    gap = cost_model.gap
    previous = [j * gap for j in range(len(b) + 1)]

    for i, x in enumerate(a, start=1):
        current = [i * gap]
        for j, y in enumerate(b, start=1):
            current.append(
                min(
                    previous[j - 1] + cost_model.substitution_cost(x, y),
                    current[j - 1] + gap,
                    previous[j] + gap,
                )
            )
        previous = current

    return previous[-1]
