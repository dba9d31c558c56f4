# src/stockroom/metrics03/benchmarks.py

"""
Category Benchmark Table
========================

Maps a free-text category label to a target weeks-of-cover value.

Lookup:
-------
- Lower-case the label
- Scan BENCHMARK_RULES top to bottom
- First rule with a keyword contained in the label wins
- No match (or empty / missing label) -> DEFAULT_WEEKS_COVER
"""

from typing import Optional, Sequence, Tuple


DEFAULT_WEEKS_COVER = 10

# (keywords, target weeks) in evaluation order
BENCHMARK_RULES: Sequence[Tuple[Tuple[str, ...], int]] = (
    (("fashion", "clothing", "apparel"), 9),
    (("footwear", "shoe"), 9),
    (("jewel", "watch"), 33),
    (("furniture", "sofa", "bed"), 12),
    (("homeware", "gift"), 9),
    (("beauty", "health", "cosmetic"), 6),
    (("sport", "outdoor"), 8),
    (("toy", "game"), 9),
    (("book", "stationery"), 6),
    (("electr", "tech"), 5),
    (("garden", "plant"), 6),
)


def target_weeks_cover(
    category: Optional[str],
    rules: Sequence[Tuple[Tuple[str, ...], int]] = BENCHMARK_RULES,
    default: int = DEFAULT_WEEKS_COVER,
) -> int:
    """
    Return the benchmark weeks of cover for ``category``.

    Examples
    --------
    >>> target_weeks_cover("Fine Jewellery")
    33
    >>> target_weeks_cover("")
    10
    """

    if not isinstance(category, str) or not category.strip():
        return default

    label = category.lower()

    for keywords, weeks in rules:
        if any(keyword in label for keyword in keywords):
            return weeks

    return default
