"""Keyword-based profession classification for episodes."""

from typing import List

from ..constants.taxonomy import (
    CATEGORY_KEYWORDS,
    PROFESSION_TAXONOMY,
    SUB_CATEGORY_KEYWORDS,
    UNCATEGORIZED_CATEGORY,
    UNCATEGORIZED_SUB_CATEGORY,
)
from ..models.episode import EpisodeTag


def determine_sub_categories(category: str, text: str) -> List[str]:
    """
    Pick the sub-categories of a matched category that appear in the text.

    Only sub-categories listed for the category in the taxonomy are considered.
    Falls back to the taxonomy's first sub-category when nothing finer matches.

    Args:
        category: A category that already matched the text
        text: Lower-cased combined title and description

    Returns:
        Non-empty list of sub-category labels
    """
    allowed = PROFESSION_TAXONOMY.get(category, [])
    sub_categories = []

    for sub_category, keywords in SUB_CATEGORY_KEYWORDS.items():
        if sub_category not in allowed:
            continue
        if any(keyword in text for keyword in keywords):
            sub_categories.append(sub_category)

    if not sub_categories and allowed:
        sub_categories.append(allowed[0])

    return sub_categories


def classify(title: str, description: str) -> List[EpisodeTag]:
    """
    Tag an episode with profession categories using substring keyword matching.

    Matching is plain substring containment on the lower-cased text, so a
    single episode can land in several categories (and short keywords such as
    "rap" also hit words like "therapist").

    Args:
        title: Episode title
        description: Episode description

    Returns:
        Tags in category declaration order, or a single Other/Unknown tag
    """
    combined_text = f"{title} {description}".lower()
    tags: List[EpisodeTag] = []

    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in combined_text for keyword in keywords):
            tags.append(EpisodeTag(
                category=category,
                sub_categories=determine_sub_categories(category, combined_text),
            ))

    if not tags:
        tags.append(EpisodeTag(
            category=UNCATEGORIZED_CATEGORY,
            sub_categories=[UNCATEGORIZED_SUB_CATEGORY],
        ))

    return tags
