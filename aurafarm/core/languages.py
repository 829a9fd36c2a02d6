from collections.abc import Iterable
from collections.abc import Mapping
from typing import Any

from aurafarm.schemas import RankedLanguage
from aurafarm.schemas import RepositoryLanguageUsage


OTHERS_NAME = "Others"
OTHERS_COLOR = "#8b949e"
DEFAULT_LANGUAGE_COLOR = "#cccccc"


def rank_languages(
    usages: Iterable[RepositoryLanguageUsage], top_k: int = 5
) -> list[RankedLanguage]:
    """Rank languages by total bytes and fold the tail into "Others".

    Percentages are relative to the size of all languages, so the kept entries
    plus "Others" add up to 100.
    """

    if top_k < 1:
        raise ValueError("top_k must be at least 1")

    sizes: dict[str, int] = {}
    colors: dict[str, str] = {}
    for usage in usages:
        sizes[usage.language_name] = sizes.get(usage.language_name, 0) + usage.byte_size
        colors[usage.language_name] = usage.display_color

    total = sum(sizes.values())
    if total == 0:
        return []

    # sorted() is stable, so equal sizes keep first-seen order.
    ordered = sorted(sizes.items(), key=lambda item: item[1], reverse=True)
    kept = ordered[:top_k]
    remainder = sum(size for _, size in ordered[top_k:])

    ranked = [
        RankedLanguage(
            name=name,
            color=colors[name],
            percent_of_total=size / total * 100,
        )
        for name, size in kept
    ]
    if len(ordered) > top_k:
        ranked.append(
            RankedLanguage(
                name=OTHERS_NAME,
                color=OTHERS_COLOR,
                percent_of_total=remainder / total * 100,
            )
        )
    return ranked


def usages_from_repositories(
    repositories: Iterable[Mapping[str, Any]],
) -> list[RepositoryLanguageUsage]:
    """Flatten GraphQL repository language edges into usage records.

    Malformed edges are skipped.
    """

    usages: list[RepositoryLanguageUsage] = []
    for repository in repositories:
        if not isinstance(repository, Mapping):
            continue
        languages = repository.get("languages")
        if not isinstance(languages, Mapping):
            continue
        edges = languages.get("edges")
        if not isinstance(edges, list):
            continue
        for edge in edges:
            if not isinstance(edge, Mapping):
                continue
            raw_size = edge.get("size")
            node = edge.get("node")
            if not isinstance(raw_size, int) or raw_size < 0:
                continue
            if not isinstance(node, Mapping):
                continue
            raw_name = node.get("name")
            if not isinstance(raw_name, str) or not raw_name:
                continue
            raw_color = node.get("color")
            usages.append(
                RepositoryLanguageUsage(
                    language_name=raw_name,
                    byte_size=raw_size,
                    display_color=raw_color
                    if isinstance(raw_color, str) and raw_color
                    else DEFAULT_LANGUAGE_COLOR,
                )
            )
    return usages
