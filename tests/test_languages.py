import math

import pytest

from aurafarm.core.languages import OTHERS_COLOR
from aurafarm.core.languages import OTHERS_NAME
from aurafarm.core.languages import rank_languages
from aurafarm.core.languages import usages_from_repositories
from aurafarm.schemas import RepositoryLanguageUsage


def usage(name: str, size: int, color: str = "#123456") -> RepositoryLanguageUsage:
    return RepositoryLanguageUsage(language_name=name, byte_size=size, display_color=color)


def test_empty_usages_produce_empty_ranking() -> None:
    assert rank_languages([]) == []


def test_zero_total_produces_empty_ranking() -> None:
    assert rank_languages([usage("Python", 0), usage("Go", 0)]) == []


def test_equal_sizes_keep_first_seen_order() -> None:
    ranked = rank_languages([usage("A", 100), usage("B", 100)], top_k=5)

    assert [language.name for language in ranked] == ["A", "B"]
    assert [language.percent_of_total for language in ranked] == [50.0, 50.0]


def test_sizes_are_summed_across_repositories() -> None:
    ranked = rank_languages(
        [usage("Python", 10), usage("Go", 25), usage("Python", 30)], top_k=5
    )

    assert [language.name for language in ranked] == ["Python", "Go"]
    assert ranked[0].percent_of_total == pytest.approx(40 / 65 * 100)


def test_latest_color_wins() -> None:
    ranked = rank_languages([usage("Python", 1, "#aaaaaa"), usage("Python", 1, "#bbbbbb")])

    assert ranked[0].color == "#bbbbbb"


def test_tail_is_folded_into_others() -> None:
    sizes = [50, 40, 30, 20, 10, 5, 5]
    usages = [usage(f"L{index}", size) for index, size in enumerate(sizes)]

    ranked = rank_languages(usages, top_k=5)

    assert [language.name for language in ranked] == [
        "L0", "L1", "L2", "L3", "L4", OTHERS_NAME,
    ]
    others = ranked[-1]
    assert others.color == OTHERS_COLOR
    assert others.percent_of_total == pytest.approx(10 / 160 * 100)
    assert math.isclose(sum(language.percent_of_total for language in ranked), 100.0)


def test_no_others_entry_when_everything_fits() -> None:
    ranked = rank_languages([usage("A", 3), usage("B", 1)], top_k=2)

    assert OTHERS_NAME not in [language.name for language in ranked]
    assert sum(language.percent_of_total for language in ranked) == pytest.approx(100.0)


def test_top_k_must_be_positive() -> None:
    with pytest.raises(ValueError):
        rank_languages([usage("A", 1)], top_k=0)


def test_usages_from_repositories_skips_malformed_edges() -> None:
    repositories = [
        {
            "languages": {
                "edges": [
                    {"size": 120, "node": {"name": "Python", "color": "#3572A5"}},
                    {"size": 40, "node": {"name": "Dockerfile", "color": None}},
                    {"size": "big", "node": {"name": "Go", "color": "#00ADD8"}},
                    {"size": 10, "node": {"color": "#fff"}},
                ]
            }
        },
        {"languages": None},
        "not-a-repo",
    ]

    usages = usages_from_repositories(repositories)

    assert [(u.language_name, u.byte_size) for u in usages] == [
        ("Python", 120),
        ("Dockerfile", 40),
    ]
    assert usages[1].display_color == "#cccccc"
