"""Tests for shopping list aggregation."""

import logging
from collections import Counter

from hranoplan.domain.recipes import Recipe, SlotType
from hranoplan.services.shopping import aggregate_shopping_list, format_shopping_list
from tests.conftest import make_recipe, sample_catalog


def test_aggregate_sums_amounts_for_same_name_and_unit() -> None:
    first = make_recipe("Omelette", [SlotType.BREAKFAST], [("Eggs", 100, "g")])
    second = make_recipe("Cake", [SlotType.SNACK], [("Eggs", 50, "g")])

    items = aggregate_shopping_list([first, second])

    assert len(items) == 1
    assert items[0].name == "Eggs"
    assert items[0].amount == 150
    assert items[0].unit == "g"
    assert items[0].recipes == ["Omelette", "Cake"]


def test_aggregate_keeps_units_apart() -> None:
    first = make_recipe("Omelette", ingredients=[("Eggs", 2, "pcs")])
    second = make_recipe("Cake", ingredients=[("Eggs", 120, "g")])

    items = aggregate_shopping_list([first, second])

    assert [(item.name, item.amount, item.unit) for item in items] == [
        ("Eggs", 2, "pcs"),
        ("Eggs", 120, "g"),
    ]


def test_aggregate_key_is_case_sensitive() -> None:
    first = make_recipe("Tarator", ingredients=[("Garlic", 1, "clove")])
    second = make_recipe("Kavarma", ingredients=[("garlic", 2, "clove")])

    items = aggregate_shopping_list([first, second])

    assert [item.name for item in items] == ["Garlic", "garlic"]


def test_aggregate_preserves_first_occurrence_order() -> None:
    items = aggregate_shopping_list(sample_catalog())

    names = [item.name for item in items]
    assert names[:4] == ["Flour", "Eggs", "Yogurt", "Sirene"]
    assert names.index("Pork") > names.index("Tomatoes")


def test_aggregate_lists_repeated_recipes_each_time() -> None:
    soup = make_recipe(
        "Soup", ingredients=[("Water", 1, "l"), ("Salt", 5, "g"), ("Salt", 2, "g")]
    )

    items = aggregate_shopping_list([soup, soup])

    by_name = {item.name: item for item in items}
    assert by_name["Water"].amount == 2
    assert by_name["Water"].recipes == ["Soup", "Soup"]
    assert by_name["Salt"].amount == 14
    assert by_name["Salt"].recipes == ["Soup"] * 4


def test_aggregate_is_order_independent_in_amounts() -> None:
    recipes = sample_catalog()

    forward = aggregate_shopping_list(recipes)
    backward = aggregate_shopping_list(list(reversed(recipes)))

    assert Counter((i.name, i.unit, i.amount) for i in forward) == Counter(
        (i.name, i.unit, i.amount) for i in backward
    )


def test_aggregate_skips_malformed_recipe(caplog) -> None:
    broken = Recipe(
        id="broken",
        name="Broken",
        instructions=[],
        ingredients=None,
        prep_time=None,
        cook_time=None,
        servings=None,
    )
    good = make_recipe("Tarator", ingredients=[("Yogurt", 400, "g")])

    with caplog.at_level(logging.WARNING, logger="hranoplan.services.shopping"):
        items = aggregate_shopping_list([broken, good])

    assert [(item.name, item.amount) for item in items] == [("Yogurt", 400)]
    assert "malformed ingredients" in caplog.text
    assert "broken" in caplog.text


def test_aggregate_empty_input() -> None:
    assert aggregate_shopping_list([]) == []


def test_format_shopping_list_lines() -> None:
    first = make_recipe("Tarator", ingredients=[("Кисело мляко", 400, "г")])
    second = make_recipe("Soup", ingredients=[("Olive oil", 12.5, "ml")])

    text = format_shopping_list(aggregate_shopping_list([first, second]))

    assert text == "Кисело мляко - 400 г\nOlive oil - 12.5 ml"


def test_format_shopping_list_keeps_full_precision() -> None:
    recipe = make_recipe("Bread", ingredients=[("Flour", 1234.5678, "g")])

    text = format_shopping_list(aggregate_shopping_list([recipe]))

    assert text == "Flour - 1234.5678 g"
