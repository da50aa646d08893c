from splitbill.models import LineItem
from splitbill.services.draft import (
    BillDraft,
    Dish,
    PriceMode,
    build_bill_input,
    default_draft,
    dish_total_cents,
    named_diners,
    new_dish,
    remove_diner,
    toggle_all_diners,
    toggle_diner,
    toggle_price_mode,
)


def test_dish_total_depends_on_price_mode():
    assert dish_total_cents(Dish(id="d", quantity=3, price_cents=450)) == 450
    assert dish_total_cents(Dish(id="d", quantity=3, price_cents=450, price_mode=PriceMode.EACH)) == 1350


def test_toggle_price_mode_converts_price():
    dish = Dish(id="d", name="Beer", quantity=3, price_cents=1000)

    toggle_price_mode(dish)
    assert dish.price_mode == PriceMode.EACH
    assert dish.price_cents == 333

    toggle_price_mode(dish)
    assert dish.price_mode == PriceMode.TOTAL
    assert dish.price_cents == 999


def test_toggle_price_mode_rounds_half_up():
    dish = Dish(id="d", quantity=2, price_cents=5)
    toggle_price_mode(dish)
    assert dish.price_cents == 3


def test_toggle_price_mode_single_unit_keeps_price():
    dish = Dish(id="d", quantity=1, price_cents=700)
    toggle_price_mode(dish)
    assert dish.price_cents == 700
    assert dish.price_mode == PriceMode.EACH


def test_new_dish_ids_are_unique():
    assert new_dish().id != new_dish().id
    assert len(default_draft().dishes) == 1


def test_toggle_diner():
    dish = Dish(id="d")
    toggle_diner(dish, 2)
    toggle_diner(dish, 0)
    assert dish.diners == [2, 0]
    toggle_diner(dish, 2)
    assert dish.diners == [0]


def test_toggle_all_diners_skips_blank_names():
    draft = BillDraft(diners=["Ann", " ", "Ben"])
    dish = Dish(id="d", diners=[0])

    toggle_all_diners(draft, dish)
    assert dish.diners == [0, 2]

    toggle_all_diners(draft, dish)
    assert dish.diners == []


def test_remove_diner_reindexes_dishes():
    draft = BillDraft(
        diners=["Ann", "Ben", "Cat"],
        dishes=[Dish(id="1", diners=[0, 1, 2]), Dish(id="2", diners=[2])],
    )

    remove_diner(draft, 1)

    assert draft.diners == ["Ann", "Cat"]
    assert draft.dishes[0].diners == [0, 1]
    assert draft.dishes[1].diners == [1]


def test_named_diners():
    draft = BillDraft(diners=["Ann", "", "Ben"])
    assert named_diners(draft) == [(0, "Ann"), (2, "Ben")]


def test_build_bill_input_requires_names():
    assert build_bill_input(BillDraft(diners=["Ann"], dishes=[Dish(id="1")])) is None
    assert build_bill_input(BillDraft(diners=[" "], dishes=[Dish(id="1", name="Soup")])) is None


def test_build_bill_input():
    draft = BillDraft(
        diners=["Ann", "", "Ben"],
        dishes=[
            Dish(id="1", name="Beer", quantity=2, price_cents=600, price_mode=PriceMode.EACH, diners=[0, 1, 2]),
            Dish(id="2", name="", price_cents=999, diners=[0]),
            Dish(id="3", name="Chips", price_cents=450, diners=[2, 7]),
        ],
        tax_cents=120,
        tip_cents=300,
        total_cents=2000,
    )

    bill = build_bill_input(draft)

    assert bill is not None
    assert bill.participants == ["Ann", "Ben"]
    assert bill.items == [
        LineItem(id="1", name="Beer", amount_cents=1200, assigned_to=["Ann", "Ben"]),
        LineItem(id="3", name="Chips", amount_cents=450, assigned_to=["Ben"]),
    ]
    assert (bill.tax_cents, bill.tip_cents, bill.fees_cents) == (120, 300, 0)


def test_remove_diner_out_of_range_is_noop():
    draft = BillDraft(diners=["Ann"], dishes=[Dish(id="1", diners=[0])])

    remove_diner(draft, 3)
    remove_diner(draft, -1)

    assert draft.diners == ["Ann"]
    assert draft.dishes[0].diners == [0]
