import pytest

from bakery_pos.errors import DuplicateProductName, InsufficientStock, InvalidInput, ProductNotFound


def test_add_new_product(core):
    product, created = core.inventory.add_or_restock(" Bread ", 1000, 20, image="http://img/bread.png")

    assert created is True
    assert product.name == "Bread"
    assert product.price == 1000
    assert product.quantity == 20
    assert product.image == "http://img/bread.png"
    assert core.inventory.get_product(product.id) == product


def test_new_products_get_distinct_ids(core):
    a, _ = core.inventory.add_or_restock("Bread", 1000, 1)
    b, _ = core.inventory.add_or_restock("Cake", 5000, 1)
    assert a.id != b.id
    assert b.id > a.id


def test_restock_merges_quantity_case_insensitively_and_keeps_price(core):
    bread, _ = core.inventory.add_or_restock("Bread", 1000, 20)

    restocked, created = core.inventory.add_or_restock("bread", 9999, 5)

    assert created is False
    assert restocked.id == bread.id
    assert restocked.quantity == 25
    assert restocked.price == 1000
    assert len(core.inventory.list_products()) == 1


@pytest.mark.parametrize("name, price, quantity", [
    ("", 1000, 1),
    ("Bread", 0, 1),
    ("Bread", -5, 1),
    ("Bread", 1000, 0),
    ("Bread", 1000, "lots"),
])
def test_add_rejects_invalid_input_without_writing(core, name, price, quantity):
    with pytest.raises(InvalidInput):
        core.inventory.add_or_restock(name, price, quantity)
    assert core.inventory.list_products() == []


def test_edit_overwrites_fields_and_allows_zero_quantity(core, catalog):
    bread = catalog["Bread"]

    edited = core.inventory.edit(bread.id, "Sourdough", 1200, 0)

    assert (edited.name, edited.price, edited.quantity) == ("Sourdough", 1200, 0)
    assert core.inventory.get_product(bread.id).name == "Sourdough"


def test_edit_can_keep_its_own_name_in_another_case(core, catalog):
    edited = core.inventory.edit(catalog["Bread"].id, "BREAD", 1000, 20)
    assert edited.name == "BREAD"


def test_edit_rejects_name_of_another_product(core, catalog):
    with pytest.raises(DuplicateProductName):
        core.inventory.edit(catalog["Bread"].id, "cake", 1000, 20)
    assert core.inventory.get_product(catalog["Bread"].id).name == "Bread"


def test_edit_unknown_product(core):
    with pytest.raises(ProductNotFound):
        core.inventory.edit(123, "Bread", 1000, 1)


def test_remove_product(core, catalog):
    removed = core.inventory.remove(catalog["Cake"].id)

    assert removed.name == "Cake"
    assert [p.name for p in core.inventory.list_products()] == ["Bread", "Cookie"]
    with pytest.raises(ProductNotFound):
        core.inventory.remove(catalog["Cake"].id)


def test_decrement(core, catalog):
    bread = core.inventory.decrement(catalog["Bread"].id, 3)
    assert bread.quantity == 17


def test_decrement_beyond_stock_leaves_quantity_unchanged(core, catalog):
    with pytest.raises(InsufficientStock) as excinfo:
        core.inventory.decrement(catalog["Cake"].id, 3)

    assert excinfo.value.details["on_hand"] == 2
    assert core.inventory.get_product(catalog["Cake"].id).quantity == 2


def test_low_stock_is_strictly_below_threshold(core):
    core.inventory.add_or_restock("Cake", 5000, 5)
    core.inventory.add_or_restock("Donut", 800, 4)

    assert [p.name for p in core.inventory.low_stock_products()] == ["Donut"]
    donut = core.inventory.find_by_name("donut")
    assert core.inventory.product_view(donut)["low_stock"] is True


def test_add_reads_comma_grouped_price_as_thousands(core):
    product, _ = core.inventory.add_or_restock("Bread", "1,000", 5)

    assert product.price == 1000
    assert core.inventory.get_product(product.id).price == 1000
