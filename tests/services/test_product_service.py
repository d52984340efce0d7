from decimal import Decimal

import pytest

from inventory.core.exceptions import InsufficientStockError, InvalidArgumentError, InvalidCategoryError
from inventory.db.models import Category
from inventory.schemas.products import ProductCreate, ProductUpdate

pytestmark = pytest.mark.asyncio


def create_payload(category_id: str, **overrides) -> ProductCreate:
    data = {
        "name": "Cordless Drill",
        "description": "18V drill",
        "price": "129.90",
        "category_id": category_id,
        "stock_quantity": 4,
    }
    data.update(overrides)
    return ProductCreate(**data)


def update_payload(category_id: str, **overrides) -> ProductUpdate:
    data = {"name": "Hammer XL", "description": "Bigger", "price": "12.50", "category_id": category_id}
    data.update(overrides)
    return ProductUpdate(**data)


async def test_create_product(product_service, tools, catalog):
    result = await product_service.create_product(create_payload(tools.id))

    product = result.value
    assert result.is_found
    assert product.sku.startswith("SKU-")
    assert product.is_low_stock is True
    assert product.total_stock_value == Decimal("519.60")
    assert product.id in catalog.products


async def test_create_product_unknown_category(product_service):
    result = await product_service.create_product(create_payload("missing"))

    assert isinstance(result.error, InvalidCategoryError)


async def test_create_product_inactive_category(product_service, tools):
    tools.deactivate()

    result = await product_service.create_product(create_payload(tools.id))

    assert isinstance(result.error, InvalidCategoryError)


async def test_update_product(product_service, make_product):
    hammer = make_product()
    result = await product_service.update_product(hammer.id, update_payload(hammer.category_id))

    assert result.is_found
    assert result.value.name == "Hammer XL"
    assert result.value.price == Decimal("12.50")
    assert result.value.stock_quantity == 20


async def test_update_product_moves_category(product_service, make_product, catalog):
    garden = Category.create("Garden", "Outdoor")
    catalog.categories[garden.id] = garden
    hammer = make_product()

    result = await product_service.update_product(hammer.id, update_payload(garden.id))

    assert result.value.category_id == garden.id


async def test_update_product_unknown_category_leaves_product_unchanged(product_service, make_product):
    hammer = make_product()
    before = (hammer.name, hammer.description, hammer.price, hammer.category_id, hammer.updated_at)

    result = await product_service.update_product(hammer.id, update_payload("missing"))

    assert isinstance(result.error, InvalidCategoryError)
    assert (hammer.name, hammer.description, hammer.price, hammer.category_id, hammer.updated_at) == before


async def test_update_missing_product(product_service, tools):
    result = await product_service.update_product("missing", update_payload(tools.id))
    assert result.is_not_found


async def test_update_stock_sets_exact_quantity(product_service, make_product):
    hammer = make_product(stock=20)

    result = await product_service.update_stock(hammer.id, 3)

    assert result.value.stock_quantity == 3
    assert result.value.is_low_stock is True


async def test_update_stock_rejects_negative(product_service, make_product):
    hammer = make_product(stock=20)

    result = await product_service.update_stock(hammer.id, -1)

    assert isinstance(result.error, InvalidArgumentError)
    assert hammer.stock_quantity == 20


async def test_update_stock_missing_product(product_service):
    assert (await product_service.update_stock("missing", 1)).is_not_found


async def test_add_and_remove_stock(product_service, make_product):
    hammer = make_product(stock=5)

    assert (await product_service.add_stock(hammer.id, 2)).value.stock_quantity == 7

    too_many = await product_service.remove_stock(hammer.id, 8)
    assert isinstance(too_many.error, InsufficientStockError)

    emptied = await product_service.remove_stock(hammer.id, 7)
    assert emptied.value.stock_quantity == 0
    assert emptied.value.is_out_of_stock is True


async def test_delete_product(product_service, make_product):
    hammer = make_product()

    assert (await product_service.delete_product(hammer.id)).value is True
    assert hammer.is_active is False
    assert (await product_service.get_product(hammer.id)).is_not_found
    assert (await product_service.delete_product(hammer.id)).is_not_found


async def test_queries_return_active_products_only(product_service, make_product, tools):
    make_product(name="Claw Hammer")
    make_product(name="Sledge HAMMER")
    retired = make_product(name="Old hammer")
    make_product(name="Saw")
    retired.deactivate()

    assert len(await product_service.get_products()) == 3
    assert len(await product_service.get_products_by_category(tools.id)) == 3
    assert {p.name for p in await product_service.search_products("hammer")} == {"Claw Hammer", "Sledge HAMMER"}


async def test_low_stock_uses_caller_threshold(product_service, make_product):
    make_product(name="A", stock=3)
    make_product(name="B", stock=12)
    make_product(name="C", stock=30)

    assert {p.name for p in await product_service.get_low_stock_products()} == {"A"}
    assert {p.name for p in await product_service.get_low_stock_products(15)} == {"A", "B"}
    assert await product_service.get_low_stock_products(0) == []


async def test_paging_last_page(product_service, make_product):
    for i in range(25):
        make_product(name=f"Item {i:02d}")

    page = await product_service.get_products_paged(3, 10)

    assert len(page.items) == 5
    assert page.items[0].name == "Item 20"
    assert page.total_count == 25
    assert page.total_pages == 3
    assert page.has_previous is True
    assert page.has_next is False


async def test_paging_first_page(product_service, make_product):
    for i in range(25):
        make_product(name=f"Item {i:02d}")

    page = await product_service.get_products_paged(1, 10)

    assert len(page.items) == 10
    assert page.has_previous is False
    assert page.has_next is True


async def test_paging_beyond_last_page(product_service, make_product):
    make_product()

    page = await product_service.get_products_paged(9, 10)

    assert page.items == []
    assert page.total_pages == 1
    assert page.has_next is False


async def test_paging_empty_catalog(product_service):
    page = await product_service.get_products_paged(1, 10)

    assert page.total_count == 0
    assert page.total_pages == 0
    assert page.has_next is False
