import threading
from decimal import Decimal

import pytest
from pydantic import ValidationError

from storefront.database import average_rating
from storefront.models import (
    Badge,
    CategoryCreate,
    ProductCreate,
    ProductFilter,
    ProductUpdate,
    SortOption,
)

from .factories import add_to_cart, make_product, make_review


@pytest.fixture
def priced_store(store):
    store.create_product(make_product("Smart Watch Pro", price="459.00"))
    store.create_product(make_product("Premium Headphones", price="299.00"))
    store.create_product(make_product("Smartphone X", price="899.00"))
    return store


# ---------- Products ----------

def test_create_product_sets_server_owned_fields(store):
    product = store.create_product(make_product())

    assert product.id == 1
    assert product.rating == "0"
    assert product.review_count == 0
    assert product.is_favorite is False
    assert product.original_price is None
    assert product.badge is None
    assert product.created_at is not None


def test_create_product_ignores_client_derived_fields(store):
    data = make_product().model_dump()
    data.update(rating="5.0", reviewCount=99, isFavorite=True)
    product = store.create_product(ProductCreate.model_validate(data))

    assert product.rating == "0"
    assert product.review_count == 0
    assert product.is_favorite is False


def test_product_ids_increase_and_are_never_reused(store):
    first = store.create_product(make_product("A"))
    second = store.create_product(make_product("B"))
    assert store.delete_product(second.id)
    third = store.create_product(make_product("C"))

    assert first.id < second.id < third.id
    assert third.id == 3


def test_price_is_normalized_to_two_places(store):
    product = store.create_product(make_product(price=299, original_price="399.5"))

    assert product.price == "299.00"
    assert product.original_price == "399.50"


def test_empty_badge_means_no_badge(store):
    product = store.create_product(make_product(badge=""))
    assert product.badge is None

    badged = store.create_product(make_product(badge="Best Seller"))
    assert badged.badge == Badge.BEST_SELLER


def test_get_product_missing_returns_none(store):
    assert store.get_product(42) is None


def test_returned_products_are_snapshots(store):
    product = store.create_product(make_product("Original"))
    product.name = "Mutated"

    assert store.get_product(product.id).name == "Original"


def test_list_products_without_filter_returns_everything(priced_store):
    assert len(priced_store.list_products()) == 3
    assert len(priced_store.list_products(ProductFilter())) == 3


def test_filter_by_category_is_exact(store):
    store.create_product(make_product("Phone", category="Electronics"))
    store.create_product(make_product("Lamp", category="electronics"))
    store.create_product(make_product("Bag", category="Clothing"))

    results = store.list_products(ProductFilter(category="Electronics"))

    assert [p.name for p in results] == ["Phone"]


def test_all_categories_means_no_category_filter(priced_store):
    results = priced_store.list_products(ProductFilter(category="All Categories"))
    assert len(results) == 3


def test_search_is_case_insensitive_substring(store):
    store.create_product(make_product("Vintage Camera", description="Film photography"))
    store.create_product(make_product("Desk Lamp", description="Warm light"))
    store.create_product(make_product("Tripod", description="Steady CAMERA support"))

    results = store.list_products(ProductFilter(search="cam"))

    assert [p.name for p in results] == ["Vintage Camera", "Tripod"]


def test_price_bounds_are_inclusive(priced_store):
    results = priced_store.list_products(
        ProductFilter(min_price=Decimal("300"), max_price=Decimal("500"))
    )
    assert [p.price for p in results] == ["459.00"]

    edges = priced_store.list_products(
        ProductFilter(min_price=Decimal("299.00"), max_price=Decimal("459.00"))
    )
    assert [p.price for p in edges] == ["459.00", "299.00"]


def test_sort_by_price_ascending(priced_store):
    results = priced_store.list_products(ProductFilter(sort_by=SortOption.PRICE_ASC.value))
    assert [p.price for p in results] == ["299.00", "459.00", "899.00"]


def test_sort_by_price_descending(priced_store):
    results = priced_store.list_products(ProductFilter(sort_by="Price: High to Low"))
    assert [p.price for p in results] == ["899.00", "459.00", "299.00"]


def test_sort_by_name(priced_store):
    results = priced_store.list_products(ProductFilter(sort_by="Name: A to Z"))
    assert [p.name for p in results] == ["Premium Headphones", "Smart Watch Pro", "Smartphone X"]


def test_sort_by_rating(store):
    low = store.create_product(make_product("Low"))
    high = store.create_product(make_product("High"))
    store.create_review(low.id, make_review(rating=2))
    store.create_review(high.id, make_review(rating=5))

    results = store.list_products(ProductFilter(sort_by="Rating: High to Low"))

    assert [p.name for p in results] == ["High", "Low"]


def test_unknown_sort_keeps_insertion_order(priced_store):
    results = priced_store.list_products(ProductFilter(sort_by="Featured"))
    assert [p.price for p in results] == ["459.00", "299.00", "899.00"]


def test_filters_apply_before_sort(priced_store):
    results = priced_store.list_products(
        ProductFilter(search="smart", sort_by="Price: High to Low")
    )
    assert [p.name for p in results] == ["Smartphone X", "Smart Watch Pro"]


def test_update_product_merges_provided_fields(store):
    product = store.create_product(make_product("Lamp", price="20.00", original_price="25.00"))

    updated = store.update_product(product.id, ProductUpdate(price="18.50"))

    assert updated.price == "18.50"
    assert updated.name == "Lamp"
    assert updated.original_price == "25.00"


def test_update_product_can_clear_optional_fields(store):
    product = store.create_product(make_product(original_price="25.00", badge="New"))

    updated = store.update_product(
        product.id, ProductUpdate(original_price=None, badge=None)
    )

    assert updated.original_price is None
    assert updated.badge is None


def test_update_product_never_overwrites_derived_fields(store):
    product = store.create_product(make_product())
    store.create_review(product.id, make_review(rating=3))

    update = ProductUpdate.model_validate(
        {"name": "Renamed", "rating": "5.0", "reviewCount": 500, "id": 99}
    )
    updated = store.update_product(product.id, update)

    assert updated.id == product.id
    assert updated.name == "Renamed"
    assert updated.rating == "3.0"
    assert updated.review_count == 1


def test_update_missing_product_returns_none(store):
    assert store.update_product(7, ProductUpdate(name="Ghost")) is None


def test_delete_product_reports_existence(store):
    product = store.create_product(make_product())

    assert store.delete_product(product.id) is True
    assert store.delete_product(product.id) is False
    assert store.get_product(product.id) is None


def test_delete_product_leaves_reviews_in_place(store):
    product = store.create_product(make_product())
    store.create_review(product.id, make_review())
    store.delete_product(product.id)

    assert len(store.list_reviews(product.id)) == 1


def test_toggle_favorite_round_trip(store):
    product = store.create_product(make_product())

    once = store.toggle_favorite(product.id)
    twice = store.toggle_favorite(product.id)

    assert once.is_favorite is True
    assert twice.is_favorite is False


def test_toggle_favorite_missing_returns_none(store):
    assert store.toggle_favorite(3) is None


# ---------- Categories ----------

def test_categories_default_to_active(store):
    category = store.create_category(CategoryCreate(name="Books"))
    assert category.is_active is True


def test_inactive_categories_are_hidden(store):
    store.create_category(CategoryCreate(name="Books"))
    store.create_category(CategoryCreate(name="Archive", is_active=False))

    assert [c.name for c in store.list_categories()] == ["Books"]
    assert store.get_category_by_name("Archive") is not None


# ---------- Reviews ----------

def test_review_recomputes_rating_and_count(store):
    product = store.create_product(make_product())
    store.create_review(product.id, make_review(rating=3))

    store.create_review(product.id, make_review(rating=5))

    refreshed = store.get_product(product.id)
    assert refreshed.review_count == 2
    assert refreshed.rating == "4.0"


def test_rating_rounds_to_one_decimal(store):
    product = store.create_product(make_product())
    for rating in (5, 4, 4):
        store.create_review(product.id, make_review(rating=rating))

    assert store.get_product(product.id).rating == "4.3"


def test_review_for_missing_product_is_kept(store):
    review = store.create_review(99, make_review())

    assert review.id == 1
    assert [r.id for r in store.list_reviews(99)] == [1]


def test_reviews_listed_in_creation_order(store):
    product = store.create_product(make_product())
    other = store.create_product(make_product("Other"))
    store.create_review(product.id, make_review(user_name="first"))
    store.create_review(other.id, make_review(user_name="elsewhere"))
    store.create_review(product.id, make_review(user_name="second"))

    assert [r.user_name for r in store.list_reviews(product.id)] == ["first", "second"]


@pytest.mark.parametrize(
    "ratings, expected",
    [([], "0"), ([5], "5.0"), ([1, 2], "1.5"), ([4, 5, 5, 5], "4.8"), ([1, 1, 2], "1.3")],
)
def test_average_rating(ratings, expected):
    assert average_rating(ratings) == expected


# ---------- Cart ----------

def test_add_to_cart_merges_same_product(store):
    product = store.create_product(make_product())

    first = add_to_cart(store, product.id)
    second = add_to_cart(store, product.id, quantity=2)

    assert first.quantity == 1
    assert second.id == first.id
    assert second.quantity == 3
    assert len(store.list_cart_items("s1")) == 1


def test_same_product_in_different_sessions_gets_separate_rows(store):
    product = store.create_product(make_product())

    a = add_to_cart(store, product.id, session_id="a")
    b = add_to_cart(store, product.id, session_id="b")

    assert a.id != b.id


def test_cart_items_are_joined_with_products(store):
    product = store.create_product(make_product("Lamp"))
    add_to_cart(store, product.id, quantity=2)

    rows = store.list_cart_items("s1")

    assert rows[0].product.name == "Lamp"
    assert rows[0].quantity == 2


def test_cart_drops_rows_for_deleted_products(store):
    kept = store.create_product(make_product("Kept"))
    gone = store.create_product(make_product("Gone"))
    add_to_cart(store, kept.id)
    add_to_cart(store, gone.id)
    store.delete_product(gone.id)

    assert [row.product.name for row in store.list_cart_items("s1")] == ["Kept"]


def test_cart_count_sums_quantities(store):
    product = store.create_product(make_product())
    other = store.create_product(make_product("Other"))
    add_to_cart(store, product.id, quantity=2)
    add_to_cart(store, other.id, quantity=3)

    assert store.cart_count("s1") == 5
    assert store.cart_count("nobody") == 0


def test_update_cart_item_replaces_quantity_without_clamping(store):
    product = store.create_product(make_product())
    item = add_to_cart(store, product.id)

    assert store.update_cart_item(item.id, 4).quantity == 4
    assert store.update_cart_item(item.id, 0).quantity == 0
    assert store.update_cart_item(404, 1) is None


def test_remove_missing_cart_item_returns_false(store):
    assert store.remove_from_cart(12345) is False


def test_remove_cart_item(store):
    product = store.create_product(make_product())
    item = add_to_cart(store, product.id)

    assert store.remove_from_cart(item.id) is True
    assert store.list_cart_items("s1") == []


def test_clear_cart_only_touches_one_session(store):
    product = store.create_product(make_product())
    add_to_cart(store, product.id, session_id="s1")
    add_to_cart(store, product.id, session_id="s2")

    assert store.clear_cart("empty-session") is True
    assert len(store.cart_items) == 2

    assert store.clear_cart("s1") is True
    assert store.list_cart_items("s1") == []
    assert len(store.list_cart_items("s2")) == 1


# ---------- Seed ----------

def test_seeded_ratings_match_seeded_reviews(seeded_store):
    headphones = seeded_store.get_product(1)
    watch = seeded_store.get_product(2)

    assert headphones.review_count == 2
    assert headphones.rating == "4.5"
    assert watch.review_count == 0
    assert watch.rating == "0"


def test_seed_loads_catalog(seeded_store):
    assert [c.name for c in seeded_store.list_categories()] == [
        "Electronics", "Clothing", "Home", "Books",
    ]
    assert len(seeded_store.list_products()) == 6
    assert seeded_store.get_product(4).is_favorite is True


def test_seed_search_matches_vintage_camera(seeded_store):
    results = seeded_store.list_products(ProductFilter(search="cam"))
    names = [p.name for p in results]

    assert "Vintage Camera" in names


# ---------- Price validation ----------

@pytest.mark.parametrize("price", ["1e30", "123456789012345678901234567890"])
def test_price_beyond_decimal_precision_is_rejected(price):
    with pytest.raises(ValidationError):
        make_product(price=price)


@pytest.mark.parametrize("price", ["-1", "NaN", "Infinity", "cheap"])
def test_invalid_price_is_rejected(price):
    with pytest.raises(ValidationError):
        make_product(price=price)


def test_update_rejects_oversized_price():
    with pytest.raises(ValidationError):
        ProductUpdate(price="1e30")


def test_exact_tie_rounds_half_up():
    assert average_rating([5] * 7 + [4] * 13) == "4.4"


# ---------- Concurrency ----------

def test_concurrent_adds_merge_into_one_row(store):
    product = store.create_product(make_product())

    def add_many():
        for _ in range(50):
            add_to_cart(store, product.id)

    workers = [threading.Thread(target=add_many) for _ in range(8)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    rows = store.list_cart_items("s1")
    assert len(rows) == 1
    assert rows[0].quantity == 400


def test_concurrent_reviews_keep_rating_consistent(store):
    product = store.create_product(make_product())

    def review_many(rating):
        for _ in range(25):
            store.create_review(product.id, make_review(rating=rating))

    workers = [threading.Thread(target=review_many, args=(r,)) for r in (2, 4)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    refreshed = store.get_product(product.id)
    assert refreshed.review_count == 50
    assert refreshed.rating == "3.0"
