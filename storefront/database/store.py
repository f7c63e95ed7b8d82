"""In-memory catalog store"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from itertools import count
from threading import RLock
from typing import Optional

from ..models.cart import AddToCartRequest, CartItem, CartItemWithProduct
from ..models.category import Category, CategoryCreate
from ..models.product import (
    ALL_CATEGORIES,
    Product,
    ProductCreate,
    ProductFilter,
    ProductUpdate,
    SortOption,
)
from ..models.review import Review, ReviewCreate

logger = logging.getLogger(__name__)

RATING_QUANTUM = Decimal("0.1")

# May be cleared to None by an update
NULLABLE_PRODUCT_FIELDS = {"original_price", "badge"}


@dataclass
class SeedProduct:
    """Seed entry: a product definition plus its initial favorite flag"""
    product: ProductCreate
    is_favorite: bool = False


@dataclass
class CatalogSeed:
    """Initial data loaded into a store at construction"""
    categories: list[CategoryCreate] = field(default_factory=list)
    products: list[SeedProduct] = field(default_factory=list)
    reviews: list[tuple[int, ReviewCreate]] = field(default_factory=list)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def average_rating(ratings: list[int]) -> str:
    """Mean of integer ratings formatted to one decimal place, "0" when empty."""
    if not ratings:
        return "0"
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    # Exact ties round up: 87/20 gives "4.4", not the float-formatted "4.3"
    return str(mean.quantize(RATING_QUANTUM, rounding=ROUND_HALF_UP))


class CatalogStore:
    """
    In-memory storage for products, categories, reviews and cart items.

    The store owns every collection and keeps the derived product fields
    (rating, review_count) consistent with the review set. Ids come from
    per-collection counters and are never reused. Entities handed to callers
    are copies, so mutating them does not touch stored state.
    """

    def __init__(self, seed: Optional[CatalogSeed] = None):
        self.products: dict[int, Product] = {}
        self.categories: dict[int, Category] = {}
        self.reviews: dict[int, Review] = {}
        self.cart_items: dict[int, CartItem] = {}

        self._product_ids = count(1)
        self._category_ids = count(1)
        self._review_ids = count(1)
        self._cart_ids = count(1)

        self._lock = RLock()

        if seed:
            self._load_seed(seed)

    def _load_seed(self, seed: CatalogSeed) -> None:
        with self._lock:
            for category in seed.categories:
                self.create_category(category)
            for entry in seed.products:
                product = self.create_product(entry.product)
                if entry.is_favorite:
                    self.toggle_favorite(product.id)
            for product_id, review in seed.reviews:
                self.create_review(product_id, review)
            for product_id in list(self.products):
                self._recalculate_rating(product_id)

        logger.info(
            f"Seeded catalog: {len(self.categories)} categories, "
            f"{len(self.products)} products, {len(self.reviews)} reviews"
        )

    # Products

    def list_products(self, filters: Optional[ProductFilter] = None) -> list[Product]:
        """
        List products matching the filters.

        Category is an exact, case-sensitive match ("All Categories" means no
        filter). Search is a case-insensitive substring of name or
        description. Price bounds are inclusive. Sorting runs after filtering;
        an absent or unknown sort keeps insertion order.
        """
        with self._lock:
            results = [p.model_copy(deep=True) for p in self.products.values()]

        if not filters:
            return results

        if filters.category and filters.category != ALL_CATEGORIES:
            results = [p for p in results if p.category == filters.category]

        if filters.search:
            term = filters.search.lower()
            results = [
                p for p in results
                if term in p.name.lower() or term in p.description.lower()
            ]

        if filters.min_price is not None:
            results = [p for p in results if p.price_amount >= filters.min_price]
        if filters.max_price is not None:
            results = [p for p in results if p.price_amount <= filters.max_price]

        return self._sort_products(results, filters.sort_by)

    @staticmethod
    def _sort_products(products: list[Product], sort_by: Optional[str]) -> list[Product]:
        if not sort_by:
            return products
        try:
            option = SortOption(sort_by)
        except ValueError:
            logger.debug(f"Ignoring unknown sort option {sort_by!r}")
            return products

        if option == SortOption.NAME_ASC:
            return sorted(products, key=lambda p: p.name.casefold())
        if option == SortOption.PRICE_ASC:
            return sorted(products, key=lambda p: p.price_amount)
        if option == SortOption.PRICE_DESC:
            return sorted(products, key=lambda p: p.price_amount, reverse=True)
        return sorted(products, key=lambda p: p.rating_amount, reverse=True)

    def get_product(self, product_id: int) -> Optional[Product]:
        """Get a product by ID"""
        with self._lock:
            product = self.products.get(product_id)
        return product.model_copy(deep=True) if product else None

    def create_product(self, data: ProductCreate) -> Product:
        """Create a product. Derived fields always start from their defaults."""
        with self._lock:
            product_id = next(self._product_ids)
            product = Product(
                id=product_id,
                name=data.name,
                description=data.description,
                price=data.price,
                original_price=data.original_price or None,
                category=data.category,
                image_url=data.image_url,
                badge=data.badge or None,
                rating="0",
                review_count=0,
                is_favorite=False,
                created_at=_now(),
            )
            self.products[product_id] = product

        logger.info(f"Created product {product_id}: {product.name}")
        return product.model_copy(deep=True)

    def update_product(self, product_id: int, data: ProductUpdate) -> Optional[Product]:
        """
        Merge the fields set on ``data`` onto an existing product.

        ProductUpdate carries no id, creation time, rating or review count,
        so derived fields only change through create_review.
        """
        changes = {
            name: value
            for name, value in data.model_dump(exclude_unset=True).items()
            if value is not None or name in NULLABLE_PRODUCT_FIELDS
        }

        with self._lock:
            existing = self.products.get(product_id)
            if not existing:
                return None
            updated = existing.model_copy(update=changes)
            self.products[product_id] = updated

        logger.info(f"Updated product {product_id}: {sorted(changes)}")
        return updated.model_copy(deep=True)

    def delete_product(self, product_id: int) -> bool:
        """Delete a product. Reviews and cart rows referencing it are kept."""
        with self._lock:
            removed = self.products.pop(product_id, None)

        if removed:
            logger.info(f"Deleted product {product_id}")
        return removed is not None

    def toggle_favorite(self, product_id: int) -> Optional[Product]:
        """Flip a product's favorite flag"""
        with self._lock:
            product = self.products.get(product_id)
            if not product:
                return None
            updated = product.model_copy(update={"is_favorite": not product.is_favorite})
            self.products[product_id] = updated

        return updated.model_copy(deep=True)

    # Categories

    def list_categories(self) -> list[Category]:
        """List active categories"""
        with self._lock:
            return [c.model_copy() for c in self.categories.values() if c.is_active]

    def get_category_by_name(self, name: str) -> Optional[Category]:
        with self._lock:
            category = next(
                (c for c in self.categories.values() if c.name == name),
                None,
            )
        return category.model_copy() if category else None

    def create_category(self, data: CategoryCreate) -> Category:
        """Create a category, active unless stated otherwise"""
        with self._lock:
            category_id = next(self._category_ids)
            category = Category(
                id=category_id,
                name=data.name,
                is_active=True if data.is_active is None else data.is_active,
            )
            self.categories[category_id] = category

        logger.info(f"Created category {category_id}: {category.name}")
        return category.model_copy()

    # Reviews

    def list_reviews(self, product_id: int) -> list[Review]:
        """List reviews for a product in creation order"""
        with self._lock:
            return [
                r.model_copy() for r in self.reviews.values()
                if r.product_id == product_id
            ]

    def create_review(self, product_id: int, data: ReviewCreate) -> Review:
        """
        Store a review and refresh the product's rating and review count.

        The review is kept even when the product does not exist; the rating
        refresh is skipped in that case.
        """
        with self._lock:
            review_id = next(self._review_ids)
            review = Review(
                id=review_id,
                product_id=product_id,
                user_name=data.user_name,
                rating=data.rating,
                comment=data.comment,
                created_at=_now(),
            )
            self.reviews[review_id] = review
            product = self._recalculate_rating(product_id)

        if product:
            logger.info(
                f"Review {review_id} for product {product_id}: "
                f"rating={product.rating} reviews={product.review_count}"
            )
        else:
            logger.warning(f"Review {review_id} references missing product {product_id}")
        return review.model_copy()

    def _recalculate_rating(self, product_id: int) -> Optional[Product]:
        """Recompute derived review fields. Caller holds the lock."""
        product = self.products.get(product_id)
        if not product:
            return None

        ratings = [r.rating for r in self.reviews.values() if r.product_id == product_id]
        updated = product.model_copy(
            update={"rating": average_rating(ratings), "review_count": len(ratings)}
        )
        self.products[product_id] = updated
        return updated

    # Cart

    def list_cart_items(self, session_id: str) -> list[CartItemWithProduct]:
        """
        List a session's cart rows joined with their products.

        Rows whose product has been deleted are left out.
        """
        with self._lock:
            rows = []
            for item in self.cart_items.values():
                if item.session_id != session_id:
                    continue
                product = self.products.get(item.product_id)
                if not product:
                    continue
                rows.append(
                    CartItemWithProduct(
                        **item.model_dump(),
                        product=product.model_copy(deep=True),
                    )
                )
        return rows

    def cart_count(self, session_id: str) -> int:
        """Total quantity across a session's cart rows"""
        return sum(item.quantity for item in self.list_cart_items(session_id))

    def add_to_cart(self, data: AddToCartRequest) -> CartItem:
        """
        Add a product to a session's cart.

        If the session already has a row for the product, its quantity is
        increased instead of inserting a second row.
        """
        quantity = data.quantity or 1

        with self._lock:
            existing = next(
                (
                    item for item in self.cart_items.values()
                    if item.session_id == data.session_id
                    and item.product_id == data.product_id
                ),
                None,
            )

            if existing:
                item = existing.model_copy(update={"quantity": existing.quantity + quantity})
                logger.debug(f"Merged into cart item {item.id}: quantity={item.quantity}")
            else:
                item = CartItem(
                    id=next(self._cart_ids),
                    product_id=data.product_id,
                    quantity=quantity,
                    session_id=data.session_id,
                )
                logger.debug(f"Created cart item {item.id} for session {data.session_id}")

            self.cart_items[item.id] = item

        return item.model_copy()

    def update_cart_item(self, item_id: int, quantity: int) -> Optional[CartItem]:
        """Set a cart row's quantity. No clamping is applied here."""
        with self._lock:
            item = self.cart_items.get(item_id)
            if not item:
                return None
            updated = item.model_copy(update={"quantity": quantity})
            self.cart_items[item_id] = updated

        return updated.model_copy()

    def remove_from_cart(self, item_id: int) -> bool:
        """Remove a cart row"""
        with self._lock:
            return self.cart_items.pop(item_id, None) is not None

    def clear_cart(self, session_id: str) -> bool:
        """Remove every row for a session. Succeeds even if there were none."""
        with self._lock:
            stale = [
                item_id for item_id, item in self.cart_items.items()
                if item.session_id == session_id
            ]
            for item_id in stale:
                del self.cart_items[item_id]

        logger.info(f"Cleared {len(stale)} cart items for session {session_id}")
        return True
