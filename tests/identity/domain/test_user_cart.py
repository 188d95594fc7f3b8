"""Tests for the cart embedded in the User aggregate."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.catalogue.product import Product
from storefront.errors import InsufficientStock, NotFound
from storefront.identity.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.identity.user import CartItem, User

AUTHOR_ID = "5f1d7c9e-1111-4aaa-8bbb-000000000001"


def _user():
    return User.register(username="buyer_bea", password_hash="hashed")


def _product(name="Leather Belt", price=10.0, stock=3):
    return Product.create(author_id=AUTHOR_ID, name=name, price=price, category="accessories", stock=stock)


class TestAddToCart:
    def test_new_entry_appended(self):
        user, product = _user(), _product()
        user.add_to_cart(product, 2)
        assert len(user.cart) == 1
        assert str(user.cart[0].product_id) == str(product.id)
        assert user.cart[0].quantity == 2

    def test_existing_entry_incremented_in_place(self):
        user, product = _user(), _product(stock=5)
        user.add_to_cart(product, 2)
        user.add_to_cart(product, 1)
        assert len(user.cart) == 1
        assert user.cart_quantity(product.id) == 3

    def test_quantity_equal_to_stock_succeeds(self):
        user, product = _user(), _product(stock=3)
        user.add_to_cart(product, 1)
        user.add_to_cart(product, 2)
        assert user.cart_quantity(product.id) == 3

    def test_second_add_over_stock_rejected(self):
        user, product = _user(), _product(stock=3)
        user.add_to_cart(product, 2)
        with pytest.raises(InsufficientStock):
            user.add_to_cart(product, 2)
        assert user.cart_quantity(product.id) == 2

    def test_first_add_over_stock_rejected(self):
        user, product = _user(), _product(stock=1)
        with pytest.raises(InsufficientStock) as exc:
            user.add_to_cart(product, 2)
        assert "Not enough stock" in str(exc.value)
        assert len(user.cart) == 0

    def test_raises_cart_item_added(self):
        user, product = _user(), _product()
        user._events.clear()
        user.add_to_cart(product, 2)
        event = user._events[-1]
        assert isinstance(event, CartItemAdded)
        assert event.quantity_added == 2
        assert event.quantity == 2

    def test_entries_for_distinct_products(self):
        user = _user()
        a, b = _product(name="Product A"), _product(name="Product B")
        user.add_to_cart(a, 1)
        user.add_to_cart(b, 1)
        assert len(user.cart) == 2


class TestCartItem:
    def test_zero_quantity_entry_rejected(self):
        with pytest.raises(ValidationError):
            CartItem(product_id=AUTHOR_ID, quantity=0)


class TestUpdateQuantity:
    def test_sets_absolute_quantity(self):
        user, product = _user(), _product(stock=5)
        user.add_to_cart(product, 1)
        user.update_cart_quantity(product, 4)
        assert user.cart_quantity(product.id) == 4

    def test_records_previous_quantity(self):
        user, product = _user(), _product(stock=5)
        user.add_to_cart(product, 1)
        user.update_cart_quantity(product, 4)
        event = user._events[-1]
        assert isinstance(event, CartQuantityUpdated)
        assert event.previous_quantity == 1
        assert event.new_quantity == 4

    def test_missing_item_not_found(self):
        user, product = _user(), _product()
        with pytest.raises(NotFound):
            user.update_cart_quantity(product, 1)

    def test_not_found_is_object_not_found(self):
        user, product = _user(), _product()
        with pytest.raises(ObjectNotFoundError):
            user.update_cart_quantity(product, 1)

    def test_over_stock_rejected(self):
        user, product = _user(), _product(stock=3)
        user.add_to_cart(product, 1)
        with pytest.raises(InsufficientStock):
            user.update_cart_quantity(product, 4)
        assert user.cart_quantity(product.id) == 1


class TestRemoveAndClear:
    def test_remove_existing(self):
        user, product = _user(), _product()
        user.add_to_cart(product, 1)
        assert user.remove_from_cart(product.id) is True
        assert len(user.cart) == 0
        assert isinstance(user._events[-1], CartItemRemoved)

    def test_remove_absent_is_noop(self):
        user, product = _user(), _product()
        user.add_to_cart(product, 1)
        assert user.remove_from_cart("5f1d7c9e-1111-4aaa-8bbb-00000000ffff") is False
        assert len(user.cart) == 1

    def test_clear(self):
        user = _user()
        user.add_to_cart(_product(name="Product A"), 1)
        user.add_to_cart(_product(name="Product B"), 2)
        assert user.clear_cart() == 2
        assert len(user.cart) == 0
        assert isinstance(user._events[-1], CartCleared)

    def test_clear_empty_cart(self):
        user = _user()
        assert user.clear_cart() == 0
