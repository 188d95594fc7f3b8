"""Application tests for cart commands and the cart read side."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.catalogue.management import RemoveProduct, UpdateProductDetails
from storefront.errors import InsufficientStock, InvalidIdentifier, NotFound, Unauthenticated
from storefront.identity.user import User
from storefront.ordering.cart import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity
from storefront.ordering.cart_summary import cart_count, cart_total, summarize_cart

UNKNOWN_ID = "5f1d7c9e-1111-4aaa-8bbb-00000000ffff"


def _add(user_id, product_id, quantity=1):
    return current_domain.process(
        AddToCart(user_id=user_id, product_id=product_id, quantity=quantity),
        asynchronous=False,
    )


def _cart(user_id):
    user = current_domain.repository_for(User).get(user_id)
    return {str(item.product_id): item.quantity for item in user.cart}


class TestAddToCart:
    def test_adds_and_persists(self, buyer_id, add_product):
        product_id = add_product(stock=5)
        assert _add(buyer_id, product_id, 2) == 2
        assert _cart(buyer_id) == {product_id: 2}

    def test_default_quantity_is_one(self, buyer_id, add_product):
        product_id = add_product()
        current_domain.process(AddToCart(user_id=buyer_id, product_id=product_id), asynchronous=False)
        assert _cart(buyer_id) == {product_id: 1}

    def test_repeat_add_merges_into_one_entry(self, buyer_id, add_product):
        product_id = add_product(stock=5)
        _add(buyer_id, product_id, 2)
        assert _add(buyer_id, product_id, 3) == 5
        assert _cart(buyer_id) == {product_id: 5}

    def test_stock_three_second_add_of_two_rejected(self, buyer_id, add_product):
        product_id = add_product(stock=3)
        _add(buyer_id, product_id, 2)
        with pytest.raises(InsufficientStock):
            _add(buyer_id, product_id, 2)
        assert _cart(buyer_id) == {product_id: 2}

    def test_reaching_stock_exactly_succeeds(self, buyer_id, add_product):
        product_id = add_product(stock=3)
        _add(buyer_id, product_id, 2)
        assert _add(buyer_id, product_id, 1) == 3

    @pytest.mark.parametrize("quantity", [0, 11, -1])
    def test_quantity_out_of_range_rejected_before_write(self, buyer_id, add_product, quantity):
        product_id = add_product(stock=50)
        with pytest.raises(ValidationError):
            AddToCart(user_id=buyer_id, product_id=product_id, quantity=quantity)
        assert _cart(buyer_id) == {}

    def test_unknown_product(self, buyer_id):
        with pytest.raises(NotFound):
            _add(buyer_id, UNKNOWN_ID)

    def test_malformed_product_id(self, buyer_id):
        with pytest.raises(InvalidIdentifier):
            _add(buyer_id, "not-an-id")

    def test_unknown_user(self, add_product):
        product_id = add_product()
        with pytest.raises(Unauthenticated):
            _add(UNKNOWN_ID, product_id)


class TestUpdateCartQuantity:
    def test_sets_quantity(self, buyer_id, add_product):
        product_id = add_product(stock=5)
        _add(buyer_id, product_id, 1)
        current_domain.process(
            UpdateCartQuantity(user_id=buyer_id, product_id=product_id, quantity=4),
            asynchronous=False,
        )
        assert _cart(buyer_id) == {product_id: 4}

    def test_item_not_in_cart(self, buyer_id, add_product):
        product_id = add_product()
        with pytest.raises(NotFound):
            current_domain.process(
                UpdateCartQuantity(user_id=buyer_id, product_id=product_id, quantity=1),
                asynchronous=False,
            )

    def test_over_stock(self, buyer_id, add_product):
        product_id = add_product(stock=3)
        _add(buyer_id, product_id, 1)
        with pytest.raises(InsufficientStock):
            current_domain.process(
                UpdateCartQuantity(user_id=buyer_id, product_id=product_id, quantity=4),
                asynchronous=False,
            )
        assert _cart(buyer_id) == {product_id: 1}

    def test_stock_checked_at_call_time(self, buyer_id, seller_id, add_product):
        product_id = add_product(stock=5)
        _add(buyer_id, product_id, 1)
        current_domain.process(
            UpdateProductDetails(actor_id=seller_id, product_id=product_id, stock=2),
            asynchronous=False,
        )
        with pytest.raises(InsufficientStock):
            current_domain.process(
                UpdateCartQuantity(user_id=buyer_id, product_id=product_id, quantity=3),
                asynchronous=False,
            )


class TestRemoveAndClear:
    def test_remove(self, buyer_id, add_product):
        product_id = add_product()
        _add(buyer_id, product_id)
        removed = current_domain.process(RemoveFromCart(user_id=buyer_id, product_id=product_id), asynchronous=False)
        assert removed is True
        assert _cart(buyer_id) == {}

    def test_remove_absent_is_noop(self, buyer_id, add_product):
        kept = add_product()
        _add(buyer_id, kept)
        removed = current_domain.process(RemoveFromCart(user_id=buyer_id, product_id=UNKNOWN_ID), asynchronous=False)
        assert removed is False
        assert _cart(buyer_id) == {kept: 1}

    def test_remove_malformed_id(self, buyer_id):
        with pytest.raises(InvalidIdentifier):
            current_domain.process(RemoveFromCart(user_id=buyer_id, product_id="bad"), asynchronous=False)

    def test_clear_then_total_is_zero(self, buyer_id, add_product):
        _add(buyer_id, add_product(name="Product A", price=10.0), 2)
        _add(buyer_id, add_product(name="Product B", price=5.0), 1)

        assert current_domain.process(ClearCart(user_id=buyer_id), asynchronous=False) == 2
        assert cart_total(buyer_id) == 0

    def test_clear_empty_cart(self, buyer_id):
        assert current_domain.process(ClearCart(user_id=buyer_id), asynchronous=False) == 0
        assert cart_total(buyer_id) == 0


class TestCartReadSide:
    def test_total_of_two_lines_is_25(self, buyer_id, add_product):
        _add(buyer_id, add_product(name="Product A", price=10.0), 2)
        _add(buyer_id, add_product(name="Product B", price=5.0), 1)
        assert cart_total(buyer_id) == 25.0

    def test_summary_lines(self, buyer_id, add_product):
        product_id = add_product(name="Product A", price=10.0)
        _add(buyer_id, product_id, 2)
        summary = summarize_cart(buyer_id)
        assert len(summary.lines) == 1
        assert summary.lines[0].subtotal == 20.0
        assert summary.item_count == 2

    def test_prices_resolved_at_read_time(self, buyer_id, seller_id, add_product):
        product_id = add_product(price=10.0)
        _add(buyer_id, product_id, 2)
        current_domain.process(
            UpdateProductDetails(actor_id=seller_id, product_id=product_id, price=12.0),
            asynchronous=False,
        )
        assert cart_total(buyer_id) == 24.0

    def test_deleted_products_skipped(self, buyer_id, seller_id, add_product):
        kept = add_product(name="Product A", price=10.0)
        removed = add_product(name="Product B", price=5.0)
        _add(buyer_id, kept, 1)
        _add(buyer_id, removed, 1)
        current_domain.process(RemoveProduct(actor_id=seller_id, product_id=removed), asynchronous=False)

        summary = summarize_cart(buyer_id)
        assert [str(line.product.id) for line in summary.lines] == [kept]
        assert summary.total == 10.0

    def test_count_sums_quantities(self, buyer_id, add_product):
        _add(buyer_id, add_product(name="Product A"), 2)
        _add(buyer_id, add_product(name="Product B"), 3)
        assert cart_count(buyer_id) == 5

    def test_empty_cart(self, buyer_id):
        summary = summarize_cart(buyer_id)
        assert summary.is_empty
        assert summary.total == 0
        assert cart_count(buyer_id) == 0
