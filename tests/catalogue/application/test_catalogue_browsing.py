"""Application tests for catalogue browsing, detail, categories and stats."""

import pytest
from protean import current_domain

from storefront.catalogue.browsing import browse_products, catalogue_stats, get_product_detail, list_categories
from storefront.errors import NotFound
from storefront.reviews.submission import SubmitReview


@pytest.fixture()
def catalogue(add_product):
    return {
        "shirt": add_product(name="Linen Shirt", price=39.5, category="apparel", description="Breathable summer"),
        "jacket": add_product(name="Denim Jacket", price=89.0, category="apparel"),
        "belt": add_product(name="Leather Belt", price=24.99, category="accessories"),
        "scarf": add_product(name="Wool Scarf", price=19.0, category="accessories", description="Warm winter wear"),
        "sneakers": add_product(name="Canvas Sneakers", price=59.0, category="footwear"),
    }


def _names(page):
    return [p.name for p in page.items]


class TestBrowseProducts:
    def test_newest_first_by_default(self, catalogue):
        page = browse_products()
        assert _names(page)[0] == "Canvas Sneakers"
        assert page.total == 5

    def test_filter_by_category(self, catalogue):
        page = browse_products(category="accessories")
        assert sorted(_names(page)) == ["Leather Belt", "Wool Scarf"]

    def test_search_is_case_insensitive_across_fields(self, catalogue):
        assert _names(browse_products(search="SHIRT")) == ["Linen Shirt"]
        assert _names(browse_products(search="winter")) == ["Wool Scarf"]
        assert sorted(_names(browse_products(search="footwear"))) == ["Canvas Sneakers"]

    def test_price_range(self, catalogue):
        page = browse_products(min_price=20, max_price=60, sort_by="price", sort_order="asc")
        assert _names(page) == ["Leather Belt", "Linen Shirt", "Canvas Sneakers"]

    def test_sort_by_name(self, catalogue):
        page = browse_products(sort_by="name", sort_order="asc")
        assert _names(page) == sorted(_names(page))

    def test_unknown_sort_falls_back_to_created_at(self, catalogue):
        assert _names(browse_products(sort_by="rating")) == _names(browse_products())

    def test_pagination(self, catalogue):
        page = browse_products(sort_by="price", sort_order="asc", page=2, limit=2)
        assert _names(page) == ["Linen Shirt", "Canvas Sneakers"]
        assert page.total == 5
        assert page.total_pages == 3
        assert page.has_next
        assert page.has_prev

    def test_empty_catalogue(self):
        page = browse_products()
        assert page.items == []
        assert page.total == 0


class TestProductDetail:
    def test_includes_reviews_and_average(self, catalogue, register):
        for i, rating in enumerate([5, 4]):
            current_domain.process(
                SubmitReview(product_id=catalogue["belt"], author_id=register(f"reviewer_{i}"), rating=rating),
                asynchronous=False,
            )
        detail = get_product_detail(catalogue["belt"])
        assert detail.product.name == "Leather Belt"
        assert len(detail.reviews) == 2
        assert detail.average_rating == 4.5

    def test_no_reviews(self, catalogue):
        assert get_product_detail(catalogue["belt"]).average_rating is None

    def test_unknown_product(self):
        with pytest.raises(NotFound):
            get_product_detail("5f1d7c9e-1111-4aaa-8bbb-00000000ffff")


class TestCategoriesAndStats:
    def test_categories_most_populated_first(self, catalogue):
        assert list_categories() == [("accessories", 2), ("apparel", 2), ("footwear", 1)]

    def test_stats(self, catalogue, buyer_id):
        stats = catalogue_stats()
        assert stats["total_products"] == 5
        assert stats["total_users"] == 2
        assert stats["average_price"] == round((39.5 + 89.0 + 24.99 + 19.0 + 59.0) / 5, 2)
        assert stats["total_categories"] == 3

    def test_stats_empty(self):
        assert catalogue_stats() == {
            "total_products": 0,
            "total_users": 0,
            "average_price": 0,
            "total_categories": 0,
        }
