"""Repository for the Product aggregate."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.query import Q

from storefront.catalogue.product import Product
from storefront.domain import storefront

SORTABLE_FIELDS = ("created_at", "price", "name")

_BATCH_SIZE = 100


@storefront.repository(part_of=Product)
class ProductRepository:
    """Product lookups and catalogue queries."""

    def find(self, product_id) -> Product | None:
        """Resolve a weak product reference; a deleted product resolves to None."""
        try:
            return self.get(str(product_id))
        except ObjectNotFoundError:
            return None

    def search(
        self,
        category=None,
        search=None,
        min_price=None,
        max_price=None,
        sort_by="created_at",
        sort_order="desc",
        offset=0,
        limit=12,
    ):
        """Filter, sort and slice the catalogue. Returns a Protean ResultSet."""
        query = self._dao.query

        if category:
            query = query.filter(category=category)
        if search:
            query = query.filter(
                Q(name__icontains=search) | Q(description__icontains=search) | Q(category__icontains=search)
            )
        if min_price is not None:
            query = query.filter(price__gte=float(min_price))
        if max_price is not None:
            query = query.filter(price__lte=float(max_price))

        if sort_by not in SORTABLE_FIELDS:
            sort_by = "created_at"
        ordering = sort_by if sort_order == "asc" else f"-{sort_by}"

        return query.order_by(ordering).offset(offset).limit(limit).all()

    def each(self, **filters):
        """Iterate over every matching product, batch by batch."""
        query = self._dao.query.filter(**filters) if filters else self._dao.query
        offset = 0
        while True:
            result = query.offset(offset).limit(_BATCH_SIZE).all()
            yield from result.items
            offset += _BATCH_SIZE
            if offset >= result.total:
                break

    def count(self) -> int:
        return self._dao.query.all().total
