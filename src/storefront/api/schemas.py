"""Pydantic request/response schemas for the storefront API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Auth ---


class RegisterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "username": "jane_doe",
                    "email": "jane@example.com",
                    "password": "s3cret-pass",
                    "role": "buyer",
                }
            ]
        }
    }

    username: str = Field(..., max_length=30)
    password: str = Field(..., max_length=128)
    email: str | None = Field(None, max_length=254)
    role: str = "buyer"


class LoginRequest(BaseModel):
    username: str
    password: str


class UpdateProfileRequest(BaseModel):
    email: str | None = Field(None, max_length=254)
    gender: str | None = None


class UserResponse(BaseModel):
    user_id: str
    username: str
    email: str | None = None
    gender: str | None = None
    role: str

    @classmethod
    def from_user(cls, user) -> UserResponse:
        return cls(
            user_id=str(user.id),
            username=user.username,
            email=user.email,
            gender=user.gender,
            role=user.role,
        )


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


# --- Products ---


class AddProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Linen Shirt",
                    "price": 39.5,
                    "category": "apparel",
                    "description": "Breathable summer shirt.",
                    "image": "https://cdn.example.com/linen-shirt.jpg",
                    "stock": 25,
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    price: float
    category: str = Field(..., max_length=50)
    description: str | None = None
    image: str | None = Field(None, max_length=500)
    stock: int = 0


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, max_length=100)
    price: float | None = None
    category: str | None = Field(None, max_length=50)
    description: str | None = None
    image: str | None = Field(None, max_length=500)
    stock: int | None = None


class ProductResponse(BaseModel):
    product_id: str
    name: str
    price: float
    stock: int
    category: str
    description: str | None = None
    image: str | None = None
    author_id: str
    review_count: int = 0
    created_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls(
            product_id=str(product.id),
            name=product.name,
            price=product.price,
            stock=product.stock or 0,
            category=product.category,
            description=product.description,
            image=product.image,
            author_id=str(product.author_id),
            review_count=len(product.review_ids or []),
            created_at=product.created_at,
        )


class PaginationResponse(BaseModel):
    current_page: int
    total_pages: int
    total: int
    limit: int
    has_next_page: bool
    has_prev_page: bool


class ProductPageResponse(BaseModel):
    products: list[ProductResponse]
    pagination: PaginationResponse


class ProductIdResponse(BaseModel):
    product_id: str


class RemovedProductResponse(BaseModel):
    product_id: str
    reviews_deleted: int


class CategoryResponse(BaseModel):
    name: str
    product_count: int


class StatsResponse(BaseModel):
    total_products: int
    total_users: int
    average_price: float
    total_categories: int


# --- Reviews ---


class SubmitReviewRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"rating": 4, "comment": "Fits well, fast delivery."}]}}

    rating: int
    comment: str | None = Field(None, max_length=500)


class ReviewResponse(BaseModel):
    review_id: str
    product_id: str
    author_id: str
    rating: int
    comment: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_review(cls, review) -> ReviewResponse:
        return cls(
            review_id=str(review.id),
            product_id=str(review.product_id),
            author_id=str(review.author_id),
            rating=review.rating.score,
            comment=review.comment,
            created_at=review.created_at,
        )


class ReviewIdResponse(BaseModel):
    review_id: str


class ReviewPageResponse(BaseModel):
    reviews: list[ReviewResponse]
    pagination: PaginationResponse


class ProductDetailResponse(BaseModel):
    product: ProductResponse
    reviews: list[ReviewResponse]
    average_rating: float | None = None


# --- Wishlist ---


class WishlistToggleResponse(BaseModel):
    product_id: str
    liked: bool


class WishlistResponse(BaseModel):
    wishlist: list[ProductResponse]
    count: int


# --- Cart ---


class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = 1


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


class CartLineResponse(BaseModel):
    product_id: str
    name: str
    unit_price: float
    quantity: int
    subtotal: float


class CartResponse(BaseModel):
    items: list[CartLineResponse]
    total: float
    item_count: int

    @classmethod
    def from_summary(cls, summary) -> CartResponse:
        return cls(
            items=[
                CartLineResponse(
                    product_id=str(line.product.id),
                    name=line.product.name,
                    unit_price=line.product.price,
                    quantity=line.quantity,
                    subtotal=line.subtotal,
                )
                for line in summary.lines
            ],
            total=summary.total,
            item_count=summary.item_count,
        )


class CartQuantityResponse(BaseModel):
    product_id: str
    quantity: int


class CartCountResponse(BaseModel):
    count: int


class CartRemovalResponse(BaseModel):
    product_id: str
    removed: bool


class ClearCartResponse(BaseModel):
    items_removed: int


# --- Orders ---


class OrderItemResponse(BaseModel):
    product_id: str
    name: str
    quantity: int
    unit_price: float
    subtotal: float


class OrderResponse(BaseModel):
    order_id: str
    user_id: str
    items: list[OrderItemResponse]
    total: float
    currency: str
    created_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> OrderResponse:
        return cls(
            order_id=str(order.id),
            user_id=str(order.user_id),
            items=[
                OrderItemResponse(
                    product_id=str(item.product_id),
                    name=item.name,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    subtotal=item.subtotal,
                )
                for item in order.items
            ],
            total=order.total,
            currency=order.currency,
            created_at=order.created_at,
        )


class OrderPageResponse(BaseModel):
    orders: list[OrderResponse]
    pagination: PaginationResponse
