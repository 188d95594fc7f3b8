"""FastAPI endpoints for the storefront."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_actor
from storefront.api.schemas import (
    AddProductRequest,
    AddToCartRequest,
    CartCountResponse,
    CartQuantityResponse,
    CartRemovalResponse,
    CartResponse,
    CategoryResponse,
    ClearCartResponse,
    LoginRequest,
    OrderPageResponse,
    OrderResponse,
    PaginationResponse,
    ProductDetailResponse,
    ProductIdResponse,
    ProductPageResponse,
    ProductResponse,
    RegisterRequest,
    RemovedProductResponse,
    ReviewIdResponse,
    ReviewPageResponse,
    ReviewResponse,
    StatsResponse,
    SubmitReviewRequest,
    TokenResponse,
    UpdateCartQuantityRequest,
    UpdateProductRequest,
    UpdateProfileRequest,
    UserResponse,
    WishlistResponse,
    WishlistToggleResponse,
)
from storefront.catalogue.browsing import browse_products, catalogue_stats, get_product_detail, list_categories
from storefront.catalogue.management import AddProduct, RemoveProduct, UpdateProductDetails
from storefront.identity.authentication import Actor, authenticate, issue_token
from storefront.identity.profile import UpdateProfile
from storefront.identity.registration import RegisterUser
from storefront.identity.wishlist import ToggleWishlist, list_wishlist
from storefront.ordering.cart import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity
from storefront.ordering.cart_summary import cart_count, summarize_cart
from storefront.ordering.checkout import PlaceOrder
from storefront.ordering.history import get_order, list_orders
from storefront.reviews.listing import list_product_reviews
from storefront.reviews.removal import RemoveReview
from storefront.reviews.submission import SubmitReview
from storefront.shared.lookups import load_actor

auth_router = APIRouter(prefix="/auth", tags=["auth"])
product_router = APIRouter(prefix="/products", tags=["products"])
catalogue_router = APIRouter(tags=["catalogue"])
review_router = APIRouter(tags=["reviews"])
wishlist_router = APIRouter(prefix="/wishlist", tags=["wishlist"])
cart_router = APIRouter(prefix="/cart", tags=["cart"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


# --- Auth endpoints ---


@auth_router.post("/register", status_code=201, response_model=TokenResponse)
async def register(body: RegisterRequest) -> TokenResponse:
    command = RegisterUser(
        username=body.username,
        password=body.password,
        email=body.email,
        role=body.role,
    )
    user_id = current_domain.process(command, asynchronous=False)
    user = load_actor(user_id)
    return TokenResponse(access_token=issue_token(user), user=UserResponse.from_user(user))


@auth_router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest) -> TokenResponse:
    user = authenticate(body.username, body.password)
    return TokenResponse(access_token=issue_token(user), user=UserResponse.from_user(user))


@auth_router.get("/me", response_model=UserResponse)
async def me(actor: Actor = Depends(current_actor)) -> UserResponse:
    return UserResponse.from_user(load_actor(actor.user_id))


@auth_router.put("/me", response_model=UserResponse)
async def update_me(body: UpdateProfileRequest, actor: Actor = Depends(current_actor)) -> UserResponse:
    command = UpdateProfile(user_id=actor.user_id, email=body.email, gender=body.gender)
    current_domain.process(command, asynchronous=False)
    return UserResponse.from_user(load_actor(actor.user_id))


# --- Product endpoints ---


@product_router.get("", response_model=ProductPageResponse)
async def browse(
    category: str | None = None,
    search: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    page: int = 1,
    limit: int | None = None,
) -> ProductPageResponse:
    result = browse_products(
        category=category,
        search=search,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return ProductPageResponse(
        products=[ProductResponse.from_product(p) for p in result.items],
        pagination=PaginationResponse(**result.pagination()),
    )


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest, actor: Actor = Depends(current_actor)) -> ProductIdResponse:
    command = AddProduct(
        actor_id=actor.user_id,
        name=body.name,
        price=body.price,
        category=body.category,
        description=body.description,
        image=body.image,
        stock=body.stock,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("/{product_id}", response_model=ProductDetailResponse)
async def product_detail(product_id: str) -> ProductDetailResponse:
    detail = get_product_detail(product_id)
    return ProductDetailResponse(
        product=ProductResponse.from_product(detail.product),
        reviews=[ReviewResponse.from_review(r) for r in detail.reviews],
        average_rating=detail.average_rating,
    )


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str, body: UpdateProductRequest, actor: Actor = Depends(current_actor)
) -> ProductResponse:
    command = UpdateProductDetails(
        actor_id=actor.user_id,
        product_id=product_id,
        name=body.name,
        price=body.price,
        category=body.category,
        description=body.description,
        image=body.image,
        stock=body.stock,
    )
    current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(get_product_detail(product_id).product)


@product_router.delete("/{product_id}", response_model=RemovedProductResponse)
async def remove_product(product_id: str, actor: Actor = Depends(current_actor)) -> RemovedProductResponse:
    command = RemoveProduct(actor_id=actor.user_id, product_id=product_id)
    reviews_deleted = current_domain.process(command, asynchronous=False)
    return RemovedProductResponse(product_id=product_id, reviews_deleted=reviews_deleted)


# --- Catalogue endpoints ---


@catalogue_router.get("/categories", response_model=list[CategoryResponse])
async def categories() -> list[CategoryResponse]:
    return [CategoryResponse(name=name, product_count=count) for name, count in list_categories()]


@catalogue_router.get("/stats", response_model=StatsResponse)
async def stats() -> StatsResponse:
    return StatsResponse(**catalogue_stats())


# --- Review endpoints ---


@review_router.get("/products/{product_id}/reviews", response_model=ReviewPageResponse)
async def product_reviews(product_id: str, page: int = 1, limit: int | None = None) -> ReviewPageResponse:
    result = list_product_reviews(product_id, page=page, limit=limit)
    return ReviewPageResponse(
        reviews=[ReviewResponse.from_review(r) for r in result.items],
        pagination=PaginationResponse(**result.pagination()),
    )


@review_router.post("/products/{product_id}/reviews", status_code=201, response_model=ReviewIdResponse)
async def submit_review(
    product_id: str, body: SubmitReviewRequest, actor: Actor = Depends(current_actor)
) -> ReviewIdResponse:
    command = SubmitReview(
        product_id=product_id,
        author_id=actor.user_id,
        rating=body.rating,
        comment=body.comment,
    )
    result = current_domain.process(command, asynchronous=False)
    return ReviewIdResponse(review_id=result)


@review_router.delete("/reviews/{review_id}", response_model=ReviewIdResponse)
async def remove_review(review_id: str, actor: Actor = Depends(current_actor)) -> ReviewIdResponse:
    current_domain.process(RemoveReview(actor_id=actor.user_id, review_id=review_id), asynchronous=False)
    return ReviewIdResponse(review_id=review_id)


# --- Wishlist endpoints ---


@wishlist_router.get("", response_model=WishlistResponse)
async def wishlist(actor: Actor = Depends(current_actor)) -> WishlistResponse:
    products = list_wishlist(actor.user_id)
    return WishlistResponse(wishlist=[ProductResponse.from_product(p) for p in products], count=len(products))


@wishlist_router.post("/{product_id}", response_model=WishlistToggleResponse)
async def toggle_wishlist(product_id: str, actor: Actor = Depends(current_actor)) -> WishlistToggleResponse:
    liked = current_domain.process(ToggleWishlist(user_id=actor.user_id, product_id=product_id), asynchronous=False)
    return WishlistToggleResponse(product_id=product_id, liked=liked)


# --- Cart endpoints ---


@cart_router.get("", response_model=CartResponse)
async def cart(actor: Actor = Depends(current_actor)) -> CartResponse:
    return CartResponse.from_summary(summarize_cart(actor.user_id))


@cart_router.get("/count", response_model=CartCountResponse)
async def count(actor: Actor = Depends(current_actor)) -> CartCountResponse:
    return CartCountResponse(count=cart_count(actor.user_id))


@cart_router.post("/items", response_model=CartQuantityResponse)
async def add_to_cart(body: AddToCartRequest, actor: Actor = Depends(current_actor)) -> CartQuantityResponse:
    command = AddToCart(user_id=actor.user_id, product_id=body.product_id, quantity=body.quantity)
    quantity = current_domain.process(command, asynchronous=False)
    return CartQuantityResponse(product_id=body.product_id, quantity=quantity)


@cart_router.put("/items/{product_id}", response_model=CartQuantityResponse)
async def update_cart_quantity(
    product_id: str, body: UpdateCartQuantityRequest, actor: Actor = Depends(current_actor)
) -> CartQuantityResponse:
    command = UpdateCartQuantity(user_id=actor.user_id, product_id=product_id, quantity=body.quantity)
    quantity = current_domain.process(command, asynchronous=False)
    return CartQuantityResponse(product_id=product_id, quantity=quantity)


@cart_router.delete("/items/{product_id}", response_model=CartRemovalResponse)
async def remove_from_cart(product_id: str, actor: Actor = Depends(current_actor)) -> CartRemovalResponse:
    removed = current_domain.process(RemoveFromCart(user_id=actor.user_id, product_id=product_id), asynchronous=False)
    return CartRemovalResponse(product_id=product_id, removed=removed)


@cart_router.delete("", response_model=ClearCartResponse)
async def clear_cart(actor: Actor = Depends(current_actor)) -> ClearCartResponse:
    items_removed = current_domain.process(ClearCart(user_id=actor.user_id), asynchronous=False)
    return ClearCartResponse(items_removed=items_removed)


# --- Order endpoints ---


@order_router.post("", status_code=201, response_model=OrderResponse)
async def checkout(actor: Actor = Depends(current_actor)) -> OrderResponse:
    order_id = current_domain.process(PlaceOrder(user_id=actor.user_id), asynchronous=False)
    return OrderResponse.from_order(get_order(order_id, actor.user_id))


@order_router.get("", response_model=OrderPageResponse)
async def orders(page: int = 1, limit: int | None = None, actor: Actor = Depends(current_actor)) -> OrderPageResponse:
    result = list_orders(actor.user_id, page=page, limit=limit)
    return OrderPageResponse(
        orders=[OrderResponse.from_order(o) for o in result.items],
        pagination=PaginationResponse(**result.pagination()),
    )


@order_router.get("/{order_id}", response_model=OrderResponse)
async def order(order_id: str, actor: Actor = Depends(current_actor)) -> OrderResponse:
    return OrderResponse.from_order(get_order(order_id, actor.user_id))
