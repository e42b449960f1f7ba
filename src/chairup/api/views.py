"""Read-side assembly: aggregates into API response payloads.

Order and cart lines are expanded with the product's current catalogue fields;
when a product has since been removed the values captured on the order are
shown instead.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from chairup.api.schemas import (
    CartItemResponse,
    CartResponse,
    OrderItemResponse,
    OrderOwner,
    OrderResponse,
    ProductResponse,
    ProductReviewsResponse,
    ProductSummary,
    PromotionResponse,
    ReviewAuthor,
    ReviewResponse,
    ShippingAddressSchema,
)
from chairup.catalogue.product import Product


def _products_by_id(product_ids):
    repo = current_domain.repository_for(Product)
    products = {}
    for product_id in {str(p) for p in product_ids}:
        try:
            products[product_id] = repo.get(product_id)
        except ObjectNotFoundError:
            continue
    return products


def product_view(product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        price=product.price,
        category=product.category,
        description=product.description,
        image=product.image,
        stock_quantity=product.stock_quantity,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def cart_view(cart, user_id) -> CartResponse:
    if cart is None:
        return CartResponse(user=str(user_id), items=[])

    products = _products_by_id(i.product_id for i in cart.items)
    items = []
    for item in cart.items:
        product = products.get(str(item.product_id))
        if product is None or not product.is_active:
            continue
        items.append(
            CartItemResponse(
                product=ProductSummary(
                    id=str(product.id),
                    name=product.name,
                    price=product.price,
                    image=product.image,
                    stock_quantity=product.stock_quantity,
                    category=product.category,
                ),
                quantity=item.quantity,
            )
        )
    return CartResponse(id=str(cart.id), user=str(cart.user_id), items=items, updated_at=cart.updated_at)


def order_view(order, current_products=False) -> OrderResponse:
    """Serialize ``order``; with ``current_products`` lines show live catalogue fields."""
    products = _products_by_id(i.product_id for i in order.items) if current_products else {}

    lines = []
    for item in order.items:
        product = products.get(str(item.product_id))
        lines.append(
            OrderItemResponse(
                product=ProductSummary(
                    id=str(item.product_id),
                    name=product.name if product else item.name,
                    image=product.image if product else item.image,
                    price=product.price if product else item.unit_price,
                ),
                quantity=item.quantity,
                price=item.unit_price,
            )
        )

    address = order.shipping_address
    return OrderResponse(
        id=str(order.id),
        user=OrderOwner(id=str(order.user_id), name=order.user_name, email=order.user_email),
        order_items=lines,
        shipping_address=ShippingAddressSchema(
            address=address.address,
            city=address.city,
            postal_code=address.postal_code,
            country=address.country,
        ),
        phone_number=order.phone_number,
        payment_method=order.payment_method,
        items_price=order.items_price,
        shipping_price=order.shipping_price,
        discount=order.discount or 0.0,
        total_price=order.total_price,
        promo_code=order.promo_code,
        status=order.status,
        created_at=order.created_at,
        updated_at=order.updated_at,
        delivered_at=order.delivered_at,
        cancelled_at=order.cancelled_at,
    )


def review_view(review, product=None) -> ReviewResponse:
    return ReviewResponse(
        id=str(review.id),
        product=ProductSummary(
            id=str(review.product_id),
            name=product.name if product else None,
            image=product.image if product else None,
        ),
        user=ReviewAuthor(id=str(review.user_id), name=review.user_name),
        rating=review.rating,
        comment=review.comment,
        verified=bool(review.verified),
        created_at=review.created_at,
        updated_at=review.updated_at,
    )


def reviews_by_user_view(reviews) -> list[ReviewResponse]:
    products = _products_by_id(r.product_id for r in reviews)
    return [review_view(r, products.get(str(r.product_id))) for r in reviews]


def product_reviews_view(reviews) -> ProductReviewsResponse:
    count = len(reviews)
    average = round(sum(r.rating for r in reviews) / count, 1) if count else 0.0
    return ProductReviewsResponse(
        reviews=[review_view(r) for r in reviews],
        average_rating=average,
        count=count,
    )


def promotion_view(promotion) -> PromotionResponse:
    return PromotionResponse(
        id=str(promotion.id),
        code=promotion.code,
        title=promotion.title,
        description=promotion.description,
        discount_percent=promotion.discount_percent,
        is_active=bool(promotion.is_active),
    )
