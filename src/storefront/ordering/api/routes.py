"""FastAPI endpoints for the cart and for orders."""

import json
import math

from fastapi import APIRouter, Depends, Header, Query
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.identity.api.dependencies import get_current_principal, require_admin
from storefront.identity.tokens import Principal
from storefront.ordering.api.schemas import (
    AddCartItemRequest,
    CartItemResponse,
    CartProductResponse,
    CartResponse,
    OrderItemResponse,
    OrderListResponse,
    OrderResponse,
    Pagination,
    PlaceOrderRequest,
    ShippingAddressSchema,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
)
from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.management import AddCartItem, ClearCart, RemoveCartItem, UpdateCartItem
from storefront.ordering.order.order import Order, OrderStatus
from storefront.ordering.order.placement import PlaceOrder
from storefront.ordering.order.status import UpdateOrderStatus
from storefront.shared.errors import PermissionDeniedError
from storefront.shared.money import as_float, to_decimal
from storefront.shared.schemas import sort_field

cart_router = APIRouter(prefix="/cart", tags=["cart"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


def _cart_response(cart: Cart) -> CartResponse:
    product_repo = current_domain.repository_for(Product)
    items = []
    subtotal = to_decimal(0)
    for item in cart.items:
        product = product_repo.find_by_id(item.product_id)
        product_view = None
        if product is not None:
            primary = next((i for i in product.images if i.is_primary), None)
            product_view = CartProductResponse(
                id=str(product.id),
                name=product.name,
                slug=product.slug,
                price=product.price,
                inventory=product.inventory,
                is_active=bool(product.is_active),
                image_url=primary.thumbnail_url if primary else None,
            )
            subtotal += to_decimal(product.price) * item.quantity
        items.append(
            CartItemResponse(
                id=str(item.id),
                product_id=str(item.product_id),
                quantity=item.quantity,
                product=product_view,
            )
        )
    return CartResponse(id=str(cart.id), user_id=str(cart.user_id), items=items, subtotal=as_float(subtotal))


def _order_response(order: Order) -> OrderResponse:
    address = order.shipping_address
    return OrderResponse(
        id=str(order.id),
        order_number=order.order_number,
        user_id=str(order.user_id),
        status=order.status,
        items=[
            OrderItemResponse(
                id=str(i.id),
                product_id=str(i.product_id),
                product_name=i.product_name,
                quantity=i.quantity,
                price=i.price,
            )
            for i in order.items
        ],
        shipping_address=ShippingAddressSchema(**address.to_dict()) if address else None,
        subtotal=order.subtotal,
        tax=order.tax,
        shipping_cost=order.shipping_cost,
        total=order.total,
        notes=order.notes,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def _user_cart(user_id) -> Cart:
    return current_domain.repository_for(Cart).get_or_create_for_user(user_id)


# --- Cart endpoints ---


@cart_router.get("", response_model=CartResponse)
async def get_cart(principal: Principal = Depends(get_current_principal)) -> CartResponse:
    return _cart_response(_user_cart(principal.user_id))


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_item(
    body: AddCartItemRequest, principal: Principal = Depends(get_current_principal)
) -> CartResponse:
    command = AddCartItem(user_id=principal.user_id, product_id=body.product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_response(_user_cart(principal.user_id))


@cart_router.put("/items/{item_id}", response_model=CartResponse)
async def update_cart_item(
    item_id: str, body: UpdateCartItemRequest, principal: Principal = Depends(get_current_principal)
) -> CartResponse:
    command = UpdateCartItem(user_id=principal.user_id, item_id=item_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_response(_user_cart(principal.user_id))


@cart_router.delete("/items/{item_id}", response_model=CartResponse)
async def remove_cart_item(item_id: str, principal: Principal = Depends(get_current_principal)) -> CartResponse:
    current_domain.process(RemoveCartItem(user_id=principal.user_id, item_id=item_id), asynchronous=False)
    return _cart_response(_user_cart(principal.user_id))


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(principal: Principal = Depends(get_current_principal)) -> CartResponse:
    current_domain.process(ClearCart(user_id=principal.user_id), asynchronous=False)
    return _cart_response(_user_cart(principal.user_id))


# --- Order endpoints ---


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(
    body: PlaceOrderRequest,
    principal: Principal = Depends(get_current_principal),
    idempotency_key: str | None = Header(None, alias="Idempotency-Key"),
) -> OrderResponse:
    command = PlaceOrder(
        user_id=principal.user_id,
        shipping_address=json.dumps(body.shipping_address.model_dump()) if body.shipping_address else None,
        notes=body.notes,
        idempotency_key=idempotency_key,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return _order_response(current_domain.repository_for(Order).get(order_id))


@order_router.get("", response_model=OrderListResponse)
async def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$", alias="sortOrder"),
    status: OrderStatus | None = None,
    user_id: str | None = Query(None, alias="userId"),
    principal: Principal = Depends(get_current_principal),
) -> OrderListResponse:
    if user_id and not principal.is_admin:
        raise PermissionDeniedError("Unauthorized")

    owner = user_id if principal.is_admin else principal.user_id
    orders, total = current_domain.repository_for(Order).search(
        user_id=owner,
        status=status.value if status else None,
        page=page,
        limit=limit,
        sort_by=sort_field(sort_by),
        sort_order=sort_order,
    )
    return OrderListResponse(
        orders=[_order_response(o) for o in orders],
        pagination=Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit)),
    )


@order_router.get("/user/{user_id}", response_model=list[OrderResponse], dependencies=[Depends(require_admin)])
async def list_user_orders(user_id: str) -> list[OrderResponse]:
    return [_order_response(o) for o in current_domain.repository_for(Order).for_user(user_id)]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, principal: Principal = Depends(get_current_principal)) -> OrderResponse:
    order = current_domain.repository_for(Order).get(order_id)
    if not principal.is_admin and str(order.user_id) != principal.user_id:
        raise PermissionDeniedError("Unauthorized")
    return _order_response(order)


@order_router.put("/{order_id}/status", response_model=OrderResponse, dependencies=[Depends(require_admin)])
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return _order_response(current_domain.repository_for(Order).get(order_id))
