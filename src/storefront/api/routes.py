"""FastAPI endpoints for checkout, order tracking and customer sessions."""

import json

import structlog
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.api.dependencies import admin_actor, authenticated_actor, optional_actor
from storefront.api.schemas import (
    ActorResponse,
    AdminLoginRequest,
    LineItemSchema,
    LinkResponse,
    LoginRequest,
    OrderListResponse,
    OrderResponse,
    PlaceOrderRequest,
    RegisterRequest,
    SessionResponse,
    ShippingAddressSchema,
    TokenResponse,
    UpdateStatusRequest,
)
from storefront.auth.credentials import authenticate_admin, issue_token
from storefront.auth.errors import UnauthorizedError
from storefront.auth.passwords import hash_password
from storefront.auth.session import ActorIdentity, attribute_owner
from storefront.customer.authentication import authenticate_customer
from storefront.customer.registration import RegisterCustomer
from storefront.notifications.dispatcher import notify_order_placed
from storefront.order.linking import link_guest_orders_for
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder
from storefront.order.status import UpdateOrderStatus

logger = structlog.get_logger(__name__)

order_router = APIRouter(prefix="/orders", tags=["orders"])
auth_router = APIRouter(prefix="/auth", tags=["auth"])


def _to_response(order: Order) -> OrderResponse:
    address = order.shipping_address
    return OrderResponse(
        order_id=str(order.id),
        customer_id=str(order.customer_id),
        status=order.status,
        items=[LineItemSchema(product_id=i.product_id, quantity=i.quantity, price=i.price) for i in order.items],
        total=order.total,
        shipping_fee=order.shipping_fee or 0,
        discount=order.discount or 0,
        tracking_number=order.tracking_number,
        notes=order.notes,
        customer_name=order.customer_name,
        customer_email=order.customer_email,
        customer_phone=order.customer_phone,
        shipping_address=(
            ShippingAddressSchema(
                street=address.street,
                ward=address.ward,
                district=address.district,
                city=address.city,
                country=address.country,
            )
            if address
            else None
        ),
        payment_method=order.payment_method,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def _to_list_response(orders) -> OrderListResponse:
    return OrderListResponse(orders=[_to_response(o) for o in orders], count=len(orders))


def _load_order(order_id: str) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Order not found") from exc


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(
    body: PlaceOrderRequest,
    background_tasks: BackgroundTasks,
    actor: ActorIdentity = Depends(optional_actor),
) -> OrderResponse:
    command = PlaceOrder(
        customer_id=attribute_owner(actor),
        items=json.dumps([item.model_dump() for item in body.items]),
        total=body.total,
        shipping_fee=body.shipping_fee,
        discount=body.discount,
        customer_name=body.full_name,
        customer_email=body.email,
        customer_phone=body.phone,
        shipping_address=json.dumps(body.shipping_address.model_dump()) if body.shipping_address else None,
        payment_method=body.payment_method,
        notes=body.notes,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = _load_order(order_id)

    if order.customer_email:
        background_tasks.add_task(notify_order_placed, order.customer_email, str(order.id), order.total)
    return _to_response(order)


@order_router.get("/mine", response_model=OrderListResponse)
async def my_orders(actor: ActorIdentity = Depends(authenticated_actor)) -> OrderListResponse:
    return _to_list_response(current_domain.repository_for(Order).owned_by(actor.customer_id))


@order_router.get("", response_model=OrderListResponse)
async def all_orders(actor: ActorIdentity = Depends(admin_actor)) -> OrderListResponse:
    return _to_list_response(current_domain.repository_for(Order).newest_first())


@order_router.post("/link-guest-orders", response_model=LinkResponse)
async def link_guest_orders(actor: ActorIdentity = Depends(authenticated_actor)) -> LinkResponse:
    return LinkResponse(linked=link_guest_orders_for(actor))


@order_router.get("/track/{order_id}", response_model=OrderResponse)
async def track_order(order_id: str) -> OrderResponse:
    return _to_response(_load_order(order_id))


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return _to_response(_load_order(order_id))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    body: UpdateStatusRequest,
    actor: ActorIdentity = Depends(admin_actor),
) -> OrderResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        tracking_number=body.tracking_number,
        notes=body.notes,
    )
    try:
        current_domain.process(command, asynchronous=False)
    except ObjectNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Order not found") from exc

    logger.info("Order status updated", order_id=order_id, status=body.status, admin=actor.customer_id)
    return _to_response(_load_order(order_id))


# ---------------------------------------------------------------------------
# Auth (bcrypt work runs in the threadpool, off the event loop)
# ---------------------------------------------------------------------------
def _open_session(customer_id: str) -> SessionResponse:
    linked = link_guest_orders_for(ActorIdentity.authenticated(customer_id))
    return SessionResponse(customer_id=customer_id, token=issue_token(customer_id), linked_orders=linked)


@auth_router.post("/register", status_code=201, response_model=SessionResponse)
async def register(body: RegisterRequest) -> SessionResponse:
    try:
        password_hash = await run_in_threadpool(hash_password, body.password)
    except ValueError as exc:
        raise ValidationError({"password": [str(exc)]}) from exc

    command = RegisterCustomer(
        email=body.email,
        name=body.name,
        password_hash=password_hash,
        phone=body.phone,
        address=body.address,
        city=body.city,
    )
    customer_id = current_domain.process(command, asynchronous=False)
    return _open_session(customer_id)


@auth_router.post("/login", response_model=SessionResponse)
async def login(body: LoginRequest) -> SessionResponse:
    try:
        customer = await run_in_threadpool(authenticate_customer, body.email, body.password)
    except UnauthorizedError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    return _open_session(str(customer.id))


@auth_router.post("/admin/login", response_model=TokenResponse)
async def admin_login(body: AdminLoginRequest) -> TokenResponse:
    try:
        return TokenResponse(token=authenticate_admin(body.username, body.password))
    except UnauthorizedError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc


@auth_router.get("/me", response_model=ActorResponse)
async def me(actor: ActorIdentity = Depends(authenticated_actor)) -> ActorResponse:
    return ActorResponse(customer_id=actor.customer_id, role=actor.role)
