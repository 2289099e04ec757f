"""API routes for order management."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from orderflow.application.common.pagination import MAX_PAGE_SIZE, Pagination
from orderflow.application.ordering.use_cases import (
    CancelOrderCommand,
    CancelOrderUseCase,
    GetOrderQuery,
    GetOrderUseCase,
    ListOrdersQuery,
    ListOrdersUseCase,
    OrderLineInput,
    PayOrderCommand,
    PayOrderUseCase,
    PlaceOrderCommand,
    PlaceOrderUseCase,
    ShipOrderCommand,
    ShipOrderUseCase,
)
from orderflow.core import container
from orderflow.domain.common.exceptions import DomainError
from orderflow.domain.ordering.entities import OrderStatus
from orderflow.exceptions import OrderflowError
from orderflow.infrastructure.common.di import inject_use_case
from orderflow.infrastructure.ordering.schemas import (
    OrderCancelRequest,
    OrderCreateRequest,
    OrderListResponse,
    OrderPaymentRequest,
    OrderResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])

UNEXPECTED_ERROR_DETAIL = "An unexpected error occurred. Please try again later."


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def place_order(
    request: OrderCreateRequest,
    use_case: PlaceOrderUseCase = Depends(inject_use_case(container.place_order_use_case)),
) -> OrderResponse:
    """
    Place a new order.

    Args:
        request: Customer, shipping address, currency and lines
        use_case: PlaceOrderUseCase injected via dependency container

    Returns:
        The pending order
    """
    try:
        order = use_case.execute(
            PlaceOrderCommand(
                customer_email=request.customer_email,
                shipping_address=request.shipping_address,
                currency=request.currency,
                lines=tuple(
                    OrderLineInput(
                        sku=line.sku,
                        quantity=line.quantity,
                        unit_price_cents=line.unit_price_cents,
                    )
                    for line in request.lines
                ),
            )
        )
        return OrderResponse.from_entity(order)
    except (OrderflowError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to place order: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=UNEXPECTED_ERROR_DETAIL,
        ) from e


@router.get("", response_model=OrderListResponse)
def list_orders(
    status_filter: OrderStatus | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=MAX_PAGE_SIZE),
    use_case: ListOrdersUseCase = Depends(inject_use_case(container.list_orders_use_case)),
) -> OrderListResponse:
    """List orders, oldest first, optionally filtered by status."""
    try:
        result = use_case.execute(
            ListOrdersQuery(
                status=status_filter,
                pagination=Pagination(page=page, page_size=page_size),
            )
        )
        return OrderListResponse(
            orders=[OrderResponse.from_entity(order) for order in result.items],
            total=result.total,
            page=result.page,
            page_size=result.page_size,
            total_pages=result.total_pages,
            has_next=result.has_next,
            has_previous=result.has_previous,
        )
    except (OrderflowError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to list orders: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=UNEXPECTED_ERROR_DETAIL,
        ) from e


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: int,
    use_case: GetOrderUseCase = Depends(inject_use_case(container.get_order_use_case)),
) -> OrderResponse:
    """Get a single order."""
    try:
        return OrderResponse.from_entity(use_case.execute(GetOrderQuery(order_id=order_id)))
    except (OrderflowError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to fetch order {order_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=UNEXPECTED_ERROR_DETAIL,
        ) from e


@router.post("/{order_id}/payment", response_model=OrderResponse)
def pay_order(
    order_id: int,
    request: OrderPaymentRequest,
    use_case: PayOrderUseCase = Depends(inject_use_case(container.pay_order_use_case)),
) -> OrderResponse:
    """
    Charge the customer and mark the order as paid.

    Args:
        order_id: ID of the order to pay
        request: The amount the customer confirmed
        use_case: PayOrderUseCase injected via dependency container

    Returns:
        The paid order
    """
    try:
        order = use_case.execute(
            PayOrderCommand(order_id=order_id, amount_cents=request.amount_cents)
        )
        return OrderResponse.from_entity(order)
    except (OrderflowError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to pay order {order_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=UNEXPECTED_ERROR_DETAIL,
        ) from e


@router.post("/{order_id}/shipment", response_model=OrderResponse)
def ship_order(
    order_id: int,
    use_case: ShipOrderUseCase = Depends(inject_use_case(container.ship_order_use_case)),
) -> OrderResponse:
    """Book a shipment for a paid order."""
    try:
        order = use_case.execute(ShipOrderCommand(order_id=order_id))
        return OrderResponse.from_entity(order)
    except (OrderflowError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to ship order {order_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=UNEXPECTED_ERROR_DETAIL,
        ) from e


@router.post("/{order_id}/cancellation", response_model=OrderResponse)
def cancel_order(
    order_id: int,
    request: OrderCancelRequest,
    use_case: CancelOrderUseCase = Depends(inject_use_case(container.cancel_order_use_case)),
) -> OrderResponse:
    """Cancel a pending or paid order, refunding it when it was paid."""
    try:
        order = use_case.execute(CancelOrderCommand(order_id=order_id, reason=request.reason))
        return OrderResponse.from_entity(order)
    except (OrderflowError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to cancel order {order_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=UNEXPECTED_ERROR_DETAIL,
        ) from e
