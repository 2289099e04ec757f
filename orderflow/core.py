from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from orderflow.application.ordering.use_cases.cancel_order_use_case import CancelOrderUseCase
from orderflow.application.ordering.use_cases.get_order_use_case import GetOrderUseCase
from orderflow.application.ordering.use_cases.list_orders_use_case import ListOrdersUseCase
from orderflow.application.ordering.use_cases.pay_order_use_case import PayOrderUseCase
from orderflow.application.ordering.use_cases.place_order_use_case import PlaceOrderUseCase
from orderflow.application.ordering.use_cases.ship_order_use_case import ShipOrderUseCase
from orderflow.config import get_settings
from orderflow.infrastructure.ordering.repositories import OrderRepository
from orderflow.infrastructure.ordering.services import (
    LoggingNotifier,
    SandboxShippingCarrier,
    create_payment_gateway,
)


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    settings = providers.Singleton(get_settings)

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    # Repositories
    order_repository = providers.Factory(OrderRepository, db=db)

    # Services (stateless, shared across requests)
    payment_gateway = providers.Singleton(create_payment_gateway, settings=settings)
    shipping_carrier = providers.Singleton(SandboxShippingCarrier)
    notifier = providers.Singleton(LoggingNotifier)

    # Ordering use cases
    place_order_use_case = providers.Factory(
        PlaceOrderUseCase,
        order_repository=order_repository,
    )
    pay_order_use_case = providers.Factory(
        PayOrderUseCase,
        order_repository=order_repository,
        payment_gateway=payment_gateway,
        notifier=notifier,
    )
    ship_order_use_case = providers.Factory(
        ShipOrderUseCase,
        order_repository=order_repository,
        shipping_carrier=shipping_carrier,
        notifier=notifier,
    )
    cancel_order_use_case = providers.Factory(
        CancelOrderUseCase,
        order_repository=order_repository,
        payment_gateway=payment_gateway,
        notifier=notifier,
    )
    get_order_use_case = providers.Factory(
        GetOrderUseCase,
        order_repository=order_repository,
    )
    list_orders_use_case = providers.Factory(
        ListOrdersUseCase,
        order_repository=order_repository,
    )


container = Container()
