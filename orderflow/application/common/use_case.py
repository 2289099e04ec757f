"""
Command, Query and UseCase base classes.

Every use case serves exactly one intent and takes exactly one input value
object. Commands express an intention to change state and are named in the
imperative (PayOrder); queries only read (GetOrder).

Example:
    @dataclass(frozen=True)
    class ShipOrderCommand(Command):
        order_id: int

    class ShipOrderUseCase(UseCase[ShipOrderCommand, Order]):
        def __init__(self, order_repository: OrderRepositoryProtocol) -> None:
            self.order_repository = order_repository

        def execute(self, command: ShipOrderCommand) -> Order:
            order = self.order_repository.get(OrderId(command.order_id))
            order.ship(...)
            return self.order_repository.save(order)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

# Input type (a command or a query)
TInput = TypeVar("TInput")
# Output type (usually the mutated entity)
TResult = TypeVar("TResult")


@dataclass(frozen=True)
class Command:
    """
    Base class for Commands.

    Commands are:
    - Immutable (frozen dataclass)
    - Named in imperative form (PlaceOrder, not OrderPlacement)
    - Carry all data the use case needs
    """


@dataclass(frozen=True)
class Query:
    """
    Base class for Queries.

    Queries carry lookup and paging parameters and never cause state changes.
    """


class UseCase(ABC, Generic[TInput, TResult]):
    """
    Base class for use cases.

    A use case:
    - Loads entities through repositories and fails fast if they are missing
    - Checks preconditions before mutating anything
    - Invokes entity behavior, then services, then persists
    - Never calls another use case; shared steps are repeated instead
    """

    @abstractmethod
    def execute(self, input: TInput) -> TResult:  # noqa: A002
        """
        Run the use case.

        Raises:
            DomainError: When business rules are violated
            OrderflowError: When input is invalid or a service fails
        """
        raise NotImplementedError
