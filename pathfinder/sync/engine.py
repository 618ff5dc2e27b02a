"""Synchronization controller engine.

One generic engine runs the load -> mutate -> optimistic local edit ->
remote confirmation -> refresh cycle for every entity. Entities differ only in
their ``EntitySpec``: which operation loads them, where the payload sits in
the response, how it is projected, and which mutation policy applies.

State machine (per controller)::

    Loading --fetch ok--> Success(value)
       |                     |
       +--fetch failed--> Error(message)

    Initial state is Loading. There is no terminal state.

Mutation policies:
    PERSIST_THEN_REFETCH: run the mutation, then re-run fetch() to pick up
        canonical server state. The collection is replaced wholesale, so rows
        with client-temporary ids disappear in favor of server rows.
    LOCAL_ONLY: edits change the in-memory collection only. mutate_remote()
        is a programming error and raises PolicyViolationError.

Ordering of overlapping operations:
    LAST_ISSUED_WINS: every state-writing operation takes a ticket from a
        monotonic counter; results carrying an older ticket are dropped.
    LAST_RESOLVED_WINS: whichever result lands last overwrites the state.

Note: Safe on a single asyncio event loop without locks. The only suspension
point is the gateway round trip.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import structlog

from pathfinder.core.config import settings
from pathfinder.core.errors import (
    NotFoundError,
    NotLoggedInError,
    PolicyViolationError,
    ProjectionError,
    SyncError,
)
from pathfinder.projections.records import new_temporary_id
from pathfinder.sync.result import Error, Loading, RemoteResult, Success, UiState
from pathfinder.sync.state import ObservableState

if TYPE_CHECKING:
    from pathfinder.gateway.base import GraphQLOperation, RemoteGateway
    from pathfinder.session.credential_store import CredentialStore, UserIdentity

__all__ = [
    "MutationPolicy",
    "Ordering",
    "EntitySpec",
    "SyncController",
    "CollectionController",
    "LocalCollection",
    "FormSubmitter",
]

logger = structlog.get_logger()

T = TypeVar("T")
E = TypeVar("E")

NOT_LOGGED_IN = NotLoggedInError().message


class MutationPolicy(Enum):
    """How a controller applies edits."""

    PERSIST_THEN_REFETCH = "persist_then_refetch"
    LOCAL_ONLY = "local_only"


class Ordering(Enum):
    """Which result wins when operations overlap."""

    LAST_ISSUED_WINS = "last_issued_wins"
    LAST_RESOLVED_WINS = "last_resolved_wins"


@dataclass(frozen=True)
class EntitySpec(Generic[T]):
    """Per-entity configuration for the engine.

    Attributes:
        name: Entity label used in logs and messages (e.g., "user_skills").
        build_fetch: Builds the load operation from the identity (None when
            the entity is not user-scoped) and any fetch() arguments.
        select: Picks the expected payload out of ``data``. Returning None
            means the entity is absent (domain not-found).
        project: Maps the selected payload to the exposed value.
        not_found_message: Error text when ``select`` returns None.
        not_logged_in_message: Error text when an identity is required but
            missing.
        requires_identity: Whether fetch/mutate need a logged-in user.
        mutation_policy: PERSIST_THEN_REFETCH or LOCAL_ONLY.
        show_loading_on_mutation: Publish Loading while a mutation runs.
        ordering: Overlap policy. None uses ``settings.sync_ordering``.
        guard_in_flight: Reject a mutation while another is in flight.
            None uses ``settings.sync_guard_in_flight``.
    """

    name: str
    build_fetch: Callable[..., "GraphQLOperation"]
    select: Callable[[dict[str, Any]], Any]
    project: Callable[[Any], T]
    not_found_message: str
    not_logged_in_message: str = NOT_LOGGED_IN
    requires_identity: bool = True
    mutation_policy: MutationPolicy = MutationPolicy.PERSIST_THEN_REFETCH
    show_loading_on_mutation: bool = False
    ordering: Ordering | None = None
    guard_in_flight: bool | None = None


class SyncController(Generic[T]):
    """Generic load/mutate/refresh controller for one entity.

    Attributes:
        spec: Entity configuration.
        state: Observable ``RemoteResult`` the presentation layer renders.
        ordering: Effective overlap policy.
        guard_in_flight: Effective duplicate-submission policy.
    """

    def __init__(
        self,
        spec: EntitySpec[T],
        gateway: "RemoteGateway",
        credentials: "CredentialStore | None" = None,
    ) -> None:
        """Initialize the controller.

        Args:
            spec: Entity configuration.
            gateway: Gateway used for every remote call.
            credentials: Identity source. Required when
                ``spec.requires_identity`` is True.
        """
        self.spec = spec
        self.gateway = gateway
        self.credentials = credentials
        self.ordering = spec.ordering or Ordering(settings.sync_ordering)
        self.guard_in_flight = (
            spec.guard_in_flight
            if spec.guard_in_flight is not None
            else settings.sync_guard_in_flight
        )
        self.state: ObservableState[RemoteResult[T]] = ObservableState(
            Loading(), name=spec.name
        )
        self._issued = 0
        self._mutations_in_flight = 0
        self._last_fetch_args: tuple[Any, ...] = ()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _issue_ticket(self) -> int:
        self._issued += 1
        return self._issued

    def _publish(self, ticket: int, value: RemoteResult[T]) -> bool:
        """Write ``value`` unless a newer operation has been issued.

        Returns:
            True if the state was written.
        """
        if self.ordering is Ordering.LAST_ISSUED_WINS and ticket != self._issued:
            logger.info(
                "stale_result_discarded",
                entity=self.spec.name,
                ticket=ticket,
                latest=self._issued,
                result=value.tag.value,
            )
            return False
        self.state.set(value)
        return True

    def _fold(self, error: SyncError) -> Error:
        """Turn a precondition or not-found failure into an Error result."""
        logger.info(
            "sync_precondition_failed",
            entity=self.spec.name,
            code=error.code,
            error=error.message,
        )
        return Error(error.message)

    def _resolve_identity(self) -> "UserIdentity | None":
        if self.credentials is None:
            return None
        return self.credentials.get_identity()

    @property
    def value(self) -> T | None:
        """The current Success value, or None in Loading/Error."""
        current = self.state.value
        match current:
            case Success(value=value):
                return value
            case _:
                return None

    @property
    def mutation_in_flight(self) -> bool:
        return self._mutations_in_flight > 0

    # -------------------------------------------------------------------------
    # Load
    # -------------------------------------------------------------------------

    async def _load(self, operation: "GraphQLOperation") -> RemoteResult[T]:
        result = await self.gateway.execute(operation)
        match result:
            case Success(value=data):
                payload = self.spec.select(data)
            case _:
                return result

        if payload is None:
            return self._fold(NotFoundError(self.spec.not_found_message))

        try:
            return Success(self.spec.project(payload))
        except ProjectionError as e:
            logger.warning("projection_failed", entity=self.spec.name, error=e.message)
            return Error(e.message)

    async def fetch(self, *args: Any) -> RemoteResult[T]:
        """Load the entity and publish the result.

        When an identity is required and missing, publishes
        ``Error(not_logged_in_message)`` before the first suspension point and
        never touches the gateway.

        Args:
            *args: Extra arguments for ``spec.build_fetch`` (e.g., a skill
                name). Remembered for ``refetch()``.

        Returns:
            The result of this fetch (which may not be the published one if
            a newer operation superseded it).
        """
        self._last_fetch_args = args
        ticket = self._issue_ticket()

        identity = self._resolve_identity()
        if self.spec.requires_identity and identity is None:
            result: RemoteResult[T] = self._fold(
                NotLoggedInError(self.spec.not_logged_in_message)
            )
            self._publish(ticket, result)
            return result

        self._publish(ticket, Loading())
        result = await self._load(self.spec.build_fetch(identity, *args))
        self._publish(ticket, result)
        return result

    async def refetch(self) -> RemoteResult[T]:
        """Repeat the last fetch with the same arguments."""
        return await self.fetch(*self._last_fetch_args)

    # -------------------------------------------------------------------------
    # Remote mutation (Policy A)
    # -------------------------------------------------------------------------

    async def mutate_remote(
        self,
        build_operation: Callable[["UserIdentity | None"], "GraphQLOperation"],
        *,
        not_logged_in_message: str | None = None,
    ) -> RemoteResult[dict]:
        """Persist one add/update/remove, then refetch on success.

        Args:
            build_operation: Builds the mutation from the current identity.
            not_logged_in_message: Overrides the entity's message for the
                missing-identity case.

        Returns:
            The mutation's own result (``Success(data)`` or ``Error``).

        Raises:
            PolicyViolationError: If the entity is LOCAL_ONLY.
        """
        if self.spec.mutation_policy is MutationPolicy.LOCAL_ONLY:
            raise PolicyViolationError(
                f"{self.spec.name} is local-only; remote mutations are not allowed"
            )

        if self.guard_in_flight and self.mutation_in_flight:
            logger.info("mutation_rejected_in_flight", entity=self.spec.name)
            return Error(f"{self.spec.name} update already in progress")

        ticket = self._issue_ticket()
        identity = self._resolve_identity()
        if self.spec.requires_identity and identity is None:
            error = self._fold(
                NotLoggedInError(not_logged_in_message or self.spec.not_logged_in_message)
            )
            self._publish(ticket, error)
            return error

        operation = build_operation(identity)
        # Held until the confirming refetch has finished
        self._mutations_in_flight += 1
        try:
            if self.spec.show_loading_on_mutation:
                self._publish(ticket, Loading())
            result = await self.gateway.execute(operation)

            match result:
                case Error(message=message):
                    logger.warning(
                        "mutation_failed",
                        entity=self.spec.name,
                        operation=operation.name,
                        error=message,
                    )
                    self._publish(ticket, result)
                case _:
                    logger.info(
                        "mutation_confirmed",
                        entity=self.spec.name,
                        operation=operation.name,
                    )
                    await self.refetch()
        finally:
            self._mutations_in_flight -= 1

        return result

    # -------------------------------------------------------------------------
    # Local edits
    # -------------------------------------------------------------------------

    def update_local(self, transform: Callable[[T], T]) -> bool:
        """Apply ``transform`` to the Success value without a remote call.

        Takes a ticket, so an in-flight fetch issued earlier will not
        overwrite the edit under LAST_ISSUED_WINS.

        Returns:
            False (and no change) when the state is not Success.
        """
        current = self.value
        if current is None:
            return False
        self._publish(self._issue_ticket(), Success(transform(current)))
        return True


class CollectionController(SyncController[tuple[E, ...]]):
    """SyncController whose value is an ordered tuple of records.

    Adds index/identity based local edits. Under PERSIST_THEN_REFETCH these
    are optimistic: the next successful refetch replaces the collection.

    Index edits are only meaningful against the snapshot the caller saw; an
    index outside the current collection is ignored.
    """

    def __init__(
        self,
        spec: EntitySpec[tuple[E, ...]],
        gateway: "RemoteGateway",
        credentials: "CredentialStore | None" = None,
        *,
        identity_of: Callable[[E], str],
        placeholder: Callable[[str], E] | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            spec: Entity configuration.
            gateway: Gateway used for every remote call.
            credentials: Identity source.
            identity_of: Returns a record's identity.
            placeholder: Builds a blank record for a client-temporary id.
        """
        super().__init__(spec, gateway, credentials)
        self._identity_of = identity_of
        self._placeholder = placeholder

    @property
    def items(self) -> tuple[E, ...]:
        """Current records, or an empty tuple outside Success."""
        return self.value or ()

    def update_at(self, index: int, item: E) -> bool:
        if not 0 <= index < len(self.items):
            return False
        return self.update_local(lambda items: (*items[:index], item, *items[index + 1 :]))

    def append(self, item: E) -> bool:
        return self.update_local(lambda items: (*items, item))

    def add_placeholder(self) -> E | None:
        """Append a blank row with a fresh client-temporary id.

        Returns:
            The new row, or None when the state is not Success.

        Raises:
            PolicyViolationError: If no placeholder factory was configured.
        """
        if self._placeholder is None:
            raise PolicyViolationError(f"{self.spec.name} has no placeholder rows")
        row = self._placeholder(new_temporary_id())
        return row if self.append(row) else None

    def remove_where(self, identity: str) -> int:
        """Remove every row whose identity matches.

        Returns:
            Number of rows removed.
        """
        before = len(self.items)
        self.update_local(
            lambda items: tuple(i for i in items if self._identity_of(i) != identity)
        )
        return before - len(self.items)


class LocalCollection(Generic[E]):
    """Local-only collection (Policy B) exposed as its own observable list.

    Used by aggregate controllers whose rows are edited freely and only
    persisted by an explicit submit.
    """

    def __init__(
        self,
        name: str,
        *,
        identity_of: Callable[[E], str],
        placeholder: Callable[[str], E],
    ) -> None:
        self.state: ObservableState[tuple[E, ...]] = ObservableState((), name=name)
        self._identity_of = identity_of
        self._placeholder = placeholder

    @property
    def items(self) -> tuple[E, ...]:
        return self.state.value

    def replace_all(self, items: tuple[E, ...]) -> None:
        self.state.set(tuple(items))

    def update_at(self, index: int, item: E) -> bool:
        items = self.items
        if not 0 <= index < len(items):
            return False
        self.state.set((*items[:index], item, *items[index + 1 :]))
        return True

    def add_placeholder(self) -> E:
        row = self._placeholder(new_temporary_id())
        self.state.set((*self.items, row))
        return row

    def remove_where(self, identity: str) -> int:
        before = len(self.items)
        self.state.set(tuple(i for i in self.items if self._identity_of(i) != identity))
        return before - len(self.items)

    def update_where(self, identity: str, **changes: Any) -> bool:
        """Replace fields on the row with ``identity`` (records are frozen)."""
        for index, item in enumerate(self.items):
            if self._identity_of(item) == identity:
                return self.update_at(index, replace(item, **changes))
        return False


class FormSubmitter:
    """Runs one-shot form mutations against a ``UiState`` slot.

    Idle/Loading/Success(message)/Error transitions for screens that save a
    form and show a confirmation instead of reloading a collection.
    """

    def __init__(
        self,
        name: str,
        gateway: "RemoteGateway",
        credentials: "CredentialStore",
        state: ObservableState[UiState],
    ) -> None:
        self.name = name
        self.gateway = gateway
        self.credentials = credentials
        self.state = state

    async def submit(
        self,
        build_operation: Callable[["UserIdentity"], "GraphQLOperation"],
        *,
        success_message: str,
        not_logged_in_message: str,
    ) -> UiState:
        """Run the mutation and publish the outcome.

        Args:
            build_operation: Builds the mutation from the current identity.
            success_message: Text for ``Success`` on completion.
            not_logged_in_message: Text for ``Error`` when no identity exists;
                the gateway is not called in that case.

        Returns:
            The published state.
        """
        identity = self.credentials.get_identity()
        if identity is None:
            outcome: UiState = Error(not_logged_in_message)
            self.state.set(outcome)
            return outcome

        self.state.set(Loading())
        result = await self.gateway.execute(build_operation(identity))
        match result:
            case Error():
                logger.warning("form_submit_failed", form=self.name, error=result.message)
                outcome = result
            case _:
                logger.info("form_submitted", form=self.name)
                outcome = Success(success_message)
        self.state.set(outcome)
        return outcome
