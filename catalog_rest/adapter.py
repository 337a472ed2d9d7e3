"""Generic REST adapter turning an ordered catalog facade into FastAPI routes.

Each resource is described by a :class:`ResourceSpec`. :func:`build_router`
creates the routes and delegates to a :class:`CollectionAdapter`, which
builds key-only references and unwraps facade results. It never loads or
fabricates records itself.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any
from typing import Callable
from typing import Dict
from typing import List
from typing import Optional
from typing import Sequence
from typing import Tuple
from typing import Type

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Path
from fastapi import Request
from fastapi import status
from pydantic import BaseModel as SchemaModel

from .controller import Controller
from .controller import handle_exceptions
from .controller import process_result
from .model import BaseModel
from .model import Ref
from .providers import Account
from .providers import StaticAccountProvider
from .schemas import INTEGER_MAX
from .schemas import INTEGER_MIN
from .security import get_current_account


logger = logging.getLogger(__name__)


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class ParentSpec:
    """Parent collection of a nested resource.

    Attributes:
        path_param (str): Path parameter carrying the parent id.
        ref_type (Type[Ref]): Key-only reference type of the parent.
    """

    path_param: str
    ref_type: Type[Ref]


@dataclass(frozen=True)
class AggregateSpec:
    """A read-only counter exposed below the collection path."""

    path: str
    method: str
    transform: Callable[[Any], Any] = _identity


@dataclass(frozen=True)
class ResourceSpec:
    """Describe one catalog collection exposed over HTTP.

    Attributes:
        name (str): Tag used in the OpenAPI document.
        prefix (str): Collection path, possibly holding parent path params.
        entity (Type[BaseModel]): Domain record handed to the facade.
        ref_type (Type[Ref]): Key-only reference type of the record.
        schema (Type[SchemaModel]): Pydantic wire schema of the record.
        facade (Callable[..., Any]): FastAPI dependency returning the facade.
        item_param (str): Path parameter of the get-by-id route.
        parent (Optional[ParentSpec]): Parent collection for nested records.
        aggregates (Tuple[AggregateSpec, ...]): Counters of the collection.
    """

    name: str
    prefix: str
    entity: Type[BaseModel]
    ref_type: Type[Ref]
    schema: Type[SchemaModel]
    facade: Callable[..., Any]
    item_param: str = "id"
    parent: Optional[ParentSpec] = None
    aggregates: Tuple[AggregateSpec, ...] = ()

    @property
    def scope_params(self) -> Tuple[str, ...]:
        """Path parameters contained in ``prefix``."""

        return tuple(
            segment[1:-1]
            for segment in self.prefix.split("/")
            if segment.startswith("{") and segment.endswith("}")
        )


def facade_dependency(facade_type: Callable[..., Any]) -> Callable[..., Any]:
    """Return a dependency building ``facade_type`` for the current request.

    The facade receives the application's session factory and clock, and an
    account provider bound to the authenticated caller.
    """

    async def provide_facade(
        request: Request,
        account: Account = Depends(get_current_account),
    ) -> Any:
        state = request.app.state
        return facade_type(
            state.session_factory,
            account_provider=StaticAccountProvider(account),
            time_provider=state.time_provider,
        )

    provide_facade.__name__ = f"provide_{getattr(facade_type, '__name__', 'facade')}"
    return provide_facade


def path_values(names: Sequence[str]) -> Callable[..., Dict[str, int]]:
    """Return a dependency collecting the integer path parameters ``names``.

    Values outside the range of a stored id are rejected with 422.
    """

    def collect(**values: int) -> Dict[str, int]:
        return values

    collect.__signature__ = inspect.Signature(  # type: ignore[attr-defined]
        [
            inspect.Parameter(
                name,
                inspect.Parameter.KEYWORD_ONLY,
                default=Path(ge=INTEGER_MIN, le=INTEGER_MAX),
                annotation=int,
            )
            for name in names
        ]
    )
    return collect


class CollectionAdapter(Controller):
    """Translate HTTP calls on one collection into facade calls."""

    def __init__(self, spec: ResourceSpec) -> None:
        super().__init__()
        self.spec = spec

    def _entity(self, body: SchemaModel) -> BaseModel:
        return self.spec.entity.from_dict(body.model_dump())

    def _ref(self, record_id: Optional[int]) -> Ref:
        return self.spec.ref_type(id=record_id)

    def _parent_ref(self, path: Dict[str, int]) -> Optional[Ref]:
        parent = self.spec.parent
        if parent is None:
            return None
        return parent.ref_type(id=path[parent.path_param])

    @handle_exceptions
    async def list_records(self, facade: Any, path: Dict[str, int]) -> List[BaseModel]:
        parent = self._parent_ref(path)
        if parent is None:
            return process_result(await facade.get_all(), required=True)
        return process_result(await facade.find(parent), required=True)

    @handle_exceptions
    async def get(self, facade: Any, record_id: int) -> Optional[BaseModel]:
        return process_result(await facade.get(record_id))

    @handle_exceptions
    async def add(self, facade: Any, body: SchemaModel, path: Dict[str, int]) -> None:
        parent = self._parent_ref(path)
        if parent is None:
            process_result(await facade.add(self._entity(body)))
        else:
            process_result(await facade.add(self._entity(body), parent))

    @handle_exceptions
    async def update(self, facade: Any, body: SchemaModel, path: Dict[str, int]) -> None:
        parent = self._parent_ref(path)
        if parent is None:
            process_result(await facade.update(self._entity(body)))
        else:
            process_result(await facade.update(self._entity(body), parent))

    @handle_exceptions
    async def remove(self, facade: Any, record_id: int) -> None:
        process_result(await facade.remove(self._ref(record_id)))

    @handle_exceptions
    async def duplicate(self, facade: Any, body: SchemaModel) -> None:
        process_result(await facade.duplicate(self._ref(body.id)))

    @handle_exceptions
    async def move_up(self, facade: Any, body: SchemaModel) -> None:
        process_result(await facade.move_up(self._ref(body.id)))

    @handle_exceptions
    async def move_down(self, facade: Any, body: SchemaModel) -> None:
        process_result(await facade.move_down(self._ref(body.id)))

    @handle_exceptions
    async def update_positions(self, facade: Any) -> None:
        process_result(await facade.update_positions())

    @handle_exceptions
    async def new_data(self, facade: Any) -> None:
        process_result(await facade.new_data())

    @handle_exceptions
    async def aggregate(self, facade: Any, aggregate: AggregateSpec) -> Any:
        value = process_result(await getattr(facade, aggregate.method)(), required=True)
        return aggregate.transform(value)


def _add_aggregate_route(
    router: APIRouter,
    adapter: CollectionAdapter,
    aggregate: AggregateSpec,
) -> None:
    spec = adapter.spec

    async def read_aggregate(facade: Any = Depends(spec.facade)) -> Any:
        return await adapter.aggregate(facade, aggregate)

    router.add_api_route(
        aggregate.path,
        read_aggregate,
        methods=["GET"],
        response_model=int,
        name=f"{spec.name}_{aggregate.method}",
    )


def build_router(spec: ResourceSpec) -> APIRouter:
    """Create the FastAPI router serving the collection described by ``spec``.

    Args:
        spec (ResourceSpec): Resource description.

    Returns:
        APIRouter: Router with list, get, add, update, remove, duplicate and
        move routes, the top-level maintenance routes and the aggregates.
    """

    adapter = CollectionAdapter(spec)
    schema = spec.schema
    router = APIRouter(
        prefix=spec.prefix,
        tags=[spec.name],
        dependencies=[Depends(get_current_account)],
    )
    scope = path_values(spec.scope_params)
    item = path_values(spec.scope_params + (spec.item_param,))
    removal = path_values(spec.scope_params + ("id",))

    @router.get("", response_model=List[schema], name=f"{spec.name}_list")
    async def list_records(
        path: Dict[str, int] = Depends(scope),
        facade: Any = Depends(spec.facade),
    ) -> Any:
        return await adapter.list_records(facade, path)

    if spec.parent is None:

        @router.post(
            "/new",
            status_code=status.HTTP_204_NO_CONTENT,
            name=f"{spec.name}_new_data",
        )
        async def new_data(facade: Any = Depends(spec.facade)) -> None:
            await adapter.new_data(facade)

        @router.post(
            "/updatePositions",
            status_code=status.HTTP_204_NO_CONTENT,
            name=f"{spec.name}_update_positions",
        )
        async def update_positions(facade: Any = Depends(spec.facade)) -> None:
            await adapter.update_positions(facade)

    # fixed paths must precede the item route
    for aggregate in spec.aggregates:
        _add_aggregate_route(router, adapter, aggregate)

    @router.get(
        f"/{{{spec.item_param}}}",
        response_model=Optional[schema],
        name=f"{spec.name}_get",
    )
    async def get_record(
        path: Dict[str, int] = Depends(item),
        facade: Any = Depends(spec.facade),
    ) -> Any:
        return await adapter.get(facade, path[spec.item_param])

    @router.put("/add", status_code=status.HTTP_201_CREATED, name=f"{spec.name}_add")
    async def add_record(
        body: schema,
        path: Dict[str, int] = Depends(scope),
        facade: Any = Depends(spec.facade),
    ) -> None:
        await adapter.add(facade, body, path)

    @router.post(
        "/update", status_code=status.HTTP_204_NO_CONTENT, name=f"{spec.name}_update"
    )
    async def update_record(
        body: schema,
        path: Dict[str, int] = Depends(scope),
        facade: Any = Depends(spec.facade),
    ) -> None:
        await adapter.update(facade, body, path)

    @router.delete(
        "/remove/{id}",
        status_code=status.HTTP_204_NO_CONTENT,
        name=f"{spec.name}_remove",
    )
    async def remove_record(
        path: Dict[str, int] = Depends(removal),
        facade: Any = Depends(spec.facade),
    ) -> None:
        await adapter.remove(facade, path["id"])

    @router.post(
        "/duplicate", status_code=status.HTTP_201_CREATED, name=f"{spec.name}_duplicate"
    )
    async def duplicate_record(
        body: schema,
        path: Dict[str, int] = Depends(scope),
        facade: Any = Depends(spec.facade),
    ) -> None:
        await adapter.duplicate(facade, body)

    @router.post(
        "/moveUp", status_code=status.HTTP_204_NO_CONTENT, name=f"{spec.name}_move_up"
    )
    async def move_up(
        body: schema,
        path: Dict[str, int] = Depends(scope),
        facade: Any = Depends(spec.facade),
    ) -> None:
        await adapter.move_up(facade, body)

    @router.post(
        "/moveDown",
        status_code=status.HTTP_204_NO_CONTENT,
        name=f"{spec.name}_move_down",
    )
    async def move_down(
        body: schema,
        path: Dict[str, int] = Depends(scope),
        facade: Any = Depends(spec.facade),
    ) -> None:
        await adapter.move_down(facade, body)

    return router


__all__ = [
    "AggregateSpec",
    "CollectionAdapter",
    "ParentSpec",
    "ResourceSpec",
    "build_router",
    "facade_dependency",
    "path_values",
]
