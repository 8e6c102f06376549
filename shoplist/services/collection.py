"""
Shoplist Backend: In-Memory Collection
=======================================

What:  Generic ordered, in-memory store implementing the list/create/update/delete
       contract shared by every resource type.
How:   Subclasses bind three Pydantic models: the stored entity, the create input
       and the update input. Entities are kept in a plain list so listing order is
       insertion order; lookups are linear scans.
Who:   ShoppingListService and RecipeService; instantiated once per app by
       create_app() and handed to route handlers through dependencies.

Contract:
    list_all()          → snapshot of all entities, insertion order
    create(fields)      → new entity with a fresh ID, appended at the end
    update(id, fields)  → applies only the supplied fields, in place
    delete(id)          → removes the entity; other entities keep their order

    update/delete on an unknown ID raise NotFoundError. Delete is not
    idempotent: a second delete of the same ID is a 404.

Thread Safety:
    Every operation holds the collection's RLock, so mutations are serialized
    against each other and against list_all() even when handlers run in a
    thread pool.
"""

import logging
import threading
import uuid
from typing import Any, Callable, ClassVar, Generic, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from shoplist.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=BaseModel)
CreateT = TypeVar("CreateT", bound=BaseModel)
UpdateT = TypeVar("UpdateT", bound=BaseModel)


def generate_id() -> str:
    """Default ID factory: a random UUID4 string."""
    return str(uuid.uuid4())


class InMemoryCollection(Generic[EntityT, CreateT, UpdateT]):
    """
    Ordered in-memory collection of one entity type.

    Subclasses must set:
        resource:      Human-readable resource name used in errors and logs
        entity_model:  Stored entity model (must have an `id: str` field)
        create_model:  Input model for create()
        update_model:  Input model for update() (all fields optional, optional `id`)
    """

    resource: ClassVar[str] = "entity"
    entity_model: ClassVar[Type[BaseModel]]
    create_model: ClassVar[Type[BaseModel]]
    update_model: ClassVar[Type[BaseModel]]

    def __init__(self, id_factory: Optional[Callable[[], str]] = None):
        self._entities: List[EntityT] = []
        self._id_factory = id_factory or generate_id
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entities)

    # ── Operations ────────────────────────────────────────────────────────

    def list_all(self) -> List[EntityT]:
        """Return every entity in insertion order (a copy of the backing list)."""
        with self._lock:
            return list(self._entities)

    def create(self, fields: Union[CreateT, Mapping[str, Any]]) -> EntityT:
        """
        Validate `fields`, assign a fresh ID and append the new entity.

        Args:
            fields: A `create_model` instance or a raw mapping (e.g. parsed JSON)

        Returns:
            The stored entity, including its assigned `id`

        Raises:
            ValidationError: A required field is missing or has the wrong shape
        """
        payload = self._coerce(self.create_model, fields)

        with self._lock:
            entity = self.entity_model(id=self._next_id(), **payload.model_dump())
            self._entities.append(entity)

        logger.info("Created %s %s", self.resource, entity.id)
        return entity

    def update(self, entity_id: str, fields: Union[UpdateT, Mapping[str, Any]]) -> None:
        """
        Overwrite only the supplied fields of the entity with `entity_id`.

        Raises:
            ValidationError: Body `id` is present and differs from `entity_id`,
                             or a supplied field has the wrong shape
            NotFoundError:   No entity has `entity_id`
        """
        payload = self._coerce(self.update_model, fields)

        body_id = getattr(payload, "id", None)
        if body_id is not None and body_id != entity_id:
            raise ValidationError(
                message=(
                    f"Request path id ({entity_id}) and request body id "
                    f"({body_id}) must match"
                ),
                field="id",
                context={"path_id": entity_id, "body_id": body_id},
            )

        changes = payload.model_dump(exclude_unset=True, exclude={"id"})

        with self._lock:
            entity = self._entities[self._index_of(entity_id)]
            for name, value in changes.items():
                setattr(entity, name, value)

        logger.info(
            "Updated %s %s (fields: %s)",
            self.resource,
            entity_id,
            ", ".join(sorted(changes)) or "none",
        )

    def delete(self, entity_id: str) -> None:
        """
        Remove the entity with `entity_id`.

        Raises:
            NotFoundError: No entity has `entity_id`
        """
        with self._lock:
            del self._entities[self._index_of(entity_id)]

        logger.info("Deleted %s %s", self.resource, entity_id)

    # ── Helpers ───────────────────────────────────────────────────────────

    def _index_of(self, entity_id: str) -> int:
        for index, entity in enumerate(self._entities):
            if entity.id == entity_id:
                return index
        raise NotFoundError(resource=self.resource, resource_id=entity_id)

    def _next_id(self) -> str:
        existing = {entity.id for entity in self._entities}
        candidate = self._id_factory()
        while candidate in existing:
            logger.debug("ID collision on %s, drawing a new one", candidate)
            candidate = self._id_factory()
        return candidate

    @staticmethod
    def _coerce(model: Type[BaseModel], fields: Any) -> Any:
        if isinstance(fields, model):
            return fields
        if not isinstance(fields, Mapping):
            raise ValidationError(message="Request body must be a JSON object")
        try:
            return model.model_validate(dict(fields))
        except PydanticValidationError as e:
            raise ValidationError.from_errors(e.errors()) from e
