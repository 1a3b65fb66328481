"""
Collaborator interfaces used by ActivityLogger.

The default implementations live in ``resolvers`` and ``sinks``; anything
with the same methods can be passed to ActivityLogger instead.
"""

from typing import Any, Optional, Protocol

from django.db.models import Model


class ActorResolver(Protocol):
    def default_driver(self) -> Optional[str]:
        ...

    def current_actor(self, driver: Optional[str]) -> Optional[Model]:
        ...

    def resolve_by_id(self, driver: Optional[str], identifier: Any) -> Optional[Model]:
        ...


class PersistenceSink(Protocol):
    def create_record(self) -> Model:
        ...

    def save(self, record: Model) -> None:
        ...

    def associate(self, record: Model, entity: Model) -> None:
        ...


class GeoLookup(Protocol):
    def client_ip_address(self) -> Optional[str]:
        ...
