from abc import ABC, abstractmethod
from typing import Generic, Protocol, TypeVar

T = TypeVar('T')
ID = TypeVar('ID')


class UpdateStruct(Protocol):
    def to_columns(self) -> dict: ...


class Repository(ABC, Generic[T, ID]):
    @abstractmethod
    async def get(self, id: ID) -> T | None: ...

    @abstractmethod
    async def create(self, entity: T) -> T: ...

    @abstractmethod
    async def update(self, id: ID, updates: UpdateStruct) -> T | None: ...

    @abstractmethod
    async def delete(self, id: ID) -> bool: ...
