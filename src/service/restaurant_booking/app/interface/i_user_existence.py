from abc import ABC, abstractmethod


class IUserExistence(ABC):
    @abstractmethod
    async def exists(self, *, user_id: str) -> bool:
        pass
