from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping


class BaseStore(ABC):
    """Contract of a permission-guarded, path-addressable store.

    Any instance of this class is a permission boundary: the engine hands
    the rest of a path to its own ``read``/``write`` instead of walking it.
    """

    @abstractmethod
    def allowed_to_read(self, field: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def allowed_to_write(self, field: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def read(self, path: str) -> Any:
        raise NotImplementedError

    @abstractmethod
    def write(self, path: str, value: Any) -> Any:
        raise NotImplementedError

    def write_entries(self, entries: Mapping[str, Any]) -> None:
        """Write every entry in iteration order, stopping at the first failure."""
        for path, value in entries.items():
            self.write(path, value)

    @abstractmethod
    def entries(self) -> Dict[str, Any]:
        raise NotImplementedError


__all__ = ["BaseStore"]
