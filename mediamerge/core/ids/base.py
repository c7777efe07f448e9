"""Base identifier namespace strategy."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar


class IdNamespaceStrategy(ABC):
    """Validates and normalizes identifiers of one external namespace."""

    namespace: ClassVar[str]

    @abstractmethod
    def parse(self, value: Any) -> str | int | None:
        """Normalizes a raw identifier value.

        Args:
            value (Any): The raw value, as stored by a provider or caller.

        Returns:
            str | int | None: The normalized identifier, or None if the value
                is not a valid identifier of this namespace.
        """

    def is_valid(self, value: Any) -> bool:
        return self.parse(value) is not None


class NumericIdStrategy(IdNamespaceStrategy):
    """Namespaces whose identifiers are positive integers."""

    def parse(self, value: Any) -> int | None:
        if value is None or isinstance(value, bool):
            return None
        try:
            parsed = int(str(value).strip())
        except ValueError:
            return None
        return parsed if parsed > 0 else None
