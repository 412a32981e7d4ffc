"""Declaration markers for mapper interfaces.

Mapper authors tag factory method parameters with these markers through
``typing.Annotated``::

    class InventoryMapper(ABC):
        @abstractmethod
        def product_dao(
            self,
            keyspace: Annotated[str, DaoKeyspace()],
            table: Annotated[Identifier, DaoTable()],
        ) -> ProductDao: ...

Only the scanner reads these markers; everything downstream works with the
resolved ``ParameterRole``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, ClassVar, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable


class ParameterRole(StrEnum):
    """Role of a factory method parameter."""

    KEYSPACE = "keyspace-override"
    TABLE = "table-override"

    @property
    def marker_name(self) -> str:
        """Name of the marker that assigns this role, as shown in diagnostics."""
        return _MARKER_NAMES[self]


class RoleMarker:
    """Base class of parameter markers."""

    __slots__ = ()

    role: ClassVar[ParameterRole]

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class DaoKeyspace(RoleMarker):
    """Marks the parameter that overrides the DAO's keyspace."""

    __slots__ = ()

    role = ParameterRole.KEYSPACE


class DaoTable(RoleMarker):
    """Marks the parameter that overrides the DAO's table."""

    __slots__ = ()

    role = ParameterRole.TABLE


_MARKER_NAMES = {
    ParameterRole.KEYSPACE: DaoKeyspace.__name__,
    ParameterRole.TABLE: DaoTable.__name__,
}


T = TypeVar("T", bound=type)


def implemented_by(implementation: type) -> Callable[[T], T]:
    """Declare the class whose ``init``/``init_async`` builds instances of a DAO.

    Examples
    --------
    Example usage::

        @implemented_by(ProductDaoImpl)
        class ProductDao(ABC): ...
    """

    def decorate(dao: T) -> T:
        dao.__dao_implementation__ = implementation  # type: ignore[attr-defined]
        return dao

    return decorate
