"""Declared factory method signatures, as read from mapper interfaces.

These models are the only input of the method generator. They are built once
by the scanner and never mutated.
"""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field

from daogen.kernel.identifier import Identifier
from daogen.kernel.markers import ParameterRole


class TypeRef(BaseModel):
    """Importable reference to a Python type.

    Non-class annotations (unions, ``Any``...) keep their textual form and
    have ``is_class`` set to False; they cannot be imported by name.
    """

    model_config = ConfigDict(frozen=True)

    module: str
    qualname: str
    is_class: bool = True

    @classmethod
    def of(cls, annotation: Any) -> Self:
        """Build a reference from a runtime annotation."""
        if isinstance(annotation, type):
            return cls(module=annotation.__module__, qualname=annotation.__qualname__)
        text = repr(annotation).removeprefix("typing.")
        return cls(module="typing", qualname=text, is_class=False)

    @property
    def is_builtin(self) -> bool:
        return self.module == "builtins"

    @property
    def import_name(self) -> str:
        """Top-level name to import so that ``qualname`` resolves."""
        return self.qualname.split(".", 1)[0]

    def __str__(self) -> str:
        return self.qualname


TEXT_TYPE = TypeRef.of(str)
IDENTIFIER_TYPE = TypeRef.of(Identifier)

# Default values that can be written back as a literal
LiteralDefault = str | int | float | bool | None
LITERAL_DEFAULT_TYPES = (str, int, float, bool, type(None))


class Parameter(BaseModel):
    """One declared parameter of a factory method.

    Defaults are limited to literals, which the generated override repeats.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Parameter name, as referenced by the emitted body")
    annotation: TypeRef = Field(description="Declared type, without Annotated metadata")
    role: ParameterRole | None = Field(default=None, description="Role assigned by a marker")
    has_default: bool = Field(default=False, description="Whether the declaration has a default")
    default: LiteralDefault = Field(default=None, description="Declared default value")


class MethodSignature(BaseModel):
    """A factory method declared on a mapper interface.

    ``return_type`` is the DAO type. Async methods are declared as returning
    ``Awaitable[Dao]``; for those ``is_async`` is set and ``return_type``
    still names the DAO.
    """

    model_config = ConfigDict(frozen=True)

    mapper_name: str
    name: str
    parameters: tuple[Parameter, ...] = ()
    return_type: TypeRef
    is_async: bool = False

    def location(self, parameter: Parameter | None = None) -> str:
        """Human-readable source location for diagnostics."""
        base = f"{self.mapper_name}.{self.name}"
        if parameter is None:
            return base
        return f"{base}({parameter.name})"
