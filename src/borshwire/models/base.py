"""Base message classes and borshwire-specific Pydantic configuration.

This module provides BaseMessage, the base class of all struct types, and BaseEnum,
the base class of tagged unions.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, model_validator


class BaseMessage(BaseModel):
    """Base class for all borshwire struct types.

    Fields are encoded in declaration order. Declare them with the wire type
    aliases from ``borshwire.models.fields`` or with ``bool``, ``str``, ``bytes``,
    ``list[...]``, ``Optional[...]`` and other message classes.

    borshwire-specific options can be configured as ClassVar attributes:

    Example:
        ```python
        from typing import ClassVar, Optional

        from borshwire import U32, BaseMessage

        class NestedStruct(BaseMessage):
            count: U32
            note: str

            borsh_max_bytes: ClassVar[Optional[int]] = 64
        ```

    Attributes:
        borsh_name: Type identifier in the schema registry (defaults to the class name)
        borsh_max_bytes: Maximum encoded size in bytes (optional, for validation)
    """

    model_config = ConfigDict(
        strict=False,
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra="forbid",
    )

    borsh_name: ClassVar[str | None] = None
    borsh_max_bytes: ClassVar[int | None] = None

    @classmethod
    def type_name(cls) -> str:
        """Return the registry identifier of this class.

        ``borsh_name`` is only honoured when set on the class itself, so a
        subclass never inherits its parent's identifier.
        """
        return cls.__dict__.get("borsh_name") or cls.__name__


class BaseEnum(BaseMessage):
    """Base class for tagged unions.

    A direct subclass of BaseEnum is an enum root; its direct subclasses are the
    variants, and their definition order is the wire order (the first variant
    has discriminant 0). A value is an instance of exactly one variant, so only
    one variant can ever be populated. Reordering variants changes the wire
    format.

    Example:
        ```python
        from borshwire import U64, BaseEnum

        class DataEnum(BaseEnum):
            pass

        class Amount(DataEnum):
            value: U64

        class Name(DataEnum):
            label: str

        [variant.type_name() for variant in DataEnum.borsh_variants]
        # ['Amount', 'Name']
        ```
    """

    borsh_variants: ClassVar[tuple[type[BaseEnum], ...]] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Record each variant on its enum root in definition order."""
        super().__init_subclass__(**kwargs)

        if BaseEnum in cls.__bases__:
            cls.borsh_variants = ()
            return

        root = cls.enum_root()
        if root not in cls.__bases__:
            raise TypeError(
                f"{cls.__name__}: variants must subclass their enum root {root.__name__} directly"
            )
        root.borsh_variants = (*root.borsh_variants, cls)

    @model_validator(mode="before")
    @classmethod
    def check_not_enum_root(cls, data: Any) -> Any:
        # An instance of a variant is a valid value for a field typed as the root
        if cls.is_enum_root() and not isinstance(data, cls):
            raise ValueError(
                f"{cls.__name__} is an enum root; instantiate one of its variants: "
                f"{', '.join(variant.__name__ for variant in cls.borsh_variants)}"
            )
        return data

    @classmethod
    def is_enum_root(cls) -> bool:
        return BaseEnum in cls.__bases__

    @classmethod
    def enum_root(cls) -> type[BaseEnum]:
        """Return the enum root this class belongs to."""
        for klass in cls.__mro__:
            if BaseEnum in klass.__bases__:
                return klass
        raise TypeError(f"{cls.__name__} is not part of an enum")

    @classmethod
    def discriminant(cls) -> int:
        """Return this variant's position in its enum."""
        if cls.is_enum_root():
            raise TypeError(f"{cls.__name__} is an enum root, not a variant")
        return cls.enum_root().borsh_variants.index(cls)
