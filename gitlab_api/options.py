"""
Validation of request options before any request is built
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .exceptions import ValidationError

MAX_PER_PAGE = 100


@dataclass
class OptionDefinition:
    name: str
    allowed_types: tuple[type, ...] | None = None
    validator: Callable[[Any], bool] | None = None
    normalizer: Callable[[Any], Any] | None = None


class OptionsResolver:
    """
    Declares which options a call accepts and checks them

    Example:
        >>> resolver = OptionsResolver().define("per_page", int, lambda v: 0 < v <= 100)
        >>> resolver.resolve({"per_page": 20})
        {'per_page': 20}
    """

    def __init__(self):
        self._definitions: dict[str, OptionDefinition] = {}

    def define(
        self,
        name: str,
        allowed_types: type | tuple[type, ...] | None = None,
        validator: Callable[[Any], bool] | None = None,
        normalizer: Callable[[Any], Any] | None = None,
    ) -> "OptionsResolver":
        """
        Define an accepted option

        Args:
            name: Option name
            allowed_types: Type or tuple of types the value must have
            validator: Predicate the value must satisfy
            normalizer: Applied to the value after validation

        Returns:
            self, for chaining
        """
        if isinstance(allowed_types, type):
            allowed_types = (allowed_types,)
        self._definitions[name] = OptionDefinition(name, allowed_types, validator, normalizer)
        return self

    @property
    def defined_options(self) -> list[str]:
        return list(self._definitions)

    def resolve(self, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """
        Validate options and apply normalizers

        Returns:
            New dict with the resolved options, in input order

        Raises:
            ValidationError: For undefined options, wrong types or rejected values
        """
        resolved = {}
        for name, value in (options or {}).items():
            definition = self._definitions.get(name)
            if definition is None:
                raise ValidationError(
                    f"The option '{name}' does not exist. "
                    f"Defined options are: {', '.join(sorted(self._definitions))}",
                    option=name,
                    value=value,
                )

            if definition.allowed_types and not _has_type(value, definition.allowed_types):
                expected = ", ".join(t.__name__ for t in definition.allowed_types)
                raise ValidationError(
                    f"The option '{name}' with value {value!r} is expected to be of type "
                    f"{expected}, but is of type {type(value).__name__}",
                    option=name,
                    value=value,
                )

            if definition.validator and not definition.validator(value):
                raise ValidationError(
                    f"The option '{name}' with value {value!r} is invalid",
                    option=name,
                    value=value,
                )

            if definition.normalizer:
                value = definition.normalizer(value)
            resolved[name] = value

        return resolved


def _has_type(value: Any, allowed_types: tuple[type, ...]) -> bool:
    # bool is a subclass of int but is never a valid int option
    if isinstance(value, bool) and bool not in allowed_types:
        return False
    return isinstance(value, allowed_types)


def create_pagination_resolver() -> OptionsResolver:
    """Resolver accepting page (> 0) and per_page (1..MAX_PER_PAGE)"""
    return (
        OptionsResolver()
        .define("page", int, lambda value: value > 0)
        .define("per_page", int, lambda value: 0 < value <= MAX_PER_PAGE)
    )
