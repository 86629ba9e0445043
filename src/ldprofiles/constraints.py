"""
Field Constraints

A closed set of constraint variants describing what a profile field may
hold. Raw field definitions (the JSON-Schema-like dicts found in profile
YAML files) are parsed once at load time into these nodes; the structural
validator compiles them back into a JSON Schema for evaluation and the
metadata resolver reads their types to synthesize examples.

Variants:
- AnyConstraint: no restriction
- PrimitiveConstraint: string/number/integer/boolean/null with format and bounds
- ConstConstraint: a single fixed value
- EnumConstraint: one of a fixed list of values
- ObjectConstraint: nested object with its own properties
- ArrayConstraint: list with an optional item constraint
- AnyOfConstraint: any one of several alternatives
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

from ldprofiles.exceptions import ProfileDefinitionError

PRIMITIVE_TYPES = ('string', 'number', 'integer', 'boolean', 'null')

# Raw keys that carry no validation meaning
_ANNOTATION_KEYS = ('description', 'examples', 'title')


def _json_type_of(value: Any) -> str:
    """Return the JSON type name of a Python value."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, int):
        return 'integer'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, (list, tuple)):
        return 'array'
    if isinstance(value, dict):
        return 'object'
    return 'string'


@dataclass(frozen=True)
class AnyConstraint:
    """Accepts any value."""

    @property
    def json_type(self) -> str:
        return 'string'

    def to_schema(self) -> Dict[str, Any]:
        return {}


@dataclass(frozen=True)
class PrimitiveConstraint:
    """A scalar JSON type with optional format and bounds."""

    type: str
    format: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    pattern: Optional[str] = None

    @property
    def json_type(self) -> str:
        return self.type

    def to_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {'type': self.type}
        if self.format is not None:
            schema['format'] = self.format
        if self.min_length is not None:
            schema['minLength'] = self.min_length
        if self.max_length is not None:
            schema['maxLength'] = self.max_length
        if self.minimum is not None:
            schema['minimum'] = self.minimum
        if self.maximum is not None:
            schema['maximum'] = self.maximum
        if self.pattern is not None:
            schema['pattern'] = self.pattern
        return schema


@dataclass(frozen=True)
class ConstConstraint:
    """Exactly one permitted value (e.g. the @type discriminator)."""

    value: Any

    @property
    def json_type(self) -> str:
        return _json_type_of(self.value)

    def to_schema(self) -> Dict[str, Any]:
        return {'const': self.value}


@dataclass(frozen=True)
class EnumConstraint:
    """One of a fixed set of values."""

    values: Tuple[Any, ...]
    type: Optional[str] = None

    @property
    def json_type(self) -> str:
        return self.type or 'string'

    def to_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {'enum': list(self.values)}
        if self.type is not None:
            schema['type'] = self.type
        return schema


@dataclass(frozen=True)
class ObjectConstraint:
    """A nested object. Undeclared properties are always allowed."""

    properties: Tuple[Tuple[str, 'Constraint'], ...] = ()
    required: Tuple[str, ...] = ()

    @property
    def json_type(self) -> str:
        return 'object'

    def to_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {'type': 'object'}
        if self.properties:
            schema['properties'] = {
                name: constraint.to_schema() for name, constraint in self.properties
            }
        if self.required:
            schema['required'] = list(self.required)
        return schema


@dataclass(frozen=True)
class ArrayConstraint:
    """A list, optionally constraining every item."""

    items: Optional['Constraint'] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None

    @property
    def json_type(self) -> str:
        return 'array'

    def to_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {'type': 'array'}
        if self.items is not None:
            schema['items'] = self.items.to_schema()
        if self.min_items is not None:
            schema['minItems'] = self.min_items
        if self.max_items is not None:
            schema['maxItems'] = self.max_items
        return schema


@dataclass(frozen=True)
class AnyOfConstraint:
    """Any one of several alternatives, e.g. a name string or a Person object."""

    options: Tuple['Constraint', ...] = field(default_factory=tuple)

    @property
    def json_type(self) -> str:
        # Examples are synthesized from the first alternative
        return self.options[0].json_type if self.options else 'string'

    def to_schema(self) -> Dict[str, Any]:
        return {'anyOf': [option.to_schema() for option in self.options]}


Constraint = Union[
    AnyConstraint,
    PrimitiveConstraint,
    ConstConstraint,
    EnumConstraint,
    ObjectConstraint,
    ArrayConstraint,
    AnyOfConstraint,
]


def parse_constraint(raw: Any, field_name: str = '') -> Constraint:
    """
    Parse a raw field definition into a constraint node.

    Args:
        raw: Field definition dict as found in a profile file
        field_name: Field name, used in error messages

    Returns:
        Constraint variant matching the definition

    Raises:
        ProfileDefinitionError: If the definition has an unsupported shape
    """
    if not isinstance(raw, dict):
        raise ProfileDefinitionError(
            f"Field definition for '{field_name}' must be a mapping, got {type(raw).__name__}",
            field_name=field_name,
        )

    if 'anyOf' in raw:
        options = raw['anyOf']
        if not isinstance(options, list) or not options:
            raise ProfileDefinitionError(
                f"'anyOf' for '{field_name}' must be a non-empty list",
                field_name=field_name,
            )
        return AnyOfConstraint(
            options=tuple(parse_constraint(option, field_name) for option in options)
        )

    if 'const' in raw:
        return ConstConstraint(value=raw['const'])

    if 'enum' in raw:
        values = raw['enum']
        if not isinstance(values, list) or not values:
            raise ProfileDefinitionError(
                f"'enum' for '{field_name}' must be a non-empty list",
                field_name=field_name,
            )
        return EnumConstraint(values=tuple(values), type=raw.get('type'))

    type_name = raw.get('type')

    if type_name is None:
        unknown = set(raw) - set(_ANNOTATION_KEYS)
        if unknown:
            raise ProfileDefinitionError(
                f"Field '{field_name}' has constraints {sorted(unknown)} but no type",
                field_name=field_name,
            )
        return AnyConstraint()

    if type_name == 'object':
        properties = raw.get('properties') or {}
        return ObjectConstraint(
            properties=tuple(
                (name, parse_constraint(definition, f"{field_name}.{name}"))
                for name, definition in properties.items()
            ),
            required=tuple(raw.get('required') or ()),
        )

    if type_name == 'array':
        items = raw.get('items')
        return ArrayConstraint(
            items=parse_constraint(items, f"{field_name}[]") if items is not None else None,
            min_items=raw.get('minItems'),
            max_items=raw.get('maxItems'),
        )

    if type_name in PRIMITIVE_TYPES:
        return PrimitiveConstraint(
            type=type_name,
            format=raw.get('format'),
            min_length=raw.get('minLength'),
            max_length=raw.get('maxLength'),
            minimum=raw.get('minimum'),
            maximum=raw.get('maximum'),
            pattern=raw.get('pattern'),
        )

    raise ProfileDefinitionError(
        f"Unsupported type '{type_name}' for field '{field_name}'",
        field_name=field_name,
    )

