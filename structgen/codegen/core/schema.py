"""
Core type model for code generation.

Converts a JSON Schema document into an immutable graph of record types
that generators can work with consistently.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple
from enum import Enum

from ...logging_config import get_logger

logger = get_logger(__name__)


class SchemaError(ValueError):
    """Exception raised when a schema document cannot be converted."""

    pass


class FieldType(Enum):
    """Semantic property types across all target languages."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    OBJECT = "object"  # Reference to a record in the graph
    ARRAY = "array"
    MAP = "map"
    ANY = "any"


class Visibility(Enum):
    """Visibility classification of a record type."""

    PUBLIC = "public"
    INTERNAL = "internal"
    PRIVATE = "private"
    NONE = "none"


@dataclass(frozen=True, eq=False)
class TypeRef:
    """Semantic type of a property."""

    kind: FieldType
    record: Optional[str] = None  # Record key for OBJECT
    items: Optional["TypeRef"] = None  # Element type for ARRAY and MAP values
    nullable: bool = False

    def with_nullable(self) -> "TypeRef":
        """Return a nullable copy of this type."""
        if self.nullable:
            return self
        return TypeRef(self.kind, self.record, self.items, nullable=True)


@dataclass(frozen=True, eq=False)
class PropertyDeclaration:
    """A single property of a record, in declaration order."""

    name: str  # Original schema name
    type: TypeRef
    optional: bool = False
    description: Optional[str] = None


@dataclass(frozen=True, eq=False)
class RecordType:
    """A named object type with ordered properties.

    Records compare by identity, so two structurally equal records are
    still distinct entities of the graph.
    """

    key: str
    original_name: str
    properties: Tuple[PropertyDeclaration, ...] = ()
    visibility: Visibility = Visibility.PUBLIC
    description: Optional[str] = None
    base_type: Optional[str] = None

    def get_property(self, name: str) -> Optional[PropertyDeclaration]:
        """Get property by original schema name."""
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None


@dataclass
class TypeGraph:
    """Ordered collection of all records produced from one schema."""

    records: Dict[str, RecordType] = field(default_factory=dict)
    top_level: Optional[str] = None

    def __iter__(self) -> Iterator[RecordType]:
        return iter(self.records.values())

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, key: str) -> bool:
        return key in self.records

    def get(self, key: str) -> RecordType:
        """Get record by key, raising SchemaError when missing."""
        try:
            return self.records[key]
        except KeyError:
            raise SchemaError(f"Unknown record type: {key}") from None

    def add(self, record: RecordType) -> None:
        """Add a record, keeping discovery order."""
        if record.key in self.records:
            raise SchemaError(f"Duplicate record type: {record.key}")
        self.records[record.key] = record


_PRIMITIVE_TYPES = {
    "string": FieldType.STRING,
    "integer": FieldType.INTEGER,
    "number": FieldType.FLOAT,
    "boolean": FieldType.BOOLEAN,
}


def _pascal(name: str) -> str:
    parts = [p for p in "".join(c if c.isalnum() else " " for c in name).split() if p]
    return "".join(p[0].upper() + p[1:] for p in parts) or "Type"


class _GraphBuilder:
    """Walks a JSON Schema document and collects records in discovery order."""

    def __init__(self, document: Dict[str, Any], visibility: Visibility,
                 base_type: Optional[str]):
        self.document = document
        self.visibility = visibility
        self.base_type = base_type
        self.graph = TypeGraph()
        self._ref_keys: Dict[str, str] = {}
        self._reserved_keys: set = set()
        self._expanding_refs: set = set()

    def build(self, top_level: str) -> TypeGraph:
        if self.document is True or self.document == {}:
            raise SchemaError("Top-level schema must describe an object")
        if not isinstance(self.document, dict):
            raise SchemaError(
                f"Top-level schema must be a JSON object, got {type(self.document).__name__}"
            )

        self._ref_keys["#"] = self._unique_key(top_level)
        ref = self.convert(self.document, top_level, ref_path="#")
        if ref.kind != FieldType.OBJECT:
            raise SchemaError(
                f"Top-level schema must describe an object, got {ref.kind.value}"
            )
        self.graph.top_level = ref.record
        return self.graph

    def _unique_key(self, hint: str) -> str:
        base = _pascal(hint)
        key = base
        counter = 1
        while key in self._reserved_keys:
            counter += 1
            key = f"{base}{counter}"
        self._reserved_keys.add(key)
        return key

    def resolve_ref(self, ref: str) -> Dict[str, Any]:
        """Resolve a local JSON pointer reference."""
        if ref == "#":
            return self.document
        if not ref.startswith("#/"):
            raise SchemaError(f"Only local references are supported: {ref}")

        node: Any = self.document
        for part in ref[2:].split("/"):
            part = part.replace("~1", "/").replace("~0", "~")
            if not isinstance(node, dict) or part not in node:
                raise SchemaError(f"Cannot resolve reference: {ref}")
            node = node[part]

        if not isinstance(node, dict):
            raise SchemaError(f"Reference does not point to a schema: {ref}")
        return node

    def convert(self, node: Any, name_hint: str, ref_path: Optional[str] = None) -> TypeRef:
        """Convert a schema node to a TypeRef, registering records on the way."""
        if node is True or node == {}:
            return TypeRef(FieldType.ANY)
        if not isinstance(node, dict):
            raise SchemaError(f"Invalid schema for '{name_hint}': {node!r}")

        if "$ref" in node:
            return self._convert_ref(node["$ref"])

        for keyword in ("anyOf", "oneOf"):
            if keyword in node:
                return self._convert_alternatives(node[keyword], name_hint)

        if "allOf" in node:
            node = self._merge_all_of(node)

        if "enum" in node:
            values = node["enum"]
            if values and all(isinstance(v, str) for v in values):
                return TypeRef(FieldType.STRING)
            return TypeRef(FieldType.ANY)

        schema_type = node.get("type")
        if schema_type is None and "properties" in node:
            schema_type = "object"

        nullable = False
        if isinstance(schema_type, list):
            non_null = [t for t in schema_type if t != "null"]
            nullable = len(non_null) != len(schema_type)
            if len(non_null) != 1:
                logger.warning(
                    "Union type %s for '%s' mapped to any", schema_type, name_hint
                )
                return TypeRef(FieldType.ANY, nullable=nullable)
            schema_type = non_null[0]

        ref = self._convert_typed(node, schema_type, name_hint, ref_path)
        return ref.with_nullable() if nullable else ref

    def _convert_typed(self, node: Dict[str, Any], schema_type: Optional[str],
                       name_hint: str, ref_path: Optional[str]) -> TypeRef:
        if schema_type == "string":
            if node.get("format") == "date-time":
                return TypeRef(FieldType.TIMESTAMP)
            return TypeRef(FieldType.STRING)
        if schema_type in _PRIMITIVE_TYPES:
            return TypeRef(_PRIMITIVE_TYPES[schema_type])
        if schema_type == "null":
            return TypeRef(FieldType.ANY, nullable=True)
        if schema_type == "array":
            items = node.get("items", True)
            if isinstance(items, list):
                logger.warning("Tuple items for '%s' mapped to any", name_hint)
                return TypeRef(FieldType.ARRAY, items=TypeRef(FieldType.ANY))
            element = self.convert(items, f"{name_hint}Element")
            return TypeRef(FieldType.ARRAY, items=element)
        if schema_type == "object":
            if "properties" in node:
                return TypeRef(FieldType.OBJECT, record=self._convert_record(node, name_hint, ref_path))
            additional = node.get("additionalProperties", True)
            values = self.convert(additional, f"{name_hint}Value") if additional is not False else TypeRef(FieldType.ANY)
            return TypeRef(FieldType.MAP, items=values)
        if schema_type is None:
            return TypeRef(FieldType.ANY)

        raise SchemaError(f"Unsupported schema type for '{name_hint}': {schema_type}")

    def _convert_ref(self, ref: str) -> TypeRef:
        if ref in self._ref_keys and self._ref_keys[ref] in self.graph:
            return TypeRef(FieldType.OBJECT, record=self._ref_keys[ref])

        # Only records break recursion; a reference that comes back to itself
        # through arrays, maps or other references has no finite type.
        if ref in self._expanding_refs:
            logger.warning("Recursive reference %s outside a record mapped to any", ref)
            return TypeRef(FieldType.ANY)

        target = self.resolve_ref(ref)
        hint = target.get("title") or ref.rstrip("/").split("/")[-1]
        self._expanding_refs.add(ref)
        try:
            return self.convert(target, hint, ref_path=ref)
        finally:
            self._expanding_refs.discard(ref)

    def _convert_alternatives(self, alternatives: List[Any], name_hint: str) -> TypeRef:
        non_null = [a for a in alternatives if not (isinstance(a, dict) and a.get("type") == "null")]
        nullable = len(non_null) != len(alternatives)
        if len(non_null) == 1:
            ref = self.convert(non_null[0], name_hint)
            return ref.with_nullable() if nullable else ref

        logger.warning("Union of %d alternatives for '%s' mapped to any", len(non_null), name_hint)
        return TypeRef(FieldType.ANY, nullable=nullable)

    def _merge_all_of(self, node: Dict[str, Any]) -> Dict[str, Any]:
        merged: Dict[str, Any] = {k: v for k, v in node.items() if k != "allOf"}
        properties: Dict[str, Any] = {}
        required: List[str] = []

        for part in node["allOf"]:
            if isinstance(part, dict) and "$ref" in part:
                part = self.resolve_ref(part["$ref"])
            if isinstance(part, dict) and "allOf" in part:
                part = self._merge_all_of(part)
            if not isinstance(part, dict):
                continue
            properties.update(part.get("properties", {}))
            required.extend(r for r in part.get("required", []) if r not in required)
            if "type" in part and "type" not in merged:
                merged["type"] = part["type"]

        properties.update(node.get("properties", {}))
        required.extend(r for r in node.get("required", []) if r not in required)
        merged["properties"] = properties
        merged["required"] = required
        return merged

    def _convert_record(self, node: Dict[str, Any], name_hint: str,
                        ref_path: Optional[str]) -> str:
        if ref_path is not None and ref_path in self._ref_keys:
            key = self._ref_keys[ref_path]
        else:
            key = self._unique_key(node.get("title") or name_hint)
            if ref_path is not None:
                self._ref_keys[ref_path] = key

        # Reserve a slot before descending so the graph keeps discovery order
        # and recursive references resolve to this key.
        placeholder = RecordType(key=key, original_name=name_hint)
        self.graph.add(placeholder)

        required = set(node.get("required", []))
        properties = []
        for prop_name, prop_schema in node["properties"].items():
            prop_type = self.convert(prop_schema, f"{key}{_pascal(prop_name)}")
            description = prop_schema.get("description") if isinstance(prop_schema, dict) else None
            properties.append(
                PropertyDeclaration(
                    name=prop_name,
                    type=prop_type,
                    optional=prop_name not in required,
                    description=description,
                )
            )

        self.graph.records[key] = RecordType(
            key=key,
            original_name=name_hint,
            properties=tuple(properties),
            visibility=self.visibility,
            description=node.get("description"),
            base_type=self.base_type,
        )
        logger.debug("Converted record %s with %d properties", key, len(properties))
        return key


def convert_json_schema(
    document: Dict[str, Any],
    top_level: str = "Root",
    visibility: Visibility = Visibility.PUBLIC,
    base_type: Optional[str] = None,
) -> TypeGraph:
    """
    Convert a JSON Schema document to a TypeGraph.

    Args:
        document: Parsed JSON Schema
        top_level: Name for the top-level record
        visibility: Visibility assigned to every record
        base_type: Optional base type every record declares

    Returns:
        TypeGraph with records in discovery order, top-level first

    Raises:
        SchemaError: If the document cannot be converted
    """
    graph = _GraphBuilder(document, visibility, base_type).build(top_level)
    logger.info("Converted schema '%s' into %d record types", top_level, len(graph))
    return graph
