# src/phasorsim_core/schematic/parser.py
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import cerberus
import pint
import yaml

from ..components.kinds import GraphicalKind, HANDLES
from ..units import to_si_magnitude
from .raw_data import ConnectionPoint, GraphicalNode, Schematic, Wire
from .exceptions import ParsingError, SchemaValidationError

logger = logging.getLogger(__name__)

# Editor ids are free-form but must be usable as LaTeX subscripts and log tokens.
ID_REGEX = r"^[A-Za-z0-9_][A-Za-z0-9_.:\-]*$"

ANALYSIS_METHODS = [
    "nodal", "mesh", "superposition", "source_transformation",
    "thevenin", "norton", "op_amp", "spice",
]


class EnhancedValidator(cerberus.Validator):
    """Custom Cerberus validator with identifier and uniqueness rules."""
    def __init__(self, *args, **kwargs):
        super(EnhancedValidator, self).__init__(*args, **kwargs)
        self.rules['id_regex'] = {'schema': {'type': 'boolean'}}
        self.rules['unique_elements_by_key'] = {'schema': {'type': 'string'}}

    def _validate_id_regex(self, constraint: bool, field: str, value: Any):
        """
        Validates that a string is a usable node or wire identifier.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if not constraint: return
        if not isinstance(value, str):
            self._error(field, "must be a string to be validated by id_regex.")
            return
        if not re.match(ID_REGEX, value):
            self._error(
                field,
                f"Identifier '{value}' is invalid. Identifiers must start with a letter, digit or underscore "
                "and may only contain letters, digits, '_', '.', ':' and '-'."
            )

    def _normalize_coerce_method_label(self, value: Any) -> Any:
        """Method labels are case-insensitive, as in `AnalysisMethod.coerce`."""
        return value.strip().lower() if isinstance(value, str) else value

    def _validate_unique_elements_by_key(self, key_for_uniqueness: str, field: str, value: List[Dict]):
        """
        Validates that all dictionaries in a list have a unique value for a given key.
        The rule's arguments are validated against this schema:
        {'type': 'string'}
        """
        if not isinstance(value, list):
            return

        seen_keys = set()
        duplicates = []
        for item in value:
            if not isinstance(item, dict):
                continue
            item_key = item.get(key_for_uniqueness)
            if item_key is not None:
                if item_key in seen_keys:
                    duplicates.append(item_key)
                else:
                    seen_keys.add(item_key)

        if duplicates:
            self._error(field, f"Duplicate values found for key '{key_for_uniqueness}': {sorted(set(duplicates))}")


class SchematicParser:
    """
    Validates a schematic document (the editor's node/edge snapshot) and turns it
    into the immutable `Schematic` IR. Documents come either as an in-memory
    mapping or as a YAML file with the same structure.
    """
    _id_rule = {"type": "string", "required": True, "empty": False, "id_regex": True}
    _handle_rule = {"type": "string", "required": True, "allowed": list(HANDLES)}

    _node_schema = {
        "id": _id_rule,
        "type": {"type": "string", "required": True, "allowed": [k.value for k in GraphicalKind]},
        "value": {"type": ["number", "string"], "required": False, "nullable": True},
        "phase": {"type": "number", "required": False, "nullable": True},
        "label": {"type": "string", "required": False},
    }

    _edge_schema = {
        "id": {"type": "string", "required": False, "empty": False},
        "source": _id_rule,
        "source_handle": _handle_rule,
        "target": _id_rule,
        "target_handle": _handle_rule,
    }

    _schema = {
        "name": {"type": "string", "required": False, "empty": False},
        "nodes": {"type": "list", "required": True, "unique_elements_by_key": "id",
                  "schema": {"type": "dict", "schema": _node_schema}},
        "edges": {"type": "list", "required": False, "default": [],
                  "schema": {"type": "dict", "schema": _edge_schema}},
        "analysis": {
            "type": "dict", "required": False, "schema": {
                "frequency": {"type": ["number", "string"], "required": True},
                "method": {"type": "string", "required": False, "coerce": "method_label",
                           "allowed": ANALYSIS_METHODS},
            },
        },
    }

    def __init__(self):
        self._validator = EnhancedValidator(self._schema)
        self._validator.allow_unknown = False
        logger.debug("SchematicParser initialized with strict structural validation rules.")

    def parse_file(self, yaml_path: Union[str, Path]) -> Schematic:
        """Loads a YAML schematic document from disk and parses it."""
        path = Path(yaml_path).resolve()
        logger.info(f"Parsing schematic document: {path}")
        content = self._load_yaml(path)
        return self.parse_document(content, source_path=path, default_name=path.stem)

    def parse_document(
        self,
        document: Dict[str, Any],
        source_path: Optional[Path] = None,
        default_name: str = "schematic",
    ) -> Schematic:
        """Validates an in-memory schematic mapping and builds the Schematic IR."""
        if not isinstance(document, dict):
            raise ParsingError(details="The root of a schematic document must be a mapping.", file_path=source_path)
        if not self._validator.validate(document):
            raise SchemaValidationError(self._flatten_errors(self._validator.errors), source_path)
        validated = self._validator.document

        nodes = tuple(
            self._build_node(raw_node, idx, source_path)
            for idx, raw_node in enumerate(validated["nodes"])
        )
        wires = tuple(
            Wire(
                source=ConnectionPoint(raw_edge["source"], raw_edge["source_handle"]),
                target=ConnectionPoint(raw_edge["target"], raw_edge["target_handle"]),
                wire_id=raw_edge.get("id"),
            )
            for raw_edge in validated.get("edges", [])
        )
        logger.debug(f"Parsed schematic with {len(nodes)} nodes and {len(wires)} wires.")
        return Schematic(
            nodes=nodes,
            wires=wires,
            name=validated.get("name", default_name),
            source_path=source_path,
            analysis=dict(validated.get("analysis") or {}),
        )

    def _build_node(self, raw_node: Dict[str, Any], idx: int, source_path: Optional[Path]) -> GraphicalNode:
        kind = GraphicalKind(raw_node["type"])
        component_kind = kind.component_kind
        raw_value = raw_node.get("value")

        if component_kind is None or component_kind.si_unit == "dimensionless":
            value = 0.0 if raw_value is None else self._convert_value(raw_value, "dimensionless", raw_node["id"], source_path)
        else:
            if raw_value is None:
                raise SchemaValidationError(
                    {f"nodes.{idx}.value": [f"required field for component type '{kind.value}'"]},
                    source_path,
                )
            value = self._convert_value(raw_value, component_kind.si_unit, raw_node["id"], source_path)

        return GraphicalNode(
            node_id=raw_node["id"],
            kind=kind,
            value=value,
            phase_deg=float(raw_node.get("phase") or 0.0),
            label=raw_node.get("label"),
        )

    def _convert_value(self, raw_value: Any, unit: str, node_id: str, source_path: Optional[Path]) -> float:
        try:
            return to_si_magnitude(raw_value, unit)
        except (pint.DimensionalityError, pint.UndefinedUnitError, ValueError, TypeError) as e:
            raise ParsingError(
                details=f"Value of node '{node_id}' cannot be read as a quantity in '{unit}': {e}",
                file_path=source_path,
                user_input=str(raw_value),
            ) from e

    @staticmethod
    def _flatten_errors(errors: Dict[str, Any], prefix: str = "") -> Dict[str, List[str]]:
        """Flattens Cerberus' nested error tree into dotted field paths."""
        flat: Dict[str, List[str]] = {}
        for key, entries in errors.items():
            path = f"{prefix}.{key}" if prefix else str(key)
            for entry in entries:
                if isinstance(entry, dict):
                    flat.update(SchematicParser._flatten_errors(entry, path))
                else:
                    flat.setdefault(path, []).append(str(entry))
        return flat

    def _load_yaml(self, source: Path) -> Dict[str, Any]:
        """Loads and performs basic sanity checks on a YAML file."""
        if not source.is_file():
            raise ParsingError(details=f"Schematic file not found at path: {source}", file_path=source)
        try:
            with source.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
            if content is None:
                raise ParsingError(details="The YAML file is empty or contains no valid content.", file_path=source)
            if not isinstance(content, dict):
                raise ParsingError(details="The root of the YAML file must be a dictionary (mapping).", file_path=source)
            return content
        except PermissionError as e:
            raise ParsingError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        except yaml.YAMLError as e:
            raise ParsingError(details=f"Invalid YAML syntax: {e}", file_path=source) from e
