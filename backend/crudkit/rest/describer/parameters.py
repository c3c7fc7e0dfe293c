"""Parameter Describer — adds query-parameter documentation to REST operations.

Invariants:
    - count / ids: 404 response + `where`
    - delete / patch / update: path parameter described as "Identifier"
    - find_one: `populate[]` + path parameter change
    - find: order, limit, offset, search (only with search columns), where, populate[]
    - A parameter already present with the same name/location is replaced, never duplicated
    - Descriptions come from Jinja2 templates in describer/templates
"""

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from crudkit.core.domain_types import ActionName

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

ORDER_BY_EXAMPLES = [
    "?order=column1     => ORDER BY entity.column1 ASC",
    "?order=-column1    => ORDER BY entity.column1 DESC",
]

ORDER_BY_ADVANCED_EXAMPLES = [
    "?order[column1]=ASC                        => ORDER BY entity.column1 ASC",
    "?order[column1]=DESC                       => ORDER BY entity.column1 DESC",
    "?order[column1]=foobar                     => ORDER BY entity.column1 ASC",
    "?order[column1]=DESC&order[column2]=DESC   => ORDER BY entity.column1 DESC, entity.column2 DESC",
]

CRITERIA_EXAMPLES = [
    "?where={\"property\": \"value\"}                => WHERE entity.property = 'value'",
    "?where={\"id\": [1,2,3]}                      => WHERE entity.id IN (1,2,3)",
    "?where={\"prop1\": \"val1\", \"prop2\": \"val2\"}   => WHERE entity.prop1 = 'val1' AND entity.prop2 = 'val2'",
    "?where={\"property\": \"value\", \"id\": [1,2,3]} => WHERE entity.property = 'value' AND entity.id IN (1,2,3)",
]

SEARCH_EXAMPLES = [
    "?search=term",
    "?search=term1+term2",
    "?search={\"and\": [\"term1\", \"term2\"]}",
    "?search={\"or\": [\"term1\", \"term2\"]}",
    "?search={\"and\": [\"term1\", \"term2\"], \"or\": [\"term3\", \"term4\"]}",
]


def create_environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )


class Parameters:
    """Describes the query parameters of one REST operation."""

    def __init__(self, environment: Environment | None = None):
        self.environment = environment or create_environment()

    def process(self, operation: dict[str, Any], action: ActionName, resource) -> dict[str, Any]:
        action = ActionName(action)

        if action in (ActionName.COUNT, ActionName.IDS):
            self._add_404(operation)
            self._add_parameter_criteria(operation)
        elif action in (ActionName.DELETE, ActionName.PATCH, ActionName.UPDATE):
            self._change_path_parameter(operation)
        elif action == ActionName.FIND_ONE:
            self._add_parameter_populate(operation, resource)
            self._change_path_parameter(operation)
        elif action == ActionName.FIND:
            self._add_parameter_order_by(operation)
            self._add_parameter_limit(operation)
            self._add_parameter_offset(operation)
            self._add_parameter_search(operation, resource)
            self._add_parameter_criteria(operation)
            self._add_parameter_populate(operation, resource)
        return operation

    def _add_parameter_search(self, operation, resource) -> None:
        if not resource.search_columns:
            return
        self._add(operation, {
            "name": "search",
            "in": "query",
            "required": False,
            "description": self._description(
                "parameter_search.j2",
                properties=list(resource.search_columns),
                examples=SEARCH_EXAMPLES,
            ),
            "schema": {"type": "string", "default": "term"},
        })

    def _add_parameter_criteria(self, operation) -> None:
        self._add(operation, {
            "name": "where",
            "in": "query",
            "required": False,
            "description": self._description(
                "parameter_criteria.j2", examples=CRITERIA_EXAMPLES,
            ),
            "schema": {"type": "string", "default": "{\"property\": \"value\"}"},
        })

    def _add_parameter_order_by(self, operation) -> None:
        self._add(operation, {
            "name": "order",
            "in": "query",
            "required": False,
            "description": self._description(
                "parameter_order.j2",
                examples=ORDER_BY_EXAMPLES,
                advanced_examples=ORDER_BY_ADVANCED_EXAMPLES,
            ),
            "schema": {"type": "string", "default": "column"},
        })

    def _add_parameter_limit(self, operation) -> None:
        self._add(operation, self._limit_offset_parameter(
            "limit", "parameter_limit.j2", ["?limit=10"],
        ))

    def _add_parameter_offset(self, operation) -> None:
        self._add(operation, self._limit_offset_parameter(
            "offset", "parameter_offset.j2", ["?offset=10"],
        ))

    def _limit_offset_parameter(self, name: str, template: str, examples: list[str]) -> dict:
        return {
            "name": name,
            "in": "query",
            "required": False,
            "description": self._description(template, examples=examples),
            "schema": {"type": "integer", "minimum": 0, "default": 10},
        }

    def _add_parameter_populate(self, operation, resource) -> None:
        self._add(operation, {
            "name": "populate[]",
            "in": "query",
            "required": False,
            "style": "form",
            "explode": True,
            "description": self._description(
                "parameter_populate.j2",
                examples=populate_examples(resource),
                associations=resource.get_associations(),
            ),
            "schema": {"type": "array", "items": {"type": "string"}},
        })

    @staticmethod
    def _change_path_parameter(operation) -> None:
        for parameter in operation.get("parameters", []):
            if parameter.get("in") != "path":
                continue
            parameter["description"] = "Identifier"
            parameter.setdefault("schema", {})["default"] = "Identifier"

    @staticmethod
    def _add_404(operation) -> None:
        operation.setdefault("responses", {})["404"] = {
            "description": "Not found",
            "content": {"application/json": {"schema": {"$ref": "#/components/schemas/ErrorResponse"}}},
        }

    @staticmethod
    def _add(operation, parameter: dict) -> None:
        parameters = operation.setdefault("parameters", [])
        parameters[:] = [
            p for p in parameters
            if not (p.get("name") == parameter["name"] and p.get("in") == parameter["in"])
        ]
        parameters.append(parameter)

    def _description(self, template: str, **data: Any) -> str:
        return self.environment.get_template(template).render(**data).strip()


def populate_examples(resource) -> list[str]:
    basename = resource.entity_name
    examples = [
        f"?populate[]={basename}.{association}"
        for association in resource.get_associations()
    ]
    examples.append(f"?populate[]={basename}.property")
    examples.append(f"?populate[]={basename}.prop1&populate[]={basename}.prop2")
    return examples
