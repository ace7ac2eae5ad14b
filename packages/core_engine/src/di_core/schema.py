from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from di_core.issues import Issue

CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "doc-inherit configuration",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "directive_prefix": {"type": "string", "minLength": 1},
        "resource_types": {
            "type": "array",
            "items": {"enum": ["model", "seed", "snapshot"]},
            "minItems": 1,
            "uniqueItems": True,
        },
        "include_sources": {"type": "boolean"},
        "preview_length": {"type": "integer", "minimum": 1},
        "placeholder": {"type": "string"},
    },
}


def _to_json_path(parts: List[Any]) -> str:
    if not parts:
        return "/"
    return "/" + "/".join(str(part) for part in parts)


def schema_issues(data: Dict[str, Any], schema: Dict[str, Any]) -> List[Issue]:
    validator = Draft202012Validator(schema)
    issues: List[Issue] = []

    for error in sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path]):
        issues.append(
            Issue(
                severity="error",
                code="CONFIG_VALIDATION_FAILED",
                message=error.message,
                path=_to_json_path(list(error.absolute_path)),
            )
        )

    return issues


def config_issues(data: Dict[str, Any]) -> List[Issue]:
    return schema_issues(data, CONFIG_SCHEMA)
