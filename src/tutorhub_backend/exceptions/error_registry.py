"""
Error registry management for loading and accessing error definitions.

The registry is the error_registry.yaml file shipped inside the
tutorhub_backend package.
"""

import yaml
from pathlib import Path
from typing import Dict, Optional

from tutorhub_types.errors import ErrorDefinition, ErrorMessageFormat


REGISTRY_PATH = Path(__file__).parent.parent / "error_registry.yaml"

# Cache for error registry
_error_registry: Optional[Dict[str, ErrorDefinition]] = None
_registry_version: Optional[str] = None


def load_error_registry(registry_path: Path = REGISTRY_PATH) -> Dict[str, ErrorDefinition]:
    """
    Load error registry from YAML file.

    Returns:
        Dictionary mapping error codes to ErrorDefinition objects

    Raises:
        FileNotFoundError: If error_registry.yaml is not found
        ValueError: If YAML is malformed or validation fails
    """
    global _error_registry, _registry_version

    if _error_registry is not None:
        return _error_registry

    if not registry_path.exists():
        raise FileNotFoundError(f"Error registry not found at {registry_path}")

    with open(registry_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data or "errors" not in data:
        raise ValueError("Invalid error registry format: missing 'errors' key")

    registry = {}
    for error_dict in data["errors"]:
        try:
            message_data = error_dict.get("message", {})
            message = ErrorMessageFormat(
                plain=message_data.get("plain", ""),
                markdown=message_data.get("markdown"),
            )

            error_def = ErrorDefinition(
                code=error_dict["code"],
                http_status=error_dict["http_status"],
                category=error_dict["category"],
                severity=error_dict["severity"],
                title=error_dict["title"],
                message=message,
                retry_after=error_dict.get("retry_after"),
                internal_description=error_dict.get("internal_description", ""),
                common_causes=error_dict.get("common_causes", []),
            )
        except (KeyError, ValueError) as e:
            raise ValueError(
                f"Failed to parse error definition for {error_dict.get('code', 'unknown')}: {e}"
            ) from e

        if error_def.code in registry:
            raise ValueError(f"Duplicate error code in registry: {error_def.code}")
        registry[error_def.code] = error_def

    _error_registry = registry
    _registry_version = str(data.get("version", "unknown"))
    return _error_registry


def get_error_definition(error_code: str) -> ErrorDefinition:
    """
    Get error definition by code.

    Unknown codes resolve to a generic internal error definition so that
    rendering an error response never fails.
    """
    registry = load_error_registry()

    if error_code not in registry:
        return ErrorDefinition(
            code="UNKNOWN",
            http_status=500,
            category="internal",
            severity="error",
            title="Unknown Error",
            message=ErrorMessageFormat(
                plain=f"An error occurred (code: {error_code})",
                markdown=f"**Unknown Error**\n\nAn error occurred with code: `{error_code}`",
            ),
            internal_description=f"Unknown error code: {error_code}",
        )

    return registry[error_code]


def get_all_error_codes() -> list[str]:
    return list(load_error_registry().keys())


def get_errors_by_http_status(http_status: int) -> list[ErrorDefinition]:
    registry = load_error_registry()
    return [
        error_def
        for error_def in registry.values()
        if error_def.http_status == http_status
    ]


def get_registry_version() -> str:
    load_error_registry()
    return _registry_version or "unknown"
