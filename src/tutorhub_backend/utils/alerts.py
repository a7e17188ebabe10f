"""
Alert headers attached to responses of entity changes.

Clients show these as notifications: the alert header carries a message
key such as "tutorhubApp.team.created", the params header the affected
entity id (or entity name for failures).
"""

from typing import Dict, Optional

from tutorhub_backend.settings import settings


def _alert_header(suffix: str) -> str:
    return f"X-{settings.APPLICATION_NAME}-{suffix}"


def create_alert(message: str, param: Optional[str]) -> Dict[str, str]:
    headers = {_alert_header("alert"): message}
    if param is not None:
        headers[_alert_header("params")] = param
    return headers


def create_entity_creation_alert(entity_name: str, param: str) -> Dict[str, str]:
    return create_alert(f"{settings.APPLICATION_NAME}.{entity_name}.created", param)


def create_entity_update_alert(entity_name: str, param: str) -> Dict[str, str]:
    return create_alert(f"{settings.APPLICATION_NAME}.{entity_name}.updated", param)


def create_entity_deletion_alert(entity_name: str, param: str) -> Dict[str, str]:
    return create_alert(f"{settings.APPLICATION_NAME}.{entity_name}.deleted", param)


def create_failure_alert(entity_name: Optional[str], error_key: str) -> Dict[str, str]:
    headers = {_alert_header("error"): f"error.{error_key}"}
    if entity_name:
        headers[_alert_header("params")] = entity_name
    return headers
