"""
Argument models for command factories.

Factories receive loosely typed values (usually decoded from a UI
message), so each one validates its arguments through one of these
models before building a command.
"""
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from .base import BaseCommand
from .errors import CommandArgumentError

M = TypeVar("M", bound=BaseModel)


class ReorderTasksArgs(BaseModel):
    task_ids: List[str]


class GeneratePrdArgs(BaseModel):
    description: Optional[str] = None


class RecordArgs(BaseModel):
    """Opaque requirements/settings record; only its mapping shape is checked."""
    value: Dict[str, Any]


class MacroArgs(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    commands: List[BaseCommand] = []
    name: Optional[str] = None
    description: Optional[str] = None


def _summarize(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def parse_arguments(command_name: str, model: Type[M], **values: Any) -> M:
    """
    Validate factory arguments against ``model``.

    Raises:
        CommandArgumentError: If the values do not fit the model
    """
    try:
        return model.model_validate(values)
    except ValidationError as e:
        raise CommandArgumentError(command_name, _summarize(e)) from e
