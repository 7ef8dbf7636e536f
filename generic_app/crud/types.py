"""Value types passed into and out of the CRUD engine."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


@dataclass(frozen=True)
class SubmittedFile:
    """A file payload submitted with a form."""
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)


# Raw form submission: field name -> string value or SubmittedFile
FormData = Mapping[str, Any]

FORM_ERROR_KEY = "_form"


class ResultKind(str, Enum):
    SUCCESS = "success"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PERSISTENCE = "persistence"
    DISABLED = "disabled"


@dataclass
class ActionResult:
    kind: ResultKind
    errors: Dict[str, List[str]] = field(default_factory=dict)
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    record: Optional[Dict[str, Any]] = None

    @property
    def success(self) -> bool:
        return self.kind == ResultKind.SUCCESS

    @classmethod
    def ok(cls, record: Optional[Dict[str, Any]] = None, warnings: Optional[List[str]] = None) -> "ActionResult":
        return cls(ResultKind.SUCCESS, record=record, warnings=list(warnings or []))

    @classmethod
    def invalid(cls, errors: Dict[str, List[str]]) -> "ActionResult":
        return cls(ResultKind.VALIDATION, errors=errors)

    @classmethod
    def not_found(cls, message: str) -> "ActionResult":
        return cls(ResultKind.NOT_FOUND, error=message)

    @classmethod
    def failed(cls, message: str, form_error: bool = True) -> "ActionResult":
        if form_error:
            return cls(ResultKind.PERSISTENCE, errors={FORM_ERROR_KEY: [message]})
        return cls(ResultKind.PERSISTENCE, error=message)

    @classmethod
    def disabled(cls, operation: str) -> "ActionResult":
        return cls(ResultKind.DISABLED, errors={FORM_ERROR_KEY: [f"{operation} is disabled"]})
