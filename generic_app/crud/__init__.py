from generic_app.crud.engine import EntityActions
from generic_app.crud.revalidate import PathRevalidator
from generic_app.crud.service import CRUDService, PaginatedResult
from generic_app.crud.types import ActionResult, ResultKind, SubmittedFile
from generic_app.crud.validation import register_validator, validate_submission
