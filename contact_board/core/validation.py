import logging
from typing import Mapping, Optional, Type, TypeVar

from fastapi import HTTPException
from pydantic import BaseModel, ValidationError

from ..schemas import ContactMessageCreate, TodoCreate


logger = logging.getLogger(__name__)

INVALID_SUBMISSION_MESSAGE = "Invalid submission. Please check the form and try again."

FormModel = TypeVar("FormModel", bound=BaseModel)


def _parse_form(model: Type[FormModel], fields: Mapping[str, Optional[str]]) -> FormModel:
    # Absent fields arrive as None and fail the model the same way blank ones do
    try:
        return model.model_validate(dict(fields))
    except ValidationError as e:
        problems = ", ".join(
            f"{'.'.join(str(part) for part in err['loc']) or '<form>'}: {err['msg']}"
            for err in e.errors()
        )
        logger.warning(f"Rejected {model.__name__} submission - {problems}")
        raise HTTPException(status_code=422, detail=INVALID_SUBMISSION_MESSAGE)


def validate_todo_form(todo: Optional[str]) -> TodoCreate:
    return _parse_form(TodoCreate, {"todo": todo})


def validate_contact_form(
    name: Optional[str] = None,
    email: Optional[str] = None,
    message: Optional[str] = None,
    message_type: Optional[str] = None,
) -> ContactMessageCreate:
    return _parse_form(
        ContactMessageCreate,
        {"name": name, "email": email, "message": message, "type": message_type},
    )
