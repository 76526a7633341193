"""Server actions behind the two forms.

Each action validates the submitted fields, performs a single write and tells
the caller how to continue: a status message to show, or a path to redirect
to. Persistence failures are logged and turned into a generic message.
"""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Protocol, Tuple

from fastapi import HTTPException
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from ..core.config import Config
from ..core.validation import validate_contact_form, validate_todo_form
from ..schemas import ContactMessage, Task
from .todo_store import JsonFileTodoStore


logger = logging.getLogger(__name__)

TASK_CREATED_MESSAGE = "Task created"
TASK_FAILED_MESSAGE = "An error occurred while creating your task."
MESSAGE_SENT_MESSAGE = "Your message has been sent successfully."
MESSAGE_FAILED_MESSAGE = "An error occurred while sending your message."
MESSAGES_UNAVAILABLE_MESSAGE = "An error occurred while fetching messages."
TODOS_UNAVAILABLE_MESSAGE = "An error occurred while fetching tasks."

THANK_YOU_PATH = "/contact/thank-you"


class MessageStore(Protocol):
    def insert(self, record: dict) -> dict: ...

    def select_ordered(self) -> List[dict]: ...


@dataclass
class ActionResult:
    message: str
    redirect_to: Optional[str] = None


async def _simulate_latency() -> None:
    if Config.SUBMIT_DELAY_SECONDS > 0:
        await asyncio.sleep(Config.SUBMIT_DELAY_SECONDS)


async def create_todo(store: JsonFileTodoStore, todo: Optional[str]) -> ActionResult:
    data = validate_todo_form(todo)

    await _simulate_latency()

    try:
        task = await run_in_threadpool(store.append, data.todo)
    except Exception as e:
        logger.error(f"Failed to write task to {store.file_path}: {e}")
        raise HTTPException(status_code=500, detail=TASK_FAILED_MESSAGE)

    logger.info(f"Created task {task.id}")
    return ActionResult(message=TASK_CREATED_MESSAGE)


async def send_contact_message(
    store: MessageStore,
    name: Optional[str] = None,
    email: Optional[str] = None,
    message: Optional[str] = None,
    message_type: Optional[str] = None,
) -> ActionResult:
    data = validate_contact_form(name, email, message, message_type)

    await _simulate_latency()

    record = {
        "name": data.name,
        "email": data.email,
        "message": data.message,
        "type": data.type.value,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    try:
        await run_in_threadpool(store.insert, record)
    except Exception as e:
        logger.error(f"Error inserting contact message into Supabase: {e}")
        raise HTTPException(status_code=500, detail=MESSAGE_FAILED_MESSAGE)

    return ActionResult(message=MESSAGE_SENT_MESSAGE, redirect_to=THANK_YOU_PATH)


def get_todos(store: JsonFileTodoStore) -> Tuple[List[Task], Optional[str]]:
    try:
        return store.list_all(), None
    except Exception as e:
        logger.error(f"Error reading tasks from {store.file_path}: {e}")
        return [], TODOS_UNAVAILABLE_MESSAGE


def get_all_messages(store: MessageStore) -> Tuple[List[ContactMessage], Optional[str]]:
    try:
        rows = store.select_ordered()
    except Exception as e:
        logger.error(f"Error fetching messages from Supabase: {e}")
        return [], MESSAGES_UNAVAILABLE_MESSAGE

    messages = []
    for row in rows:
        try:
            messages.append(ContactMessage.model_validate(row))
        except ValidationError as e:
            logger.warning(f"Skipping malformed contact message {row.get('id')!r}: {e.error_count()} invalid field(s)")
    return messages, None
