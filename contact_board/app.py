import logging
import os
import time
from datetime import datetime
from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, Form, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from .core.config import Config
from .core.middleware import log_requests, global_exception_handler
from .schemas import MessageType
from .services.actions import (
    create_todo,
    get_all_messages,
    get_todos,
    send_contact_message,
)
from .services.supabase_service import SupabaseMessageStore
from .services.todo_store import JsonFileTodoStore

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=os.path.join(os.path.dirname(__file__), "templates"))


@lru_cache(maxsize=None)
def get_todo_store() -> JsonFileTodoStore:
    # One instance per process so its lock guards every append to the file
    return JsonFileTodoStore(Config.TODOS_FILE)


def get_message_store() -> SupabaseMessageStore:
    return SupabaseMessageStore(Config.CONTACT_TABLE)


def render(request: Request, name: str, context: dict, status_code: int = 200):
    """Render a page that must never be served from a cache."""
    response = templates.TemplateResponse(request, name, context, status_code=status_code)
    response.headers["Cache-Control"] = "no-store"
    return response


# Initialize FastAPI
app = FastAPI(title="Contact Board")

# CORS setup
ALLOWED_ORIGINS = Config.allowed_origins()

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

@app.middleware("http")
async def _log_requests(request, call_next):
    return await log_requests(request, call_next)

@app.exception_handler(Exception)
async def _global_exception_handler(request, exc):
    return await global_exception_handler(request, exc)


@app.get("/")
async def root():
    """The home page sends visitors straight to the contact form."""
    return RedirectResponse("/contact")


def _render_todos(
    request: Request,
    store: JsonFileTodoStore,
    status_message: str = "",
    todo_value: str = "",
    status_code: int = 200,
):
    todos, error = get_todos(store)
    return render(
        request,
        "todos.html",
        {
            "todos": todos,
            "error": error,
            "status_message": status_message,
            "todo_value": todo_value,
        },
        status_code=status_code,
    )


@app.get("/todos")
def todos_page(request: Request, store: JsonFileTodoStore = Depends(get_todo_store)):
    return _render_todos(request, store)


@app.post("/todos")
async def add_todo(
    request: Request,
    todo: str = Form(None),
    store: JsonFileTodoStore = Depends(get_todo_store),
):
    """Append a task and re-render the list with a status message.

    On failure the submitted text stays in the field.
    """
    try:
        result = await create_todo(store, todo)
    except HTTPException as e:
        return await run_in_threadpool(
            _render_todos, request, store, e.detail, todo or "", status_code=e.status_code
        )
    return await run_in_threadpool(_render_todos, request, store, result.message)


def _render_contact_form(
    request: Request,
    status_message: str = "",
    values: Optional[dict] = None,
    status_code: int = 200,
):
    return render(
        request,
        "contact.html",
        {
            "message_types": list(MessageType),
            "status_message": status_message,
            "values": values or {},
        },
        status_code=status_code,
    )


@app.get("/contact")
async def contact_page(request: Request):
    return _render_contact_form(request)


@app.post("/contact")
async def contact_submit(
    request: Request,
    name: str = Form(None),
    email: str = Form(None),
    message: str = Form(None),
    message_type: str = Form(None, alias="type"),
    store: SupabaseMessageStore = Depends(get_message_store),
):
    """Insert a contact message, then redirect to the thank-you page.

    Validation and insert errors re-render the form with a generic message
    and the submitted values, and no redirect happens.
    """
    try:
        result = await send_contact_message(store, name, email, message, message_type)
    except HTTPException as e:
        values = {"name": name, "email": email, "message": message, "type": message_type}
        return _render_contact_form(request, e.detail, values, status_code=e.status_code)
    return RedirectResponse(result.redirect_to, status_code=303)


@app.get("/contact/thank-you")
def thank_you_page(request: Request, store: SupabaseMessageStore = Depends(get_message_store)):
    messages, error = get_all_messages(store)
    return render(request, "thank_you.html", {"messages": messages, "error": error})


@app.get("/health")
def health_check(
    store: SupabaseMessageStore = Depends(get_message_store),
    todo_store: JsonFileTodoStore = Depends(get_todo_store),
):
    """Basic health and dependency checks for the app."""
    health_start_time = time.time()

    try:
        # Check configuration, Supabase connection and the to-do file
        Config.validate()
        store.ping()
        todo_store.list_all()

        health_duration = time.time() - health_start_time

        return {
            "status": "healthy",
            "service": "contact-board",
            "timestamp": datetime.now().isoformat(),
            "response_time_ms": round(health_duration * 1000, 2)
        }
    except Exception as e:
        health_duration = time.time() - health_start_time
        logger.error(f"Health check failed: {str(e)} - Duration: {health_duration:.1f}s")

        return {
            "status": "unhealthy",
            "service": "contact-board",
            "timestamp": datetime.now().isoformat(),
            "error": str(e),
            "response_time_ms": round(health_duration * 1000, 2)
        }
