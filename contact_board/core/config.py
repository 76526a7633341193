import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables.

    Provides validated access to the Supabase table backing the contact form
    and to the local file backing the to-do list.
    """

    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_ANON_KEY: str = os.getenv("SUPABASE_ANON_KEY", "")
    SUPABASE_SERVICE_KEY: str = os.getenv("SUPABASE_SERVICE_KEY", "")
    CONTACT_TABLE: str = os.getenv("CONTACT_TABLE", "contact_test_app")
    TODOS_FILE: str = os.getenv("TODOS_FILE", os.path.join(os.getcwd(), "data", "todos.json"))
    SUBMIT_DELAY_SECONDS: float = float(os.getenv("SUBMIT_DELAY_SECONDS", "0") or 0)
    CORS_ALLOWED_ORIGINS: str = os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:3000")

    @classmethod
    def allowed_origins(cls, extra_origins: List[str] | None = None) -> List[str]:
        env_origins = [o.strip() for o in cls.CORS_ALLOWED_ORIGINS.split(",") if o.strip()]
        merged = list(env_origins)
        if extra_origins:
            merged.extend(extra_origins)
        # Deduplicate while preserving order
        seen = set()
        result: List[str] = []
        for origin in merged:
            if origin not in seen:
                seen.add(origin)
                result.append(origin)
        return result

    @classmethod
    def supabase_key(cls) -> str:
        return cls.SUPABASE_SERVICE_KEY or cls.SUPABASE_ANON_KEY

    @classmethod
    def validate(cls) -> None:
        if not cls.SUPABASE_URL:
            raise ValueError("SUPABASE_URL environment variable is required")
        if not cls.supabase_key():
            raise ValueError("SUPABASE_SERVICE_KEY or SUPABASE_ANON_KEY environment variable is required")
