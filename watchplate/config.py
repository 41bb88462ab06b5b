# -*- coding: utf-8 -*-
from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional


class Settings:
    """Centralized configuration for the watch companion sync service."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        # ---- Sync (paired-device state) ----
        self.data_root: Path = Path(
            os.environ.get("WATCHPLATE_DATA_ROOT") or data_root_default
        ).expanduser()
        self.sync_queue_size: int = int(
            os.environ.get("WATCHPLATE_SYNC_QUEUE_SIZE") or "64"
        )
        self.replay_context: bool = (
            os.environ.get("WATCHPLATE_REPLAY_CONTEXT") or "1"
        ).strip() in {"1", "true", "True"}

        # ---- Server ----
        self.host: str = os.environ.get("WATCHPLATE_HOST") or "127.0.0.1"
        self.port: int = int(os.environ.get("WATCHPLATE_PORT") or "8000")

        # ---- Recipe assistant (request building only) ----
        self.gemini_base_url: str = os.environ.get(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
        )
        self.gemini_model: str = os.environ.get("GEMINI_MODEL", "gemini-2.0-flash")
        temperature = (os.environ.get("GEMINI_TEMPERATURE") or "").strip()
        self.gemini_temperature: Optional[float] = float(temperature) if temperature else None

        cors = os.environ.get("WATCHPLATE_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]

    @property
    def context_path(self) -> Path:
        return self.data_root / "sync" / "context.json"

    @property
    def gemini_endpoint_url(self) -> str:
        base = self.gemini_base_url.rstrip("/")
        return f"{base}/models/{self.gemini_model}:generateContent"


settings = Settings()
