# -*- coding: utf-8 -*-
"""Paired-device sync: JSON file storage for the last application context."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import settings

logger = logging.getLogger(__name__)


def _context_path(data_root: Path | None) -> Path:
    if data_root is None:
        return settings.context_path
    return data_root / "sync" / "context.json"


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def save_context(context: Dict[str, Any], data_root: Path | None = None) -> Path:
    """Persist the latest context snapshot, replacing the previous one."""
    file_path = _context_path(data_root)
    _ensure_dir(file_path.parent)
    record = {
        "received_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "context": context,
    }
    tmp_path = file_path.with_suffix(".json.tmp")
    tmp_path.write_text(json.dumps(record, ensure_ascii=False, indent=2), encoding="utf-8")
    tmp_path.replace(file_path)
    return file_path


def load_context(data_root: Path | None = None) -> Optional[Dict[str, Any]]:
    """Return the stored context snapshot, or None if there is nothing usable."""
    file_path = _context_path(data_root)
    if not file_path.exists():
        return None
    try:
        record = json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Unreadable context snapshot %s: %s", file_path, exc)
        return None
    context = record.get("context") if isinstance(record, dict) else None
    if not isinstance(context, dict):
        logger.warning("Context snapshot %s has no context object", file_path)
        return None
    return context
