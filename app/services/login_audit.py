"""Login audit trail: last login time per vendor email, kept in a JSON file.

This is an observability side channel. It is only written when
LOGIN_AUDIT_FILE is configured and a failure here never fails a login.
"""

import json
import os
import tempfile
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Union

from starlette.concurrency import run_in_threadpool

from app.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

# Serializes read-modify-write within this process
_lock = threading.Lock()


class LoginAuditLog:
    """Upserts ``{email: last_login_iso}`` entries into a JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def record(self, email: str, when: Optional[datetime] = None) -> None:
        when = when or datetime.now(timezone.utc)
        with _lock:
            entries = self.read()
            entries[email] = when.isoformat()
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(entries, f, indent=2, sort_keys=True)
                os.replace(tmp_path, self.path)
            except BaseException:
                os.unlink(tmp_path)
                raise


def get_login_audit() -> Optional[LoginAuditLog]:
    if not settings.LOGIN_AUDIT_FILE:
        return None
    return LoginAuditLog(settings.LOGIN_AUDIT_FILE)


async def record_login(email: str) -> None:
    """Record a successful login if the audit file is configured."""
    audit = get_login_audit()
    if audit is None:
        return
    try:
        await run_in_threadpool(audit.record, email)
    except (OSError, ValueError) as exc:
        logger.warning(
            "Could not write login audit entry",
            extra={"path": str(audit.path), "error": str(exc)},
        )
