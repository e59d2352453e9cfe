"""
Critical section for multi-step ledger mutations.

A workout start writes two records (the session and the owner's id list) and a
user deletion removes several. Each such operation runs under one
process-wide lock and commits once, so no other request observes a session
list that disagrees with the workout table.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from sqlmodel import Session

logger = logging.getLogger(__name__)

_ledger_lock = threading.RLock()


@contextmanager
def atomic(session: Session, operation: str) -> Iterator[Session]:
    """
    Run a block of store writes as one unit.

    Commits when the block exits normally. Any exception rolls back every
    write made inside the block before re-raising it. A block that returns a
    ledger error without writing commits nothing of consequence.
    """
    with _ledger_lock:
        try:
            yield session
            session.commit()
        except Exception:
            logger.exception("Rolling back %s", operation)
            session.rollback()
            raise
