# core/db_wait.py
import logging
import time
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

logger = logging.getLogger("db")


def ping(engine) -> None:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def wait_for_db(engine, retries: int = 30, sleep_s: float = 1.0) -> None:
    last_err = None
    total = max(retries, 1)
    for attempt in range(1, total + 1):
        try:
            ping(engine)
            return
        except OperationalError as e:
            last_err = e
            logger.info("Database not ready (attempt %d/%d)", attempt, total)
            time.sleep(sleep_s)
    raise last_err
