import os
import logging
import psycopg2
from psycopg2.extras import RealDictCursor
from contextlib import contextmanager

logger = logging.getLogger(__name__)


def get_database_url() -> str:
    url = os.environ.get("DATABASE_URL")
    if not url:
        raise ValueError("DATABASE_URL environment variable is not set")
    return url


@contextmanager
def get_connection():
    conn = None
    try:
        conn = psycopg2.connect(get_database_url(), connect_timeout=10)
        yield conn
    except Exception as e:
        logger.error(f"Database connection error: {e}")
        raise
    finally:
        if conn:
            conn.close()


@contextmanager
def get_cursor():
    """Dict cursor on a fresh connection, rolled back on error."""
    with get_connection() as conn:
        cursor = conn.cursor(cursor_factory=RealDictCursor)
        try:
            yield cursor
        except Exception as e:
            conn.rollback()
            logger.error(f"Database error: {e}")
            raise
        finally:
            cursor.close()


def execute_query(query: str, params: tuple = None):
    with get_cursor() as cursor:
        cursor.execute(query, params)
        return cursor.fetchall()
