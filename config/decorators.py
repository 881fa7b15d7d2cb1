import time
import functools
import httpx
import logging

logger = logging.getLogger(__name__)

TRANSIENT_ERROR_MARKERS = ("DECRYPTION_FAILED_OR_BAD_RECORD_MAC", "Server disconnected", "Connection reset")


def retry_on_transient_error(func=None, *, max_retries: int = 3, delay: float = 0.5):
    """
    A decorator to retry a synchronous Supabase call when the connection drops
    mid-request. Any other error is raised immediately.
    """
    def decorator(inner):
        @functools.wraps(inner)
        def wrapper(*args, **kwargs):
            for attempt in range(max_retries):
                try:
                    return inner(*args, **kwargs)
                except (httpx.ReadError, httpx.RemoteProtocolError, httpx.ConnectError) as e:
                    if attempt < max_retries - 1:
                        logger.warning(f"Transient error on {inner.__name__}: {e}. Retrying in {delay} seconds... (Attempt {attempt + 1}/{max_retries})")
                        time.sleep(delay)
                        continue
                    logger.error(f"Failed on last attempt of {inner.__name__}: {e}")
                    raise
                except Exception as e:
                    if any(marker in str(e) for marker in TRANSIENT_ERROR_MARKERS) and attempt < max_retries - 1:
                        logger.warning(f"Transient error on {inner.__name__}: {e}. Retrying in {delay} seconds... (Attempt {attempt + 1}/{max_retries})")
                        time.sleep(delay)
                        continue
                    raise
        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
