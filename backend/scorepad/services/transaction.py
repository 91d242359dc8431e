from functools import wraps
import logging

from scorepad.exceptions import DirectoryError

logger = logging.getLogger(__name__)


def transactional(func):
    """Run a service method as one unit of work on ``self.session``.

    Commits once when the method returns. Any exception rolls the session
    back and is re-raised unchanged, so callers never see a half-applied
    write. Methods must not commit on their own.
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        session = self.session
        try:
            result = func(self, *args, **kwargs)
            session.commit()
            return result
        except DirectoryError as e:
            logger.info(f"[tx-rollback] {func.__name__}: {e.error_code} {e.message}")
            session.rollback()
            raise
        except Exception as e:
            logger.error(f"Transaction failed in {func.__name__}: {e}", exc_info=True)
            session.rollback()
            raise

    return wrapper
