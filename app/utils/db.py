from contextlib import contextmanager
from models import db


@contextmanager
def transactional():
    """Commit on success; roll back and re-raise on any error.

    Failures are logged once, by the error handlers that turn them into responses.
    """
    try:
        yield
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
