from sqlalchemy.exc import IntegrityError


EXCLUSION_VIOLATION = '23P01'


def sqlstate_of(error: IntegrityError) -> str | None:
    """SQLSTATE of the driver error wrapped by SQLAlchemy (asyncpg keeps it on the cause)"""
    orig = error.orig
    return getattr(orig, 'sqlstate', None) or getattr(
        getattr(orig, '__cause__', None), 'sqlstate', None
    )


def is_exclusion_violation(error: IntegrityError, *, constraint_name: str | None = None) -> bool:
    if sqlstate_of(error) == EXCLUSION_VIOLATION:
        return True
    # Fall back to the message when the driver did not surface a SQLSTATE
    return constraint_name is not None and constraint_name in str(error)
