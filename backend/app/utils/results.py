"""Translate ledger results into HTTP responses."""

from fastapi import HTTPException

from app.services.errors import is_error


def unwrap_or_raise(result):
    """
    Return the entity from a service result, or raise the HTTPException that
    matches its error kind.

    Raises:
        HTTPException with the error's status code and tagged detail
    """
    if is_error(result):
        raise HTTPException(status_code=result.status_code, detail=result.to_detail())
    return result
