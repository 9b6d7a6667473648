"""Mapping of plate errors to HTTP errors."""
from fastapi import HTTPException

from platecrafter.errors import LayoutFormatError, PlateError


def plate_http_error(error: PlateError) -> HTTPException:
    """422 with the error message; layout errors also list their problems."""
    if isinstance(error, LayoutFormatError):
        return HTTPException(
            status_code=422,
            detail={"message": str(error), "problems": error.problems}
        )
    return HTTPException(status_code=422, detail=str(error))
