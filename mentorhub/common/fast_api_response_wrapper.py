from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from http import HTTPStatus
from typing import Any


def api_response(
    message: str,
    success: bool = True,
    data: Any = None,
    status_code: HTTPStatus = HTTPStatus.OK,
) -> JSONResponse:
    """
    Generate the standard `{success, message, data}` JSON envelope.

    Pydantic DTOs inside `data` are serialized with their camelCase aliases
    through `jsonable_encoder`.

    Args:
        message (str): A descriptive message explaining the result of the API call.
        success (bool): Whether the API call succeeded (True) or failed (False).
        data (Any): Optional payload (dict, list or DTO). Can be None.
        status_code (HTTPStatus): The HTTP status code for the response.
                                  Defaults to HTTPStatus.OK (200).

    Returns:
        JSONResponse: A FastAPI/Starlette JSONResponse object.

    Example:
        return api_response(
            message="Mentorship request sent successfully.",
            data={"match": match_dto},
            status_code=HTTPStatus.CREATED,
        )
    """

    response_body = {
        "success": success,
        "message": message,
        "data": data,
    }
    serialized_body = jsonable_encoder(response_body, by_alias=True)

    return JSONResponse(
        status_code=status_code.value,
        content=serialized_body,
    )
