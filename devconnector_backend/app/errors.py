import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger("devconnector.errors")


class AppError(Exception):
    status_code = 500
    default_msg = "Server Error"

    def __init__(self, msg: str | None = None):
        self.msg = msg or self.default_msg
        super().__init__(self.msg)

    def to_body(self) -> dict:
        return {"msg": self.msg}


class ValidationError(AppError):
    """Input failed one or more field checks; carries every violation."""

    status_code = 400
    default_msg = "Invalid input"

    def __init__(self, errors: list[dict]):
        self.errors = list(errors)
        super().__init__(self.errors[0]["msg"] if self.errors else None)

    def to_body(self) -> dict:
        return {"errors": self.errors}


class ConflictError(AppError):
    status_code = 400
    default_msg = "Conflict"


class AuthError(AppError):
    status_code = 401
    default_msg = "Token is not valid"


class AuthorizationError(AppError):
    status_code = 401
    default_msg = "User Not Authorized"


class NotFoundError(AppError):
    status_code = 404
    default_msg = "Not Found"


class InternalError(AppError):
    status_code = 500
    default_msg = "Server Error"


def field_error(param: str, msg: str, value=None, location: str = "body") -> dict:
    err = {"msg": msg, "param": param, "location": location}
    if value is not None:
        err["value"] = value
    return err


async def app_error_handler(request: Request, exc: AppError):
    if isinstance(exc, InternalError):
        logger.error("INTERNAL method=%s path=%s msg=%s", request.method, request.url.path, exc.msg, exc_info=exc)
        # 不向调用方暴露内部细节
        return JSONResponse(status_code=500, content={"msg": InternalError.default_msg})
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = []
    for item in exc.errors():
        loc = [str(part) for part in item.get("loc", ())]
        location = loc[0] if loc else "body"
        param = ".".join(loc[1:]) if len(loc) > 1 else location
        errors.append(field_error(param, item.get("msg", "Invalid value"), location=location))
    return JSONResponse(status_code=400, content={"errors": errors})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("UNHANDLED method=%s path=%s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"msg": InternalError.default_msg})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
