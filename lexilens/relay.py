"""FastAPI relay forwarding images and prompts to generative-AI providers.

Routes
------
POST /analyze         image + model  -> {status, data}
POST /compareAnalyze  image          -> {status, datas}
POST /ask             {prompt, model} -> {status, data: {response}}
GET  /status
GET  /check
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.concurrency import run_in_threadpool

import config
from lexilens.analysis import analyze_image, ask, compare_image
from lexilens.context import RelayContext
from lexilens.errors import InvalidImageError, ProviderRateLimitError
from lexilens.imaging import preprocess_image
from lexilens.logger import get_logger
from lexilens.models import AskRequest, StatusReport
from lexilens.providers import ProviderName

TOO_MANY_REQUESTS = "Too many requests, please try again later."

CHECK_PAGE = """
<html>
    <body>
        <h1>Image Analysis API</h1>
        <h2>API Endpoints:</h2>
        <ul>
            <li>POST /analyze - Upload image for analysis</li>
            <li>POST /compareAnalyze - Analyze an image with every model</li>
            <li>POST /ask - Send a text prompt to a model</li>
            <li>GET /status - Check API status</li>
        </ul>

        <h2>Test Form:</h2>
        <form action="/analyze" method="post" enctype="multipart/form-data">
            <p>Select image file: <input type="file" name="image" accept="image/*" required></p>
            <p>Select model:
                <select name="model" required>
{options}
                </select>
            </p>
            <input type="submit" value="Analyze">
        </form>
    </body>
</html>
"""

router = APIRouter()


class RateLimitExceeded(Exception):
    """Raised by the rate-limit dependency when a caller is over its quota."""

    def __init__(self, retry_after: float):
        super().__init__(f"Rate limit exceeded, retry after {retry_after}s")
        self.retry_after = retry_after


def error_response(status_code: int, message: str, headers: Optional[dict] = None, **extra) -> JSONResponse:
    """Build the JSON error envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"status": status_code, "error": message, **extra},
        headers=headers,
    )


async def get_context(request: Request) -> RelayContext:
    return request.app.state.context


async def enforce_rate_limit(request: Request, context: RelayContext = Depends(get_context)) -> None:
    """Reject callers that exceeded their request quota for the current window."""
    caller = request.client.host if request.client else "unknown"
    retry_after = context.limiter.hit(caller)
    if retry_after:
        raise RateLimitExceeded(retry_after)


def _invalid_model_message(context: RelayContext) -> str:
    return f"Invalid model type. Use {' or '.join(context.model_names)}"


async def _read_image(image: Optional[UploadFile]) -> Optional[bytes]:
    if image is None:
        return None
    data = await image.read()
    return data or None


@router.post("/analyze", dependencies=[Depends(enforce_rate_limit)])
async def analyze(
    image: Optional[UploadFile] = File(None),
    model: Optional[str] = Form(None),
    context: RelayContext = Depends(get_context),
):
    logger = get_logger()
    context.counters.record("analyze")

    data = await _read_image(image)
    if data is None:
        return error_response(400, "No image file provided")

    provider_name = ProviderName.parse(model)
    if provider_name is None or provider_name not in context.providers:
        return error_response(400, _invalid_model_message(context))

    provider = context.providers[provider_name]
    try:
        jpeg = await run_in_threadpool(preprocess_image, data)
        result = await analyze_image(provider, jpeg, context.today())
    except InvalidImageError as e:
        return error_response(400, str(e))
    except ProviderRateLimitError as e:
        logger.warning(f"Analysis rate limited by {provider.name}: {e}")
        return error_response(429, f"{provider.name} rate limit reached, please try again later.")
    except Exception as e:
        logger.error(f"Analysis error with {provider.name}: {e}", exc_info=True)
        return error_response(500, str(e))

    return {"status": 200, "data": result.model_dump()}


@router.post("/compareAnalyze", dependencies=[Depends(enforce_rate_limit)])
async def compare_analyze(
    image: Optional[UploadFile] = File(None),
    context: RelayContext = Depends(get_context),
):
    context.counters.record("compare_analyze")

    data = await _read_image(image)
    if data is None:
        return error_response(400, "No image file provided")

    try:
        jpeg = await run_in_threadpool(preprocess_image, data)
    except InvalidImageError as e:
        return error_response(400, str(e))

    results = await compare_image(context.providers, jpeg, context.today())
    return {"status": 200, "datas": [result.model_dump() for result in results]}


@router.post("/ask", dependencies=[Depends(enforce_rate_limit)])
async def ask_model(body: AskRequest, context: RelayContext = Depends(get_context)):
    logger = get_logger()
    context.counters.record("ask")

    if not body.prompt or not body.prompt.strip():
        return error_response(400, "No prompt provided")

    provider_name = ProviderName.parse(body.model)
    if provider_name is None or provider_name not in context.providers:
        return error_response(400, _invalid_model_message(context))

    provider = context.providers[provider_name]
    try:
        response = await ask(provider, body.prompt)
    except ProviderRateLimitError as e:
        logger.warning(f"Ask rate limited by {provider.name}: {e}")
        return error_response(
            429, f"Rate limit exceeded on {provider.name}, please wait a moment and try again."
        )
    except Exception as e:
        logger.error(f"Ask error with {provider.name}: {e}", exc_info=True)
        return error_response(500, f"Failed to get a response from {provider.name}: {e}")

    return {"status": 200, "data": {"response": response}}


@router.get("/status")
async def status(context: RelayContext = Depends(get_context)):
    context.counters.record("status")
    report = StatusReport(
        models=context.model_names,
        version=config.SERVICE_VERSION,
        requests=context.counters,
    )
    return report.model_dump()


@router.get("/check", response_class=HTMLResponse)
async def check(context: RelayContext = Depends(get_context)):
    context.counters.record("check")
    options = "\n".join(
        f'                    <option value="{name}">{name}</option>' for name in context.model_names
    )
    return CHECK_PAGE.replace("{options}", options)


def create_app(context: RelayContext) -> FastAPI:
    """
    Build the relay application around an explicit context.

    Args:
        context: Providers, counters and rate limiter shared by all handlers

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await context.aclose()

    app = FastAPI(
        title="LexiLens Analysis Relay",
        version=config.SERVICE_VERSION,
        lifespan=lifespan,
    )
    app.state.context = context

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        logger = get_logger()
        logger.warning(f"Rate limit exceeded for {request.client.host if request.client else 'unknown'}")
        return error_response(
            429,
            TOO_MANY_REQUESTS,
            headers={"Retry-After": str(int(exc.retry_after))},
            retry_after=exc.retry_after,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return error_response(400, f"Invalid request: {message}")

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger = get_logger()
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
        return error_response(500, "Internal server error")

    app.include_router(router)
    return app
