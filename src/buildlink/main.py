"""Build share link service"""

import asyncio
import json
import logging
import os
import sys
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse, PlainTextResponse

from .catalog import validate_packages
from .config import CodecConfig
from .decoder import ShareDecoder
from .encoder import ShareEncoder
from .exceptions import InvalidSelectionError
from .rate_limiter import SlidingWindowLimiter, rate_limit
from .selection import Selection
from .summary import text_summary
from .url import assemble_link, extract_share_param


# Define log format
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
SHARE_RATE_LIMIT = int(os.getenv("SHARE_RATE_LIMIT", "120"))  # links per client per hour


def configure_logging(level=logging.INFO):
    """Send our logs and uvicorn's through one stdout handler."""
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=[handler]
    )

    # Apply the same format to all relevant Uvicorn loggers
    for logger_name in ["uvicorn", "uvicorn.access"]:
        logger = logging.getLogger(logger_name)
        logger.handlers.clear()
        logger.propagate = False
        logger.addHandler(handler)


async def _json_body(request: Request):
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise HTTPException(status_code=422, detail="Request body must be JSON.") from e


def create_app(config: CodecConfig = None, share_rate_limit: int = SHARE_RATE_LIMIT) -> FastAPI:
    """Build the FastAPI app around one encoder/decoder pair."""
    config = config or CodecConfig.from_env()
    encoder = ShareEncoder(config)
    decoder = ShareDecoder(config)
    limiter = SlidingWindowLimiter(share_rate_limit)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        """Run the rate limiter cleanup while the app is up."""
        task = asyncio.create_task(limiter.cleanup_loop())
        yield  # App runs here
        task.cancel()  # Cleanup on shutdown

    app = FastAPI(lifespan=lifespan)

    def decode_or_400(b: str):
        result = decoder.decode(extract_share_param(b))
        if not result.ok:
            raise HTTPException(status_code=400, detail={"kind": result.kind.value, "detail": result.message})
        return result.selection

    @app.get("/health")
    async def health():
        return {"status": "ok", "schema_version": config.schema_version}

    @app.post("/share")
    @rate_limit(limiter)
    async def create_share(request: Request):
        """Encode a selection and return the share link."""
        data = await _json_body(request)
        try:
            selection = Selection.from_dict(data, config.personas)
        except InvalidSelectionError as e:
            raise HTTPException(status_code=422, detail=str(e)) from e

        link = assemble_link(selection, encoder=encoder)
        if link.too_long:
            logging.warning("Share link is %s chars, over the %s char advisory limit",
                            link.length, config.url_warning_threshold)
        logging.info("Created share link (%s chars, %s blocked)", link.length, link.blocked_count)
        return {
            "fragment": link.fragment,
            "url": link.url,
            "length": link.length,
            "too_long": link.too_long,
            "blocked_count": link.blocked_count,
            "too_long_to_decode": link.too_long_to_decode,
        }

    @app.get("/decode")
    async def decode_share(b: str):
        """Resolve a share link back into a selection."""
        return JSONResponse(decode_or_400(b).to_dict())

    @app.get("/summary", response_class=PlainTextResponse)
    async def summary(b: str):
        """Plain-text summary of a shared build."""
        resolved = decode_or_400(b)
        selection = resolved.as_selection()
        link = assemble_link(selection, encoder=encoder)
        return text_summary(selection, link.url, config.personas)

    @app.post("/packages/validate")
    async def check_packages(request: Request):
        """Split decoded package keys into those still in the catalog and a miss count."""
        data = await _json_body(request)
        packages = data.get("packages") if isinstance(data, dict) else None
        catalog = data.get("catalog") if isinstance(data, dict) else None
        if not isinstance(packages, list) or not isinstance(catalog, list):
            raise HTTPException(status_code=422, detail="Expected 'packages' and 'catalog' lists.")
        result = validate_packages(packages, {k for k in catalog if isinstance(k, str)})
        return {"valid": list(result.valid), "invalid_count": result.invalid_count}

    return app


configure_logging()
app = create_app()
