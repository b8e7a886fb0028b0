from typing import Optional

from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from chunking.exceptions import ConfigurationError, TokenizationError
from chunking.tokenizer import TokenizerRegistry

from .config import LoaderServiceConfig
from .exceptions import DocumentDecodeError, SourceReadError
from .models import LoadResponse
from .service import LoaderService


def create_app(
    config: LoaderServiceConfig | None = None,
    registry: TokenizerRegistry | None = None,
) -> FastAPI:
    service = LoaderService(
        config=config or LoaderServiceConfig.from_env(),
        registry=registry,
    )
    app = FastAPI(
        title="PDF Loader Service",
        version="1.0.0",
        description="Per-page PDF text extraction with optional token chunking.",
    )

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.post("/load", response_model=LoadResponse)
    async def load(
        request: Request,
        split: bool = False,
        x_pdf_password: Optional[str] = Header(None),
    ) -> LoadResponse:
        data = await request.body()
        try:
            units = await run_in_threadpool(
                service.load_bytes, data, password=x_pdf_password, split=split
            )
        except DocumentDecodeError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except SourceReadError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except ConfigurationError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except TokenizationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        total_pages = units[0].metadata.get("total_pages", 0) if units else 0
        return LoadResponse(units=units, total_units=len(units), total_pages=total_pages)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8001, log_level="info")
