from fastapi import FastAPI, HTTPException

from .config import ChunkingServiceConfig
from .exceptions import ConfigurationError, TokenizationError
from .models import (
    SplitDocumentsRequest,
    SplitDocumentsResponse,
    SplitRequest,
    SplitResponse,
)
from .service import ChunkingService
from .tokenizer import TokenizerRegistry


def create_app(
    config: ChunkingServiceConfig | None = None,
    registry: TokenizerRegistry | None = None,
) -> FastAPI:
    service = ChunkingService(
        config=config or ChunkingServiceConfig.from_env(),
        registry=registry,
    )
    app = FastAPI(
        title="Token Chunking Service",
        version="1.0.0",
        description="Splits text into overlapping token windows.",
    )

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.post("/split", response_model=SplitResponse)
    def split(request: SplitRequest) -> SplitResponse:
        try:
            return service.split_text(request.text, request.config)
        except ConfigurationError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except TokenizationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.post("/split-documents", response_model=SplitDocumentsResponse)
    def split_documents(request: SplitDocumentsRequest) -> SplitDocumentsResponse:
        try:
            units = service.split_documents(request.units, request.config)
        except ConfigurationError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except TokenizationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return SplitDocumentsResponse(units=units, total_units=len(units))

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
