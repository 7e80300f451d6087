from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from portal.core import settings
from portal.routes import requirements, upload, workspace


def create_app() -> FastAPI:
    app = FastAPI(title="Compliance Document Portal API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(requirements.router, prefix="/api")
    app.include_router(upload.router, prefix="/api")
    app.include_router(workspace.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        return JSONResponse(
            {
                "message": "Compliance Document Portal API",
                "docs": "/docs",
                "health": "/api/compliance",
            }
        )

    return app


app = create_app()
