"""FastAPI application for the form-flow external data API."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routers import binding, forms

VERSION = "0.3.0"

# Create FastAPI app
app = FastAPI(
    title="Form Flow External Data API",
    description="""
    REST API for binding external JSON data to form-flow fields.

    Provides access to:
    - Field binding (initial values and select options) from any JSON payload
    - Path expression evaluation
    - Bundled and project form definitions
    """,
    version=VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

# Configure CORS for the designer frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",  # Vite dev server
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(binding.router, prefix="/api")
app.include_router(forms.router, prefix="/api")


@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": VERSION}


@app.get("/")
def root():
    """Root endpoint - redirect to docs."""
    return {
        "message": "Form Flow External Data API",
        "docs": "/api/docs",
        "health": "/api/health",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
