"""
Vintage Audio Vault Backend

Catalog of vintage audio equipment with social features and AI-assisted
identification and valuation.

Package Structure:
==================
    audio_vault/
    ├── api/        ← FastAPI application
    ├── worker/     ← Background tasks (keep-alive pinger)
    ├── shared/     ← Shared code (models, services, etc.)
    └── config/     ← Configuration

Running the Application:
========================
    # API Server
    uvicorn audio_vault.api.main:app --reload

    # Database migrations
    alembic upgrade head
"""
