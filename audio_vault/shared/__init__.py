"""
Shared Module

Contains code shared between the API and the worker:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer
- Services: Business logic layer
- Schemas: Pydantic request/response models
- Core: Logging, exceptions, utilities
- Adapters: External service integrations

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database session management
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── services/       ← Business logic
    ├── schemas/        ← Pydantic schemas
    ├── adapters/       ← External services
    └── utils/          ← Utilities

Usage:
======
    from audio_vault.shared.models import User, AudioItem
    from audio_vault.shared.repositories import UserRepository
    from audio_vault.shared.services import AuthService
    from audio_vault.shared.schemas import UserCreate, AuthResponse
    from audio_vault.shared.core import logger, VaultException
"""
