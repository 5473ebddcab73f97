"""
API Layer - FastAPI Presentation Layer

Responsibility:
    HTTP interface for the report service. Handles requests and responses,
    delegates every operation to ReportService. No business logic.

Contains:
    - FastAPI routers (excel)
    - Request/Response models (Pydantic)
    - Dependency injection setup
    - Middleware configuration (CORS, logging)

Does NOT contain:
    - Business logic (belongs to Domain layer)
    - Pipeline orchestration (belongs to Application layer)
    - Storage operations (belongs to Infrastructure layer)
"""
