"""
Application Layer - Use Cases and Orchestration

Responsibility:
    Coordinates the report pipeline between the API, the Domain layer
    and the infrastructure collaborators (renderer, object store,
    metadata repository).

Contains:
    - ports: Protocols for collaborators implemented in Infrastructure
    - services: ReportService orchestrator

Does NOT contain:
    - Domain business rules (belongs to Domain layer)
    - HTTP handling (belongs to API layer)
    - Infrastructure details (belongs to Infrastructure layer)
"""
