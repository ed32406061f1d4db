"""Infrastructure layer - Adapters for the domain ports.

Structure:
- acl/: In-memory ACL provider
- persistence/: SQLAlchemy database, models and ACL provider
- logging/: structlog logging adapter
"""
