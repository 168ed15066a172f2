"""Schema management for SQL-backed providers."""

import structlog
from protean.domain import Domain
from sqlalchemy import create_engine

logger = structlog.get_logger(__name__)

_SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for name, provider in domain.providers.items():
        if provider.conn_info["provider"] in _SQL_PROVIDERS:
            yield name, provider


def setup_db(domain: Domain) -> None:
    """Create tables for every aggregate and entity stored in a SQL provider."""
    with domain.domain_context():
        for name, provider in _sql_providers(domain):
            # Touching the DAO registers the model's table on the provider's metadata
            records = list(domain.registry.aggregates.values()) + list(domain.registry.entities.values())
            for record in records:
                if record.cls.meta_.provider == name:
                    domain.repository_for(record.cls)._dao  # noqa: B018

            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))
            logger.info("Schema created", provider=name)


def drop_db(domain: Domain) -> None:
    """Drop every table registered on SQL providers."""
    with domain.domain_context():
        for name, provider in _sql_providers(domain):
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
            logger.info("Schema dropped", provider=name)
