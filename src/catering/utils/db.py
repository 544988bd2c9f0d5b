"""Schema management for SQL-backed catering providers."""

from protean.domain import Domain
from sqlalchemy import create_engine


def _rdbms_providers(domain: Domain):
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] in ("sqlite", "postgresql"):
            yield provider


def _register_tables(domain: Domain, provider) -> None:
    # A table only appears in the provider's metadata once its DAO is built
    records = (
        list(domain.registry.aggregates.values())
        + list(domain.registry.entities.values())
        + list(domain.registry.projections.values())
    )
    for record in records:
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain):
    """Create tables for orders, their status history and the order board."""
    with domain.domain_context():
        for provider in _rdbms_providers(domain):
            _register_tables(domain, provider)
            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))


def drop_db(domain: Domain):
    with domain.domain_context():
        for provider in _rdbms_providers(domain):
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
