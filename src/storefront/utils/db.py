"""Schema management for SQLAlchemy-backed Protean providers.

The memory provider needs none of this; ``setup_db`` and ``drop_db`` are
no-ops unless ``domain.toml`` points a database at sqlite or postgresql.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

_RDBMS_PROVIDERS = ("sqlite", "postgresql")


def _rdbms_providers(domain: Domain):
    return [provider for provider in domain.providers.values() if provider.conn_info["provider"] in _RDBMS_PROVIDERS]


def _register_models(domain: Domain, provider):
    # Touching the DAO makes the provider build and register the table model
    records = [*domain.registry.aggregates.values(), *domain.registry.entities.values()]
    for record in records:
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain):
    """Create tables for every aggregate and entity stored in a relational database."""
    with domain.domain_context():
        for provider in _rdbms_providers(domain):
            _register_models(domain, provider)
            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))


def drop_db(domain: Domain):
    with domain.domain_context():
        for provider in _rdbms_providers(domain):
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
