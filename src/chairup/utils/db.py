"""Create and drop SQL tables for the domain's database providers.

The memory provider keeps no schema, so both functions do nothing for it.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

_SQL_PROVIDERS = ("sqlite", "postgresql")


def _register_models(domain: Domain, provider):
    # Touching ``_dao`` makes Protean build the SQLAlchemy model for the aggregate
    for _, record in domain.registry.aggregates.items():
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018

    for _, record in domain.registry.entities.items():
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain):
    """Create tables for every SQL provider."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in _SQL_PROVIDERS:
                _register_models(domain, provider)
                provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))


def drop_db(domain: Domain):
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in _SQL_PROVIDERS:
                provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
