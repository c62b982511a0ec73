from protean.domain import Domain
from sqlalchemy import create_engine


def _load_models(domain: Domain, provider_name: str) -> None:
    # Accessing _dao forces each element's SQLAlchemy model to be built and
    # registered with the provider's metadata.
    registries = (
        domain.registry.aggregates,
        domain.registry.entities,
        domain.registry.projections,
    )
    for registry in registries:
        for _, record in registry.items():
            if record.cls.meta_.provider == provider_name:
                domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain):
    """Create tables for every RDBMS-backed provider of the domain."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in ("sqlite", "postgresql"):
                engine = create_engine(provider.conn_info["database_uri"])
                _load_models(domain, provider.name)
                provider._metadata.create_all(engine)


def drop_db(domain: Domain):
    """Drop tables for every RDBMS-backed provider of the domain."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in ("sqlite", "postgresql"):
                engine = create_engine(provider.conn_info["database_uri"])
                _load_models(domain, provider.name)
                provider._metadata.drop_all(engine)
