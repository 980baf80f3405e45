"""CLI adapter creating the ledger tables and default settings."""

from commission_desk.infrastructure.container import (
    build_database_adapter,
    build_settings,
)
from commission_desk.infrastructure.logging.logger import get_app_logger
from commission_desk.infrastructure.schema import create_schema, seed_defaults


def main() -> None:
    """Create missing tables and seed the default rest percentage."""
    logger = get_app_logger()
    settings = build_settings()
    engine = build_database_adapter(settings).get_engine()
    create_schema(engine)
    seed_defaults(engine)
    logger.info(f"Database ready at {engine.url.render_as_string()}")
    print(f"Database ready: {engine.url.render_as_string()}")


if __name__ == "__main__":  # pragma: no cover
    main()
