import logging

from classifieds.core.config import config

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure root logging once for the API process and the seeders."""
    level_name = (level or config.log_level).upper()
    logging.basicConfig(
        format=LOG_FORMAT,
        level=getattr(logging, level_name, logging.INFO),
    )
    # sqlalchemy echo is controlled by config.echo_sql, keep its logger quiet otherwise
    if not config.echo_sql:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
