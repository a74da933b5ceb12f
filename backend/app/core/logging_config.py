import logging


def configure_logging(level_name: str = "INFO") -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    logging.getLogger("app").setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
