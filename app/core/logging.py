import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

def configure_logging(level: str = "INFO") -> None:
    """Installe un handler console unique sur le logger racine."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # Le logger racine peut déjà avoir un handler (uvicorn, pytest)
    logging.getLogger().setLevel(level.upper())
