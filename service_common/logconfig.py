import logging
import os

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def configure_logging(service_name: str, log_path=None, level: str = "INFO"):
    """Send logs to ``{log_path}/{service_name}.log`` or to stderr when no path is set."""
    if log_path:
        os.makedirs(log_path, exist_ok=True)
        logging.basicConfig(
            filename=f'{log_path}/{service_name}.log',
            level=level,
            filemode='a',
            format=LOG_FORMAT
        )
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT)
