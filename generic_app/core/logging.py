import logging
import sys


class ContextFormatter(logging.Formatter):
    """Custom formatter that handles optional entity and action fields."""
    def format(self, record):
        if not hasattr(record, 'entity'):
            record.entity = '-'
        if not hasattr(record, 'action'):
            record.action = '-'
        return super().format(record)


def configure_logging(level: int = logging.INFO) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ContextFormatter(
        "%(asctime)s %(levelname)s %(name)s [entity=%(entity)s action=%(action)s] - %(message)s"
    ))
    logging.basicConfig(
        level=level,
        handlers=[handler],
    )
