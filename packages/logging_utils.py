import logging

from .config import LOG_LEVEL
from .request_context import request_id_var, run_id_var


LOG_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s "
    "request_id=%(request_id)s run_id=%(run_id)s %(message)s"
)


def _stamp(record: logging.LogRecord) -> logging.LogRecord:
    if not hasattr(record, "request_id"):
        record.request_id = request_id_var.get() or "-"
    if not hasattr(record, "run_id"):
        record.run_id = run_id_var.get() or "-"
    return record


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        record.run_id = run_id_var.get() or "-"
        return True


class SafeFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return super().format(_stamp(record))


def setup_logging(level: str | None = None) -> None:
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    # Third-party loggers may emit before our filter is attached.
    old_factory = logging.getLogRecordFactory()

    def record_factory(*args, **kwargs):
        return _stamp(old_factory(*args, **kwargs))

    logging.setLogRecordFactory(record_factory)
    logging.basicConfig(level=(level or LOG_LEVEL), format=LOG_FORMAT)

    root = logging.getLogger()
    root.addFilter(ContextFilter())
    formatter = SafeFormatter(LOG_FORMAT)
    for handler in root.handlers:
        handler.setFormatter(formatter)
        handler.addFilter(ContextFilter())
