from contextvars import ContextVar
from contextlib import contextmanager


request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
run_id_var: ContextVar[str | None] = ContextVar("run_id", default=None)


@contextmanager
def pipeline_run_context(run_id: int | str | None):
    token = run_id_var.set(str(run_id) if run_id is not None else None)
    try:
        yield
    finally:
        run_id_var.reset(token)
