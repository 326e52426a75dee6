import inspect
import logging.config
import typing as t

from .logging import TraceLogLevelLogger


def trace(msg: str, *args: t.Any, **kwargs: t.Any):
    if len(logging.root.handlers) == 0:
        logging.basicConfig()
    t.cast(TraceLogLevelLogger, logging.root).trace(msg, *args, **kwargs)


class LoggingProvider(object):
    Function: t.Final[t.Literal["fn"]] = "fn"
    Module: t.Final[t.Literal["mod"]] = "mod"

    def __init__(self, config: dict[str, t.Any], debug: bool):
        LoggingProvider.create_trace_loglevel()
        logging.config.dictConfig(config)
        if debug:
            self.capture_warnings(True)

    @staticmethod
    def create_trace_loglevel():
        """
        Create a log level TRACE = 5
        """
        logging.setLoggerClass(TraceLogLevelLogger)
        logging.addLevelName(5, "TRACE")
        logging.TRACE = 5  # pyright: ignore [reportAttributeAccessIssue]
        logging.trace = trace  # pyright: ignore [reportAttributeAccessIssue]

    @classmethod
    def get_logger(
        cls, scope: t.Literal["mod", "fn"] = "mod", name: str | None = None, n_frames: int = 1
    ) -> TraceLogLevelLogger:
        if name:
            return t.cast(TraceLogLevelLogger, logging.getLogger(name))

        frame = inspect.stack()[n_frames]
        mod = frame.frame.f_globals["__name__"]
        if scope == cls.Function:
            name = f"{mod}.{frame.function}"
        else:
            name = mod
        return t.cast(TraceLogLevelLogger, logging.getLogger(name))

    @staticmethod
    def capture_warnings(capture: bool):
        logging.captureWarnings(capture)
