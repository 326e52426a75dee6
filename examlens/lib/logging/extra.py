import inspect
import json
import logging
import string
import textwrap
import typing as t

import pygments
from pygments.formatters import Terminal256Formatter
from pygments.lexers.data import JsonLexer  # pyright: ignore [reportMissingTypeStubs]
from pygments.style import Style

from .json import JSONEncoder
from .style import LogStyle

ReservedKeys = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {
    "asctime",
    "color_message",
    "exception",
    "id",
    "message",
}


class ExtraFormatter(logging.Formatter):
    """Render a record with a `base` formatter, then append its `extra` fields as JSON.

    Multi-line messages are re-indented to line up under the first line. On
    a TTY the JSON is highlighted with pygments unless `no_color` is set.
    """

    def __init__(
        self,
        base: type[logging.Formatter],
        format: str | None,
        datefmt: str | None = None,
        indent: bool = True,
        pyg_style: t.Type[Style] = LogStyle,
        style: t.Literal["%", "{", "$"] = "%",
        validate: bool = True,
        *,
        defaults: t.Any = None,
        no_color: bool = False,
        **kwargs: t.Any,
    ):
        self.base = base(format, datefmt=datefmt, style=style, validate=validate, defaults=defaults, **kwargs)
        self.pyg_style = pyg_style
        self.handler = None
        self.indent = indent
        self.no_color = no_color

    def format(self, record: logging.LogRecord) -> str:
        if "color_message" in record.__dict__:
            # uvicorn ships a pre-colored variant of its messages
            record.msg = record.__dict__.pop("color_message")

        msg = record.getMessage()
        if "\n" in msg:
            formatted = self.base.format(record)
            idx = formatted.find(msg)
            indent = " " * len([c for c in formatted[:idx] if c in string.printable])
            line, *lines = msg.splitlines()
            body = textwrap.indent("\n".join(lines), prefix=indent)
            record.msg = record.message = f"{line}\n{body}"
            record.args = None
        message = self.base.format(record)

        d = record.__dict__
        extra = {k: d[k] for k in d.keys() - ReservedKeys}
        if not extra:
            return message

        if self.handler is None:
            # we fix up our handler because we won't have access to it during construction
            frame = inspect.currentframe()
            caller = frame.f_back if frame is not None else None
            if caller is not None and isinstance(caller.f_locals.get("self"), logging.Handler):
                self.handler = caller.f_locals["self"]

        js = json.dumps(extra, sort_keys=True, indent=(4 if self.indent else None), cls=JSONEncoder)
        stream = getattr(self.handler, "stream", None)
        if not self.no_color and stream is not None and stream.isatty():
            hl = pygments.highlight  # pyright: ignore [reportUnknownMemberType, reportUnknownVariableType]
            ps = hl(js, JsonLexer(), Terminal256Formatter(style=self.pyg_style), None)
        else:
            ps = js
        return message + " " + ps.strip()

    def __getattr__(self, name: str) -> t.Any:
        if name == "base":
            raise AttributeError(name)
        return getattr(self.base, name)
