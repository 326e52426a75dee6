import typing as t

from examlens.lib.json import JSONEncoder as BaseJSONEncoder
from examlens.lib.json import JSONValue


class JSONEncoder(BaseJSONEncoder):
    """Encoder for log extras: anything unencodable is rendered with repr()."""

    def default(self, o: t.Any) -> JSONValue:
        try:
            return super().default(o)
        except TypeError:
            return repr(o)
