from __future__ import annotations

import enum
import functools
import json as pyjson
import typing as t

import fastapi
import pydantic as p
import starlette.background

JSONPrimitive = str | int | float | bool | None
JSONValue = JSONPrimitive | list["JSONValue"] | dict[str, "JSONValue"]


# encoders
def encode_enum(obj: enum.Enum) -> t.Any:
    return obj.value


def encode_pydantic(obj: p.BaseModel) -> dict[str, JSONValue]:
    # our BaseModel dumps by alias, so wire names survive
    return obj.model_dump(mode="json")


def encode_secret(obj: p.SecretStr) -> str:
    return str(obj)


@functools.cache  # noqa: E302
def _encoder_map() -> dict[type, t.Callable[[t.Any], JSONValue]]:
    return {
        enum.Enum: encode_enum,
        p.SecretStr: encode_secret,
    }


# stdlib-compatible JSON encoder
class JSONEncoder(pyjson.JSONEncoder):
    def default(self, o: t.Any) -> JSONValue:
        if isinstance(o, p.BaseModel):
            return encode_pydantic(o)

        encoders = _encoder_map()
        for tp, encoder in encoders.items():
            if isinstance(o, tp):
                return encoder(o)

        return pyjson.JSONEncoder.default(self, o)


def dumps(
    obj: t.Any,
    *,
    ensure_ascii: bool = False,
    cls: type[pyjson.JSONEncoder] = JSONEncoder,
    indent: int | str | None = None,
    sort_keys: bool = False,
    **kw: t.Any,
) -> str:
    return pyjson.dumps(obj, ensure_ascii=ensure_ascii, cls=cls, indent=indent, sort_keys=sort_keys, **kw)


# FastAPI compatibility
class FastAPIJSONResponse(fastapi.responses.JSONResponse):
    def __init__(
        self,
        content: t.Any,
        status_code: int = 200,
        headers: t.Mapping[str, str] | None = None,
        media_type: str | None = None,
        background: starlette.background.BackgroundTask | None = None,
    ):
        super().__init__(
            jsonable_encoder(content),
            status_code=status_code,
            headers=headers,
            media_type=media_type,
            background=background,
        )

    def render(self, content: t.Any) -> bytes:
        return pyjson.dumps(
            content, ensure_ascii=False, cls=JSONEncoder, allow_nan=False, indent=None, separators=(",", ":")
        ).encode("utf-8")


def jsonable_encoder(obj: t.Any) -> JSONValue:
    import fastapi.encoders

    if isinstance(obj, p.BaseModel):
        return jsonable_encoder(encode_pydantic(obj))
    return fastapi.encoders.jsonable_encoder(obj, custom_encoder=_encoder_map())
