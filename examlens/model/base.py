import typing as t

import pydantic as p


class BaseModel(p.BaseModel):
    def model_dump(self, **kwargs: t.Any) -> dict[str, t.Any]:
        # invert default by_alias to True
        kwargs.setdefault("by_alias", True)
        return super().model_dump(**kwargs)

    def model_dump_json(self, **kwargs: t.Any) -> str:
        kwargs.setdefault("by_alias", True)
        return super().model_dump_json(**kwargs)
