import functools
import typing as t
from pathlib import Path

import pydantic as p
import yaml
from pydantic_settings import PydanticBaseSettingsSource
from pydantic_settings import SettingsError

from examlens.model import DeploymentEnvironment

SkipKeys: t.Final[frozenset[str]] = frozenset({"env", "root", "override"})


class CurrentState(t.TypedDict, total=False):
    root: t.Required[p.AnyUrl]
    env: t.Required[DeploymentEnvironment]


class SettingsCurrentState(CurrentState, total=False):
    override: t.Required[tuple[str, ...]]


class SettingsSource(PydanticBaseSettingsSource):
    def __call__(self) -> dict[str, t.Any]:
        # we expect init kwargs to have config root and env in them
        data: dict[str, t.Any] = {}

        for field_name, field in self.settings_cls.model_fields.items():
            try:
                field_value, field_key, value_is_complex = self.get_field_value(field, field_name)
                field_value = self.prepare_field_value(field_name, field, field_value, value_is_complex)
            except KeyError:
                continue
            except ValueError as e:
                raise SettingsError(f"error parsing value for field {field_name!r} from source {self!r}") from e
            except Exception as e:
                raise SettingsError(f"error getting value for field {field_name!r} from source {self!r}") from e

            data[field_key] = field_value
        return data


class OverrideSettingsSource(SettingsSource):
    """Apply `key.path=value` overrides, taking precedence over YAML files.

    Values are parsed as YAML, so `-o evaluation.count_mismatch=reject` and
    `-o llm.evaluation.max_tokens=1000` both do what they look like.
    """

    @functools.cached_property
    def parsed_options(self) -> dict[str, t.Any]:
        current_state = t.cast(SettingsCurrentState, self.current_state)
        od: dict[str, t.Any] = {}
        for o in current_state.get("override", ()):
            if "=" not in o:
                raise ValueError(f"override must look like key.path=value: {o!r}")
            k, v = [s.strip() for s in o.split("=", 1)]

            target = od
            path = k.split(".")
            for key in path[:-1]:
                target = target.setdefault(key, {})
            target[path[-1]] = yaml.safe_load(v)
        return od

    def get_field_value(self, field: p.fields.FieldInfo, field_name: str) -> tuple[t.Any, str, bool]:
        if field_name in SkipKeys or field_name not in self.parsed_options:
            raise KeyError(field_name)

        # pydantic-settings deep-merges nested dicts across sources, so only
        # the overridden keys are returned
        return self.parsed_options[field_name], field_name, False

    def prepare_field_value(
        self, field_name: str, field: p.fields.FieldInfo, value: t.Any, value_is_complex: bool
    ) -> t.Any:
        return value


class YAMLCascadingSettingsSource(SettingsSource):
    """Load each settings field from `<root>/<field>.yaml`.

    Outside of the local environment, `<root>/env.d/<env>/<field>.yaml` takes
    precedence when present.
    """

    @functools.cached_property
    def load_paths(self) -> list[Path]:
        current_state = t.cast(SettingsCurrentState, self.current_state)
        root = current_state["root"]
        env = current_state["env"]
        assert root.scheme == "file" and root.path is not None, "root is not a legible location of YAML files"

        paths = [Path(root.path)]
        if env is not DeploymentEnvironment.Local:
            # we don't have a special directory for local/ that's just root
            paths.append(Path(root.path) / "env.d" / env.value)
        return paths

    def get_field_value(self, field: p.fields.FieldInfo, field_name: str) -> tuple[t.Any, str, bool]:
        if field_name in SkipKeys:
            raise KeyError(field_name)

        yamls: list[str] = []
        for path in self.load_paths:
            fn = path / f"{field_name}.yaml"
            if fn.exists():
                yamls.append(fn.read_text(encoding="utf8"))
        if not yamls:
            raise KeyError(field_name)
        return yamls, field_name, True

    def prepare_field_value(
        self, field_name: str, field: p.fields.FieldInfo, value: t.Any, value_is_complex: bool
    ) -> t.Any:
        if not value_is_complex:
            return value

        # for complex values, we expect to be given a list[str] representing
        # the yamls encountered along the load_paths
        if not isinstance(value, list):
            raise ValueError(field_name)
        yamls = t.cast(list[str], value)
        return yaml.safe_load(yamls[-1])
