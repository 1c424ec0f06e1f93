from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, TypeVar, get_args, get_origin, get_type_hints

import yaml

T = TypeVar("T", bound="BaseConfig")

__all__ = ["BaseConfig"]


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration class with utility methods."""

    @classmethod
    def from_yaml(cls: type[T], path: str) -> T:
        """Load configuration from a YAML file."""
        with open(path) as f:
            return cls.from_yaml_text(f.read())

    @classmethod
    def from_yaml_text(cls: type[T], text: str) -> T:
        """Load configuration from YAML source text."""
        data = yaml.safe_load(text)
        if not isinstance(data, dict):
            raise ValueError(f"{cls.__name__} expects a YAML mapping, got {type(data).__name__}")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls: type[T], data: dict[str, Any]) -> T:
        """Create configuration from a dictionary, recursively handling nested configs."""
        hints = get_type_hints(cls)
        kwargs = {}
        for k, v in data.items():
            if k not in hints:
                continue
            field_type = hints[k]
            # Handle nested BaseConfig
            if _is_config(field_type) and isinstance(v, dict):
                kwargs[k] = field_type.from_dict(v)
            # Handle tuple[BaseConfig, ...] from YAML sequences or to_dict() output
            elif get_origin(field_type) is tuple and isinstance(v, list | tuple):
                item_type = get_args(field_type)[0]
                if _is_config(item_type):
                    kwargs[k] = tuple(item_type.from_dict(item) for item in v)
                else:
                    kwargs[k] = tuple(v)
            else:
                kwargs[k] = v
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return asdict(self)


def _is_config(field_type: Any) -> bool:
    return isinstance(field_type, type) and issubclass(field_type, BaseConfig)
