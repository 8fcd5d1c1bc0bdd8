"""
Project configuration for a generation run.
"""
import json
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from comptree.core.error_handling import InvalidConfigurationError

_PATH_KEYS = (
    ('root_component_path', 'rootComponentPath'),
    ('src_path', 'srcPath'),
    ('client_path', 'clientPath'),
)


class ProjectConfig(BaseModel):
    """Paths describing the project whose components are analysed.

    Accepts the camelCase keys of the redez JSON config file as well as
    the snake_case field names.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    root_component_path: str = Field(alias='rootComponentPath')
    src_path: str = Field(alias='srcPath')
    client_path: Optional[str] = Field(default=None, alias='clientPath')
    log_asts: bool = Field(default=False, alias='logASTs')

    @field_validator('root_component_path', 'src_path', 'client_path')
    @classmethod
    def _absolute(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        if not value.strip():
            raise ValueError('path must not be empty')
        return os.path.abspath(value)

    @property
    def project_path(self) -> str:
        """Directory the debug logs go under; the source root's parent by default."""
        return self.client_path or os.path.dirname(self.src_path)

    def validate_paths(self) -> "ProjectConfig":
        """Check that the configured paths point at real files and directories."""
        if not os.path.isdir(self.src_path):
            raise InvalidConfigurationError('src_path', self.src_path, 'not a directory')
        if not os.path.isfile(self.root_component_path):
            raise InvalidConfigurationError('root_component_path', self.root_component_path, 'not a file')
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Optional[str] = None) -> "ProjectConfig":
        """Build a config, resolving relative paths against ``base_dir`` when given."""
        data = dict(data)
        if base_dir is not None:
            for name, alias in _PATH_KEYS:
                for key in (name, alias):
                    value = data.get(key)
                    if isinstance(value, str) and value and not os.path.isabs(value):
                        data[key] = os.path.join(base_dir, value)
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            setting = '.'.join(str(part) for part in first['loc'])
            raise InvalidConfigurationError(setting, first.get('input'), first['msg']) from e

    @classmethod
    def from_file(cls, path: str) -> "ProjectConfig":
        """Load a JSON config file. ``client_path`` defaults to the file's directory."""
        try:
            with open(path, 'r', encoding='utf8') as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            raise InvalidConfigurationError('config_file', path, str(e)) from e
        if not isinstance(data, dict):
            raise InvalidConfigurationError('config_file', path, 'expected a JSON object')
        base_dir = os.path.dirname(os.path.abspath(path))
        if 'client_path' not in data and 'clientPath' not in data:
            data['client_path'] = base_dir
        return cls.from_dict(data, base_dir=base_dir)
