import logging
import os

import yaml
from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator, model_validator

logger = logging.getLogger(__name__)

PROJECT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


# Config validation
class OrkaConfig(BaseModel):
    endpoint: str = Field(validation_alias=AliasChoices('endpoint', 'orka_endpoint'))
    image_name: str = ''
    skip_image_creation: bool = Field(
        default=False, validation_alias=AliasChoices('skip_image_creation', 'no_create_image'))
    use_precopy: bool = Field(
        default=False, validation_alias=AliasChoices('use_precopy', 'image_precopy'))

    @field_validator('endpoint')
    @classmethod
    def check_endpoint(cls, value):
        value = value.strip().rstrip('/')
        if not value.startswith(('http://', 'https://')):
            raise ValueError(f"Invalid endpoint '{value}': must be an http:// or https:// URL")
        return value

    @model_validator(mode='after')
    def check_image_name(self):
        # Saving creates a new image, so it needs a name. Committing reuses the attached one.
        if not self.skip_image_creation and not self.use_precopy and not self.image_name:
            raise ValueError("image_name is required unless no_create_image or image_precopy is set")
        return self


def load_config(path=None):
    """
    Load the Orka section of a YAML config file.

    :param path: Config file path. Defaults to $ORKA_BUILDER_CONFIG, then
                 secrets/config.orka.yaml in the project directory
    :return: OrkaConfig
    """
    if path is None:
        path = os.getenv('ORKA_BUILDER_CONFIG', os.path.join(PROJECT_DIR, 'secrets', 'config.orka.yaml'))

    with open(path, 'r') as f:
        raw_config = yaml.safe_load(f) or {}

    try:
        config = OrkaConfig(**raw_config.get('orka', {}))
    except ValidationError as e:
        raise ValueError(f"Invalid config: {e}")
    logger.info(f"Loaded Orka config from {path}")
    return config


def load_token(path=None):
    """Read the Orka bearer token from a file ($ORKA_TOKEN_FILE or secrets/orka-token.txt)."""
    if path is None:
        path = os.getenv('ORKA_TOKEN_FILE', os.path.join(PROJECT_DIR, 'secrets', 'orka-token.txt'))

    with open(path, 'r') as f:
        token = f.read().strip()
    if not token:
        raise ValueError(f"Token file '{path}' is empty")
    return token
