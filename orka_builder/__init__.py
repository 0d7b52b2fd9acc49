from .client import (
    OrkaClient,
    OrkaAPIError,
    OrkaRequestError,
    OrkaResponseError,
    ImageCommitRequest,
    ImageCommitResponse,
    ImageSaveRequest,
    ImageSaveResponse,
)
from .config import OrkaConfig, load_config, load_token
from .state import StepAction, StepContext, ImageResult, ImageResultKind
from .step_create_image import StepCreateImage
from .ui import Ui, LoggingUi

__all__ = [
    'OrkaClient',
    'OrkaAPIError',
    'OrkaRequestError',
    'OrkaResponseError',
    'ImageCommitRequest',
    'ImageCommitResponse',
    'ImageSaveRequest',
    'ImageSaveResponse',
    'OrkaConfig',
    'load_config',
    'load_token',
    'StepAction',
    'StepContext',
    'ImageResult',
    'ImageResultKind',
    'StepCreateImage',
    'Ui',
    'LoggingUi',
]
