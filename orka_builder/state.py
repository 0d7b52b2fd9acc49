"""
Typed pipeline state shared between the host and the image step.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import OrkaConfig
from .ui import Ui


class StepAction(str, Enum):
    CONTINUE = "continue"
    HALT = "halt"


class ImageResultKind(str, Enum):
    OK = "ok"
    COMMIT_FAILED = "commit_failed"
    SAVE_FAILED = "save_failed"


@dataclass(frozen=True)
class ImageResult:
    kind: ImageResultKind
    error: Optional[Exception] = None

    @classmethod
    def ok(cls):
        return cls(ImageResultKind.OK)

    @classmethod
    def commit_failed(cls, error):
        return cls(ImageResultKind.COMMIT_FAILED, error)

    @classmethod
    def save_failed(cls, error):
        return cls(ImageResultKind.SAVE_FAILED, error)

    @property
    def failed(self) -> bool:
        return self.kind is not ImageResultKind.OK


@dataclass
class StepContext:
    config: OrkaConfig
    ui: Ui
    vmid: str
    token: str
    error: Optional[Exception] = None
    cancelled: bool = False
    halted: bool = False
    # Written by the image step's run, read by its cleanup
    image_result: Optional[ImageResult] = None
