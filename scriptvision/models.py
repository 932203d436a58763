"""
Request and result types shared by the prompt, style and image components.
"""

import base64
import io
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

from PIL import Image


class AspectRatio(str, Enum):
    """Output aspect ratios accepted by the image model."""

    SQUARE = "1:1"
    PORTRAIT = "3:4"
    LANDSCAPE = "4:3"
    VERTICAL = "9:16"
    WIDESCREEN = "16:9"

    @classmethod
    def coerce(cls, value: Union["AspectRatio", str]) -> "AspectRatio":
        """Accept either an AspectRatio or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(ratio.value for ratio in cls)
            raise ValueError(f"Unsupported aspect ratio {value!r}; expected one of: {allowed}") from None


@dataclass
class PromptGenerationResult:
    """Prompts produced from a script plus the exact instruction sent."""

    prompts: List[str] = field(default_factory=list)
    request_prompt: str = ""


@dataclass
class ImageAnalysisInput:
    """A base64-encoded image and its MIME type."""

    base64: str
    mime_type: str

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: Optional[str] = None) -> "ImageAnalysisInput":
        """
        Wrap raw image bytes, detecting the MIME type with Pillow when not given.

        Args:
            data: Encoded image file contents
            mime_type: Optional explicit MIME type

        Returns:
            ImageAnalysisInput: Base64 payload ready for analysis

        Raises:
            ValueError: If the MIME type cannot be determined
        """
        if mime_type is None:
            try:
                with Image.open(io.BytesIO(data)) as image:
                    mime_type = Image.MIME.get(image.format or "")
            except OSError as e:
                raise ValueError(f"Unrecognized image data: {str(e)}") from e
            if not mime_type:
                raise ValueError("Could not determine the image MIME type")

        return cls(base64=base64.b64encode(data).decode("ascii"), mime_type=mime_type)

    @classmethod
    def from_path(cls, path: Union[str, Path], mime_type: Optional[str] = None) -> "ImageAnalysisInput":
        """Load an image file from disk."""
        return cls.from_bytes(Path(path).read_bytes(), mime_type)

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.base64, validate=True)


@dataclass
class ImageResult:
    """Outcome of one image request: either image data or an error message."""

    base64: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.base64 is not None

    @classmethod
    def success(cls, image_bytes: bytes) -> "ImageResult":
        return cls(base64=base64.b64encode(image_bytes).decode("ascii"), error=None)

    @classmethod
    def failure(cls, error: str) -> "ImageResult":
        return cls(base64=None, error=error)

    def to_bytes(self) -> Optional[bytes]:
        """Decode the image data, or None for a failed result."""
        if self.base64 is None:
            return None
        return base64.b64decode(self.base64)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"base64": self.base64, "error": self.error}
