"""Effect descriptor: everything that distinguishes one effect from another."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from app.effects.fields import ParamField

# Parameters after validation, keyed by request field name.
Params = Dict[str, Any]

# Base64 encodings of fetched source media, keyed by request field name.
InlineMedia = Dict[str, str]

PayloadBuilder = Callable[[Params, InlineMedia], Dict[str, Any]]


class AuthScheme(str, Enum):
    BEARER = "bearer"
    API_KEY = "api_key"


@dataclass
class EffectSpec:
    """Declarative description of one generative effect.

    slug:          URL path segment, e.g. "anime-filter"
    endpoint:      vendor endpoint path, e.g. "kling-kiss"
    fields:        validated request parameters
    build_payload: (params, inline_media) -> vendor JSON body
    result_key:    response key the result URL is also reported under
    result_path:   where the URL lives in a JSON vendor response
    inline_media:  URL fields to download and base64-encode before the call
    binary_types:  content-type fragments treated as the artifact itself
    upload_folder: storage folder for binary artifacts; None inlines them
    retention_hours: overrides the default task retention window
    """
    slug: str
    name: str
    endpoint: str
    fields: List[ParamField]
    build_payload: PayloadBuilder
    result_key: str = "imageUrl"
    result_path: Tuple[Union[str, int], ...] = ("images", 0, "url")
    auth: AuthScheme = AuthScheme.API_KEY
    inline_media: Sequence[str] = ()
    binary_types: Sequence[str] = ()
    upload_folder: Optional[str] = None
    retention_hours: Optional[float] = None
    accept: str = "application/json"
    description: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def validate(self, body: Dict[str, Any]) -> Params:
        """Return cleaned parameters or raise EffectValidationError on the first bad field."""
        return {f.name: f.clean(body) for f in self.fields}

    def is_binary(self, content_type: str) -> bool:
        content_type = content_type.lower()
        return any(kind in content_type for kind in self.binary_types)

    def retention_seconds(self, default_hours: float) -> float:
        hours = self.retention_hours if self.retention_hours is not None else default_hours
        return hours * 3600

    def describe(self) -> Dict[str, Any]:
        return {
            "effect": self.slug,
            "name": self.name,
            "description": self.description,
            "result_key": self.result_key,
            "parameters": [f.describe() for f in self.fields],
        }


def extract_path(data: Any, path: Sequence[Union[str, int]]) -> Any:
    """Walk nested dicts/lists; None if any step is missing."""
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or len(current) <= step:
                return None
            current = current[step]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(step)
        if current is None:
            return None
    return current
