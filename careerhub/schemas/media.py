"""Media upload schemas."""

from pydantic import Field

from careerhub.schemas.common import CamelModel
from careerhub.utils.constants import MediaType


class UploadRequest(CamelModel):
    file: str = Field(..., min_length=1, description="Base64 data URI")
    type: MediaType


class UploadResult(CamelModel):
    url: str
    public_id: str
