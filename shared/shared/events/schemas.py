from pydantic import BaseModel, ConfigDict, Field


class ImageMessage(BaseModel):
    """SQS message: an uploaded image is ready to be finalized."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    file_id: str = ""
    file_extension: str = ""
    directory: str = ""
    callback_url: str = ""
    width: int = Field(default=0, ge=0)
    height: int = Field(default=0, ge=0)


class CallbackMessage(BaseModel):
    """SQS message: a finalized image whose owner should be called back."""

    model_config = ConfigDict(extra="ignore")

    callback_url: str = ""
    bucket: str = ""
    directory: str = ""
    file_id: str = ""
    file_extension: str = ""
    width: int = 0
    height: int = 0
    size_bytes: int = 0


class CallbackPayload(BaseModel):
    """JSON body POSTed to the callback URL."""

    model_config = ConfigDict(extra="forbid")

    bucket: str
    directory: str
    file_id: str
    file_extension: str
    width: int
    height: int
    size_bytes: int
