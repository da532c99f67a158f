from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

_IMAGE_URL_PREFIXES = ("http://", "https://", "data:image/")


class SolveRequest(BaseModel):
    """
    Problem submitted for solving.

    At least one of `prompt` / `image` must be non-empty; that check happens in
    the route so it can answer with the plain `{"error": ...}` envelope.
    """

    model_config = ConfigDict(extra="ignore")

    subject: str | None = Field(
        default=None,
        description="Free-form subject label, e.g. `math`, `physics`, `chemistry`.",
        examples=["physics"],
    )
    prompt: str | None = Field(
        default=None,
        description="Problem text.",
        examples=["A car accelerates from 0 to 20 m/s in 4 s. Find a."],
    )
    image: str | None = Field(
        default=None,
        description="Problem image as an http(s) URL or a `data:image/...;base64,` URL.",
    )

    @field_validator("image")
    @classmethod
    def _image_must_be_url(cls, value: str | None) -> str | None:
        if not value:
            return value
        if not value.lower().startswith(_IMAGE_URL_PREFIXES):
            raise ValueError("image must be an http(s) URL or a data:image URL")
        return value

    @property
    def has_problem(self) -> bool:
        return bool(self.prompt) or bool(self.image)


class SolveOut(BaseModel):
    result: str = Field(
        description="Formula-only answer. May be empty when no math could be extracted.",
        examples=["a = 20/4\na = 5"],
    )
