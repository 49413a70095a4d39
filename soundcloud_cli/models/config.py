"""
Settings for a download run, merged from the INI file and the command line.
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

_LIMITS = {
    "max_workers": (1, 64),
    "track_attempts": (1, 20),
    "request_attempts": (1, 50),
}
_INTERNAL_FIELDS = frozenset({"source_url"})


class DownloadConfig(BaseModel):
    """Validated settings; assignments are re-validated too."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    # Concurrency and retries
    max_workers: int = 8
    track_attempts: int = 5
    request_attempts: int = 10

    # Output
    output_dir: str = "."
    embed_art: bool = True

    # Set at runtime, never written to the INI file
    source_url: str = Field("", repr=False)

    @field_validator("max_workers", "track_attempts", "request_attempts")
    @classmethod
    def validate_limits(cls, v: int, info: ValidationInfo) -> int:
        low, high = _LIMITS[info.field_name]
        if not low <= v <= high:
            label = info.field_name.replace("_", " ").capitalize()
            raise ValueError(f"{label} must be between {low} and {high}.")
        return v

    @field_validator("output_dir")
    @classmethod
    def validate_output_dir(cls, v: str) -> str:
        if not v:
            raise ValueError("Output directory cannot be empty.")
        return v

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Names of the settings stored in the INI file."""
        return set(cls.model_fields) - _INTERNAL_FIELDS
