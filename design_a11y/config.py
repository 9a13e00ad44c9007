"""Configuration management for accessibility scans."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils.wcag import Platform, WCAGLevel


class ScanSettings(BaseSettings):
    """Scan settings loaded from environment variables (DESIGN_A11Y_*)."""

    model_config = SettingsConfigDict(
        env_prefix="DESIGN_A11Y_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Conformance target
    wcag_level: WCAGLevel = Field(WCAGLevel.AA, description="WCAG level text contrast is checked against")
    check_aaa: bool = Field(False, description="Also report AA-passing text that fails AAA contrast")
    platform: Platform = Field(Platform.WEB, description="Platform whose touch target and text size minimums apply")

    # Scanner behavior
    include_color_blindness: bool = Field(True, description="Run the color blindness analyzer")
    include_descendants: bool = Field(True, description="Expand supplied nodes into their full subtrees")

    # Heuristic thresholds
    min_touch_spacing: float = Field(8.0, ge=0, description="Minimum gap between adjacent touch targets (px)")
    adjacency_gap: float = Field(16.0, ge=0, description="Max gap for two colored siblings to count as adjacent (px)")
    distinguishable_distance: float = Field(
        50.0, gt=0, description="RGB distance below which two colors look the same"
    )
    retained_distance_ratio: float = Field(
        0.5, gt=0, le=1.0, description="Share of a pair's RGB distance a simulated deficiency must keep"
    )
    hue_only_contrast: float = Field(
        3.0, ge=1.0, description="Luminance contrast below which colors differ only by hue"
    )
    min_line_height_ratio: float = Field(1.5, gt=0, description="Recommended line height as a multiple of font size")
    max_line_length_chars: int = Field(80, gt=0, description="Maximum characters per line")

    # Logging
    log_level: str = Field("INFO", description="Logging level")
    log_json: bool = Field(False, description="Emit logs as JSON")


def get_settings() -> ScanSettings:
    """Get scan settings."""
    return ScanSettings()
