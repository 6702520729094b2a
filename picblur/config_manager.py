"""Configuration persistence manager.

This module handles loading and saving of blur and search settings to/from
a JSON file.
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Tuple

from .models import CONFIG_FILE, BlurConfig, BoundaryMode, SearchConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """Handles loading and saving of picture processing configuration."""

    def __init__(self, config_path: Path = CONFIG_FILE):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file (defaults to ~/.picblur_config.json)
        """
        self.config_path = Path(config_path)

    def load(self) -> Tuple[BlurConfig, SearchConfig]:
        """Load configuration from file, returning defaults if not found.

        Returns:
            BlurConfig and SearchConfig with loaded or default values
        """
        blur = BlurConfig()
        search = SearchConfig()

        try:
            if self.config_path.exists():
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                blur_data = data.get("blur", {})
                search_data = data.get("search", {})

                # Update config with loaded values (fallback to defaults)
                blur.radius = int(blur_data.get("radius", blur.radius))
                blur.boundary_mode = BoundaryMode(
                    blur_data.get("boundary_mode", blur.boundary_mode.value)
                )
                blur.blurred_suffix = blur_data.get("blurred_suffix", blur.blurred_suffix)
                blur.output_format = blur_data.get("output_format", blur.output_format)

                search.api_key = search_data.get("api_key", search.api_key)
                search.engine_id = search_data.get("engine_id", search.engine_id)
                search.endpoint = search_data.get("endpoint", search.endpoint)
                search.fetch_proxy = search_data.get("fetch_proxy", search.fetch_proxy)
                search.timeout = float(search_data.get("timeout", search.timeout))
                logger.info("Loaded configuration from %s", self.config_path)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Could not load config file %s: %s", self.config_path, e)
            return BlurConfig(), SearchConfig()

        return blur, search

    def save(self, blur: BlurConfig, search: SearchConfig) -> Tuple[bool, Optional[str]]:
        """Save configuration to file.

        Args:
            blur: BlurConfig to save
            search: SearchConfig to save

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        blur_data = asdict(blur)
        blur_data["boundary_mode"] = blur.boundary_mode.value
        try:
            with open(self.config_path, "w") as f:
                json.dump({"blur": blur_data, "search": asdict(search)}, f, indent=2)
            return True, None
        except OSError as e:
            return False, str(e)
