"""
Application Settings

Environment configuration for topology graph builds.
"""

import os
from dataclasses import dataclass


# Well-known component configuration key holding the parallelism hint
TOPOLOGY_COMPONENT_PARALLELISM = "topology.component.parallelism"


@dataclass
class Settings:
    """Application settings from environment."""
    
    # Component configuration
    parallelism_key: str = TOPOLOGY_COMPONENT_PARALLELISM
    
    # Export
    output_dir: str = "output"
    
    # Logging
    log_level: str = "INFO"
    
    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            parallelism_key=os.getenv("TOPOGRAPH_PARALLELISM_KEY", TOPOLOGY_COMPONENT_PARALLELISM),
            output_dir=os.getenv("TOPOGRAPH_OUTPUT_DIR", "output"),
            log_level=os.getenv("TOPOGRAPH_LOG_LEVEL", "INFO").upper(),
        )
