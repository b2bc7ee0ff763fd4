"""
lceval Configuration

This module provides configuration settings for the evaluator and the
logging setup shared by the command-line front-end.
"""

import logging
from dataclasses import dataclass
from typing import Optional


@dataclass
class EvaluatorConfig:
    """Configuration for the substitution evaluator."""
    capture_avoiding: bool = False
    max_steps: Optional[int] = None


@dataclass
class LcevalConfig:
    """Main configuration for lceval."""
    evaluator: EvaluatorConfig = None
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.evaluator is None:
            self.evaluator = EvaluatorConfig()


# Global configuration instance
_config: Optional[LcevalConfig] = None


def get_config() -> LcevalConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = LcevalConfig()
    return _config


def set_config(config: LcevalConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def setup_logging(level: str = "WARNING") -> None:
    """Setup logging for lceval."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
