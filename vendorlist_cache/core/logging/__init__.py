from .logger import (
    clear_resolution_id,
    get_logger,
    get_resolution_id,
    log_stage,
    set_resolution_id,
    setup_logging,
)

__all__ = [
    "clear_resolution_id",
    "get_logger",
    "get_resolution_id",
    "log_stage",
    "set_resolution_id",
    "setup_logging",
]
