"""Logging utilities for cookbook_uploader modules."""

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger that inherits its handlers from the root logger.
    
    The logger propagates to the root logger. When the root logger has no
    handlers yet (``basicConfig()`` was never called), the level defaults
    to WARNING.
    
    Args:
        name: Logger name (typically ``'cookbook_uploader.<area>'``)
        
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    
    root_logger = logging.getLogger()
    if not root_logger.handlers and logger.level == logging.NOTSET:
        logger.setLevel(logging.WARNING)
    
    return logger
