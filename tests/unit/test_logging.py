"""Tests for logging module."""
import logging

import pytest

import cookbook_uploader
from cookbook_uploader.core.logging import get_logger


class TestGetLogger:
    """Test suite for get_logger."""
    
    @pytest.fixture(autouse=True)
    def reset_logger(self):
        logger = logging.getLogger('cookbook_uploader.test')
        logger.setLevel(logging.NOTSET)
        yield
        logger.setLevel(logging.NOTSET)
    
    def test_returns_named_logger(self):
        logger = get_logger('cookbook_uploader.test')
        
        assert logger.name == 'cookbook_uploader.test'
        assert logger.propagate is True
    
    def test_same_instance(self):
        assert get_logger('cookbook_uploader.test') is get_logger('cookbook_uploader.test')
    
    def test_warning_default_without_root_handlers(self, monkeypatch):
        monkeypatch.setattr(logging.getLogger(), 'handlers', [])
        
        logger = get_logger('cookbook_uploader.test')
        
        assert logger.level == logging.WARNING
    
    def test_inherits_when_root_configured(self, monkeypatch):
        monkeypatch.setattr(logging.getLogger(), 'handlers', [logging.NullHandler()])
        
        logger = get_logger('cookbook_uploader.test')
        
        assert logger.level == logging.NOTSET


class TestSetupLogging:
    """Test suite for setup_logging."""
    
    def test_sets_package_levels(self):
        names = ['cookbook_uploader', 'cookbook_uploader.transport']
        previous = {name: logging.getLogger(name).level for name in names}
        try:
            cookbook_uploader.setup_logging(logging.DEBUG)
            
            for name in names:
                assert logging.getLogger(name).level == logging.DEBUG
        finally:
            for name, level in previous.items():
                logging.getLogger(name).setLevel(level)
