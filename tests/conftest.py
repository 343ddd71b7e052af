"""
Shared test fixtures
"""

import logging

import pytest


class RecordingHandler(logging.Handler):
    """Keeps every record it receives"""

    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)

    def actions(self):
        return [getattr(record, 'action', None) for record in self.records]


@pytest.fixture
def ledger_log():
    """Capture everything logged under the bank_ledger namespace"""
    logger = logging.getLogger("bank_ledger")
    handler = RecordingHandler()
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    yield handler
    logger.removeHandler(handler)
    logger.setLevel(previous_level)
