from __future__ import annotations

import logging
from typing import Iterator

import pytest

from docsonnet.decoder import Decoder


@pytest.fixture
def decoder() -> Decoder:
    """Provide a decoder with the default conventions."""
    return Decoder()


@pytest.fixture(autouse=True)
def _reset_docsonnet_logger() -> Iterator[None]:
    """Undo CLI logging configuration so caplog keeps seeing docsonnet records."""
    yield
    logger = logging.getLogger("docsonnet")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
