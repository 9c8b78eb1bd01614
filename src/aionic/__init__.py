"""aionic: small typed clients for the OpenAI HTTP API."""

import logging

from aionic.openai import *  # noqa: F403
from aionic.openai import __all__

logging.getLogger("aionic").addHandler(logging.NullHandler())

__version__ = "0.1.0"
