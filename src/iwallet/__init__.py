"""
iwallet core

Account key storage and multi-signature transaction authorization for the
iwallet command line client.
"""

from .runtime.errors import *
from .config import WalletConfig
from .crypto import Algorithm, VALID_SIGN_ALGOS, algorithm_by_name
from .keys import *
from .tx import *
from .signers import *

__version__ = "0.3.0"
